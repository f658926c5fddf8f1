from bstviz.main import main

main()
