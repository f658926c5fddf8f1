import pytest

from bstviz.errors import InputError, NotIntegerInput, OutOfRangeInput
from bstviz.inputs import KEY_BINDINGS, PRESETS, parse_value
from bstviz.tree import BSTree


@pytest.mark.parametrize("text,expected", [
    ("5", 5), (" -12 ", -12), ("99", 99), ("-99", -99), ("0", 0),
])
def test_parse_value_accepts_integers(text, expected):
    assert parse_value(text) == expected


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_value_blank_is_none(text):
    assert parse_value(text) is None


@pytest.mark.parametrize("text", ["abc", "1.5", "07", "+3", "1e2", "--1"])
def test_parse_value_rejects_non_integers(text):
    with pytest.raises(NotIntegerInput):
        parse_value(text)


def test_parse_value_range():
    with pytest.raises(OutOfRangeInput) as exc:
        parse_value("100")
    assert exc.value.value == 100
    assert parse_value("100", lo=0, hi=100) == 100


def test_input_errors_are_value_errors():
    assert issubclass(InputError, ValueError)
    assert issubclass(NotIntegerInput, InputError)


def test_presets_are_valid_trees():
    for values in PRESETS:
        t = BSTree.from_values(values)
        t.validate()
        assert t.in_order() == sorted(values)


def test_key_bindings_cover_presets():
    assert KEY_BINDINGS["1"] == "preset_0"
    assert KEY_BINDINGS["8"] == "preset_7"
    assert KEY_BINDINGS["Up"] == "move_up"
    assert KEY_BINDINGS["q"] == "rotate_cw"
