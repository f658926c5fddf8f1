"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  BUILD WINDOW                       ║
║                                                                  ║
║  The interactive window: keyboard / mouse input on one side,     ║
║  canvas drawing on the other, a TreeSession in the middle.       ║
║                                                                  ║
║  ┌────────────────────────────────────────────────────────────┐  ║
║  │ TOP BAR   [🌳 BST Visualizer]     [PNG][GIF][PDF][Theme]   │  ║
║  ├─────────────────────────────────────────────┬──────────────┤  ║
║  │                                             │ 📊 Stats     │  ║
║  │             Canvas (tree drawing)           │ 📋 Log       │  ║
║  │                                             │              │  ║
║  ├─────────────────────────────────────────────┴──────────────┤  ║
║  │ HINT BAR  ←↑→↓ move · A add · D delete · Q/E rotate · 1-8  │  ║
║  └────────────────────────────────────────────────────────────┘  ║
║                                                                  ║
║  Data Flow                                                       ║
║  ─────────                                                       ║
║  1. Key press  →  KEY_BINDINGS  →  _run_command()                ║
║  2. _run_command calls a TreeSession operation                   ║
║  3. The session relayouts and starts a transition whose frames   ║
║     arrive through TkFrameScheduler (tkinter after())            ║
║  4. Every frame calls _draw(), which asks the session for each   ║
║     node's interpolated position                                 ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""
import logging
import math
from tkinter import (
    Tk, Toplevel, Frame, Canvas, Label, Button, Listbox, Scrollbar,
    LEFT, RIGHT, TOP, BOTTOM, BOTH, X, Y, END, VERTICAL, W,
    messagebox, filedialog, simpledialog
)

from bstviz.animation import TkFrameScheduler
from bstviz.cursor import Direction
from bstviz.errors import BSTVizError
from bstviz.inputs import KEY_BINDINGS, PRESETS, parse_value
from bstviz.layout import count_imbalanced, tree_height
from bstviz.render import (NODE_RADIUS, SELECTION_RADIUS, PDFExporter,
                           export_gif, export_png, grid_to_coords)
from bstviz.session import TreeSession
from bstviz.settings import Settings

logger = logging.getLogger(__name__)

_MOVES = {
    "move_left":  Direction.LEFT,
    "move_up":    Direction.UP,
    "move_right": Direction.RIGHT,
    "move_down":  Direction.DOWN,
}


class BuildWindow(Toplevel):
    """Main window — interactive BST editing with animated relayout.

    Attributes:
        settings (Settings):      Persisted app settings (theme, duration).
        session (TreeSession):    Tree, selection and animation state.
        pdf_exporter (PDFExporter): Reusable PDF export helper.

    Widget references (set in ``_build_ui``):
        canvas, log_list, stats_labels, hint_label
    """

    def __init__(self, master, settings):
        super().__init__(master)
        self.settings = settings
        self.title("🌳 Binary Search Tree Visualizer")
        self.geometry("1200x760")
        self.minsize(900, 560)

        self.pdf_exporter = PDFExporter(settings)

        self._build_ui()

        # ── Session: frames come from this window's after() loop ──
        start = PRESETS[settings.start_preset % len(PRESETS)]
        self.session = TreeSession(TkFrameScheduler(self), start,
                                   duration=settings.anim_duration,
                                   on_frame=self._draw)

        self._apply_theme()
        self.bind("<KeyPress>", self._on_key)
        self.canvas.bind("<Button-1>", self._on_click)
        self.canvas.bind("<Configure>", lambda e: self._draw())
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._refresh()
        self.focus_set()

    def _on_close(self):
        """Stop the running transition before destroying the window.

        A frame scheduled with ``after()`` could otherwise fire on a
        destroyed canvas and raise ``TclError``.
        """
        self.session.animator.cancel()
        self.settings.save()
        self.destroy()
        if isinstance(self.master, Tk):
            self.master.destroy()

    # ═══════════════════════════════════════════════════════════════
    #  BUILD UI — construct all widgets
    # ═══════════════════════════════════════════════════════════════
    def _build_ui(self):
        # ── 1. top bar ──
        self.top = Frame(self)
        self.top.pack(side=TOP, fill=X, padx=8, pady=6)
        self.title_label = Label(self.top, text="🌳 BST Visualizer",
                                 font=("Segoe UI", 14, "bold"))
        self.title_label.pack(side=LEFT)
        self.buttons = []
        for text, cmd in (("Theme", self._toggle_theme),
                          ("PDF", self._export_pdf),
                          ("GIF", self._export_gif),
                          ("PNG", self._export_png)):
            b = Button(self.top, text=text, width=7, relief="flat",
                       command=cmd, takefocus=0)
            b.pack(side=RIGHT, padx=3)
            self.buttons.append(b)

        # ── 4. hint bar (packed before body so it keeps its space) ──
        self.hint_label = Label(
            self, anchor=W, font=("Consolas", 10),
            text="←↑→↓ move · A add · D delete · Q rotate CW · "
                 "E rotate CCW · 1-8 presets · click to select")
        self.hint_label.pack(side=BOTTOM, fill=X, padx=8, pady=4)

        # ── 2/3. body: canvas + side panel ──
        self.body = Frame(self)
        self.body.pack(side=TOP, fill=BOTH, expand=True)

        self.side = Frame(self.body, width=240)
        self.side.pack(side=RIGHT, fill=Y, padx=(0, 8), pady=4)
        self.side.pack_propagate(False)

        self.canvas = Canvas(self.body, highlightthickness=0)
        self.canvas.pack(side=LEFT, fill=BOTH, expand=True, padx=8, pady=4)

        self.stats_title = Label(self.side, text="📊 Tree Stats",
                                 font=("Segoe UI", 11, "bold"), anchor=W)
        self.stats_title.pack(fill=X)
        self.stats_labels = {}
        for key in ("Nodes", "Height", "Imbalanced", "Root", "Selected"):
            lbl = Label(self.side, anchor=W, font=("Consolas", 10))
            lbl.pack(fill=X)
            self.stats_labels[key] = lbl

        self.log_title = Label(self.side, text="📋 Operation Log",
                               font=("Segoe UI", 11, "bold"), anchor=W)
        self.log_title.pack(fill=X, pady=(12, 0))
        log_frame = Frame(self.side)
        log_frame.pack(fill=BOTH, expand=True)
        sb = Scrollbar(log_frame, orient=VERTICAL)
        self.log_list = Listbox(log_frame, yscrollcommand=sb.set,
                                font=("Consolas", 10), takefocus=0,
                                activestyle="none", borderwidth=0)
        sb.config(command=self.log_list.yview)
        sb.pack(side=RIGHT, fill=Y)
        self.log_list.pack(side=LEFT, fill=BOTH, expand=True)

    def _apply_theme(self):
        s = self.settings
        bg, bg2, fg = s.get("BG"), s.get("BG2"), s.get("FG")
        self.configure(bg=bg)
        for w in (self.top, self.body, self.hint_label, self.title_label):
            w.configure(bg=bg)
        self.title_label.configure(fg=s.get("ACCENT"))
        self.hint_label.configure(fg=fg)
        self.side.configure(bg=bg2)
        for w in (self.stats_title, self.log_title):
            w.configure(bg=bg2, fg=s.get("ACCENT"))
        for lbl in self.stats_labels.values():
            lbl.configure(bg=bg2, fg=s.get("STATS_FG"))
        self.log_list.configure(bg=bg2, fg=fg, selectbackground=s.get("ACCENT"))
        for b in self.buttons:
            b.configure(bg=bg2, fg=fg, activebackground=s.get("ACCENT"))
        self.canvas.configure(bg=s.get("CANVAS_BG"))
        self._draw()

    # ═══════════════════════════════════════════════════════════════
    #  INPUT HANDLING
    # ═══════════════════════════════════════════════════════════════
    def _on_key(self, event):
        command = KEY_BINDINGS.get(event.keysym) or \
                  KEY_BINDINGS.get(event.keysym.lower())
        if command is None:
            return
        self._run_command(command)

    def _run_command(self, command):
        """Dispatch one command name from KEY_BINDINGS."""
        session = self.session
        try:
            if command in _MOVES:
                session.move_selection(_MOVES[command])
            elif command.startswith("preset_"):
                session.load_preset(PRESETS[int(command.split("_")[1])])
            elif command == "add":
                self._prompt_and_add()
            elif command == "delete":
                session.delete()
            elif command == "rotate_cw":
                session.rotate_clockwise()
            elif command == "rotate_ccw":
                session.rotate_counter_clockwise()
        except BSTVizError as e:
            messagebox.showerror("Error", str(e), parent=self)
        self._refresh()

    def _prompt_and_add(self):
        lo, hi = self.settings.value_min, self.settings.value_max
        text = simpledialog.askstring(
            "Add", f"value to add (integer between {lo} and {hi})?",
            parent=self)
        value = parse_value(text, lo, hi)
        if value is not None:
            self.session.insert(value)

    def _on_click(self, event):
        node = self._find_clicked(self.session.root, event.x, event.y)
        if node is not None:
            self.session.select(node)
            self._refresh()

    def _find_clicked(self, node, x, y):
        """Depth-first hit test against the displayed node circles."""
        if node is None:
            return None
        cx, cy = self._node_xy(node)
        if math.hypot(cx - x, cy - y) <= NODE_RADIUS:
            return node
        return self._find_clicked(node.left, x, y) or \
               self._find_clicked(node.right, x, y)

    # ═══════════════════════════════════════════════════════════════
    #  DRAWING
    # ═══════════════════════════════════════════════════════════════
    def _node_xy(self, node):
        col, row = self.session.get_position(node)
        return grid_to_coords(row, col, self.canvas.winfo_width())

    def _draw(self):
        """Redraw the whole tree at the current animation frame."""
        c = self.canvas
        s = self.settings
        c.delete("all")
        root = self.session.root

        def _edges(n):
            for child in n.children():
                x1, y1 = self._node_xy(n)
                x2, y2 = self._node_xy(child)
                c.create_line(x1, y1, x2, y2, fill=s.get("EDGE"), width=2)
                _edges(child)
        _edges(root)

        sx, sy = self._node_xy(self.session.selection)
        r = SELECTION_RADIUS
        c.create_oval(sx - r, sy - r, sx + r, sy + r,
                      fill=s.get("SELECTION"), outline="")

        def _nodes(n):
            if n is None:
                return
            _nodes(n.left)
            _nodes(n.right)
            x, y = self._node_xy(n)
            r = NODE_RADIUS
            fill = s.get("NODE_FILL") if n.balanced else s.get("IMBALANCED_FILL")
            c.create_oval(x - r, y - r, x + r, y + r, fill=fill, outline="")
            c.create_text(x, y, text=str(n.value), fill=s.get("NODE_TEXT"),
                          font=("Consolas", 12, "bold"))
        _nodes(root)

    def _refresh(self):
        """Redraw, then update stats and the log after any command."""
        self._draw()
        self._update_stats()
        self._update_log()

    def _update_stats(self):
        root = self.session.root
        values = {
            "Nodes":      self.session.size,
            "Height":     tree_height(root),
            "Imbalanced": count_imbalanced(root),
            "Root":       root.value,
            "Selected":   self.session.selection.value,
        }
        for key, val in values.items():
            self.stats_labels[key].config(text=f"{key:<11}{val}")

    def _update_log(self):
        self.log_list.delete(0, END)
        for i, entry in enumerate(self.session.history):
            self.log_list.insert(END, f"{i + 1:>3}. {entry['desc']}")
        self.log_list.see(END)

    # ═══════════════════════════════════════════════════════════════
    #  SETTINGS & EXPORT
    # ═══════════════════════════════════════════════════════════════
    def _toggle_theme(self):
        self.settings.toggle_theme()
        self.settings.save()
        self._apply_theme()

    def _export(self, kind, ext, func):
        path = filedialog.asksaveasfilename(
            defaultextension=ext, filetypes=[(kind, f"*{ext}")],
            title=f"Export {kind}", parent=self)
        if not path:
            return  # user cancelled
        try:
            func(path)
        except BSTVizError as e:
            messagebox.showerror("Error", str(e), parent=self)
            return
        except OSError as e:
            logger.exception("%s export failed", kind)
            messagebox.showerror(f"{kind} Error", str(e), parent=self)
            return
        messagebox.showinfo("Exported", f"{kind} saved:\n{path}", parent=self)

    def _export_png(self):
        self._export("PNG", ".png",
                     lambda p: export_png(self.session, self.settings, p))

    def _export_gif(self):
        self._export("GIF", ".gif",
                     lambda p: export_gif(self.session, self.settings, p))

    def _export_pdf(self):
        self._export("PDF", ".pdf",
                     lambda p: self.pdf_exporter.export(self.session.history, p))


def open_build_window(root=None, settings=None):
    """
    Launch the Build window.

    Args:
        root     (Tk|None)       : Master window.  A hidden one is
                                   created when None.
        settings (Settings|None) : Loaded from ~/.bstviz.json when None.
    """
    settings = settings or Settings()
    if root is None:
        root = Tk()
        root.withdraw()
    window = BuildWindow(root, settings)
    if root.winfo_exists():
        root.mainloop()
    return window
