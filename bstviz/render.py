"""
╔══════════════════════════════════════════════════════════════════╗
║            BST Visualizer  —  OFF-SCREEN RENDERING & EXPORT      ║
║                                                                  ║
║  Renders snapshot dict-trees (layout.snapshot) to Pillow images. ║
║  Used by three exporters:                                        ║
║    • export_png   — the tree as currently laid out               ║
║    • export_gif   — replay of the most recent transition         ║
║    • PDFExporter  — one page per history entry                   ║
║                                                                  ║
║  Grid → pixel mapping (shared with the Build window canvas):     ║
║    x = width / 2 + col * COL_DELTA                               ║
║    y = TOP_PADDING + row * ROW_DELTA                             ║
║                                                                  ║
║  Dependencies                                                    ║
║  ────────────                                                    ║
║  Pillow    → PNG / GIF export + image rendering                  ║
║  reportlab → PDF walkthrough export                              ║
║                                                                  ║
║  License: MIT                                                    ║
╚══════════════════════════════════════════════════════════════════╝
"""
import logging
import os
import shutil
import tempfile
from datetime import datetime

# ─── Pillow: PNG/GIF export, image rendering for PDF pages ──────
try:
    from PIL import Image, ImageDraw, ImageFont
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

# ─── ReportLab: PDF generation for the session walkthrough ──────
try:
    from reportlab.lib.pagesizes import A4, landscape
    from reportlab.pdfgen import canvas as pdf_canvas
    HAS_REPORTLAB = True
except ImportError:
    HAS_REPORTLAB = False

from bstviz.animation import ease_out_expo, interpolate
from bstviz.errors import ExportError
from bstviz.layout import snapshot

logger = logging.getLogger(__name__)

# ═════════════════════════════════════════════════════════════════
#  GEOMETRY CONSTANTS
# ═════════════════════════════════════════════════════════════════
TOP_PADDING      = 100
ROW_DELTA        = 60
COL_DELTA        = 50
NODE_RADIUS      = 20
SELECTION_RADIUS = 25


def grid_to_coords(row, col, width):
    """
    Convert grid coordinates to pixels on a surface of the given width.

    Columns are centred on the surface (col 0 is the middle).

    Returns:
        tuple[float, float]: (x, y) pixel position.
    """
    return (width / 2 + col * COL_DELTA,
            TOP_PADDING + row * ROW_DELTA)


def replay_snapshot(root, x, selected=None):
    """
    Snapshot of the most recent transition at eased progress x.

    Nodes without a baseline (new nodes) sit at their final position.
    """
    def _pos(n):
        if n.old_row is None or n.old_col is None:
            return n.col, n.row
        return (interpolate(n.old_col, n.col, x),
                interpolate(n.old_row, n.row, x))
    return snapshot(root, _pos, selected)


# ═════════════════════════════════════════════════════════════════
#  TREE IMAGE RENDERER
# ═════════════════════════════════════════════════════════════════
class TreeImageRenderer:
    """
    Off-screen tree renderer using Pillow.

    Args:
        settings (Settings): For colour lookups.
        width    (int)     : Image width in pixels.
        height   (int)     : Image height in pixels.
    """

    def __init__(self, settings, width=800, height=500):
        self.settings = settings
        self.width    = width
        self.height   = height

    @staticmethod
    def _load_fonts():
        """
        Attempt to load a monospace font for node labels.

        Falls back to Pillow's built-in font if none is found.

        Returns:
            tuple[ImageFont, ImageFont]: (normal_14pt, title_16pt)
        """
        candidates_mono = [
            "consola.ttf",                                         # Windows
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf", # Debian/Ubuntu
            "/usr/share/fonts/TTF/DejaVuSansMono.ttf",             # Arch
            "/System/Library/Fonts/Menlo.ttc",                     # macOS
        ]
        for p in candidates_mono:
            try:
                return ImageFont.truetype(p, 14), ImageFont.truetype(p, 16)
            except OSError:
                continue
        font = ImageFont.load_default()
        return font, font

    def render(self, tree_state, title=""):
        """
        Render a tree snapshot to a Pillow Image.

        Args:
            tree_state (dict|None) : Snapshot dict-tree (layout.snapshot);
                                     nodes flagged "selected" get the ring.
            title      (str)       : Text drawn at the top of the image.

        Returns:
            Image: Rendered PIL Image.

        Raises:
            ExportError: If Pillow is not installed.
        """
        if not HAS_PIL:
            raise ExportError("Pillow required.\npip install Pillow")

        s    = self.settings
        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font, font_t = self._load_fonts()

        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font_t)

        if tree_state is None:
            draw.text((self.width // 2 - 40, self.height // 2),
                      "Empty Tree", fill=s.get("FG"), font=font)
            return img

        def _xy(n):
            return grid_to_coords(n["row"], n["col"], self.width)

        # ── Edges first so nodes are drawn on top ──
        def _edges(n):
            for child in (n["left"], n["right"]):
                if child is not None:
                    draw.line([_xy(n), _xy(child)], fill=s.get("EDGE"), width=2)
                    _edges(child)
        _edges(tree_state)

        def _nodes(n):
            if n is None:
                return
            _nodes(n["left"])
            _nodes(n["right"])
            x, y = _xy(n)
            if n.get("selected"):
                r = SELECTION_RADIUS
                draw.ellipse([x - r, y - r, x + r, y + r],
                             fill=s.get("SELECTION"))
            r    = NODE_RADIUS
            fill = s.get("NODE_FILL") if n["balanced"] else s.get("IMBALANCED_FILL")
            draw.ellipse([x - r, y - r, x + r, y + r], fill=fill,
                         outline="white", width=1)

            txt = str(n["value"])
            bb  = draw.textbbox((0, 0), txt, font=font)
            tw, th = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((x - tw / 2, y - th / 2), txt,
                      fill=s.get("NODE_TEXT"), font=font)
        _nodes(tree_state)
        return img


# ═════════════════════════════════════════════════════════════════
#  PNG / GIF EXPORT
# ═════════════════════════════════════════════════════════════════

def export_png(session, settings, path, width=1200, height=800):
    """Save the session's tree, as currently laid out, to a PNG file."""
    renderer = TreeImageRenderer(settings, width, height)
    img = renderer.render(snapshot(session.root, selected=session.selection),
                          title=f"BST  ·  {session.size} nodes")
    img.save(path)
    logger.info("PNG saved: %s", path)
    return path


def export_gif(session, settings, path, frames=12, width=800, height=500):
    """
    Save the most recent transition as an animated GIF.

    Frames are sampled at equal time steps over the transition and
    eased with the same curve the canvas uses.

    Args:
        frames (int): Number of frames (at least 2).
    """
    if frames < 2:
        raise ValueError("a GIF needs at least 2 frames")
    renderer = TreeImageRenderer(settings, width, height)
    images = []
    for i in range(frames):
        x = ease_out_expo(i / (frames - 1))
        images.append(renderer.render(
            replay_snapshot(session.root, x, session.selection)))
    step_ms = max(1, int(session.animator.duration / (frames - 1)))
    images[0].save(path, save_all=True, append_images=images[1:],
                   duration=step_ms, loop=0)
    logger.info("GIF saved: %s (%d frames)", path, frames)
    return path


# ═════════════════════════════════════════════════════════════════
#  PDF EXPORTER
#
#  Multi-page walkthrough of the session history:
#    Page 1     : title page
#    Pages 2..N : one page per history entry (tree image + action)
# ═════════════════════════════════════════════════════════════════
class PDFExporter:
    """
    Export the session history as a landscape-A4 PDF document.

    Attributes:
        settings (Settings)          : For colour/theme lookups.
        renderer (TreeImageRenderer) : Renders tree snapshots to images.
    """

    def __init__(self, settings):
        self.settings = settings
        self.renderer = TreeImageRenderer(settings, 700, 400)

    def export(self, history, filename):
        """
        Generate a PDF file from the history list.

        Args:
            history  (list) : History entries (TreeSession.history).
            filename (str)  : Output PDF file path.

        Raises:
            ExportError: Missing dependency.
        """
        if not HAS_REPORTLAB:
            raise ExportError("ReportLab required.\npip install reportlab")
        if not HAS_PIL:
            raise ExportError("Pillow required.\npip install Pillow")

        pw, ph = landscape(A4)
        c = pdf_canvas.Canvas(filename, pagesize=landscape(A4))

        c.setFont("Helvetica-Bold", 28)
        c.drawCentredString(pw / 2, ph - 100, "Binary Search Tree Session")
        c.setFont("Helvetica", 12)
        c.drawCentredString(pw / 2, ph - 140,
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
        c.drawCentredString(pw / 2, ph - 160, f"Operations: {len(history)}")
        c.showPage()

        tmp = tempfile.mkdtemp()
        try:
            for i, entry in enumerate(history):
                img = self.renderer.render(entry["tree_state"],
                                           title=f"Step {i + 1}")
                ip = os.path.join(tmp, f"s{i:04d}.png")
                img.save(ip)

                c.setFont("Helvetica-Bold", 14)
                c.drawString(30, ph - 30, f"Step {i + 1} of {len(history)}")
                c.drawImage(ip, 30, ph - 450, width=700, height=400,
                            preserveAspectRatio=True)
                c.setFont("Helvetica", 12)
                c.drawString(30, ph - 480, f"Action: {entry['desc']}")
                c.showPage()
            c.save()
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

        logger.info("PDF saved: %s (%d steps)", filename, len(history))
        return filename
