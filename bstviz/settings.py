"""
Themes and persisted user preferences.

Settings live as JSON in the user's home directory (~/.bstviz.json)
so they survive across sessions.
"""
import json
import logging
import os

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Two built-in Catppuccin-inspired palettes.
#  Each key maps to a hex colour used throughout the UI.
# ═════════════════════════════════════════════════════════════════
THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "BG": "#1e1e2e",           # Main window background
        "BG2": "#2a2a3d",          # Side panel background
        "FG": "#cdd6f4",           # Primary foreground text
        "ACCENT": "#89b4fa",       # Headings
        "CANVAS_BG": "#1e1e2e",    # Tree-drawing canvas
        "NODE_FILL": "#585b70",    # Locally balanced node
        "IMBALANCED_FILL": "#f38ba8",  # Locally imbalanced node
        "NODE_TEXT": "#ffffff",    # Text inside nodes
        "EDGE": "#585b70",         # Lines connecting nodes
        "SELECTION": "#f9e2af",    # Selection ring
        "STATS_FG": "#bac2de",     # Stats panel text
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "BG": "#eff1f5",
        "BG2": "#dce0e8",
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "CANVAS_BG": "#e6e9ef",
        "NODE_FILL": "#4c4f69",
        "IMBALANCED_FILL": "#d20f39",
        "NODE_TEXT": "#ffffff",
        "EDGE": "#8c8fa1",
        "SELECTION": "#df8e1d",
        "STATS_FG": "#5c5f77",
    },
}


# ═════════════════════════════════════════════════════════════════
#  SETTINGS — persisted user preferences
# ═════════════════════════════════════════════════════════════════
class Settings:
    """
    Persistent user preferences manager.

    Attributes:
        theme         (str) : Active theme name ("dark" / "light").
        anim_duration (int) : Length of one layout transition in ms.
        value_min     (int) : Smallest value the Add prompt accepts.
        value_max     (int) : Largest value the Add prompt accepts.
        start_preset  (int) : Index of the preset loaded at startup.
        custom_colors (dict): Key→hex overrides on top of the theme.

    File location:  ~/.bstviz.json
    """
    _PATH = os.path.join(os.path.expanduser("~"), ".bstviz.json")

    _FIELDS = ("theme", "anim_duration", "value_min", "value_max",
               "start_preset", "custom_colors")

    def __init__(self, path=None):
        self.path          = path or self._PATH
        self.theme         = "dark"     # Default theme
        self.anim_duration = 250        # Default ms per transition
        self.value_min     = -99
        self.value_max     = 99
        self.start_preset  = 1
        self.custom_colors = {}         # No overrides initially
        self._load()                    # Overwrite defaults from disk

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read settings JSON; a missing or corrupt file keeps defaults."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return
        if not isinstance(d, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return
        for key in self._FIELDS:
            if key not in d:
                continue
            if self._valid(key, d[key]):
                setattr(self, key, d[key])
            else:
                logger.warning("Invalid %s %r in %s, keeping %r",
                               key, d[key], self.path, getattr(self, key))
        if self.value_min > self.value_max:
            logger.warning("value_min %r above value_max %r, using -99..99",
                           self.value_min, self.value_max)
            self.value_min, self.value_max = -99, 99

    @staticmethod
    def _valid(key, value):
        """Type and range check for one field read from disk."""
        if key == "theme":
            return isinstance(value, str) and value in THEMES
        if key == "custom_colors":
            return isinstance(value, dict) and all(
                isinstance(k, str) and isinstance(v, str)
                for k, v in value.items())
        if isinstance(value, bool):
            return False
        if key == "anim_duration":
            return isinstance(value, (int, float)) and value > 0
        if key == "start_preset":
            return isinstance(value, int) and value >= 0
        return isinstance(value, int)  # value_min / value_max

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        try:
            with open(self.path, "w") as f:
                json.dump({k: getattr(self, k) for k in self._FIELDS}, f)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.path, e)

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES[self.theme].get(key, "#ffffff")

    def toggle_theme(self):
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme
