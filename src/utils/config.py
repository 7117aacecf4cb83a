"""Application configuration constants."""

from __future__ import annotations

APP_NAME = "TextOverlayStudio"
APP_VERSION = "0.1.0"
ORG_NAME = "TextOverlayStudio"

# Preview surface (used until the video reports its native size)
DEFAULT_CANVAS_WIDTH = 1280
DEFAULT_CANVAS_HEIGHT = 720

# Full-duration range for new overlays when the video duration is unknown
DEFAULT_VIDEO_DURATION = 60.0

# New overlay defaults
DEFAULT_TEXT = "نص جديد"
DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 32
DEFAULT_TEXT_COLOR = "#ffffff"
DEFAULT_STROKE_COLOR = "#000000"
DEFAULT_PADDING = 5
DEFAULT_SHADOW_COLOR = "rgba(0, 0, 0, 0.5)"
DEFAULT_SHADOW_BLUR = 5
DEFAULT_SHADOW_OFFSET = 2

# Family used whenever the requested one is not (yet) available
FALLBACK_FONT_FAMILY = "DejaVu Sans"

TRANSPARENT = "transparent"

TEXT_ALIGNMENTS = ("left", "center", "right")
FONT_WEIGHTS = ("normal", "bold")
FONT_STYLES = ("normal", "italic")

# Font catalog offered to the UI. url=None means a system font.
FONT_CATALOG = [
    {"id": "arial", "name": "Arial", "category": "sans-serif", "url": None},
    {"id": "times-new-roman", "name": "Times New Roman", "category": "serif", "url": None},
    {"id": "courier-new", "name": "Courier New", "category": "monospace", "url": None},
    {"id": "roboto", "name": "Roboto", "category": "sans-serif",
     "url": "https://fonts.googleapis.com/css2?family=Roboto:wght@400;700&display=swap"},
    {"id": "open-sans", "name": "Open Sans", "category": "sans-serif",
     "url": "https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;700&display=swap"},
    {"id": "lato", "name": "Lato", "category": "sans-serif",
     "url": "https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap"},
    {"id": "montserrat", "name": "Montserrat", "category": "sans-serif",
     "url": "https://fonts.googleapis.com/css2?family=Montserrat:wght@400;700&display=swap"},
    {"id": "cairo", "name": "Cairo", "category": "arabic",
     "url": "https://fonts.googleapis.com/css2?family=Cairo:wght@400;700&display=swap"},
    {"id": "tajawal", "name": "Tajawal", "category": "arabic",
     "url": "https://fonts.googleapis.com/css2?family=Tajawal:wght@400;700&display=swap"},
    {"id": "amiri", "name": "Amiri", "category": "arabic",
     "url": "https://fonts.googleapis.com/css2?family=Amiri:wght@400;700&display=swap"},
]
