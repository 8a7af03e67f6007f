# Configuration values for the venue map designer.

WINDOW_TITLE = "Venue Map Designer"

TEMPLATE_EXTENSION = ".map.json"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = "INFO"

# Viewport
ZOOM_MIN = 0.5
ZOOM_MAX = 2.0
ZOOM_STEP = 0.1

DEFAULT_MAP_SIZE = (1000, 1000)

# Map skin. Sizes are screen pixels; in map units they shrink as 1 / scale.
BACKGROUND = "#FFFFFF"
HIGHLIGHT_FILL = "#FF5733"
DEFAULT_AREA_FILL = "#000000"

STAGE_STROKE = "#000000"
STAGE_STROKE_WIDTH = 2
STAGE_STROKE_WIDTH_SELECTED = 5

OUTLINE_STROKE = "#FFFFFF"
OUTLINE_STROKE_WIDTH = 2

LABEL_COLOR = "#000000"
LABEL_FONT = "Arial"
LABEL_FONT_SIZE = 12
LABEL_OFFSET = (5, 15)

# Zones with special treatment
BRIDGE_ZONES = ("BRIDGE",)
OUTLINE_ZONES = ("STROKE",)
UNSELECTABLE_ZONES = ("BOUNDARY",)

# Static preview export
PREVIEW_MAX_SIZE = 800
PREVIEW_DPI = 100
PREVIEW_OUTLINE = "#2D3748"
PREVIEW_OUTLINE_WIDTH = 3
PREVIEW_AREA_FILL = "#E2E8F0"
PREVIEW_AREA_STROKE = "#4A5568"
PREVIEW_AREA_STROKE_WIDTH = 2
PREVIEW_SELECTED_FILL = "#FBBF24"
PREVIEW_SELECTED_STROKE = "#F59E0B"
PREVIEW_SELECTED_STROKE_WIDTH = 3
PREVIEW_LABEL_COLOR = "#1A202C"
PREVIEW_LABEL_SHADOW = "#FFFFFF"
PREVIEW_LABEL_MIN_SIZE = 10
PREVIEW_LABEL_MAX_SIZE = 20
PREVIEW_LABEL_MIN_BOX = (30, 20)
PREVIEW_FIRST_AREA = "OUTER BOUNDARY"

DEFAULT_FONT = "Segoe UI"

THEME = {
    "bg": "#1F2125",
    "panel": "#262A30",
    "panel_alt": "#2F343C",
    "text": "#E6E6E6",
    "muted": "#9AA0A6",
    "accent": "#0A84FF",
    "danger": "#FF4D4D",
}
