"""Default values for visualization settings.

These constants are used as `Field(default=...)` values in the pydantic
state and config schemas. Sizes are in pixels.
"""

# --- Surface ---
DEFAULT_WIDTH = 960.0
DEFAULT_HEIGHT = 600.0

# --- Margins (reset at the start of every layout pass) ---
DEFAULT_MARGIN_TOP = 10.0
DEFAULT_MARGIN_RIGHT = 10.0
DEFAULT_MARGIN_BOTTOM = 10.0
DEFAULT_MARGIN_LEFT = 10.0

# --- Widgets ---
TITLE_HEIGHT = 24.0
SUB_TITLE_HEIGHT = 16.0
TIMELINE_HEIGHT = 40.0
LEGEND_HEIGHT = 30.0
DRAWER_ROW_HEIGHT = 28.0

# --- Color ---
DEFAULT_COLOR_RANGE = ("#d73027", "#ffffbf", "#1a9850")
DEFAULT_CATEGORY_PALETTE = "tab10"
DEFAULT_MISSING_COLOR = "#eeeeee"

# --- Focus ---
UNFOCUSED_OPACITY = 0.25

# --- Type ---
DEFAULT_APP_TYPE = "tree_map"
DEFAULT_LOCALE = "en_US"
