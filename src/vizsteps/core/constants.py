"""Shared names used across the planner and its collaborators."""

# Channels that can be filled from a url, in load order.
URL_CHANNELS = ("data", "attrs", "coords", "nodes", "edges")

# Key types produced by key indexing.
KEY_NUMBER = "number"
KEY_STRING = "string"
KEY_BOOLEAN = "boolean"
KEY_OBJECT = "object"

# Data-shape requirements an app type may declare.
REQUIRES_DATA = "data"
REQUIRES_NODES = "nodes"
REQUIRES_EDGES = "edges"


class StepNames:
    """Stable identifiers for every step the planner can emit."""

    APP_SETUP = "app_setup"
    SURFACE_INIT = "surface_init"
    GROUP_CREATE = "group_create"
    DATA_REINDEX = "data_reindex"
    ATTRS_REINDEX = "attrs_reindex"
    COLOR_TYPE = "color_type"
    EDGE_PARSE = "edge_parse"
    NODE_PARSE = "node_parse"
    DATA_FORMAT = "data_format"
    DATA_FETCH = "data_fetch"
    COLOR_SCALE = "color_scale"
    TOOLTIP_RESET = "tooltip_reset"
    VALIDATION = "validation"
    LAYOUT = "layout"
    FOCUS_TOOLTIP = "focus_tooltip"
    SURFACE_COMMIT = "surface_commit"
    DRAW_SHAPES = "draw_shapes"
    FINALIZE = "finalize"

    @staticmethod
    def load(channel: str) -> str:
        return f"load_{channel}"
