"""The set of collaborators a plan's steps call into.

Steps never import rendering or data code directly; they go through a
``Collaborators`` bundle so that any piece can be swapped (in tests, or for
another rendering backend) with ``dataclasses.replace``.
"""

from dataclasses import dataclass
from typing import Any, Callable

from vizsteps.services import data, focus, layout, parse, scene, shapes, validation
from vizsteps.services.color import compute_color_scale

Op = Callable[..., Any]


@dataclass(frozen=True)
class Collaborators:
    load: Op = data.load_channel
    index_keys: Op = data.index_keys
    parse_edges: Op = parse.parse_edges
    parse_nodes: Op = parse.parse_nodes
    group_data: Op = data.group_data
    fetch_render_data: Op = data.fetch_render_data
    time_selection: Op = data.active_time_selection
    compute_color_scale: Op = compute_color_scale
    validate: Op = validation.check_configuration
    create_root_groups: Op = scene.create_root_groups
    create_app_group: Op = scene.create_app_group
    update_layout: Op = layout.update_layout
    reconcile_focus: Op = focus.reconcile_focus
    commit_surface: Op = scene.commit_surface
    draw_type: Op = shapes.run_app_type
    draw_shapes: Op = shapes.draw_shapes
    finalize_focus: Op = focus.finalize_focus
    finish: Op = shapes.finish


DEFAULT_COLLABORATORS = Collaborators()
