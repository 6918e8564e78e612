"""One-shot, non-interactive renderings of the navigation views."""

from __future__ import annotations

import json

from ..runtime.views import NavigationViews
from ..tree_model import UiNode
from ..ui_theme import PLAIN_THEME
from .ansi import clip_ansi_line
from .panes import display_path, format_node, preview_lines


def node_to_dict(node: UiNode) -> dict[str, object]:
    return {
        "id": node.id,
        "label": node.label,
        "kind": node.kind.value,
        "directory_path": node.directory_path,
        "raw_path": node.raw_path,
        "has_children": node.has_children,
    }


def views_to_dict(views: NavigationViews) -> dict[str, object]:
    return {
        "current_path": views.current_path,
        "breadcrumb": [node_to_dict(node) for node in views.breadcrumb],
        "breadcrumb_highlight": views.breadcrumb_highlight,
        "current_nodes": [node_to_dict(node) for node in views.current_nodes],
        "selected_index": views.selected_index,
        "preview_target": views.preview_target,
        "preview_nodes": [node_to_dict(node) for node in views.preview_nodes],
        "listing_error": views.listing_status.error,
        "preview_error": views.preview_status.error,
    }


def views_to_json(views: NavigationViews) -> str:
    return json.dumps(views_to_dict(views), indent=2, ensure_ascii=False)


def render_plain(views: NavigationViews, width: int = 80) -> str:
    """Uncolored text dump: breadcrumb, listing with a ``>`` cursor, then preview."""
    width = max(1, width)
    lines = [f"path: {display_path(views.current_path)}"]
    if views.breadcrumb:
        lines.append("breadcrumb: " + " > ".join(node.label for node in views.breadcrumb))
    if views.listing_status.error is not None:
        lines.append(f"error: {views.listing_status.error}")
    lines.append("")
    if not views.current_nodes:
        lines.append("  (no children)")
    for idx, node in enumerate(views.current_nodes):
        cursor = ">" if idx == views.selected_index else " "
        lines.append(f"{cursor} {format_node(node, PLAIN_THEME)}")
    preview = preview_lines(views, PLAIN_THEME)
    if preview:
        lines.append("")
        lines.append("preview:")
        lines.extend(f"  {line}" for line in preview)
    return "\n".join(clip_ansi_line(line, width) for line in lines) + "\n"


__all__ = ["node_to_dict", "render_plain", "views_to_dict", "views_to_json"]
