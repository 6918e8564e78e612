"""Frame composition for the breadcrumb │ listing │ preview layout.

``render_screen`` is a pure function of the views plus the viewports, except
that it tells the viewports how much content each pane has so scrolling and
mouse hit-testing see the same geometry that was drawn.
"""

from __future__ import annotations

from ..input.focus import FocusState
from ..input.viewport import DetailViewport, ListViewport
from ..runtime.layout import PaneLayout, breadcrumb_start
from ..runtime.state import PaneStatus
from ..runtime.views import NavigationViews
from ..tree_model import NodeKind, UiNode
from ..tree_path import normalize_path
from ..ui_theme import UITheme
from .ansi import fit_cell, sanitize_label_text

CHILD_MARKER = "[+]"
LOADING_TEXT = "loading…"
EMPTY_TEXT = "no children"


def display_path(path: str | None) -> str:
    key = normalize_path(path)
    return key if key else "<root>"


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Reverse-video a styled cell without losing its inner colors."""
    if not theme.reverse:
        return f"> {text}"
    return theme.reverse + text.replace(theme.reset, theme.reset + theme.reverse) + theme.reset


def format_node(node: UiNode, theme: UITheme) -> str:
    label = sanitize_label_text(node.label)
    if node.kind is NodeKind.DIRECTORY:
        text = f"{theme.directory}{label}/{theme.reset}"
        if node.has_children:
            text += f" {theme.child_marker}{CHILD_MARKER}{theme.reset}"
        return text
    color = {NodeKind.MARKDOWN: theme.markdown, NodeKind.IMAGE: theme.image}.get(node.kind, theme.other)
    return f"{color}{label}{theme.reset}"


def status_banner(status: PaneStatus, loaded: bool, empty: bool, theme: UITheme) -> str | None:
    """One-line banner for a pane that has nothing else to show."""
    if status.error is not None and (empty or not loaded):
        return f"{theme.error}{sanitize_label_text(status.error)}{theme.reset}"
    if not loaded or (status.loading and empty):
        return f"{theme.loading}{LOADING_TEXT}{theme.reset}"
    if empty:
        return f"{theme.dim}{EMPTY_TEXT}{theme.reset}"
    return None


def breadcrumb_lines(views: NavigationViews, theme: UITheme) -> list[str]:
    lines: list[str] = []
    for depth, node in enumerate(views.breadcrumb):
        label = sanitize_label_text(node.label)
        if node.directory_path == views.breadcrumb_highlight:
            lines.append(f"{theme.breadcrumb_current}{label}{theme.reset}")
        else:
            lines.append(f"{theme.breadcrumb}{' ' * min(depth, 4)}{label}{theme.reset}")
    return lines


def listing_lines(views: NavigationViews, theme: UITheme) -> list[str]:
    """Rows of the listing pane; row ``i`` is ``views.current_nodes[i]``."""
    lines = [format_node(node, theme) for node in views.current_nodes]
    if views.selected_index is not None and 0 <= views.selected_index < len(lines):
        lines[views.selected_index] = selected_with_ansi(lines[views.selected_index], theme)
    return lines


def preview_lines(views: NavigationViews, theme: UITheme) -> list[str]:
    """Scrollable content of the preview pane for the selected row."""
    node = views.selected_node
    if node is None:
        return []
    if views.preview_target is not None:
        lines = [f"{theme.header}{sanitize_label_text(views.preview_target)}{theme.reset}"]
        banner = status_banner(
            views.preview_status,
            views.preview_loaded,
            not views.preview_nodes,
            theme,
        )
        if banner is not None:
            lines.append(banner)
        lines.extend(format_node(child, theme) for child in views.preview_nodes)
        return lines
    if node.kind is NodeKind.DIRECTORY:
        return [
            f"{theme.header}{sanitize_label_text(node.directory_path or node.label)}{theme.reset}",
            f"{theme.dim}{EMPTY_TEXT}{theme.reset}",
        ]
    return [
        f"{theme.header}{sanitize_label_text(node.label)}{theme.reset}",
        f"{theme.dim}kind:{theme.reset} {node.kind.value}",
        f"{theme.dim}path:{theme.reset} {sanitize_label_text(node.raw_path or '')}",
        f"{theme.dim}id:{theme.reset}   {sanitize_label_text(node.id)}",
    ]


def status_text(views: NavigationViews, focus: FocusState, theme: UITheme) -> str:
    if focus.in_text_field:
        return f"{theme.prompt}go to:{theme.reset} {sanitize_label_text(focus.buffer)}_"
    parts = [display_path(views.current_path)]
    if views.current_nodes and views.selected_index is not None:
        parts.append(f"{views.selected_index + 1}/{len(views.current_nodes)}")
    if views.listing_status.loading:
        parts.append(f"{theme.loading}{LOADING_TEXT}{theme.reset}")
    if views.listing_status.error is not None:
        parts.append(f"{theme.error}{sanitize_label_text(views.listing_status.error)}{theme.reset}")
    parts.append(f"{theme.dim}: go to  R reload  q quit{theme.reset}")
    return "  ".join(parts)


def render_screen(
    views: NavigationViews,
    layout: PaneLayout,
    *,
    list_viewport: ListViewport,
    detail_viewport: DetailViewport,
    focus: FocusState,
    theme: UITheme,
    title: str = "lazynav",
) -> str:
    """Compose one full-screen frame, ready to write to the terminal."""
    rows = layout.content_rows

    crumbs = breadcrumb_lines(views, theme)
    crumbs = crumbs[breadcrumb_start(len(crumbs), rows) :] or [f"{theme.dim}<root>{theme.reset}"]

    listing = listing_lines(views, theme)
    list_start = list_viewport.follow(views.selected_index, len(listing), rows)
    listing = listing[list_start : list_start + rows]
    if not listing:
        banner = status_banner(views.listing_status, views.listing_loaded, True, theme)
        listing = [banner] if banner is not None else []

    detail_viewport.follow(views.preview_target or (views.selected_node.id if views.selected_node else None))
    preview = preview_lines(views, theme)
    detail_viewport.set_extent(len(preview), rows)
    preview = preview[detail_viewport.offset : detail_viewport.offset + rows]

    divider = f"{theme.divider}│{theme.reset}"
    out = ["\033[H\033[J"]
    header = f"{theme.header}{title}{theme.reset} {theme.dim}{display_path(views.current_path)}{theme.reset}"
    out.append(fit_cell(header, layout.columns, theme.reset))
    for row in range(rows):
        cells = [
            fit_cell(crumbs[row] if row < len(crumbs) else "", layout.breadcrumb_width, theme.reset),
            fit_cell(listing[row] if row < len(listing) else "", layout.listing_width, theme.reset),
            fit_cell(preview[row] if row < len(preview) else "", layout.preview_width, theme.reset),
        ]
        out.append("\r\n" + divider.join(cells))
    out.append("\r\n" + fit_cell(status_text(views, focus, theme), max(1, layout.columns - 1), theme.reset))
    return "".join(out)


__all__ = [
    "breadcrumb_lines",
    "display_path",
    "format_node",
    "listing_lines",
    "preview_lines",
    "render_screen",
    "status_banner",
    "status_text",
]
