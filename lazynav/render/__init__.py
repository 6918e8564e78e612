"""Terminal and snapshot renderers for ``NavigationViews``."""

from .panes import render_screen
from .snapshot import render_plain, views_to_json

__all__ = ["render_plain", "render_screen", "views_to_json"]
