"""
UI package for GFly Dashboard.
Contains the terminal display and menu.
"""

from .cli import CLI, create_cli
from .render import render_view, render_field, render_status_line

__all__ = [
    'CLI',
    'create_cli',
    'render_view',
    'render_field',
    'render_status_line'
]
