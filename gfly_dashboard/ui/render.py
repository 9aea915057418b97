"""
Text rendering of derived views for the terminal display.
"""

from typing import List, Optional

from ..core.navigation import ViewSelection
from ..core.view import DerivedField, DerivedResult, Emphasis, Loading

LABEL_WIDTH = 24
NO_FIX_BANNER = "*** NO GPS FIX ***"
LOADING_TEXT = "Loading..."

_ANSI = {
    Emphasis.NORMAL: "",
    Emphasis.POSITIVE: "\033[32m",
    Emphasis.NEGATIVE: "\033[31m",
    Emphasis.MUTED: "\033[2m",
}
_ANSI_RESET = "\033[0m"


def page_header(page: ViewSelection) -> str:
    pages = list(ViewSelection)
    return f"== {page.title} [{pages.index(page) + 1}/{len(pages)}] =="


def render_field(field: DerivedField, color: bool = False) -> str:
    value = field.primary_value
    if field.secondary_value:
        value = f"{value} ({field.secondary_value})"
    if color and _ANSI[field.emphasis]:
        value = f"{_ANSI[field.emphasis]}{value}{_ANSI_RESET}"
    return f"{field.label + ':':<{LABEL_WIDTH}}{value}"


def render_view(result: DerivedResult, page: ViewSelection, color: bool = False) -> List[str]:
    """
    Render a derivation result as display lines.

    Args:
        result: Output of derive()
        page: Selected page, used for the header while loading
        color: Use ANSI colors for emphasis

    Returns:
        List[str]: Lines to print
    """
    lines = [page_header(page)]
    if isinstance(result, Loading):
        lines.append(LOADING_TEXT)
        return lines

    if result.no_fix_warning:
        banner = NO_FIX_BANNER
        if color:
            banner = f"{_ANSI[Emphasis.NEGATIVE]}{banner}{_ANSI_RESET}"
        lines.append(banner)
    lines.extend(render_field(field, color) for field in result.fields)
    return lines


def render_status_line(seconds_since_update: Optional[float], is_fetching: bool) -> str:
    """One-line freshness summary, e.g. 'Updated 1.2 s ago (fetching)'"""
    if seconds_since_update is None:
        text = "No data yet"
    else:
        text = f"Updated {seconds_since_update:.1f} s ago"
    if is_fetching:
        text += " (fetching)"
    return text
