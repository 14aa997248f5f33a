"""
Styling for PaneShell TUI.

The palette and attribute names are an immutable value built once and
handed to the app and widgets; nothing reads styling from module state.
"""

from dataclasses import dataclass
from typing import Tuple

DEFAULT_PALETTE = (
    # Basic UI elements - use terminal defaults
    ('body', 'default', 'default'),
    ('footer', 'dark gray', 'default'),
    ('bold', 'white,bold', 'default'),
    ('dark gray', 'dark gray', 'default'),
    ('dark cyan', 'dark cyan', 'default'),
    ('dark green', 'dark green', 'default'),
    ('light red', 'light red', 'default'),

    # Pane borders
    ('border', 'default', 'default'),
    ('focused_border', 'light magenta', 'default'),

    # Selector buttons
    ('button_active', 'light gray', 'dark magenta'),
    ('button_inactive', 'dark blue', 'default'),

    # Tabs
    ('tab_active', 'white,bold', 'dark magenta'),
    ('tab_inactive', 'dark gray', 'default'),

    # Input area
    ('input', 'white', 'default'),
    ('prompt', 'light magenta', 'default'),
    ('placeholder_text', 'dark gray', 'default'),

    # Help line
    ('help', 'dark gray', 'default'),

    # Fuzzy picker
    ('picker_match', 'white,bold', 'dark magenta'),
    ('picker_count', 'dark cyan', 'default'),
)


@dataclass(frozen=True)
class Theme:
    palette: Tuple[tuple, ...] = DEFAULT_PALETTE
    border: str = 'border'
    focused_border: str = 'focused_border'
    button_active: str = 'button_active'
    button_inactive: str = 'button_inactive'
    tab_active: str = 'tab_active'
    tab_inactive: str = 'tab_inactive'
    prompt: str = 'prompt'
    placeholder: str = 'placeholder_text'
    help: str = 'help'
    picker_match: str = 'picker_match'
    picker_count: str = 'picker_count'

    def border_for(self, focused: bool) -> str:
        return self.focused_border if focused else self.border


DEFAULT_THEME = Theme()
