"""
Reusable UI widgets for PaneShell TUI.
"""

from .edit_widgets import WatermarkEdit, CommandEdit
from .footer import StatusFooter, HelpLine
from .display import SelectorRow, SelectorPane, ViewportPane, TabBar, ClickablePane, render_selector_row
from .fuzzy_picker import FuzzyPickerDialog

__all__ = [
    'WatermarkEdit',
    'CommandEdit',
    'StatusFooter',
    'HelpLine',
    'SelectorRow',
    'SelectorPane',
    'ViewportPane',
    'TabBar',
    'ClickablePane',
    'render_selector_row',
    'FuzzyPickerDialog',
]
