"""
Display widgets for PaneShell TUI: selector rows, viewport and tab bar.
"""

import urwid
import logging
from typing import Callable, Optional, Sequence

from ..key_bindings import MOUSE_LEFT, MOUSE_WHEEL_UP, MOUSE_WHEEL_DOWN
from ..theme import Theme, DEFAULT_THEME

logger = logging.getLogger('PaneShell.TUI')


def render_selector_row(text: str, is_selected: bool, theme: Theme = DEFAULT_THEME) -> list:
    """Markup for one selector button."""
    attr = theme.button_active if is_selected else theme.button_inactive
    return [(attr, f" {text} ")]


class SelectorRow(urwid.WidgetWrap):
    """One command button in the selector list."""

    def __init__(self, index: int, text: str, is_selected: bool,
                 on_click: Optional[Callable[[int], None]] = None, theme: Theme = DEFAULT_THEME):
        self.index = index
        self.text = text
        self.is_selected = is_selected
        self._on_click = on_click
        super().__init__(urwid.Text(render_selector_row(text, is_selected, theme), wrap='clip'))

    def selectable(self):
        return True

    def keypress(self, size, key):
        # Keys are routed by the controller, never by the list
        return key

    def mouse_event(self, size, event, button, col, row, focus):
        if event == 'mouse press' and button == MOUSE_LEFT and self._on_click:
            self._on_click(self.index)
            return True
        return False


class SelectorPane(urwid.WidgetWrap):
    """Scrollable list of command buttons."""

    def __init__(self, on_row_click: Optional[Callable[[int], None]] = None,
                 theme: Theme = DEFAULT_THEME):
        self._on_row_click = on_row_click
        self._theme = theme
        self._rows = ()
        self._selected = None
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)
        super().__init__(self.listbox)

    def update(self, rows: Sequence[str], selected_index: int):
        rows = tuple(rows)
        if rows == self._rows and selected_index == self._selected:
            return
        self._rows = rows
        self._selected = selected_index
        self.walker[:] = [
            SelectorRow(i, text, i == selected_index, self._on_row_click, self._theme)
            for i, text in enumerate(rows)
        ]
        if 0 <= selected_index < len(self.walker):
            self.walker.set_focus(selected_index)


class ViewportPane(urwid.WidgetWrap):
    """Shows the visible slice of the active tab's output."""

    def __init__(self):
        self.text = urwid.Text("", wrap='clip')
        super().__init__(urwid.Filler(self.text, valign='top'))

    def update(self, lines: Sequence[str]):
        self.text.set_text("\n".join(lines))

    @property
    def content(self) -> str:
        return self.text.text


class TabBar(urwid.Text):
    """Tab labels with the active one highlighted."""

    def __init__(self, theme: Theme = DEFAULT_THEME):
        super().__init__("")
        self._theme = theme

    def update(self, labels: Sequence[str], active_index: int):
        markup = []
        for i, label in enumerate(labels):
            attr = self._theme.tab_active if i == active_index else self._theme.tab_inactive
            markup.append((attr, f" {i + 1}:{label} "))
            markup.append(" ")
        self.set_text(markup or "")


class ClickablePane(urwid.WidgetWrap):
    """Bordered pane that reports left clicks, and optionally wheel steps, before passing them on."""

    def __init__(self, widget, title: str, on_click: Callable[[], None], theme: Theme = DEFAULT_THEME,
                 on_wheel: Optional[Callable[[int], None]] = None):
        self._theme = theme
        self._on_click = on_click
        self._on_wheel = on_wheel
        self.linebox = urwid.LineBox(widget, title=title)
        self.attr_map = urwid.AttrMap(self.linebox, theme.border)
        super().__init__(self.attr_map)

    def set_focused(self, focused: bool):
        self.attr_map.set_attr_map({None: self._theme.border_for(focused)})

    def mouse_event(self, size, event, button, col, row, focus):
        if event == 'mouse press':
            if button == MOUSE_LEFT:
                self._on_click()
            elif button in (MOUSE_WHEEL_UP, MOUSE_WHEEL_DOWN) and self._on_wheel:
                # One line per wheel step; up scrolls back
                self._on_wheel(-1 if button == MOUSE_WHEEL_UP else 1)
                return True
        return super().mouse_event(size, event, button, col, row, focus)
