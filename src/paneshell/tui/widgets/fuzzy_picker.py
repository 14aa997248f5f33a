"""
Modal fuzzy picker for narrowing output lines.
"""

import urwid
import logging
from typing import Callable, Optional

from ...fuzzy_filter import FuzzyFilter
from ..key_bindings import (
    KEY_PICKER_ACCEPT, KEY_PICKER_CANCEL, KEY_NAVIGATE_UP, KEY_NAVIGATE_DOWN,
    KEY_PAGE_UP, KEY_PAGE_DOWN,
)
from ..theme import Theme, DEFAULT_THEME

logger = logging.getLogger('PaneShell.TUI')

PAGE_SIZE = 10


class FuzzyPickerDialog(urwid.WidgetWrap):
    """
    Query box over a narrowing list of lines.

    Consumes every key while open. Enter picks the highlighted line, Esc
    aborts; either way `on_done` is called exactly once, with the chosen
    line or None.
    """

    def __init__(self, fuzzy_filter: FuzzyFilter, on_done: Callable[[Optional[str]], None],
                 theme: Theme = DEFAULT_THEME):
        self.fuzzy_filter = fuzzy_filter
        self._on_done = on_done
        self._theme = theme
        self.highlighted = 0
        self.finished = False

        self.query_edit = urwid.Edit("> ")
        self.count_text = urwid.Text("", align='right')
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)

        header = urwid.Columns([self.query_edit, ('pack', self.count_text)])
        frame = urwid.Frame(body=self.listbox, footer=header, focus_part='footer')
        super().__init__(urwid.LineBox(frame, title='Filter output'))

        urwid.connect_signal(self.query_edit, 'change', self._on_query_changed)
        self._rebuild()

    def _on_query_changed(self, widget, new_text):
        self.fuzzy_filter.set_query(new_text)
        self.highlighted = 0
        self._rebuild()

    def _rebuild(self):
        matches = self.fuzzy_filter.matches
        rows = []
        for i, candidate in enumerate(matches):
            if i == self.highlighted:
                rows.append(urwid.Text((self._theme.picker_match, f"> {candidate.line}"), wrap='clip'))
            else:
                rows.append(urwid.Text(f"  {candidate.line}", wrap='clip'))
        self.walker[:] = rows
        if rows:
            self.walker.set_focus(self.highlighted)
        self.count_text.set_text(
            (self._theme.picker_count, f" {len(matches)}/{len(self.fuzzy_filter.lines)}")
        )

    def _move(self, delta: int):
        count = len(self.fuzzy_filter.matches)
        if not count:
            return
        self.highlighted = min(max(0, self.highlighted + delta), count - 1)
        self._rebuild()

    @property
    def selected_line(self) -> Optional[str]:
        matches = self.fuzzy_filter.matches
        if 0 <= self.highlighted < len(matches):
            return matches[self.highlighted].line
        return None

    def _finish(self, line: Optional[str]):
        if self.finished:
            return
        self.finished = True
        logger.debug(f"Picker finished with {line!r}")
        self._on_done(line)

    def keypress(self, size, key):
        if key == KEY_PICKER_ACCEPT:
            self._finish(self.selected_line)
        elif key == KEY_PICKER_CANCEL:
            self._finish(None)
        elif key == KEY_NAVIGATE_UP:
            self._move(-1)
        elif key == KEY_NAVIGATE_DOWN:
            self._move(1)
        elif key == KEY_PAGE_UP:
            self._move(-PAGE_SIZE)
        elif key == KEY_PAGE_DOWN:
            self._move(PAGE_SIZE)
        else:
            # Typing goes to the query box
            self.query_edit.keypress((max(1, size[0] - 2),), key)
        return None
