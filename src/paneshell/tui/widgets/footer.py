"""
Footer widgets for PaneShell TUI: status line and toggleable help line.
"""

import urwid
from typing import Optional

from ... import __version__
from ..key_bindings import KEY_HELP, KEY_QUIT, KEY_FILTER, key_label
from ..theme import Theme, DEFAULT_THEME


class StatusInfo:
    """Holds what the footer shows."""

    def __init__(self):
        self.command_count = 0
        self.tab_label = ""
        self.focus = ""
        self.last_command = ""
        self.last_error: Optional[str] = None
        self.last_duration = 0.0

    def update(self, **kwargs):
        """Update status fields from keyword arguments."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)


class StatusFooter(urwid.WidgetWrap):
    """Status on the left, key hints on the right."""

    def __init__(self):
        self.status_info = StatusInfo()
        self._left_text_widget = urwid.Text("", wrap='clip')
        self._right_text_widget = urwid.Text("", align='right', wrap='clip')
        columns = urwid.Columns([self._left_text_widget, ('pack', self._right_text_widget)])
        super().__init__(urwid.AttrMap(columns, 'footer'))
        self._refresh_display()

    def update(self, **kwargs):
        self.status_info.update(**kwargs)
        self._refresh_display()

    @property
    def left_text(self) -> str:
        return self._left_text_widget.text

    def _refresh_display(self):
        info = self.status_info
        left_text = [('dark cyan', f"PaneShell v{__version__}")]
        left_text.append(('dark gray', f" • {info.command_count} commands"))
        if info.tab_label:
            left_text.append(('dark gray', f" • {info.tab_label}"))
        if info.focus:
            left_text.append(('dark gray', f" • {info.focus}"))
        if info.last_command:
            if info.last_error:
                left_text.append(('light red', f" • {info.last_command}: {info.last_error}"))
            else:
                left_text.append(('dark green', f" • {info.last_command} {info.last_duration*1000:.0f}ms"))

        self._left_text_widget.set_text(left_text)
        self._right_text_widget.set_text(self._generate_key_bindings())

    def _generate_key_bindings(self) -> list:
        return [
            ('bold', key_label(KEY_HELP)), ('dark gray', " help "),
            ('bold', key_label(KEY_FILTER)), ('dark gray', " filter "),
            ('bold', key_label(KEY_QUIT)), ('dark gray', " quit"),
        ]


class HelpLine(urwid.Text):
    """One-line key reference, blank while hidden."""

    def __init__(self, help_text: str, theme: Theme = DEFAULT_THEME):
        super().__init__("")
        self.help_text = help_text
        self._theme = theme
        self.visible = False

    def set_visible(self, visible: bool):
        if visible == self.visible:
            return
        self.visible = visible
        self.set_text((self._theme.help, self.help_text) if visible else "")
