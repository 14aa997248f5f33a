"""
Custom edit widgets for PaneShell TUI.
"""

import urwid
import logging

from ..theme import Theme, DEFAULT_THEME

logger = logging.getLogger('PaneShell.TUI')


class WatermarkEdit(urwid.Edit):
    """Edit widget that shows watermark text while empty."""

    def __init__(self, caption="", edit_text="", watermark_text="",
                 watermark_attr='placeholder_text', **kwargs):
        super().__init__(caption, edit_text, **kwargs)
        self.watermark_text = watermark_text
        self.watermark_attr = watermark_attr

    def render(self, size, focus=False):
        """Show the watermark while there is nothing typed."""
        if not self.edit_text and self.watermark_text:
            watermark_widget = urwid.Text(
                [self.caption, (self.watermark_attr, self.watermark_text)], wrap='clip'
            )
            return watermark_widget.render(size, focus)
        return super().render(size, focus)


class CommandEdit(WatermarkEdit):
    """
    The free-form command input.

    Programmatic updates (completion, clearing after submit) go through
    `replace_text`, which keeps the cursor at the end and does not count
    as a user edit.
    """

    def __init__(self, watermark_text="Type a command...", theme: Theme = DEFAULT_THEME, **kwargs):
        super().__init__(caption="", edit_text="", watermark_text=watermark_text,
                         watermark_attr=theme.placeholder, **kwargs)
        self._theme = theme
        self._programmatic = False

    @property
    def is_programmatic_update(self) -> bool:
        return self._programmatic

    def replace_text(self, text: str):
        if text == self.edit_text:
            return
        self._programmatic = True
        try:
            self.set_edit_text(text)
            self.set_edit_pos(len(text))
        finally:
            self._programmatic = False

    def set_prompt(self, command_name):
        """Show which command is waiting for an argument, or clear the caption."""
        if command_name:
            self.set_caption((self._theme.prompt, f"{command_name}> "))
        else:
            self.set_caption("")
