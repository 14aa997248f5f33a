"""
Output buffers and the tab set that holds them.

Each tab owns an append-only OutputLog plus the text currently shown in
the viewport for it and a scroll offset. Only the active tab is rendered
and written to by the command runner.
"""

import logging
from typing import List, Optional, Sequence

logger = logging.getLogger('PaneShell.Tabs')

PLACEHOLDER_TEXT = "Output will be displayed here..."


class OutputLog:
    """Append-only text buffer."""

    def __init__(self):
        self._chunks: List[str] = []
        self._text_cache: Optional[str] = ""

    def append(self, text: str):
        if not text:
            return
        self._chunks.append(text)
        self._text_cache = None

    @property
    def text(self) -> str:
        if self._text_cache is None:
            self._text_cache = "".join(self._chunks)
        return self._text_cache

    def lines(self) -> List[str]:
        """Split on line breaks; a trailing separator yields a final empty line."""
        return self.text.split("\n")

    def is_empty(self) -> bool:
        return not self._chunks

    def __len__(self):
        return len(self.text)


class Tab:
    """A named output log with its own viewport state."""

    def __init__(self, label: str):
        self.label = label
        self.log = OutputLog()
        self.scroll_position = 0
        self.view_text = PLACEHOLDER_TEXT

    def show_log(self):
        """Display the full log again (after an append, refresh or filter)."""
        self.view_text = self.log.text

    def show_line(self, line: str):
        """Replace the displayed content with a single line; the log is untouched."""
        self.view_text = line
        self.scroll_position = 0

    def view_lines(self) -> List[str]:
        return self.view_text.split("\n")

    def max_scroll(self, height: int) -> int:
        return max(0, len(self.view_lines()) - height)

    def scroll_by(self, delta: int, height: int):
        self.scroll_position = min(max(0, self.scroll_position + delta), self.max_scroll(height))

    def scroll_to_top(self):
        self.scroll_position = 0

    def scroll_to_bottom(self, height: int):
        self.scroll_position = self.max_scroll(height)

    def visible_lines(self, height: int) -> List[str]:
        start = min(self.scroll_position, self.max_scroll(height))
        return self.view_lines()[start:start + height]

    def __repr__(self):
        return f"Tab({self.label!r}, {len(self.log)} chars, scroll={self.scroll_position})"


class TabSet:
    """Fixed, ordered set of tabs with exactly one active."""

    def __init__(self, labels: Sequence[str]):
        if not labels:
            raise ValueError("a tab set needs at least one tab")
        self.tabs = [Tab(label) for label in labels]
        self.active_index = 0

    @property
    def active(self) -> Tab:
        return self.tabs[self.active_index]

    @property
    def labels(self) -> List[str]:
        return [tab.label for tab in self.tabs]

    def next(self) -> int:
        self.active_index = (self.active_index + 1) % len(self.tabs)
        logger.debug(f"Active tab -> {self.active_index} ({self.active.label})")
        return self.active_index

    def previous(self) -> int:
        self.active_index = (self.active_index - 1 + len(self.tabs)) % len(self.tabs)
        logger.debug(f"Active tab -> {self.active_index} ({self.active.label})")
        return self.active_index

    def __len__(self):
        return len(self.tabs)

    def __iter__(self):
        return iter(self.tabs)
