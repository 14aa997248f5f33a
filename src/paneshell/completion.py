"""Completion cycling for the command input."""

import logging
from typing import Optional, Sequence

logger = logging.getLogger('PaneShell.Completion')


class CompletionCursor:
    """
    Cycles through a fixed list of candidates.

    `index` is None until the first advance and goes back to None whenever
    the input is edited by anything other than the cursor itself.
    """

    def __init__(self, candidates: Sequence[str]):
        self.candidates = tuple(candidates)
        self.index: Optional[int] = None

    def advance(self) -> Optional[str]:
        """Move to the next candidate and return it (None if there are none)."""
        if not self.candidates:
            return None
        if self.index is None:
            self.index = 0
        else:
            self.index = (self.index + 1) % len(self.candidates)
        logger.debug(f"Completion {self.index + 1}/{len(self.candidates)}: {self.candidates[self.index]!r}")
        return self.candidates[self.index]

    def reset(self):
        self.index = None

    @property
    def current(self) -> Optional[str]:
        if self.index is None:
            return None
        return self.candidates[self.index]
