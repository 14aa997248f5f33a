"""
Focus state machine for the three launcher panes.

Focus cycles Selector -> Viewport -> Input. While a prompting command is
waiting for its argument, focus is pinned to Input and every other
transition request is refused.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .config import CommandSpec
from .tui.breadcrumb_logger import FocusBreadcrumb

logger = logging.getLogger('PaneShell.Focus')


class FocusState(enum.Enum):
    SELECTOR = "selector"
    VIEWPORT = "viewport"
    INPUT = "input"


FOCUS_ORDER = (FocusState.SELECTOR, FocusState.VIEWPORT, FocusState.INPUT)


@dataclass(frozen=True)
class PromptContext:
    """A prompting command waiting for the user to type its last argument."""
    pending_command: CommandSpec


class FocusStateMachine:
    """Owns the current focus and the optional prompt context."""

    def __init__(self, breadcrumbs: Optional[FocusBreadcrumb] = None):
        self._state = FocusState.SELECTOR
        self.prompt: Optional[PromptContext] = None
        self.breadcrumbs = breadcrumbs or FocusBreadcrumb()
        self.breadcrumbs.did_gain_focus(self._state.value, reason="startup")

    @property
    def state(self) -> FocusState:
        return self._state

    @property
    def is_pinned(self) -> bool:
        return self.prompt is not None

    def _move_to(self, state: FocusState, reason: str):
        if state is self._state:
            return
        logger.debug(f"Focus {self._state.value} -> {state.value} ({reason})")
        self._state = state
        self.breadcrumbs.did_gain_focus(state.value, reason=reason)

    def _step(self, offset: int, reason: str) -> bool:
        if self.is_pinned:
            logger.debug(f"Focus pinned to input by pending prompt; ignoring {reason}")
            return False
        index = FOCUS_ORDER.index(self._state)
        self._move_to(FOCUS_ORDER[(index + offset) % len(FOCUS_ORDER)], reason)
        return True

    def next(self) -> bool:
        """Cycle forward. Returns False when pinned."""
        return self._step(1, "next focus")

    def previous(self) -> bool:
        """Cycle backward. Returns False when pinned."""
        return self._step(-1, "previous focus")

    def focus_pane(self, state: FocusState) -> bool:
        """Direct transition, used for pointer clicks. Refused when pinned."""
        if self.is_pinned and state is not FocusState.INPUT:
            logger.debug(f"Focus pinned to input; ignoring click on {state.value}")
            return False
        self._move_to(state, "pointer")
        return True

    def begin_prompt(self, command: CommandSpec) -> PromptContext:
        self.prompt = PromptContext(pending_command=command)
        self._move_to(FocusState.INPUT, f"prompt for '{command.name}'")
        return self.prompt

    def finish_input(self):
        """Input was submitted: drop any prompt and hand focus back to the selector."""
        self.prompt = None
        self._move_to(FocusState.SELECTOR, "input submitted")
