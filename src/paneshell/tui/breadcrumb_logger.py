"""
Breadcrumb logging for pane focus transitions.
Provides visibility into how the user moves between panes.
"""

import logging
import time
from typing import Optional

# Dedicated logger for TUI breadcrumbs
breadcrumb_logger = logging.getLogger('PaneShell.TUI.Breadcrumbs')


class FocusBreadcrumb:
    """Tracks pane focus transitions and logs them as breadcrumbs."""

    MAX_PATH_LENGTH = 10

    def __init__(self, clock=time.time):
        self._clock = clock
        self.current_pane: Optional[str] = None
        self.focus_start_time: Optional[float] = None
        self.navigation_path = []

    def did_gain_focus(self, pane_name: str, reason: str = "navigation"):
        """Log when a pane becomes focused."""
        now = self._clock()

        if self.current_pane and self.focus_start_time is not None:
            duration = now - self.focus_start_time
            breadcrumb_logger.info(f"Pane '{self.current_pane}' focused for {duration:.2f}s")

        self.current_pane = pane_name
        self.focus_start_time = now
        self.navigation_path.append((pane_name, now))
        breadcrumb_logger.info(f"Focus transition: '{pane_name}' (reason: {reason})")

        if len(self.navigation_path) > self.MAX_PATH_LENGTH:
            self.navigation_path = self.navigation_path[-self.MAX_PATH_LENGTH:]

    def log_user_action(self, action: str):
        """Log a user action within the focused pane."""
        breadcrumb_logger.info(f"User action in '{self.current_pane}': {action}")

    def get_navigation_summary(self) -> str:
        if not self.navigation_path:
            return "No navigation history"
        return " -> ".join(item[0] for item in self.navigation_path)
