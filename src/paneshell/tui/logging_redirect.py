"""
Logging redirection for TUI mode.
While urwid owns the terminal, anything written to the console would paint
over the interface, so root-logger console output and stray stderr writes
are routed to the debug log instead. stdout is left alone: urwid draws
through it.
"""

import io
import sys
import logging
import contextlib
from typing import Dict, List, Optional

LOG_FORMAT = '%(asctime)s - TUI_REDIRECT - %(name)s - %(levelname)s - %(message)s'


class TUILogCapture:
    """Swaps console handlers for a file handler for the duration of TUI mode."""

    def __init__(self, log_path: str):
        self.log_path = log_path
        self.original_handlers: Dict[str, List[logging.Handler]] = {}
        self.captured_loggers: List[str] = []
        self.debug_handler: Optional[logging.Handler] = None
        self.active = False

    def start_capture(self):
        if self.active:
            return
        self.active = True

        self.debug_handler = logging.FileHandler(self.log_path, mode='a')
        self.debug_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        # urwid and asyncio log from inside the main loop; root catches the rest
        for logger_name in ('urwid', 'asyncio', ''):
            logger = logging.getLogger(logger_name)
            self.original_handlers[logger_name] = logger.handlers.copy()
            self.captured_loggers.append(logger_name)

            for handler in logger.handlers[:]:
                if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                    logger.removeHandler(handler)
            logger.addHandler(self.debug_handler)

    def stop_capture(self):
        if not self.active:
            return
        self.active = False

        for logger_name in self.captured_loggers:
            logger = logging.getLogger(logger_name)
            if self.debug_handler in logger.handlers:
                logger.removeHandler(self.debug_handler)
            for handler in self.original_handlers.get(logger_name, []):
                if handler not in logger.handlers:
                    logger.addHandler(handler)

        if self.debug_handler:
            self.debug_handler.close()
            self.debug_handler = None

        self.captured_loggers.clear()
        self.original_handlers.clear()


class StderrCapture:
    """Captures stderr during TUI mode and appends it to the log afterwards."""

    def __init__(self, log_path: str):
        self.log_path = log_path
        self.original_stderr = None
        self.captured_output: Optional[io.StringIO] = None
        self.active = False

    def start_capture(self):
        if self.active:
            return
        self.active = True
        self.original_stderr = sys.stderr
        self.captured_output = io.StringIO()
        sys.stderr = self.captured_output

    def stop_capture(self) -> str:
        """Restore stderr; returns whatever was captured."""
        if not self.active:
            return ""
        self.active = False

        output = self.captured_output.getvalue() if self.captured_output else ""
        sys.stderr = self.original_stderr

        if output.strip():
            with open(self.log_path, 'a') as f:
                f.write(f"\n--- TUI STDERR CAPTURE ---\n{output}\n--- END CAPTURE ---\n")

        if self.captured_output:
            self.captured_output.close()
            self.captured_output = None
        return output


@contextlib.contextmanager
def tui_redirect_context(log_path: str):
    """Route console logging and stderr to log_path while the block runs."""
    log_capture = TUILogCapture(log_path)
    stderr_capture = StderrCapture(log_path)
    log_capture.start_capture()
    stderr_capture.start_capture()
    try:
        yield
    finally:
        stderr_capture.stop_capture()
        log_capture.stop_capture()
