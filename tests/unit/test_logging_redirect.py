"""
Tests for routing console logging and stderr to the debug log in TUI mode.
"""

import logging
import sys

from paneshell.tui.logging_redirect import StderrCapture, TUILogCapture, tui_redirect_context


class TestTUILogCapture:

    def test_console_handlers_are_swapped_and_restored(self, tmp_path):
        log_path = tmp_path / "debug.log"
        urwid_logger = logging.getLogger('urwid')
        console = logging.StreamHandler()
        urwid_logger.addHandler(console)
        try:
            capture = TUILogCapture(str(log_path))
            capture.start_capture()
            assert console not in urwid_logger.handlers
            assert capture.debug_handler in urwid_logger.handlers

            capture.stop_capture()
            assert console in urwid_logger.handlers
            assert capture.debug_handler is None
        finally:
            urwid_logger.removeHandler(console)

    def test_stop_without_start_is_harmless(self, tmp_path):
        TUILogCapture(str(tmp_path / "debug.log")).stop_capture()


class TestStderrCapture:

    def test_captured_text_lands_in_log(self, tmp_path):
        log_path = tmp_path / "debug.log"
        original = sys.stderr
        capture = StderrCapture(str(log_path))

        capture.start_capture()
        print("stray warning", file=sys.stderr)
        output = capture.stop_capture()

        assert sys.stderr is original
        assert output == "stray warning\n"
        assert "stray warning" in log_path.read_text()

    def test_nothing_written_when_quiet(self, tmp_path):
        log_path = tmp_path / "debug.log"
        capture = StderrCapture(str(log_path))

        capture.start_capture()
        capture.stop_capture()

        assert not log_path.exists()


def test_redirect_context(tmp_path):
    log_path = tmp_path / "debug.log"
    original = sys.stderr

    with tui_redirect_context(str(log_path)):
        logging.getLogger('paneshell_redirect_test').warning("logged during tui")
        sys.stderr.write("written during tui\n")

    assert sys.stderr is original
    text = log_path.read_text()
    assert "logged during tui" in text
    assert "written during tui" in text
