"""
Interaction controller for the launcher.

Owns the whole in-process model (focus, tabs, completion cursor, selector
position, input text) and turns key and pointer events into state changes
and command runs. It has no urwid dependency: the TUI feeds it urwid key
strings, forwards whatever it declines to the focused widget, and redraws
from `frame()` after every event.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .command_runner import CommandRunner, RunResult
from .completion import CompletionCursor
from .config import CommandSpec, LauncherConfig
from .focus import FocusState, FocusStateMachine, PromptContext
from .fuzzy_filter import FuzzyFilter, split_lines
from .output_log import TabSet
from .tui.key_bindings import (
    KEY_QUIT, KEY_HELP, KEY_NEXT_FOCUS, KEY_PREV_FOCUS,
    KEY_NEXT_TAB, KEY_NEXT_TAB_ALT, KEY_PREV_TAB, KEY_PREV_TAB_ALT, KEY_REFRESH,
    KEY_SELECT, KEY_SUBMIT, KEY_COMPLETE, KEY_FILTER,
    KEY_NAVIGATE_UP, KEY_NAVIGATE_DOWN, KEY_PAGE_UP, KEY_PAGE_DOWN, KEY_HOME, KEY_END,
    HELP_TEXT,
)

logger = logging.getLogger('PaneShell.Controller')

# picker(fuzzy_filter, on_done); on_done receives the chosen line or None
Picker = Callable[[FuzzyFilter, Callable[[Optional[str]], None]], None]


@dataclass(frozen=True)
class Frame:
    """Snapshot of everything the UI draws."""
    tab_labels: Tuple[str, ...]
    active_tab: int
    focus: FocusState
    selector_rows: Tuple[str, ...]
    selected_index: int
    viewport_lines: Tuple[str, ...]
    input_text: str
    show_help: bool
    help_text: str
    prompt_command: Optional[str] = None

    @property
    def show_tab_bar(self) -> bool:
        return len(self.tab_labels) > 1


class LauncherController:
    """Routes input events to the focus machine, runner, tabs and filter."""

    def __init__(self, config: LauncherConfig, runner: Optional[CommandRunner] = None,
                 focus: Optional[FocusStateMachine] = None, picker: Optional[Picker] = None):
        self.config = config
        self.commands: Tuple[CommandSpec, ...] = config.commands
        self.runner = runner or CommandRunner()
        self.focus = focus or FocusStateMachine()
        self.tabs = TabSet(config.tab_labels)
        self.completion = CompletionCursor(config.completions)
        self.picker = picker
        self.viewport_height = config.viewport_lines
        self.selector_page_size = config.selector_rows

        self.selected_index = 0
        self.input_text = ""
        self.show_help = False
        self.quit_requested = False
        self.filter_active = False
        self.last_result: Optional[RunResult] = None

    # State accessors

    @property
    def focus_state(self) -> FocusState:
        return self.focus.state

    @property
    def prompt(self) -> Optional[PromptContext]:
        return self.focus.prompt

    @property
    def selected_command(self) -> Optional[CommandSpec]:
        if 0 <= self.selected_index < len(self.commands):
            return self.commands[self.selected_index]
        return None

    # Key dispatch

    def handle_key(self, key: str) -> bool:
        """
        Handle one key press.

        Global bindings are tried first, then the focused pane's bindings.

        Returns:
            True if the key was consumed, False if the focused widget should
            get it (text editing keys in the input pane, for instance)
        """
        if self.filter_active:
            # The picker is modal; nothing else sees keys until it resolves
            return True

        if self.handle_global_key(key):
            return True

        state = self.focus.state
        if state is FocusState.SELECTOR:
            return self._handle_selector_key(key)
        if state is FocusState.VIEWPORT:
            return self._handle_viewport_key(key)
        return self._handle_input_key(key)

    def handle_global_key(self, key: str) -> bool:
        if key == KEY_QUIT:
            self.request_quit()
        elif key == KEY_HELP:
            self.toggle_help()
        elif key == KEY_NEXT_FOCUS:
            self.focus.next()
        elif key == KEY_PREV_FOCUS:
            self.focus.previous()
        elif key in (KEY_NEXT_TAB, KEY_NEXT_TAB_ALT):
            self.next_tab()
        elif key in (KEY_PREV_TAB, KEY_PREV_TAB_ALT):
            self.previous_tab()
        elif key == KEY_REFRESH:
            self.refresh()
        else:
            return False
        return True

    def _handle_selector_key(self, key: str) -> bool:
        if key == KEY_SELECT:
            self.select_command()
        elif key == KEY_NAVIGATE_UP:
            self.move_selection(-1)
        elif key == KEY_NAVIGATE_DOWN:
            self.move_selection(1)
        elif key == KEY_PAGE_UP:
            self.move_selection(-self.selector_page_size)
        elif key == KEY_PAGE_DOWN:
            self.move_selection(self.selector_page_size)
        elif key == KEY_HOME:
            self.move_selection(-len(self.commands))
        elif key == KEY_END:
            self.move_selection(len(self.commands))
        else:
            return False
        return True

    def _handle_viewport_key(self, key: str) -> bool:
        tab = self.tabs.active
        if key == KEY_FILTER:
            self.request_filter()
        elif key == KEY_NAVIGATE_UP:
            self.scroll_viewport(-1)
        elif key == KEY_NAVIGATE_DOWN:
            self.scroll_viewport(1)
        elif key == KEY_PAGE_UP:
            self.scroll_viewport(-self.viewport_height)
        elif key == KEY_PAGE_DOWN:
            self.scroll_viewport(self.viewport_height)
        elif key == KEY_HOME:
            tab.scroll_to_top()
        elif key == KEY_END:
            tab.scroll_to_bottom(self.viewport_height)
        else:
            return False
        return True

    def _handle_input_key(self, key: str) -> bool:
        if key == KEY_SUBMIT:
            self.submit_input()
        elif key == KEY_COMPLETE:
            self.complete()
        else:
            return False
        return True

    # Global actions

    def request_quit(self):
        logger.info("Quit requested")
        self.quit_requested = True

    def toggle_help(self):
        self.show_help = not self.show_help

    def next_tab(self):
        self.tabs.next()

    def previous_tab(self):
        self.tabs.previous()

    def refresh(self):
        """Redraw the active tab from its log, undoing any filter."""
        tab = self.tabs.active
        tab.show_log()
        tab.scroll_to_bottom(self.viewport_height)

    def scroll_viewport(self, delta: int):
        """Scroll the active tab by delta lines (negative scrolls back), clamped."""
        self.tabs.active.scroll_by(delta, self.viewport_height)

    # Selector

    def move_selection(self, delta: int):
        if not self.commands:
            return
        self.selected_index = min(max(0, self.selected_index + delta), len(self.commands) - 1)

    def select_command(self, index: Optional[int] = None) -> Optional[RunResult]:
        """
        Activate a command from the selector.

        Non-prompting commands run right away and focus stays on the
        selector. Prompting commands move focus to the input and wait.
        """
        if self.focus.state is not FocusState.SELECTOR:
            return None
        if index is not None:
            self.selected_index = index
        command = self.selected_command
        if command is None:
            return None

        self.focus.breadcrumbs.log_user_action(f"select '{command.name}'")
        if command.requires_prompt:
            self._replace_input_text("")
            self.focus.begin_prompt(command)
            return None
        return self.run_command(command.argv)

    # Input

    def set_input_text(self, text: str):
        """Record a user edit of the input field; resets completion cycling."""
        if text == self.input_text:
            return
        self.input_text = text
        self.completion.reset()

    def _replace_input_text(self, text: str):
        self.input_text = text
        self.completion.reset()

    def complete(self) -> Optional[str]:
        if self.focus.state is not FocusState.INPUT:
            return None
        candidate = self.completion.advance()
        if candidate is not None:
            # Set directly: this edit must not reset the cursor
            self.input_text = candidate
        return candidate

    def submit_input(self) -> Optional[RunResult]:
        """
        Run what was typed.

        With a pending prompt the text becomes the prompting command's last
        argument (an empty line abandons the prompt). Otherwise the line is
        split on whitespace and run as is.
        """
        if self.focus.state is not FocusState.INPUT:
            return None

        text = self.input_text
        prompt = self.focus.prompt
        result = None
        if prompt is not None:
            if text.strip():
                result = self.run_command(prompt.pending_command.argv + (text,))
            else:
                logger.info(f"Prompt for '{prompt.pending_command.name}' abandoned")
        else:
            result = self.run_command(text.split())

        self._replace_input_text("")
        self.focus.finish_input()
        return result

    # Execution

    def run_command(self, argv: Sequence[str]) -> Optional[RunResult]:
        """Run argv and append the outcome to the active tab. Empty argv is a no-op."""
        result = self.runner.run(argv)
        if result is None:
            return None

        tab = self.tabs.active
        tab.log.append(result.format_log_entry())
        tab.show_log()
        tab.scroll_to_bottom(self.viewport_height)
        self.last_result = result
        return result

    # Fuzzy filter

    def request_filter(self) -> bool:
        """Open the picker over the active tab's log lines (viewport focus only)."""
        if self.focus.state is not FocusState.VIEWPORT:
            return False
        if self.picker is None:
            logger.warning("No picker configured; ignoring filter request")
            return False

        lines = split_lines(self.tabs.active.log.text)
        self.filter_active = True
        self.picker(FuzzyFilter(lines), self.apply_filter_selection)
        return True

    def apply_filter_selection(self, line: Optional[str]) -> bool:
        self.filter_active = False
        if line is None:
            logger.debug("Filter aborted")
            return False
        self.tabs.active.show_line(line)
        return True

    # Pointer

    def click_pane(self, pane: FocusState) -> bool:
        return self.focus.focus_pane(pane)

    def click_selector_row(self, index: int) -> bool:
        if not self.focus.focus_pane(FocusState.SELECTOR):
            return False
        if 0 <= index < len(self.commands):
            self.selected_index = index
        return True

    # Rendering

    def frame(self) -> Frame:
        tab = self.tabs.active
        prompt = self.focus.prompt
        return Frame(
            tab_labels=tuple(self.tabs.labels),
            active_tab=self.tabs.active_index,
            focus=self.focus.state,
            selector_rows=tuple(command.name for command in self.commands),
            selected_index=self.selected_index,
            viewport_lines=tuple(tab.visible_lines(self.viewport_height)),
            input_text=self.input_text,
            show_help=self.show_help,
            help_text=HELP_TEXT,
            prompt_command=prompt.pending_command.name if prompt else None,
        )
