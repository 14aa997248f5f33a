import urwid
import logging
import traceback
from typing import Callable, Optional

from .config import LauncherConfig
from .error_handler_util import ErrorHandlerUtil
from .focus import FocusState
from .fuzzy_filter import FuzzyFilter
from .launcher_controller import Frame, LauncherController
from .tui.logging_redirect import tui_redirect_context
from .tui.theme import Theme, DEFAULT_THEME
from .tui.widgets import (
    CommandEdit, StatusFooter, HelpLine, SelectorPane, ViewportPane, TabBar,
    ClickablePane, FuzzyPickerDialog,
)

logger = logging.getLogger('PaneShell.TUI')


class LauncherApp:
    """
    urwid front end for the launcher.

    Every key goes through the controller first (global bindings, then the
    focused pane). Keys the controller declines while the input pane is
    focused are handed to the edit widget. After each batch of input the
    widgets are refreshed from `controller.frame()`.
    """

    def __init__(self, config: LauncherConfig, controller: Optional[LauncherController] = None,
                 theme: Theme = DEFAULT_THEME, log_path: Optional[str] = None):
        self.config = config
        self.theme = theme
        self.log_path = log_path
        self.controller = controller or LauncherController(config)
        self.controller.picker = self._open_picker
        self.loop = None
        self.picker_overlay = None
        self._errors = ErrorHandlerUtil.create_error_context('TUI')

        # Panes
        self.tab_bar = TabBar(theme)
        self.selector = SelectorPane(on_row_click=self._on_selector_row_click, theme=theme)
        self.viewport = ViewportPane()
        self.input_edit = CommandEdit(theme=theme)
        self.footer = StatusFooter()
        self.help_line = HelpLine(self.controller.frame().help_text, theme)

        self.selector_pane = ClickablePane(
            urwid.BoxAdapter(self.selector, config.selector_rows), 'Buttons',
            lambda: self._on_pane_click(FocusState.SELECTOR), theme
        )
        self.viewport_pane = ClickablePane(
            urwid.BoxAdapter(self.viewport, config.viewport_lines), 'Output',
            lambda: self._on_pane_click(FocusState.VIEWPORT), theme,
            on_wheel=self._on_viewport_wheel
        )
        self.input_pane = ClickablePane(
            self.input_edit, 'Command',
            lambda: self._on_pane_click(FocusState.INPUT), theme
        )
        self.panes = {
            FocusState.SELECTOR: self.selector_pane,
            FocusState.VIEWPORT: self.viewport_pane,
            FocusState.INPUT: self.input_pane,
        }

        self.right_column = urwid.Pile([('pack', self.viewport_pane), ('pack', self.input_pane)])
        self.columns = urwid.Columns([
            ('fixed', config.selector.width + 2, self.selector_pane),
            ('fixed', config.viewport.width + 2, self.right_column),
        ], dividechars=1)

        body = [('pack', self.columns), ('pack', self.footer), ('pack', self.help_line)]
        if len(config.tab_labels) > 1:
            body.insert(0, ('pack', self.tab_bar))

        self.main_layout = urwid.Padding(
            urwid.Filler(urwid.Pile(body), valign='top', top=1),
            left=2, right=2
        )

        urwid.connect_signal(self.input_edit, 'change', self._on_input_changed)
        self.sync()

    # Controller wiring

    def has_loop(self):
        return self.loop is not None

    def sync(self, frame: Optional[Frame] = None):
        """Refresh every widget from the controller's current frame."""
        frame = frame or self.controller.frame()
        self.tab_bar.update(frame.tab_labels, frame.active_tab)
        self.selector.update(frame.selector_rows, frame.selected_index)
        self.viewport.update(frame.viewport_lines)
        self.input_edit.replace_text(frame.input_text)
        self.input_edit.set_prompt(frame.prompt_command)
        self.help_line.set_visible(frame.show_help)
        for state, pane in self.panes.items():
            pane.set_focused(state is frame.focus)
        self._sync_widget_focus(frame.focus)

        result = self.controller.last_result
        self.footer.update(
            command_count=len(frame.selector_rows),
            tab_label=frame.tab_labels[frame.active_tab],
            focus=frame.focus.value,
            last_command=" ".join(result.argv) if result else "",
            last_error=result.error if result else None,
            last_duration=result.duration if result else 0.0,
        )

    def _sync_widget_focus(self, focus: FocusState):
        # urwid only draws the edit cursor when the input is on the focus path
        if focus is FocusState.SELECTOR:
            self.columns.focus_position = 0
        else:
            self.columns.focus_position = 1
            self.right_column.focus_position = 0 if focus is FocusState.VIEWPORT else 1

    def _on_input_changed(self, widget, new_text):
        if self.input_edit.is_programmatic_update:
            return
        self.controller.set_input_text(new_text)

    def _on_pane_click(self, pane: FocusState):
        if self.picker_overlay is not None:
            return
        self.controller.click_pane(pane)
        self.sync()

    def _on_viewport_wheel(self, delta: int):
        # Does not move focus, so a pending prompt does not block it
        if self.picker_overlay is not None:
            return
        self.controller.scroll_viewport(delta)
        self.sync()

    def _on_selector_row_click(self, index: int):
        if self.picker_overlay is not None:
            return
        self.controller.click_selector_row(index)
        self.sync()

    # Key handling

    def handle_key(self, key: str):
        """Route one key: controller first, then the input widget when it has focus."""
        if not self.controller.handle_key(key):
            if self.controller.focus_state is FocusState.INPUT:
                self.input_edit.keypress((self.config.input.width,), key)
            else:
                logger.debug(f"Unhandled key '{key}' in {self.controller.focus_state.value}")

        if self.controller.quit_requested:
            raise urwid.ExitMainLoop()
        self.sync()

    def input_filter(self, keys, raw):
        """
        MainLoop input filter: handles keys before any widget sees them.

        Mouse events pass through to the widgets. While the picker is open
        every key passes through to it untouched.
        """
        remaining = []
        for key in keys:
            if self.picker_overlay is not None or not isinstance(key, str):
                remaining.append(key)
                continue
            self.handle_key(key)
        return remaining

    # Fuzzy picker

    def _open_picker(self, fuzzy_filter: FuzzyFilter, on_done: Callable[[Optional[str]], None]):
        def finish(line):
            self._close_picker()
            on_done(line)
            self.sync()

        dialog = FuzzyPickerDialog(fuzzy_filter, finish, self.theme)
        self.picker_overlay = urwid.Overlay(
            dialog,
            self.main_layout,
            align='center',
            width=('relative', 80),
            valign='middle',
            height=('relative', 80)
        )
        if self.has_loop():
            self.loop.widget = self.picker_overlay

    def _close_picker(self):
        self.picker_overlay = None
        if self.has_loop():
            self.loop.widget = self.main_layout

    # Main loop

    def run(self) -> int:
        """Run until the user quits. Returns a process exit status."""
        self.loop = urwid.MainLoop(
            self.main_layout,
            list(self.theme.palette),
            input_filter=self.input_filter,
            handle_mouse=True
        )

        try:
            if self.log_path:
                with tui_redirect_context(self.log_path):
                    self.loop.run()
            else:
                self.loop.run()
            return 0
        except Exception as e:
            self._errors.log_and_continue(e, "TUI main loop")
            logger.error(f"Full traceback: {traceback.format_exc()}")
            return 1


def run_ui(config: LauncherConfig, log_path: Optional[str] = None) -> int:
    return LauncherApp(config, log_path=log_path).run()
