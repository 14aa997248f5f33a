"""
Tests for LauncherController: command selection, prompting, tabs,
completion, filtering and pointer handling.
"""

import pytest

from paneshell.config import CommandSpec
from paneshell.focus import FocusState, PromptContext
from paneshell.launcher_controller import LauncherController
from paneshell.output_log import PLACEHOLDER_TEXT
from paneshell.tui.key_bindings import HELP_TEXT
from test_helpers import make_config, FakeRunner, RecordingPicker


def make_controller(runner=None, picker=None, **config_kwargs):
    runner = runner or FakeRunner(output="hey\n")
    return LauncherController(make_config(**config_kwargs), runner=runner, picker=picker)


def focus_input(controller):
    controller.handle_key("ctrl n")
    controller.handle_key("ctrl n")
    assert controller.focus_state is FocusState.INPUT


class TestNonPromptingCommands:

    def test_runs_argv_unchanged_and_keeps_selector_focus(self):
        runner = FakeRunner(output="hey\n")
        controller = make_controller(runner)
        assert controller.focus_state is FocusState.SELECTOR

        controller.handle_key("enter")

        assert runner.calls == [("echo", "hey")]
        assert controller.focus_state is FocusState.SELECTOR
        assert controller.prompt is None

    def test_output_is_appended_to_active_tab(self):
        controller = make_controller()

        controller.select_command(0)

        log_text = controller.tabs.active.log.text
        assert log_text == "Running command: echo hey\nhey\n"
        assert controller.last_result.argv == ("echo", "hey")

    def test_failed_run_logs_error_line(self):
        controller = make_controller(FakeRunner(error="exit status 1"))

        controller.select_command(0)

        assert controller.tabs.active.log.text == "Running command: echo hey\nError: exit status 1\n"

    def test_select_requires_selector_focus(self):
        runner = FakeRunner()
        controller = make_controller(runner)
        controller.handle_key("ctrl n")

        assert controller.select_command(0) is None
        assert runner.calls == []

    def test_every_plain_command_runs_its_argv(self):
        commands = (
            CommandSpec("ls", ("ls", "-l")),
            CommandSpec("date", ("date",)),
            CommandSpec("uname", ("uname", "-a")),
        )
        runner = FakeRunner()
        controller = make_controller(runner, commands=commands)

        for index in range(len(commands)):
            controller.select_command(index)
            assert controller.focus_state is FocusState.SELECTOR

        assert runner.calls == [c.argv for c in commands]


class TestPromptingCommands:

    def test_selecting_prompts_without_running(self):
        runner = FakeRunner()
        controller = make_controller(runner)

        controller.handle_key("down")
        controller.handle_key("enter")

        assert runner.calls == []
        assert controller.focus_state is FocusState.INPUT
        assert controller.prompt == PromptContext(pending_command=controller.commands[1])
        assert controller.frame().prompt_command == "python test"

    def test_submit_appends_input_as_last_argument(self):
        runner = FakeRunner()
        controller = make_controller(runner)
        controller.select_command(1)

        controller.set_input_text("--fast mode")
        controller.handle_key("enter")

        assert runner.calls == [("python3", "test.py", "--fast mode")]
        assert controller.focus_state is FocusState.SELECTOR
        assert controller.prompt is None
        assert controller.input_text == ""

    def test_blank_submit_abandons_prompt(self):
        runner = FakeRunner()
        controller = make_controller(runner)
        controller.select_command(1)

        controller.set_input_text("   ")
        controller.submit_input()

        assert runner.calls == []
        assert controller.prompt is None
        assert controller.focus_state is FocusState.SELECTOR
        assert controller.tabs.active.log.is_empty()

    def test_focus_keys_are_ignored_while_prompting(self):
        controller = make_controller()
        controller.select_command(1)

        assert controller.handle_key("ctrl n") is True
        assert controller.handle_key("ctrl p") is True
        assert controller.focus_state is FocusState.INPUT

    def test_selecting_clears_stale_input(self):
        controller = make_controller()
        focus_input(controller)
        controller.set_input_text("leftover")
        controller.handle_key("ctrl n")

        controller.select_command(1)

        assert controller.input_text == ""


class TestFreeFormInput:

    def test_input_is_split_on_whitespace(self):
        runner = FakeRunner()
        controller = make_controller(runner)
        focus_input(controller)

        controller.set_input_text("  ls   -la  /tmp ")
        controller.handle_key("enter")

        assert runner.calls == [("ls", "-la", "/tmp")]
        assert controller.focus_state is FocusState.SELECTOR

    def test_empty_input_never_spawns_or_logs(self):
        runner = FakeRunner()
        controller = make_controller(runner)
        focus_input(controller)

        controller.submit_input()

        assert runner.calls == []
        assert controller.tabs.active.log.is_empty()
        assert controller.last_result is None

    def test_run_command_with_empty_argv_is_a_no_op(self):
        runner = FakeRunner()
        controller = make_controller(runner)

        assert controller.run_command([]) is None

        assert runner.calls == []
        for tab in controller.tabs:
            assert tab.log.is_empty()

    def test_text_keys_are_left_to_the_widget(self):
        controller = make_controller()
        focus_input(controller)

        assert controller.handle_key("a") is False
        assert controller.handle_key("backspace") is False


class TestCompletion:

    def test_tab_cycles_candidates_into_input(self):
        controller = make_controller(completions=("a.txt", "b.txt", "c.txt"))
        focus_input(controller)

        seen = []
        for _ in range(4):
            controller.handle_key("tab")
            seen.append(controller.input_text)

        assert seen == ["a.txt", "b.txt", "c.txt", "a.txt"]

    def test_user_edit_restarts_cycle(self):
        controller = make_controller(completions=("a.txt", "b.txt", "c.txt"))
        focus_input(controller)
        controller.complete()
        controller.complete()

        controller.set_input_text("b.tx")
        controller.complete()

        assert controller.input_text == "a.txt"

    def test_completion_only_in_input(self):
        controller = make_controller(completions=("a.txt",))

        assert controller.complete() is None
        assert controller.input_text == ""


class TestTabs:

    def test_previous_tab_wraps(self):
        controller = make_controller(tab_labels=("one", "two", "three"))

        seen = []
        for _ in range(3):
            controller.handle_key("ctrl left")
            seen.append(controller.tabs.active_index)

        assert seen == [2, 1, 0]

    def test_next_tab_keys(self):
        controller = make_controller(tab_labels=("one", "two", "three"))

        controller.handle_key("ctrl right")
        controller.handle_key("f6")

        assert controller.tabs.active_index == 2

    def test_commands_write_to_active_tab_only(self):
        controller = make_controller(tab_labels=("one", "two"))
        controller.handle_key("ctrl right")

        controller.select_command(0)

        assert controller.tabs.tabs[0].log.is_empty()
        assert "echo hey" in controller.tabs.tabs[1].log.text

    def test_tab_bar_hidden_for_single_tab(self):
        assert not make_controller().frame().show_tab_bar
        assert make_controller(tab_labels=("one", "two")).frame().show_tab_bar


class TestFuzzyFilterFlow:

    def setup_method(self):
        self.picker = RecordingPicker(choice="y")
        self.controller = make_controller(picker=self.picker)
        tab = self.controller.tabs.active
        tab.log.append("x\ny\nz\n")
        tab.show_log()

    def test_selected_line_replaces_view_only(self):
        self.controller.handle_key("ctrl n")
        self.controller.handle_key("/")

        assert self.picker.seen_lines == ["x", "y", "z", ""]
        assert self.controller.frame().viewport_lines == ("y",)
        assert self.controller.tabs.active.log.text == "x\ny\nz\n"
        assert not self.controller.filter_active

    def test_refresh_restores_full_log(self):
        self.controller.handle_key("ctrl n")
        self.controller.handle_key("/")

        self.controller.handle_key("ctrl l")

        assert self.controller.frame().viewport_lines == ("x", "y", "z", "")

    def test_aborted_filter_leaves_view(self):
        self.picker.choice = None
        self.controller.handle_key("ctrl n")

        self.controller.handle_key("/")

        assert self.controller.frame().viewport_lines == ("x", "y", "z", "")

    def test_filter_key_only_in_viewport(self):
        assert self.controller.request_filter() is False
        assert self.picker.seen_lines is None

    def test_keys_are_swallowed_while_picker_is_open(self):
        pending = []
        controller = make_controller(picker=lambda fuzzy_filter, on_done: pending.append(on_done))
        controller.handle_key("ctrl n")
        controller.handle_key("/")
        assert controller.filter_active

        assert controller.handle_key("ctrl n") is True
        assert controller.focus_state is FocusState.VIEWPORT

        pending[0](None)
        assert not controller.filter_active

    def test_no_picker_configured(self):
        controller = make_controller()
        controller.handle_key("ctrl n")
        assert controller.request_filter() is False


class TestViewportScrolling:

    def test_scroll_keys(self):
        controller = make_controller(runner=FakeRunner(output="\n".join(str(i) for i in range(40))))
        controller.select_command(0)
        controller.handle_key("ctrl n")
        bottom = controller.tabs.active.scroll_position
        assert bottom > 0

        controller.handle_key("up")
        assert controller.tabs.active.scroll_position == bottom - 1

        controller.handle_key("home")
        assert controller.tabs.active.scroll_position == 0

        controller.handle_key("page down")
        assert controller.tabs.active.scroll_position == controller.viewport_height

        controller.handle_key("end")
        assert controller.tabs.active.scroll_position == bottom

    def test_scroll_viewport_is_clamped_and_keeps_focus(self):
        controller = make_controller(runner=FakeRunner(output="\n".join(str(i) for i in range(40))))
        controller.select_command(0)
        bottom = controller.tabs.active.scroll_position

        controller.scroll_viewport(-3)
        assert controller.tabs.active.scroll_position == bottom - 3

        controller.scroll_viewport(10)
        assert controller.tabs.active.scroll_position == bottom

        controller.scroll_viewport(-100)
        assert controller.tabs.active.scroll_position == 0
        assert controller.focus_state is FocusState.SELECTOR

    def test_placeholder_before_any_output(self):
        assert make_controller().frame().viewport_lines == (PLACEHOLDER_TEXT,)


class TestSelectorNavigation:

    def test_movement_is_clamped(self):
        controller = make_controller()

        controller.handle_key("up")
        assert controller.selected_index == 0

        controller.handle_key("down")
        controller.handle_key("down")
        assert controller.selected_index == 1

        controller.handle_key("home")
        assert controller.selected_index == 0

        controller.handle_key("end")
        assert controller.selected_index == 1

    def test_page_keys_move_by_visible_rows(self):
        commands = tuple(CommandSpec(f"cmd {i}", ("echo", str(i))) for i in range(30))
        controller = make_controller(commands=commands)
        assert controller.selector_page_size == 18

        controller.handle_key("page down")
        assert controller.selected_index == 18

        controller.handle_key("page down")
        assert controller.selected_index == 29

        controller.handle_key("page up")
        assert controller.selected_index == 11

        controller.handle_key("page up")
        assert controller.selected_index == 0


class TestPointer:

    def test_click_moves_focus(self):
        controller = make_controller()

        assert controller.click_pane(FocusState.VIEWPORT)
        assert controller.focus_state is FocusState.VIEWPORT

    def test_click_refused_while_prompting(self):
        controller = make_controller()
        controller.select_command(1)

        assert controller.click_pane(FocusState.VIEWPORT) is False
        assert controller.click_selector_row(0) is False
        assert controller.focus_state is FocusState.INPUT

    def test_row_click_selects_without_running(self):
        runner = FakeRunner()
        controller = make_controller(runner)
        controller.handle_key("ctrl n")

        assert controller.click_selector_row(1)

        assert controller.selected_index == 1
        assert controller.focus_state is FocusState.SELECTOR
        assert runner.calls == []


class TestGlobalKeys:

    def test_quit(self):
        controller = make_controller()
        assert controller.handle_key("esc")
        assert controller.quit_requested

    def test_help_toggles(self):
        controller = make_controller()

        controller.handle_key("ctrl g")
        frame = controller.frame()
        assert frame.show_help
        assert frame.help_text == HELP_TEXT

        controller.handle_key("ctrl g")
        assert not controller.frame().show_help

    @pytest.mark.parametrize("key", ["x", "f12", "meta a"])
    def test_unbound_keys_are_declined_in_selector(self, key):
        assert make_controller().handle_key(key) is False


class TestFrame:

    def test_initial_frame(self):
        frame = make_controller().frame()

        assert frame.tab_labels == ("Output",)
        assert frame.active_tab == 0
        assert frame.focus is FocusState.SELECTOR
        assert frame.selector_rows == ("Echo Hey", "python test")
        assert frame.selected_index == 0
        assert frame.input_text == ""
        assert frame.prompt_command is None
