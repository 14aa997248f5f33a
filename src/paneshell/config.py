"""
Launcher configuration for PaneShell.

Loads the command table, pane dimensions, tab labels and completion
candidates from a TOML file into immutable values that are built once at
startup and passed explicitly to the controller and the UI.

Example paneshell.toml:
    tabs = ["Main", "Scratch"]

    [viewport]
    width = 110
    height = 20

    [list]
    width = 45
    height = 20

    [textinput]
    width = 107

    [[buttons]]
    name = "Echo Hey"
    cmd = ["echo", "hey"]
    prompt = false
"""

import os
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .error_handler_util import ConfigError, ErrorHandlerUtil

logger = logging.getLogger('PaneShell.Config')
_errors = ErrorHandlerUtil.create_error_context('Config')

CONFIG_ENV_VAR = 'PANESHELL_CONFIG'
CONFIG_FILE_NAME = 'paneshell.toml'
USER_CONFIG_PATH = Path('~/.config/paneshell') / CONFIG_FILE_NAME

DEFAULT_TAB_LABELS = ("Output",)

# The text input is always one row tall
INPUT_HEIGHT = 1


@dataclass(frozen=True)
class CommandSpec:
    """A named command from the button table."""
    name: str
    argv: Tuple[str, ...]
    requires_prompt: bool = False


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int


@dataclass(frozen=True)
class LauncherConfig:
    """Everything the launcher needs from configuration."""
    commands: Tuple[CommandSpec, ...]
    viewport: Dimensions
    selector: Dimensions
    input: Dimensions
    completions: Tuple[str, ...]
    tab_labels: Tuple[str, ...] = DEFAULT_TAB_LABELS

    @property
    def viewport_lines(self) -> int:
        """Rows of output visible at once (borders and padding excluded)."""
        return max(1, self.viewport.height - self.input.height - 4)

    @property
    def selector_rows(self) -> int:
        """Command rows visible at once inside the selector border."""
        return max(1, self.selector.height - 2)


def find_config_file(explicit_path: Optional[str] = None) -> Path:
    """
    Resolve which config file to load.

    Order: explicit path, $PANESHELL_CONFIG, ./paneshell.toml, then the
    per-user file. When nothing exists the local name is returned so the
    load error names a sensible path.

    Args:
        explicit_path: Path given on the command line, if any

    Returns:
        Path: Config file to load
    """
    if explicit_path:
        return Path(explicit_path).expanduser()

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    local = Path.cwd() / CONFIG_FILE_NAME
    if local.exists():
        return local

    user = USER_CONFIG_PATH.expanduser()
    if user.exists():
        return user

    return local


def list_directory_entries(directory: Path) -> Tuple[str, ...]:
    """Entries of a directory the way `ls -a` lists them: dot entries first."""
    names = sorted(entry.name for entry in directory.iterdir())
    return ('.', '..') + tuple(names)


def load_config(path: Path, cwd: Optional[Path] = None) -> LauncherConfig:
    """
    Load and validate a launcher config file.

    Args:
        path: TOML file to read
        cwd: Directory used for default completions (default: current dir)

    Returns:
        LauncherConfig: Validated configuration

    Raises:
        ConfigError: If the file is missing, unparsable or malformed
    """
    logger.info(f"Loading config from {path}")
    try:
        with open(path, 'rb') as f:
            raw = tomllib.load(f)
    except FileNotFoundError as e:
        _errors.config_error(f"config file not found: {path}", path=path, cause=e)
    except tomllib.TOMLDecodeError as e:
        _errors.config_error(f"invalid TOML in {path}: {e}", path=path, cause=e)
    except OSError as e:
        _errors.config_error(f"cannot read {path}: {e}", path=path, cause=e)

    try:
        return parse_config(raw, cwd=cwd)
    except ConfigError as e:
        if e.path is None:
            e.path = path
        raise


def parse_config(raw: Dict[str, Any], cwd: Optional[Path] = None) -> LauncherConfig:
    """Build a LauncherConfig from an already-decoded TOML document."""
    commands = _parse_commands(raw.get('buttons'))
    viewport = _parse_dimensions(raw, 'viewport')
    selector = _parse_dimensions(raw, 'list')
    input_dims = Dimensions(width=_parse_width(raw), height=INPUT_HEIGHT)
    tab_labels = _parse_string_list(raw, 'tabs', DEFAULT_TAB_LABELS)
    if not tab_labels:
        _errors.config_error("'tabs' must name at least one tab")

    if 'completions' in raw:
        completions = _parse_string_list(raw, 'completions', ())
    else:
        directory = cwd or Path.cwd()
        completions = _errors.handle_with_fallback(
            lambda: list_directory_entries(directory),
            fallback_value=(),
            error_message=f"Could not list {directory} for completions"
        )

    config = LauncherConfig(
        commands=commands,
        viewport=viewport,
        selector=selector,
        input=input_dims,
        completions=completions,
        tab_labels=tab_labels,
    )
    logger.debug(
        f"Config loaded: {len(commands)} commands, {len(completions)} completions, "
        f"{len(tab_labels)} tabs"
    )
    return config


def _parse_commands(buttons) -> Tuple[CommandSpec, ...]:
    if not isinstance(buttons, list) or not buttons:
        _errors.config_error("'buttons' must be a non-empty array of tables")

    commands = []
    for position, button in enumerate(buttons, start=1):
        if not isinstance(button, dict):
            _errors.config_error(f"button #{position} is not a table")

        name = button.get('name')
        if not isinstance(name, str) or not name:
            _errors.config_error(f"button #{position} needs a string 'name'")

        argv = button.get('cmd')
        if (not isinstance(argv, list) or not argv
                or not all(isinstance(arg, str) for arg in argv)):
            _errors.config_error(
                f"button '{name}' needs 'cmd' as a non-empty array of strings"
            )

        prompt = button.get('prompt', False)
        if not isinstance(prompt, bool):
            _errors.config_error(f"button '{name}' has a non-boolean 'prompt'")

        commands.append(CommandSpec(name=name, argv=tuple(argv), requires_prompt=prompt))
    return tuple(commands)


def _parse_dimensions(raw: Dict[str, Any], section: str) -> Dimensions:
    table = raw.get(section)
    if not isinstance(table, dict):
        _errors.config_error(f"missing [{section}] table")
    return Dimensions(
        width=_positive_int(table, 'width', section),
        height=_positive_int(table, 'height', section),
    )


def _parse_width(raw: Dict[str, Any]) -> int:
    table = raw.get('textinput')
    if not isinstance(table, dict):
        _errors.config_error("missing [textinput] table")
    return _positive_int(table, 'width', 'textinput')


def _positive_int(table: Dict[str, Any], key: str, section: str) -> int:
    value = table.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        _errors.config_error(f"[{section}] {key} must be a positive integer")
    return value


def _parse_string_list(raw: Dict[str, Any], key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if key not in raw:
        return default
    value = raw[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        _errors.config_error(f"'{key}' must be an array of strings")
    return tuple(value)
