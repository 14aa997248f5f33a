"""Command-line interface for PaneShell."""

import os
import sys
import argparse
import logging
from typing import Optional

from . import __version__
from .config import LauncherConfig, find_config_file, load_config
from .error_handler_util import ConfigError

logger = logging.getLogger('PaneShell')

DEFAULT_LOG_PATH = os.path.expanduser('~/.paneshell/debug.log')


def configure_logging(log_path: str = DEFAULT_LOG_PATH, verbose: bool = False):
    """File handler for debug logging, console handler for critical messages only."""
    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.CRITICAL)
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    # The TUI redirect hangs its own handler on the root logger
    logger.propagate = False


def print_commands(config: LauncherConfig):
    """Print the command table."""
    print(f"PaneShell v{__version__} - {len(config.commands)} commands")
    print("=" * 45)
    width = max(len(command.name) for command in config.commands)
    for command in config.commands:
        suffix = " <arg>" if command.requires_prompt else ""
        print(f"  {command.name:<{width}}  {' '.join(command.argv)}{suffix}")
    print(f"\nTabs: {', '.join(config.tab_labels)}")
    print(f"Completions: {len(config.completions)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='paneshell',
        description="PaneShell: run configured commands and browse their output."
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-c', '--config', help='Config file (default: $PANESHELL_CONFIG, ./paneshell.toml, '
                                               '~/.config/paneshell/paneshell.toml).')
    parser.add_argument('--log-file', default=DEFAULT_LOG_PATH, help='Where to write the debug log.')
    parser.add_argument('--verbose', action='store_true', help='Log debug details (key routing, focus changes).')
    parser.add_argument('--list', action='store_true', help='Print the configured commands and exit.')
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, verbose=args.verbose)

    # Configuration failures are fatal before any UI state exists
    config_path = find_config_file(args.config)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.list:
        print_commands(config)
        return 0

    from .launcher_tui import run_ui
    return run_ui(config, log_path=args.log_file)


def entry_point():
    sys.exit(main())
