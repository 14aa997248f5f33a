"""
TUI components for PaneShell.

This package contains the terminal user interface components organized into:
- widgets/: Reusable urwid widgets (panes, footer, fuzzy picker)
- key_bindings, theme: Key map and styling values
- breadcrumb_logger, logging_redirect: Logging support while the screen is active
"""
