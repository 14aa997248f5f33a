"""
PaneShell: a terminal launcher for configured shell commands.
"""

__version__ = "0.1.0"

from .config import CommandSpec, LauncherConfig, load_config
from .launcher_controller import LauncherController

__all__ = ['CommandSpec', 'LauncherConfig', 'load_config', 'LauncherController', '__version__']
