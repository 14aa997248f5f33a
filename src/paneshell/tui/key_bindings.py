"""
Key binding constants for PaneShell TUI.
Centralized location for all keyboard shortcuts. Names follow urwid's key
strings.
"""

# Global keys (handled before pane dispatch, whatever has focus)
KEY_QUIT = 'esc'
KEY_HELP = 'ctrl g'
KEY_NEXT_FOCUS = 'ctrl n'
KEY_PREV_FOCUS = 'ctrl p'
KEY_NEXT_TAB = 'ctrl right'
KEY_NEXT_TAB_ALT = 'f6'  # Alternative for terminals without ctrl+arrow
KEY_PREV_TAB = 'ctrl left'
KEY_PREV_TAB_ALT = 'f5'
KEY_REFRESH = 'ctrl l'

# Pane-local keys
KEY_SELECT = 'enter'
KEY_SUBMIT = 'enter'
KEY_COMPLETE = 'tab'
KEY_FILTER = '/'

# Navigation
KEY_NAVIGATE_UP = 'up'
KEY_NAVIGATE_DOWN = 'down'
KEY_PAGE_UP = 'page up'
KEY_PAGE_DOWN = 'page down'
KEY_HOME = 'home'
KEY_END = 'end'

# Mouse buttons as urwid reports them
MOUSE_LEFT = 1
MOUSE_WHEEL_UP = 4
MOUSE_WHEEL_DOWN = 5

# Fuzzy picker (modal, sees every key while open)
KEY_PICKER_ACCEPT = 'enter'
KEY_PICKER_CANCEL = 'esc'


def key_label(key: str) -> str:
    """Short label for a key, e.g. 'ctrl n' -> '^N'."""
    if key.startswith('ctrl ') and len(key) == 6:
        return '^' + key[-1].upper()
    if key.startswith('ctrl '):
        return 'ctrl+' + key[5:]
    return key.upper() if len(key) > 1 else key


HELP_TEXT = (
    f"{key_label(KEY_NEXT_FOCUS)}/{key_label(KEY_PREV_FOCUS)} switch focus. "
    f"ENTER runs the selected command or submits the input. "
    f"TAB cycles completions. "
    f"{key_label(KEY_FILTER)} filters the output. "
    f"{key_label(KEY_REFRESH)} refreshes. "
    f"{key_label(KEY_PREV_TAB_ALT)}/{key_label(KEY_NEXT_TAB_ALT)} switch tabs. "
    f"{key_label(KEY_QUIT)} quits."
)
