"""Test keyboard input handling."""

import pytest
from evilined.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,value", [
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<PAGEUP>', 'page_up'),
    ('<PAGEDOWN>', 'page_down'),
    ('<DELETE>', 'delete'),
    ('<BACKSPACE>', 'backspace'),
    ('<TAB>', 'tab'),
    ('<Ctrl-j>', 'enter'),
    ('<Ctrl-m>', 'enter'),
    ('<Ctrl-h>', 'backspace'),
    ('<ESC>', 'escape'),
])
def test_special_tokens(handler, token, value):
    """Test curtsies tokens for special keys."""
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


@pytest.mark.parametrize("token", ['<F1>', '<F2>', '<F10>'])
def test_function_keys(handler, token):
    """Test function key tokens."""
    event = handler.parse_key(token)
    assert event.key_type == KeyType.FUNCTION
    assert event.value == token[1:-1].lower()


def test_space_token(handler):
    """Test that the space token is a regular key."""
    event = handler.parse_key('<SPACE>')
    assert event.key_type == KeyType.REGULAR
    assert event.value == ' '


def test_ctrl_letter(handler):
    """Test Ctrl-letter tokens."""
    event = handler.parse_key('<Ctrl-a>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'a'
    assert event.is_ctrl


@pytest.mark.parametrize("char,value", [
    ('\t', 'tab'),
    ('\n', 'enter'),
    ('\r', 'enter'),
    ('\x7f', 'backspace'),
    ('\x08', 'backspace'),
    ('\x1b', 'escape'),
])
def test_raw_control_characters(handler, char, value):
    """Test raw control characters for special keys."""
    event = handler.parse_key(char)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_raw_ctrl_character(handler):
    """Test a raw Ctrl-A character."""
    event = handler.parse_key('\x01')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'a'


def test_regular_character(handler):
    """Test a printable character."""
    event = handler.parse_key('x')
    assert event == KeyEvent(key_type=KeyType.REGULAR, value='x', raw='x')


def test_get_key_event_from_terminal():
    """Test reading events from the terminal until input runs out."""
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<F2>')
    event = handler.get_key_event()
    assert event.key_type == KeyType.FUNCTION
    assert handler.get_key_event() is None
