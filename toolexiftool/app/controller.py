"""
Key handling for the viewer
"""

import logging
import webbrowser
from pathlib import Path
from typing import Callable, Optional, Sequence

from .state import MainInput, MainState, Reader, BinaryReader, Screen, StatusMessage
from ..config.constants import (
    MSG_COPIED_ENTRY, MSG_COPIED_NUMERICAL, MSG_COPIED_VALUE, MSG_NO_BINARY,
    SCROLL_PAGE
)
from ..core import processor
from ..core.exceptions import ClipboardError

logger = logging.getLogger(__name__)

# Toolkit-neutral key names
KEY_UP = "Up"
KEY_DOWN = "Down"
KEY_LEFT = "Left"
KEY_RIGHT = "Right"
KEY_ENTER = "Return"
KEY_ESCAPE = "Escape"
KEY_TAB = "Tab"
KEY_BACKTAB = "BackTab"
KEY_BACKSPACE = "BackSpace"
KEY_SPACE = " "


class Clipboard:
    """Clipboard interface; toolkits provide the implementation."""

    def set_contents(self, text: str) -> None:
        raise NotImplementedError


class App:
    """The viewer: current screen, main state and side-effect hooks."""

    def __init__(self, state: MainState, clipboard: Clipboard, screen: Screen = Screen.MAIN,
                 opener: Optional[Callable[[str], object]] = None):
        self.screen = screen
        self.input = MainInput.MAIN
        self.state = state
        self.clipboard = clipboard
        self.opener = opener or webbrowser.open

    @classmethod
    def from_paths(cls, paths: Sequence[str], clipboard: Clipboard, recursive: Optional[bool] = None,
                   reader: Optional[Reader] = None, binary_reader: Optional[BinaryReader] = None,
                   download_dir: Optional[Path] = None,
                   opener: Optional[Callable[[str], object]] = None) -> "App":
        """
        Build the app for command-line paths.

        A single file opens directly. Several paths, or one folder, are read
        together; if a folder has sub-folders and `recursive` is undecided the
        app starts on the recursion prompt.
        """
        kwargs = dict(reader=reader, binary_reader=binary_reader, download_dir=download_dir)
        if processor.is_single_file(paths):
            return cls(MainState.for_single_file(paths[0], **kwargs), clipboard, opener=opener)

        state = MainState.for_multiple_files(paths, **kwargs)
        if recursive is None and processor.needs_recursion_prompt(paths):
            return cls(state, clipboard, Screen.MULTIPLE_FILES_START, opener=opener)

        state.read_multiple_files(bool(recursive))
        return cls(state, clipboard, opener=opener)

    # --- event entry points ---

    def handle_scroll(self, delta: int) -> None:
        if self.screen is Screen.MAIN and self.input is MainInput.MAIN:
            self.state.scrollv_drag_cursor(delta)

    def select_row(self, index: int) -> None:
        if self.screen is Screen.MAIN and self.input is MainInput.MAIN:
            self.state.cursor = max(min(index, self.state.num_entries_shown - 1), 0)

    def handle_key(self, key: str) -> bool:
        """Dispatch a key press. Returns True when the app should quit."""
        if self.screen is Screen.MAIN:
            if self.input is MainInput.MAIN:
                return self._main_key(key)
            if self.input is MainInput.FILTER:
                self._filter_key(key)
            elif self.input is MainInput.BINARY_SAVE_DIALOG:
                self._dialog_key(key)
        elif self.screen is Screen.HELP:
            if key in (KEY_ESCAPE, KEY_ENTER, "q"):
                self.screen = Screen.MAIN
                self.input = MainInput.MAIN
        elif self.screen is Screen.MULTIPLE_FILES_START:
            if key == "q":
                return True
            if key in ("y", KEY_ENTER):
                self._start_multiple(True)
            elif key in ("n", KEY_ESCAPE):
                self._start_multiple(False)
        return False

    # --- screens ---

    def _start_multiple(self, recursive: bool) -> None:
        self.state.read_multiple_files(recursive)
        self.screen = Screen.MAIN
        self.input = MainInput.MAIN

    def _copy(self, text: str, message: str) -> None:
        try:
            self.clipboard.set_contents(text)
        except ClipboardError as e:
            logger.error(e.get_full_message())
            self.state.log_msg = StatusMessage(e.message, True)
            return
        self.state.log_msg = StatusMessage(message)

    def _main_key(self, key: str) -> bool:
        state = self.state
        multiple = state.is_multiple_files()

        if key == "q":
            return True
        elif key == KEY_SPACE:
            state.scrollv_drag_cursor(SCROLL_PAGE)
        elif key == "s":
            state.display_mode.short = not state.display_mode.short
        elif key == "n":
            state.display_mode.numerical = not state.display_mode.numerical
        elif key == "f":
            self.input = MainInput.FILTER
            state.reset_position()
        elif key == "w":
            entry = state.selected_entry()
            if entry is not None:
                self.opener(entry.docs_url())
        elif key == "h":
            self.screen = Screen.HELP
        elif key == KEY_UP:
            state.scrollv(-1)
        elif key == KEY_DOWN:
            state.scrollv(1)
        elif key == KEY_LEFT:
            state.scrollh(-1)
        elif key == KEY_RIGHT:
            state.scrollh(1)
        elif key == KEY_ENTER:
            state.show_details = not state.show_details
        elif key == KEY_ESCAPE:
            state.show_details = False
        elif key == "x":
            entry = state.selected_entry()
            if entry is not None:
                self._copy(entry.val.to_string(), MSG_COPIED_VALUE)
        elif key == "X":
            entry = state.selected_entry()
            if entry is not None:
                self._copy(entry.numerical_text(), MSG_COPIED_NUMERICAL)
        elif key == "C":
            entry = state.selected_entry()
            if entry is not None:
                self._copy(entry.describe(), MSG_COPIED_ENTRY)
        elif key == "b":
            if state.open_binary_save_dialog():
                self.input = MainInput.BINARY_SAVE_DIALOG
            else:
                state.log_msg = StatusMessage(MSG_NO_BINARY, True)
        elif key == "F":
            state.filter_by_selected_family()
        elif key == KEY_TAB and multiple:
            state.next_file()
        elif key == KEY_BACKTAB and multiple:
            state.previous_file()
        elif key == "W" and multiple and not state.compare.active:
            state.close_current_file()
        elif key == "c" and multiple:
            state.toggle_compare()
        elif key == "d" and state.compare.active:
            state.toggle_diff_only()
        return False

    def _filter_key(self, key: str) -> None:
        state = self.state
        if key == KEY_ENTER:
            self.input = MainInput.MAIN
        elif key == KEY_ESCAPE:
            self.input = MainInput.MAIN
            state.filter = ""
        elif key == KEY_BACKSPACE:
            state.filter = state.filter[:-1]
        elif len(key) == 1:
            state.filter += key

    def _dialog_key(self, key: str) -> None:
        state = self.state
        dialog = state.binary_save_dialog
        if key == KEY_ESCAPE:
            self.input = MainInput.MAIN
            state.binary_save_dialog = None
        elif dialog is None:
            self.input = MainInput.MAIN
        elif key == KEY_ENTER:
            if state.try_save_binary():
                state.binary_save_dialog = None
                self.input = MainInput.MAIN
        elif key == KEY_TAB:
            dialog.switch_focus()
        elif key == KEY_BACKSPACE:
            dialog.pop()
        elif len(key) == 1:
            dialog.push(key)
