"""
Viewer state: loaded files, cursor, filter, display modes and dialogs
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..config.constants import (
    DEFAULT_BINARY_EXTENSION, FAMILY_FILTER_PREFIX, FAMILY_FILTER_SUFFIX,
    MIN_SCROLL_TAIL, MSG_ENTER_EXTENSION, MSG_ENTER_NAME, MSG_FILE_EXISTS,
    MSG_SAVE_HINT, MSG_SAVED
)
from ..core import compare, exiftool
from ..core.compare import CompareRow
from ..core.exceptions import BinarySaveError, ToolExiftoolError
from ..core.models import FileTags, TagEntry

logger = logging.getLogger(__name__)

Reader = Callable[[Sequence[str], bool], List[FileTags]]
BinaryReader = Callable[[str, TagEntry], bytes]


class Screen(Enum):
    MAIN = "main"
    HELP = "help"
    MULTIPLE_FILES_START = "multiple_files_start"


class MainInput(Enum):
    MAIN = "main"
    FILTER = "filter"
    BINARY_SAVE_DIALOG = "binary_save_dialog"


@dataclass
class StatusMessage:
    text: str
    is_error: bool = False


@dataclass
class DisplayMode:
    short: bool = False
    numerical: bool = False


@dataclass
class BinarySaveDialog:
    fname: str = ""
    fext: str = DEFAULT_BINARY_EXTENSION
    status: StatusMessage = field(default_factory=lambda: StatusMessage(MSG_SAVE_HINT))
    editing_fname: bool = True

    def push(self, ch: str) -> None:
        if self.editing_fname:
            self.fname += ch
        else:
            self.fext += ch

    def pop(self) -> None:
        if self.editing_fname:
            self.fname = self.fname[:-1]
        else:
            self.fext = self.fext[:-1]

    def switch_focus(self) -> None:
        self.editing_fname = not self.editing_fname


@dataclass
class CompareData:
    # None: off, False: all rows, True: differing rows only
    mode: Optional[bool] = None
    rows: List[CompareRow] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.mode is not None


class MainState:
    """Everything the main screen shows, independent of any toolkit."""

    def __init__(self, files: Optional[List[FileTags]] = None, download_dir: Optional[Path] = None,
                 reader: Optional[Reader] = None, binary_reader: Optional[BinaryReader] = None):
        self.files: List[FileTags] = files or []
        self.current_file_index = 0
        self.current_file = self.files[0].file_name if self.files else ""
        self.show_details = False
        self.binary_save_dialog: Optional[BinarySaveDialog] = None
        self.filter = ""
        self.display_mode = DisplayMode()
        self.scroll_offset = (0, 0)
        self.cursor = 0
        self.log_msg: Optional[StatusMessage] = None
        self.compare = CompareData()
        self.download_dir = download_dir or Path.home() / "Downloads"
        self.multiple_files_input: Optional[List[str]] = None
        self._reader = reader or (lambda paths, recursive: exiftool.run(paths, recursive))
        self._binary_reader = binary_reader or (lambda path, entry: exiftool.extract_binary(path, entry))

    @classmethod
    def for_single_file(cls, path: str, **kwargs) -> "MainState":
        state = cls(**kwargs)
        state.files = state._reader([path], False)
        state.current_file = path
        return state

    @classmethod
    def for_multiple_files(cls, paths: Sequence[str], **kwargs) -> "MainState":
        state = cls(**kwargs)
        state.multiple_files_input = list(paths)
        return state

    def read_multiple_files(self, recursive: bool) -> None:
        paths = self.multiple_files_input or []
        self.multiple_files_input = None
        self.files = self._reader(paths, recursive)
        self.current_file_index = 0
        self.current_file = self.files[0].file_name if self.files else ""
        self.calculate_compare_data()

    # --- queries ---

    def is_multiple_files(self) -> bool:
        return len(self.files) > 1

    @property
    def current(self) -> Optional[FileTags]:
        if not self.files:
            return None
        return self.files[self.current_file_index]

    def visible_entries(self) -> List[TagEntry]:
        current = self.current
        if current is None:
            return []
        if not self.filter:
            return list(current.tag_entries)
        return [e for e in current.tag_entries if e.matches(self.filter)]

    def visible_compare_rows(self) -> List[CompareRow]:
        return compare.visible_rows(self.compare.rows, self.filter, bool(self.compare.mode))

    @property
    def num_entries_shown(self) -> int:
        if self.compare.active and self.is_multiple_files():
            return len(self.visible_compare_rows())
        return len(self.visible_entries())

    def selected_entry(self) -> Optional[TagEntry]:
        """In compare mode this is the current file's value on the cursor row."""
        if self.compare.active:
            rows = self.visible_compare_rows()
            if self.cursor >= len(rows):
                return None
            values = rows[self.cursor].values
            if self.current_file_index >= len(values):
                return None
            return values[self.current_file_index]
        entries = self.visible_entries()
        if self.cursor >= len(entries):
            return None
        return entries[self.cursor]

    # --- scrolling ---

    def reset_position(self) -> None:
        self.scroll_offset = (0, 0)
        self.cursor = 0

    def _clamp_cursor(self) -> None:
        self.cursor = min(self.cursor, max(self.num_entries_shown - 1, 0))

    def scrollv(self, delta: int) -> None:
        self.cursor = max(self.cursor + delta, 0)
        if delta > 0:
            self._clamp_cursor()

    def scrollv_drag_cursor(self, delta: int) -> None:
        row, col = self.scroll_offset
        self.scroll_offset = (max(row + delta, 0), col)
        self.scrollv(delta)

    def scrollh(self, delta: int) -> None:
        row, col = self.scroll_offset
        self.scroll_offset = (row, max(col + delta, 0))

    def fit_viewport(self, height: int) -> None:
        """Keep the cursor inside a viewport of `height` rows."""
        row, col = self.scroll_offset
        if self.cursor < row:
            row = self.cursor
        elif height > 0 and self.cursor >= row + height:
            row = self.cursor - height + 1
        row = min(row, max(self.num_entries_shown - MIN_SCROLL_TAIL, 0))
        self.scroll_offset = (row, col)

    # --- files ---

    def _sync_current_file(self) -> None:
        self.current_file = self.files[self.current_file_index].file_name

    def next_file(self) -> None:
        if not self.is_multiple_files():
            return
        self.current_file_index = (self.current_file_index + 1) % len(self.files)
        self._sync_current_file()

    def previous_file(self) -> None:
        if not self.is_multiple_files():
            return
        self.current_file_index = (self.current_file_index - 1) % len(self.files)
        self._sync_current_file()

    def close_current_file(self) -> bool:
        if not self.is_multiple_files() or self.compare.active:
            return False
        removed = self.files.pop(self.current_file_index)
        logger.debug(f"Closed tab {removed.file_name}")
        if self.current_file_index >= len(self.files):
            self.current_file_index = len(self.files) - 1
        self._sync_current_file()
        self.calculate_compare_data()
        self._clamp_cursor()
        return True

    # --- compare ---

    def calculate_compare_data(self) -> None:
        self.compare.rows = compare.build_compare_rows(self.files)

    def toggle_compare(self) -> None:
        self.compare.mode = None if self.compare.active else False
        self.reset_position()
        self.current_file_index = 0
        if self.files:
            self._sync_current_file()

    def toggle_diff_only(self) -> None:
        if not self.compare.active:
            return
        self.compare.mode = not self.compare.mode
        self.reset_position()

    # --- filter ---

    def filter_by_selected_family(self) -> bool:
        entry = self.selected_entry()
        if entry is None:
            return False
        self.filter = f"{FAMILY_FILTER_PREFIX}{entry.family()}{FAMILY_FILTER_SUFFIX}"
        self.reset_position()
        return True

    # --- binary data ---

    def open_binary_save_dialog(self) -> bool:
        entry = self.selected_entry()
        if entry is None or not entry.is_binary:
            return False
        self.binary_save_dialog = BinarySaveDialog()
        return True

    def binary_target_path(self) -> Optional[Path]:
        """Validate the dialog and return the output path, or None with an error status set."""
        dialog = self.binary_save_dialog
        if dialog is None:
            return None
        if not dialog.fname:
            dialog.status = StatusMessage(MSG_ENTER_NAME, True)
            return None
        if not dialog.fext:
            dialog.status = StatusMessage(MSG_ENTER_EXTENSION, True)
            return None
        if dialog.fext.startswith('.'):
            dialog.fext = dialog.fext[1:]
        path = self.download_dir / f"{dialog.fname}.{dialog.fext}"
        if path.exists():
            dialog.status = StatusMessage(MSG_FILE_EXISTS, True)
            return None
        return path

    def try_save_binary(self) -> bool:
        """
        Write the selected entry's binary data to the download directory.

        Returns:
            True when the file was written
        """
        path = self.binary_target_path()
        if path is None:
            return False

        entry = self.selected_entry()
        current = self.current
        if entry is None or current is None:
            return False

        try:
            data = self._binary_reader(current.file_name, entry)
        except ToolExiftoolError as e:
            logger.error(e.get_full_message())
            self.binary_save_dialog.status = StatusMessage(e.message, True)
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'xb') as f:
                f.write(data)
        except FileExistsError:
            self.binary_save_dialog.status = StatusMessage(MSG_FILE_EXISTS, True)
            return False
        except OSError as e:
            error = BinarySaveError(str(path), e)
            logger.error(error.get_full_message())
            self.binary_save_dialog.status = StatusMessage(error.message, True)
            return False

        logger.info(f"Saved {len(data)} bytes of {entry.short_name} to {path}")
        self.log_msg = StatusMessage(MSG_SAVED.format(path=path))
        return True

    def take_log_msg(self) -> Optional[StatusMessage]:
        msg, self.log_msg = self.log_msg, None
        return msg
