"""
Tests for the viewer state
"""

import sys
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

# Add the project root to Python path for development testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent))

from toolexiftool.app.state import BinarySaveDialog, MainState
from toolexiftool.config.constants import (
    MSG_ENTER_EXTENSION, MSG_ENTER_NAME, MSG_FILE_EXISTS, MSG_SAVE_HINT
)
from toolexiftool.core.exceptions import BinaryExtractionError
from toolexiftool.core.models import FileTags
from sample_data import make_entry, make_files


def multiple_files_state(**kwargs):
    state = MainState.for_multiple_files(["a.jpg", "b.jpg"], reader=lambda paths, recursive: make_files(),
                                         **kwargs)
    state.read_multiple_files(False)
    return state


class TestConstruction(unittest.TestCase):

    def test_single_file(self):
        reader = mock.Mock(return_value=make_files()[:1])
        state = MainState.for_single_file("a.jpg", reader=reader)

        reader.assert_called_once_with(["a.jpg"], False)
        self.assertEqual(state.current_file, "a.jpg")
        self.assertFalse(state.is_multiple_files())
        self.assertEqual(state.num_entries_shown, 3)

    def test_multiple_files_are_read_later(self):
        reader = mock.Mock(return_value=make_files())
        state = MainState.for_multiple_files(["photos"], reader=reader)
        reader.assert_not_called()
        self.assertEqual(state.multiple_files_input, ["photos"])

        state.read_multiple_files(True)
        reader.assert_called_once_with(["photos"], True)
        self.assertIsNone(state.multiple_files_input)
        self.assertTrue(state.is_multiple_files())
        self.assertEqual(len(state.compare.rows), 4)


class TestScrolling(unittest.TestCase):

    def setUp(self):
        entries = [make_entry(f"Tag{i}", str(i)) for i in range(20)]
        self.state = MainState(files=[FileTags("many.jpg", entries)])

    def test_cursor_stays_in_range(self):
        self.state.scrollv(-1)
        self.assertEqual(self.state.cursor, 0)
        self.state.scrollv(100)
        self.assertEqual(self.state.cursor, 19)

    def test_drag_moves_offset_and_cursor(self):
        self.state.scrollv_drag_cursor(4)
        self.assertEqual(self.state.scroll_offset, (4, 0))
        self.assertEqual(self.state.cursor, 4)
        self.state.scrollv_drag_cursor(-10)
        self.assertEqual(self.state.scroll_offset, (0, 0))
        self.assertEqual(self.state.cursor, 0)

    def test_horizontal(self):
        self.state.scrollh(-1)
        self.assertEqual(self.state.scroll_offset, (0, 0))
        self.state.scrollh(3)
        self.assertEqual(self.state.scroll_offset, (0, 3))

    def test_fit_viewport(self):
        self.state.cursor = 15
        self.state.fit_viewport(10)
        self.assertEqual(self.state.scroll_offset[0], 6)

        self.state.cursor = 2
        self.state.fit_viewport(10)
        self.assertEqual(self.state.scroll_offset[0], 2)

    def test_fit_viewport_keeps_tail_visible(self):
        self.state.scroll_offset = (19, 0)
        self.state.cursor = 19
        self.state.fit_viewport(2)
        self.assertEqual(self.state.scroll_offset[0], 15)

    def test_reset_position(self):
        self.state.scrollv_drag_cursor(5)
        self.state.scrollh(2)
        self.state.reset_position()
        self.assertEqual((self.state.scroll_offset, self.state.cursor), ((0, 0), 0))


class TestFilterAndSelection(unittest.TestCase):

    def setUp(self):
        self.state = multiple_files_state()

    def test_filter(self):
        self.state.filter = "horizontal"
        self.assertEqual([e.short_name for e in self.state.visible_entries()], ["Orientation"])
        self.assertEqual(self.state.selected_entry().short_name, "Orientation")

    def test_no_selection_when_nothing_matches(self):
        self.state.filter = "nothing matches this"
        self.assertIsNone(self.state.selected_entry())
        self.assertFalse(self.state.filter_by_selected_family())

    def test_filter_by_selected_family(self):
        self.state.cursor = 1
        self.assertTrue(self.state.filter_by_selected_family())
        self.assertEqual(self.state.filter, "<<Exif::Main>>")
        self.assertEqual(self.state.cursor, 0)


class TestTabs(unittest.TestCase):

    def setUp(self):
        self.state = multiple_files_state()

    def test_cycle(self):
        self.state.next_file()
        self.assertEqual(self.state.current_file, "b.jpg")
        self.state.next_file()
        self.assertEqual(self.state.current_file, "a.jpg")
        self.state.previous_file()
        self.assertEqual(self.state.current_file, "b.jpg")

    def test_single_file_does_not_cycle(self):
        state = MainState(files=make_files()[:1])
        state.next_file()
        state.previous_file()
        self.assertEqual(state.current_file_index, 0)

    def test_close_last_tab_moves_left(self):
        self.state.next_file()
        self.assertTrue(self.state.close_current_file())
        self.assertEqual(self.state.current_file, "a.jpg")
        self.assertEqual(len(self.state.files), 1)
        self.assertEqual([r.main.short_name for r in self.state.compare.rows],
                         ["Make", "Orientation", "ThumbnailImage"])

    def test_close_needs_two_files(self):
        self.state.close_current_file()
        self.assertFalse(self.state.close_current_file())
        self.assertEqual(len(self.state.files), 1)

    def test_close_disabled_while_comparing(self):
        self.state.toggle_compare()
        self.assertFalse(self.state.close_current_file())
        self.assertEqual(len(self.state.files), 2)


class TestCompareMode(unittest.TestCase):

    def setUp(self):
        self.state = multiple_files_state()

    def test_toggle(self):
        self.state.next_file()
        self.state.cursor = 2
        self.state.toggle_compare()

        self.assertTrue(self.state.compare.active)
        self.assertIs(self.state.compare.mode, False)
        self.assertEqual(self.state.current_file_index, 0)
        self.assertEqual(self.state.cursor, 0)
        self.assertEqual(self.state.num_entries_shown, 4)

        self.state.toggle_compare()
        self.assertFalse(self.state.compare.active)

    def test_diff_only(self):
        self.state.toggle_diff_only()
        self.assertIsNone(self.state.compare.mode)

        self.state.toggle_compare()
        self.state.toggle_diff_only()
        self.assertIs(self.state.compare.mode, True)
        self.assertEqual(self.state.num_entries_shown, 3)

    def test_selected_entry_follows_current_tab(self):
        self.state.toggle_compare()
        self.state.cursor = 1
        self.assertEqual(self.state.selected_entry().val.to_string(), "Horizontal (normal)")
        self.state.next_file()
        self.assertEqual(self.state.selected_entry().val.to_string(), "Rotate 90 CW")

        self.state.cursor = 2
        self.assertIsNone(self.state.selected_entry())


class TestBinarySave(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.download_dir = Path(self.temp_dir) / "Downloads"
        self.binary_reader = mock.Mock(return_value=b"\xff\xd8\xff\xe0")
        self.state = MainState(files=make_files()[:1], download_dir=self.download_dir,
                               binary_reader=self.binary_reader)
        self.state.cursor = 2

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_dialog_needs_binary_entry(self):
        self.state.cursor = 0
        self.assertFalse(self.state.open_binary_save_dialog())
        self.assertIsNone(self.state.binary_save_dialog)

        self.state.cursor = 2
        self.assertTrue(self.state.open_binary_save_dialog())
        dialog = self.state.binary_save_dialog
        self.assertEqual((dialog.fname, dialog.fext), ("", "jpeg"))
        self.assertEqual(dialog.status.text, MSG_SAVE_HINT)

    def test_validation(self):
        self.state.open_binary_save_dialog()
        dialog = self.state.binary_save_dialog

        self.assertFalse(self.state.try_save_binary())
        self.assertEqual(dialog.status.text, MSG_ENTER_NAME)
        self.assertTrue(dialog.status.is_error)

        dialog.fname = "thumb"
        dialog.fext = ""
        self.assertFalse(self.state.try_save_binary())
        self.assertEqual(dialog.status.text, MSG_ENTER_EXTENSION)
        self.binary_reader.assert_not_called()

    def test_save(self):
        self.state.open_binary_save_dialog()
        self.state.binary_save_dialog.fname = "thumb"
        self.state.binary_save_dialog.fext = ".jpg"

        self.assertTrue(self.state.try_save_binary())

        target = self.download_dir / "thumb.jpg"
        self.assertEqual(target.read_bytes(), b"\xff\xd8\xff\xe0")
        self.binary_reader.assert_called_once_with("a.jpg", self.state.files[0].tag_entries[2])
        msg = self.state.take_log_msg()
        self.assertIn(str(target), msg.text)
        self.assertFalse(msg.is_error)
        self.assertIsNone(self.state.take_log_msg())

    def test_existing_file_is_not_overwritten(self):
        self.download_dir.mkdir()
        (self.download_dir / "thumb.jpeg").write_bytes(b"old")
        self.state.open_binary_save_dialog()
        self.state.binary_save_dialog.fname = "thumb"

        self.assertFalse(self.state.try_save_binary())
        self.assertEqual(self.state.binary_save_dialog.status.text, MSG_FILE_EXISTS)
        self.assertEqual((self.download_dir / "thumb.jpeg").read_bytes(), b"old")

    def test_extraction_error(self):
        self.binary_reader.side_effect = BinaryExtractionError("a.jpg", "ThumbnailImage")
        self.state.open_binary_save_dialog()
        self.state.binary_save_dialog.fname = "thumb"

        self.assertFalse(self.state.try_save_binary())
        self.assertTrue(self.state.binary_save_dialog.status.is_error)
        self.assertFalse((self.download_dir / "thumb.jpeg").exists())

    def test_exiftool_missing_at_save_time(self):
        state = MainState(files=make_files()[:1], download_dir=self.download_dir)
        state.cursor = 2
        state.open_binary_save_dialog()
        state.binary_save_dialog.fname = "thumb"

        with mock.patch('toolexiftool.core.exiftool.find_exiftool', return_value=None):
            self.assertFalse(state.try_save_binary())

        status = state.binary_save_dialog.status
        self.assertTrue(status.is_error)
        self.assertEqual(status.text, "Could not find the exiftool executable")
        self.assertFalse((self.download_dir / "thumb.jpeg").exists())


class TestBinarySaveDialog(unittest.TestCase):

    def test_editing(self):
        dialog = BinarySaveDialog()
        dialog.push("a")
        dialog.push("b")
        dialog.pop()
        dialog.switch_focus()
        dialog.pop()
        dialog.push("g")
        self.assertEqual((dialog.fname, dialog.fext), ("a", "jpeg"))


if __name__ == '__main__':
    unittest.main()
