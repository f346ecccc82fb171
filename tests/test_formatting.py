"""
Tests for toolkit-independent viewer text
"""

import sys
import unittest
from pathlib import Path

# Add the project root to Python path for development testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(Path(__file__).parent))

from toolexiftool.app import App, Clipboard, MainInput, MainState, Screen
from toolexiftool.app.state import DisplayMode, StatusMessage
from toolexiftool.core.models import FileTags
from toolexiftool.ui import formatting
from sample_data import make_entry, make_files


def make_app(files):
    state = MainState(files=files)
    state.calculate_compare_data()
    return App(state, Clipboard(), opener=lambda url: None)


class TestCutString(unittest.TestCase):

    def test_fits(self):
        self.assertEqual(formatting.cut_string("Canon", 20, 0), "Canon")

    def test_too_long(self):
        self.assertEqual(formatting.cut_string("1234567890123", 12, 0), "1234567...")

    def test_scrolled(self):
        self.assertEqual(formatting.cut_string("1234567890123", 12, 1), "....5678...")
        self.assertEqual(formatting.cut_string("1234567890", 20, 2), ".....67890")

    def test_scrolled_past_end(self):
        self.assertEqual(formatting.cut_string("abc", 10, 5), "........")
        self.assertEqual(formatting.cut_string("", 10, 0), "")


class TestHeaders(unittest.TestCase):

    def test_headers_follow_display_mode(self):
        self.assertEqual(formatting.key_header(DisplayMode()), " Tag [Detailed] ")
        self.assertEqual(formatting.key_header(DisplayMode(short=True)), " Tag [Short] ")
        self.assertEqual(formatting.value_header(DisplayMode()), " Value [Readable] ")
        self.assertEqual(formatting.value_header(DisplayMode(numerical=True)), " Value [Numerical] ")

    def test_cell_text(self):
        entry = make_entry("Orientation", "Horizontal (normal)", name="Orientation Name")
        self.assertEqual(formatting.key_text(entry, DisplayMode(short=True)), "Orientation")
        self.assertEqual(formatting.value_text(entry, DisplayMode(numerical=True)), "Horizontal (normal)")
        self.assertEqual(formatting.value_text(None, DisplayMode()), "")

    def test_title(self):
        app = make_app(make_files())
        self.assertEqual(formatting.title_text(app, 80), "a.jpg")

        app.state.current_file = "/very/long/path/name.jpg"
        title = formatting.title_text(app, 10)
        self.assertTrue(title.startswith("..."))
        self.assertTrue(title.endswith(".jpg"))
        self.assertEqual(len(title), 8)

        app.state.toggle_compare()
        self.assertEqual(formatting.title_text(app, 80), "Compare Mode")

    def test_column_title(self):
        self.assertEqual(formatting.column_title("abcdefghij", 20), "abcdefghij")
        self.assertEqual(formatting.column_title("abcdefghij", 6), "*ghij")


class TestRowStyle(unittest.TestCase):

    def test_styles(self):
        binary = make_entry("ThumbnailImage", "x", binary_size_kb=1.0)
        self.assertEqual(formatting.row_style(binary), "binary")
        self.assertEqual(formatting.row_style(make_entry("Warning", "x")), "warning")
        self.assertEqual(formatting.row_style(make_entry("Error", "x")), "error")
        self.assertIsNone(formatting.row_style(make_entry("Make", "x")))

    def test_binary_in_any_column(self):
        main = make_entry("ThumbnailImage", "missing")
        binary = make_entry("ThumbnailImage", "x", binary_size_kb=1.0)
        self.assertEqual(formatting.row_style(main, [None, binary]), "binary")


class TestTabs(unittest.TestCase):

    def test_labels(self):
        files = [FileTags("photos/a.jpg"), FileTags("photos/b.jpg")]
        self.assertEqual(formatting.tab_labels(files, 100), ["|*photos/a.jpg|", "|*photos/b.jpg|"])

    def test_labels_keep_tail(self):
        labels = formatting.tab_labels([FileTags("a" * 40 + ".jpg")] * 2, 20)
        self.assertEqual(labels[0], "|*aa.jpg|")

    def test_too_narrow(self):
        self.assertIsNone(formatting.tab_labels([FileTags("a.jpg")] * 10, 40))
        self.assertEqual(formatting.tab_labels([], 40), [])


class TestDetails(unittest.TestCase):

    def test_lines(self):
        entry = make_entry("Make", "Canon", id=271, index=1)
        text = ["".join(seg for seg, _ in line) for line in formatting.details_lines(entry, 40)]
        self.assertEqual(text[0], "Detailed name: Make")
        self.assertEqual(text[1], "Tag ID: 271 (0x10F)")
        self.assertIn("Exif::Main", text[2])
        self.assertEqual(text[3], "Value: Canon")
        self.assertIn("Index: 1", text)
        self.assertNotIn("<b> - extract binary data", text)
        self.assertEqual(formatting.details_title(entry), " Details [Make] ")

    def test_long_value_is_cut(self):
        entry = make_entry("Comment", "x" * 300)
        value_line = formatting.details_lines(entry, 10)[3]
        self.assertEqual(value_line[1][0], "x" * 30)
        self.assertEqual(value_line[2], ("... value too long, press <x> to copy", "hint"))

    def test_binary_hint(self):
        entry = make_entry("ThumbnailImage", "x", binary_size_kb=1.0)
        text = ["".join(seg for seg, _ in line) for line in formatting.details_lines(entry, 40)]
        self.assertIn("Tag ID: [Unknown]", text)
        self.assertEqual(text[-1], "<b> - extract binary data")


class TestHints(unittest.TestCase):

    def setUp(self):
        self.app = make_app(make_files())

    def test_status_message_is_shown_once(self):
        self.app.state.log_msg = StatusMessage("Succesfully copied value to clipboard")
        self.assertEqual(formatting.hint_lines(self.app),
                         [[("Succesfully copied value to clipboard", "success")]])
        self.assertNotEqual(formatting.hint_lines(self.app)[0][0][1], "success")

    def test_error_message(self):
        self.app.state.log_msg = StatusMessage("Broken", True)
        self.assertEqual(formatting.hint_lines(self.app), [[("Broken", "error")]])

    def test_hints_per_screen(self):
        self.assertEqual(formatting.hint_lines(self.app)[1][1], ("<q> - quit", "quit"))

        self.app.input = MainInput.FILTER
        self.assertEqual(formatting.hint_lines(self.app)[0][0][0], "Filtering by tags and values.")

        self.app.input = MainInput.MAIN
        self.app.screen = Screen.HELP
        self.assertEqual(formatting.hint_lines(self.app), [[("<ENTER/ESC/q> - go back", None)]])

        self.app.screen = Screen.MULTIPLE_FILES_START
        self.assertEqual(formatting.hint_lines(self.app), [[("<q> - quit", None)]])

        self.app.screen = Screen.MAIN
        self.app.input = MainInput.BINARY_SAVE_DIALOG
        self.assertEqual(formatting.hint_lines(self.app), [])

    def test_help_text_lists_tab_keys(self):
        text = "\n".join(line for line, _ in formatting.HELP_LINES)
        self.assertIn("<W> - close current tab", text)
        self.assertIn("<d> - while in side-by-side compare mode", text)


if __name__ == '__main__':
    unittest.main()
