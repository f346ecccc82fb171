"""
Toolkit-independent text rendering for the viewer
"""

from typing import List, Optional, Sequence, Tuple

from ..app.controller import App
from ..app.state import DisplayMode, MainInput, Screen
from ..config.constants import DETAILS_CUT_FACTOR, DETAILS_LONG_FACTOR, MIN_TAB_WIDTH
from ..core.models import FileTags, TagEntry

# (text, style) pairs; style is one of None, "hint", "warning", "error", "success", "quit"
Segment = Tuple[str, Optional[str]]

HELP_LINES = [
    ("General controls", "heading"),
    ("<↑/↓/←/→/WHEEL/SPACE> - scroll      <f> - filter by tags/values", None),
    ("<ENTER> - toggle show details       <s> - toggle show short tag names", None),
    ("<n> - toggle show numerical representation of tag values", None),
    ("<b> - save binary data from tag     <h> - show this text", None),
    ("<q> - quit", None),
    ("", None),
    ("Extra controls", "heading"),
    ("<x> - copy tag value to clipboard   <X> - copy tag numerical value to clipboard", None),
    ("<C> - copy all entry data to clipboard", None),
    ("<F> - filter by current tag's group (family)", None),
    ("<w> - try to open a web page with this tag's family's information", None),
    ("", None),
    ("Multiple files extra controls", "heading"),
    ("<TAB> - next tab                    <SHIFT+TAB> - previous tab", None),
    ("<W> - close current tab", None),
    ("<c> - toggle side-by-side compare mode", None),
    ("<d> - while in side-by-side compare mode, show only lines that differ", None),
    ("", None),
    ("You can still change tabs while in side-by-side compare mode;", None),
    ("this will control what details will be shown, what data will be copied, extracted etc.", None),
]

RECURSION_PROMPT = ("You provided one or more folders as input. "
                    "Please choose if you want to read them recursively:")


def cut_string(s: str, width: int, x_offset: int) -> str:
    """
    Fit `s` into a column `width` characters wide, scrolled right by `x_offset`.

    Hidden parts are replaced by dots on the left and '...' on the right.
    """
    if x_offset >= len(s) and s:
        return "." * (x_offset + 3)
    if len(s) - x_offset >= max(width - 2, 0):
        s = s[:x_offset + max(width - 5, 0)] + "..."
    if x_offset:
        mid = x_offset + 3
        if mid >= len(s):
            s = "." * mid
        else:
            s = "." * mid + s[mid:]
    return s


def key_text(entry: TagEntry, mode: DisplayMode) -> str:
    return entry.display_name(mode.short)


def value_text(entry: Optional[TagEntry], mode: DisplayMode) -> str:
    if entry is None:
        return ""
    return entry.display_value(mode.numerical)


def row_style(entry: TagEntry, values: Sequence[Optional[TagEntry]] = ()) -> Optional[str]:
    """Row colour class: binary data wins over warning/error names."""
    if entry.is_binary or any(v is not None and v.is_binary for v in values):
        return "binary"
    short = entry.short_name.lower()
    if "warning" in short:
        return "warning"
    if "error" in short:
        return "error"
    return None


def key_header(mode: DisplayMode) -> str:
    return " Tag [Short] " if mode.short else " Tag [Detailed] "


def value_header(mode: DisplayMode) -> str:
    return " Value [Numerical] " if mode.numerical else " Value [Readable] "


def title_text(app: App, width: int) -> str:
    state = app.state
    if state.compare.active:
        return "Compare Mode"
    name = str(state.current_file)
    limit = max(width - 2, 0)
    if len(name) >= limit:
        return "..." + name[max(len(name) - limit, 0) + 3:]
    return name


def column_title(file_name: str, width: int) -> str:
    """File name under a compare column, keeping the tail when it does not fit."""
    if width + 2 >= len(file_name):
        return file_name
    return "*" + file_name[len(file_name) - width + 2:]


def tab_labels(files: Sequence[FileTags], width: int) -> Optional[List[str]]:
    """Tab captions for `width` columns, or None when they would not fit."""
    if not files:
        return []
    tab_len = int(width * 0.95 / len(files))
    if tab_len < MIN_TAB_WIDTH:
        return None
    take = max(tab_len - 4, 0)
    labels = []
    for f in files:
        name = str(f.file_name)
        labels.append(f"|*{name[max(len(name) - (take + 1), 0):]}|")
    return labels


TABS_OVERFLOW = "Too many files to show tabs, <TAB> can still be used"


def _long_value(label: str, text: str, width: int, copy_key: str) -> List[Segment]:
    if len(text) > width * DETAILS_LONG_FACTOR:
        return [(label, None), (text[:width * DETAILS_CUT_FACTOR], None),
                (f"... value too long, press <{copy_key}> to copy", "hint")]
    return [(label, None), (text, None)]


def details_title(entry: TagEntry) -> str:
    return f" Details [{entry.short_name}] "


def details_lines(entry: TagEntry, width: int) -> List[List[Segment]]:
    """Lines of the details pane, each a list of styled segments."""
    tag_id = f"{entry.id} (0x{entry.id:X})" if entry.id is not None else "[Unknown]"
    lines = [
        [("Detailed name: " + entry.name, None)],
        [("Tag ID: " + tag_id, None)],
        [("Tag family: ", None), (entry.family(), None), (" <F> - filter by tag family", "hint")],
        _long_value("Value: ", entry.val.to_string(), width, "x"),
        _long_value("Numerical value: ", entry.numerical_text(), width, "X"),
    ]
    if entry.index is not None:
        lines.append([(f"Index: {entry.index}", None)])
    lines.append([])
    lines.append([("<C> - copy entry to clipboard", "hint")])
    if entry.is_binary:
        lines.append([("<b> - extract binary data", "hint")])
    return lines


def hint_lines(app: App) -> List[List[Segment]]:
    """Footer lines: a pending status message, or key hints for the screen."""
    msg = app.state.take_log_msg()
    if msg is not None:
        return [[(msg.text, "error" if msg.is_error else "success")]]

    if app.screen is Screen.MAIN and app.input is MainInput.MAIN:
        return [
            [("<↑/↓/←/→/WHEEL> - scroll  <f> - filter  <ENTER> - details", None)],
            [("<h> - help  ", "warning"), ("<q> - quit", "quit")],
        ]
    if app.screen is Screen.MAIN and app.input is MainInput.FILTER:
        return [
            [("Filtering by tags and values.", "info")],
            [("<ENTER> - apply  ", "success"), ("<ESC> - discard", "quit")],
        ]
    if app.screen is Screen.HELP:
        return [[("<ENTER/ESC/q> - go back", None)]]
    if app.screen is Screen.MULTIPLE_FILES_START:
        return [[("<q> - quit", None)]]
    return []
