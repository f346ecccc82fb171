"""
Tkinter front-end for the tag viewer
"""

import logging
import tkinter as tk
from tkinter import font as tkfont
from tkinter import messagebox, ttk
from typing import List, Optional

from . import formatting
from ..app import controller
from ..app.controller import App, Clipboard
from ..app.state import MainInput, Screen
from ..core.exceptions import ClipboardError, ToolExiftoolError, format_error_for_cli

logger = logging.getLogger(__name__)

COLORS = {
    "warning": "#b8860b",
    "error": "#c62828",
    "binary": "#2e7d32",
    "success": "#2e7d32",
    "quit": "#c62828",
    "hint": "#b8860b",
    "info": "#00838f",
    "heading": None,
}

KEYSYM_MAP = {
    "Up": controller.KEY_UP,
    "Down": controller.KEY_DOWN,
    "Left": controller.KEY_LEFT,
    "Right": controller.KEY_RIGHT,
    "Return": controller.KEY_ENTER,
    "KP_Enter": controller.KEY_ENTER,
    "Escape": controller.KEY_ESCAPE,
    "Tab": controller.KEY_TAB,
    "ISO_Left_Tab": controller.KEY_BACKTAB,
    "BackSpace": controller.KEY_BACKSPACE,
    "space": controller.KEY_SPACE,
}

SHIFT_MASK = 0x0001


def translate_key(keysym: str, char: str, state: int = 0) -> Optional[str]:
    """Map a Tk key event to a controller key name."""
    if keysym == "Tab" and state & SHIFT_MASK:
        return controller.KEY_BACKTAB
    if keysym in KEYSYM_MAP:
        return KEYSYM_MAP[keysym]
    if char and len(char) == 1 and char.isprintable():
        return char
    return None


class TkClipboard(Clipboard):
    """Clipboard backed by the Tk selection."""

    def __init__(self, root: tk.Misc):
        self.root = root

    def set_contents(self, text: str) -> None:
        try:
            self.root.clipboard_clear()
            self.root.clipboard_append(text)
            self.root.update_idletasks()
        except tk.TclError as e:
            raise ClipboardError(e)


class ViewerWindow:
    """
    Main window: title, file tabs, filter bar, tag table, details pane and hints.

    The window holds no state of its own; every event goes to the App and the
    whole view is rebuilt from it.
    """

    def __init__(self, root: tk.Tk, app: App):
        self.root = root
        self.app = app
        self.root.title("toolexiftool")
        self.root.geometry("1100x650")
        self.root.resizable(True, True)

        self._setup_styles()
        self._setup_layout()
        self._bind_events()
        self.render()

    def _setup_styles(self):
        """Configure UI styles and themes."""
        self.style = ttk.Style()
        if "clam" in self.style.theme_names():
            self.style.theme_use("clam")

        self.mono = tkfont.nametofont("TkFixedFont")
        self.bold = self.mono.copy()
        self.bold.configure(weight="bold")
        self.style.configure("Treeview", font=self.mono)
        self.style.configure("Treeview.Heading", font=self.bold)
        self.style.configure("Title.TLabel", font=self.bold, background="white", foreground="black")
        self.style.configure("Tab.TLabel", font=self.mono)
        self.style.configure("CurrentTab.TLabel", font=self.bold, background="#444444", foreground="white")
        self.style.configure("Filter.TLabel", font=self.bold)

    def _setup_layout(self):
        """Create and arrange all UI components."""
        container = ttk.Frame(self.root, padding=4)
        container.pack(fill="both", expand=True)
        self.container = container

        self.title_label = ttk.Label(container, style="Title.TLabel", anchor="w")
        self.title_label.pack(fill="x")

        self.tabs_frame = ttk.Frame(container)
        self.filter_label = ttk.Label(container, style="Filter.TLabel", anchor="w")

        self.body = ttk.Frame(container)
        self.body.pack(fill="both", expand=True)
        self.body.columnconfigure(0, weight=3)
        self.body.rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(self.body, show="headings", selectmode="browse", takefocus=False)
        self.tree.grid(row=0, column=0, sticky="nsew")
        tree_scroll = ttk.Scrollbar(self.body, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=tree_scroll.set)
        tree_scroll.grid(row=0, column=1, sticky="ns")
        for name, color in COLORS.items():
            if color:
                self.tree.tag_configure(name, foreground=color)
        self.tree.tag_configure("cursor", background="white", foreground="black", font=self.bold)

        self.details_frame = ttk.LabelFrame(self.body)
        self.details = tk.Text(self.details_frame, wrap="word", width=40, font=self.mono,
                               takefocus=0, state="disabled")
        self.details.pack(fill="both", expand=True)
        self._configure_text_tags(self.details)

        self.page = tk.Text(container, wrap="word", font=self.mono, takefocus=0, state="disabled")
        self._configure_text_tags(self.page)

        self.dialog = ttk.Frame(self.root, padding=10, relief="ridge", borderwidth=2)
        self.dialog_text = tk.Text(self.dialog, height=6, width=60, font=self.mono,
                                   takefocus=0, state="disabled")
        self.dialog_text.pack(fill="both", expand=True)
        self._configure_text_tags(self.dialog_text)

        self.hints = tk.Text(container, height=2, wrap="word", font=self.mono,
                             takefocus=0, state="disabled")
        self.hints.pack(fill="x", side="bottom")
        self._configure_text_tags(self.hints)

    def _configure_text_tags(self, widget: tk.Text):
        for name, color in COLORS.items():
            if color:
                widget.tag_configure(name, foreground=color)
        widget.tag_configure("heading", font=self.bold, justify="center")
        widget.tag_configure("center", justify="center")

    def _bind_events(self):
        for widget in (self.root, self.tree):
            widget.bind("<Key>", self.on_key)
            widget.bind("<MouseWheel>", self.on_wheel)
            widget.bind("<Button-4>", lambda e: self.on_scroll(-1))
            widget.bind("<Button-5>", lambda e: self.on_scroll(1))
        # selection follows state.cursor
        self.tree.bind("<Button-1>", self.on_click)
        self.root.bind("<Configure>", self.on_resize)
        self.root.focus_set()
        self._size = None

    # --- events ---

    def on_key(self, event):
        key = translate_key(event.keysym, event.char, event.state)
        if key is None:
            return "break"
        try:
            should_quit = self.app.handle_key(key)
        except ToolExiftoolError as e:
            self._report_error(e)
            return "break"
        if should_quit:
            self.root.destroy()
            return "break"
        self.render()
        return "break"

    def on_resize(self, event):
        # children propagate <Configure> through the toplevel bindtag
        if event.widget is not self.root or self._size == (event.width, event.height):
            return
        self._size = (event.width, event.height)
        self.root.after_idle(self.render)

    def on_wheel(self, event):
        return self.on_scroll(-1 if event.delta > 0 else 1)

    def on_scroll(self, delta: int):
        self.app.handle_scroll(delta)
        self.render()
        return "break"

    def on_click(self, event):
        row = self.tree.identify_row(event.y)
        if row:
            self.app.select_row(int(row))
        self.render()
        return "break"

    def _report_error(self, error: ToolExiftoolError):
        logger.error(error.get_full_message())
        messagebox.showerror("toolexiftool", format_error_for_cli(error))
        if not self.app.state.files:
            self.root.destroy()

    # --- rendering ---

    def _columns(self, widget: tk.Misc) -> int:
        width = widget.winfo_width()
        if width <= 1:
            width = self.root.winfo_reqwidth()
        return max(width // max(self.mono.measure("0"), 1), 1)

    def _visible_rows(self) -> int:
        row_height = self.mono.metrics("linespace") + 4
        return max(self.tree.winfo_height() // row_height - 1, 1)

    def render(self):
        try:
            if not self.root.winfo_exists():
                return
        except tk.TclError:
            return
        app = self.app
        if app.screen is Screen.MAIN:
            self.page.pack_forget()
            self._render_main()
        else:
            self._hide_main()
            self._render_page()
        self._render_dialog()
        self._write(self.hints, formatting.hint_lines(app))

    def _hide_main(self):
        self.title_label.pack_forget()
        self.tabs_frame.pack_forget()
        self.filter_label.pack_forget()
        self.body.pack_forget()

    def _render_page(self):
        if self.app.screen is Screen.HELP:
            lines = [[(text, style)] for text, style in formatting.HELP_LINES]
        else:
            lines = [
                [(formatting.RECURSION_PROMPT, "heading")],
                [],
                [("<y/ENTER>   YES", "success")],
                [("<n/ESC>     NO", "quit")],
            ]
        self.page.pack(fill="both", expand=True, before=self.hints)
        self._write(self.page, lines)

    def _render_main(self):
        app, state = self.app, self.app.state
        # repack in display order; pack(before=...) only positions relative to hints
        self._hide_main()
        self.title_label.pack(fill="x", before=self.hints)
        self.title_label.configure(text=formatting.title_text(app, self._columns(self.container)))

        if state.is_multiple_files() and not state.compare.active:
            self.tabs_frame.pack(fill="x", before=self.hints)
            self._render_tabs()

        if state.filter or app.input is MainInput.FILTER:
            caret = "▏" if app.input is MainInput.FILTER else ""
            self.filter_label.configure(text=f" Filter: {state.filter}{caret}")
            self.filter_label.pack(fill="x", before=self.hints)

        self.body.pack(fill="both", expand=True, before=self.hints)
        self._render_table()
        self._render_details()

    def _render_tabs(self):
        for child in self.tabs_frame.winfo_children():
            child.destroy()
        state = self.app.state
        labels = formatting.tab_labels(state.files, self._columns(self.container))
        if labels is None:
            ttk.Label(self.tabs_frame, text=formatting.TABS_OVERFLOW, foreground=COLORS["warning"]).pack(side="left")
            return
        for i, text in enumerate(labels):
            style = "CurrentTab.TLabel" if i == state.current_file_index else "Tab.TLabel"
            ttk.Label(self.tabs_frame, text=text, style=style).pack(side="left")

    def _render_table(self):
        state = self.app.state
        mode = state.display_mode
        x_offset = state.scroll_offset[1]
        comparing = state.compare.active and state.is_multiple_files()

        if comparing:
            columns = ["tag"] + [f"file{i}" for i in range(len(state.files))]
        else:
            columns = ["tag", "value"]
        self.tree.configure(columns=columns)

        total = self._columns(self.tree)
        if comparing:
            # tag column takes one share, every file column two
            share = max(total // (1 + 2 * len(state.files)), 4)
            widths = [share] + [share * 2] * len(state.files)
        else:
            widths = [max(total * 2 // 5, 4), max(total * 3 // 5, 4)]
        char_px = max(self.mono.measure("0"), 1)
        for column, width in zip(columns, widths):
            self.tree.column(column, width=width * char_px, stretch=True, anchor="w")

        self.tree.heading("tag", text=formatting.key_header(mode).strip())
        if comparing:
            for i, f in enumerate(state.files):
                marker = "● " if i == state.current_file_index else ""
                title = formatting.column_title(str(f.file_name), widths[i + 1])
                self.tree.heading(f"file{i}", text=f"{marker}{formatting.value_header(mode).strip()} {title}")
        else:
            self.tree.heading("value", text=formatting.value_header(mode).strip())

        self.tree.delete(*self.tree.get_children())
        rows = self._table_rows(comparing)
        for i, (cells, style) in enumerate(rows):
            values = [formatting.cut_string(text, width, x_offset) for text, width in zip(cells, widths)]
            tags = [style] if style else []
            if i == state.cursor:
                tags.append("cursor")
            self.tree.insert("", "end", iid=str(i), values=values, tags=tags)

        state.fit_viewport(self._visible_rows())
        if rows:
            self.tree.yview_moveto(state.scroll_offset[0] / len(rows))
            if state.cursor < len(rows):
                self.tree.selection_set(str(state.cursor))
                self.tree.see(str(state.cursor))

    def _table_rows(self, comparing: bool) -> List:
        state = self.app.state
        mode = state.display_mode
        if comparing:
            return [
                ([formatting.key_text(row.main, mode)]
                 + [formatting.value_text(v, mode) for v in row.values],
                 formatting.row_style(row.main, row.values))
                for row in state.visible_compare_rows()
            ]
        return [
            ([formatting.key_text(entry, mode), formatting.value_text(entry, mode)],
             formatting.row_style(entry))
            for entry in state.visible_entries()
        ]

    def _render_details(self):
        state = self.app.state
        entry = state.selected_entry() if state.show_details else None
        if entry is None:
            self.details_frame.grid_forget()
            self.body.columnconfigure(2, weight=0)
            return
        self.body.columnconfigure(0, weight=3 if state.compare.active else 2)
        self.body.columnconfigure(2, weight=1)
        self.details_frame.configure(text=formatting.details_title(entry))
        self.details_frame.grid(row=0, column=2, sticky="nsew")
        self._write(self.details, formatting.details_lines(entry, self._columns(self.details)))

    def _render_dialog(self):
        app = self.app
        dialog = app.state.binary_save_dialog
        if app.input is not MainInput.BINARY_SAVE_DIALOG or dialog is None:
            self.dialog.place_forget()
            return
        fname_caret = "▏" if dialog.editing_fname else ""
        fext_caret = "" if dialog.editing_fname else "▏"
        lines = [
            [(" Save binary data ", "heading")],
            [(f"File name: {dialog.fname}{fname_caret}", None)],
            [(f"Extension: {dialog.fext}{fext_caret}", None)],
            [(dialog.status.text, "error" if dialog.status.is_error else None)],
            [("<ENTER> - save ", "success"), ("<ESC> - discard ", "quit"), ("<TAB> - switch focus", None)],
        ]
        self._write(self.dialog_text, lines)
        self.dialog.place(relx=0.5, rely=0.5, anchor="center", relwidth=0.6)
        self.dialog.lift()

    def _write(self, widget: tk.Text, lines):
        widget.configure(state="normal")
        widget.delete("1.0", "end")
        for n, segments in enumerate(lines):
            if n:
                widget.insert("end", "\n")
            for text, style in segments:
                widget.insert("end", text, (style,) if style else ())
        widget.configure(state="disabled")


def launch(paths, recursive=None, reader=None, binary_reader=None, download_dir=None) -> None:
    """Build the App for `paths` on a fresh Tk root and run the event loop."""
    try:
        root = tk.Tk()
    except tk.TclError as e:
        raise ToolExiftoolError(
            "Could not open the viewer window",
            str(e),
            ["Make sure a graphical display is available (DISPLAY on X11)",
             "Use --print to dump the tags to the terminal instead"]
        )
    try:
        app = App.from_paths(paths, TkClipboard(root), recursive=recursive, reader=reader,
                             binary_reader=binary_reader, download_dir=download_dir)
    except ToolExiftoolError:
        root.destroy()
        raise
    ViewerWindow(root, app)
    root.mainloop()
