"""Tkinter desktop GUI for Spell It Please.

WHY: The people who spell things over the phone want to type, read the
code words off the screen, tweak a word now and then, and paste the
result into a chat. A single small window does all of that without any
command line.

HOW: A single SpellItApp class builds the window: a scrollable list of
rows (character label, editable code word, revert button) above a text
entry and a Copy button. All non-visual decisions go through a
SpellingSession; this module only moves text between widgets and the
session. Saving happens on the OverrideStore's background thread, so
the Tk main loop never waits on disk.

RULES:
- tkinter widgets are ONLY touched from the main thread
- Every keystroke in a code-word entry updates the converter and
  repaints every row showing the same character
- Programmatic repaints must not re-trigger the edit handler
- The revert button is shown only while its entry has focus and its
  text differs from the built-in code word
- Closing the window flushes pending saves (bounded wait)
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import List, Optional

from spell_it_please import config
from spell_it_please.core.converter import PhoneticConverter
from spell_it_please.core.session import SpellingSession
from spell_it_please.storage.kv import JsonFileKeyValueStore
from spell_it_please.storage.overrides import OverrideStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE = "Spell It Please"
_WINDOW_MIN_WIDTH = 360
_WINDOW_MIN_HEIGHT = 480
_PAD = 8
_LABEL_FONT = ("TkFixedFont", 12, "bold")
_REVERT_TEXT = "↶"


class _Row:
    """Widgets for one character of the input."""

    def __init__(
        self,
        parent: ttk.Frame,
        position: int,
        app: "SpellItApp",
    ) -> None:
        self.position = position
        self.var = tk.StringVar()
        self.label = ttk.Label(parent, font=_LABEL_FONT, foreground="gray", width=3)
        self.entry = ttk.Entry(parent, textvariable=self.var)
        self.revert_btn = ttk.Button(
            parent,
            text=_REVERT_TEXT,
            width=3,
            command=lambda: app.revert_row(position),
        )

        self.label.grid(row=position, column=0, sticky=tk.W, padx=(0, 4), pady=2)
        self.entry.grid(row=position, column=1, sticky=tk.EW, pady=2)
        self.revert_btn.grid(row=position, column=2, padx=(4, 0), pady=2)
        self.revert_btn.grid_remove()

        self.var.trace_add("write", lambda *_: app.on_code_word_changed(position))
        self.entry.bind("<FocusIn>", lambda _e: app.update_revert_button(position))
        self.entry.bind("<FocusOut>", lambda _e: app.update_revert_button(position))

    def destroy(self) -> None:
        self.label.destroy()
        self.entry.destroy()
        self.revert_btn.destroy()


class SpellItApp:
    """Main tkinter application.

    RULES:
    - Rows are rebuilt whenever the input text changes
    - self._repainting guards StringVar writes made by the app itself
    """

    def __init__(
        self,
        root: tk.Tk,
        session: SpellingSession,
        store: Optional[OverrideStore] = None,
    ) -> None:
        self._root = root
        self._session = session
        self._store = store
        self._rows: List[_Row] = []
        self._repainting = False

        self._root.title(_WINDOW_TITLE)
        self._root.minsize(_WINDOW_MIN_WIDTH, _WINDOW_MIN_HEIGHT)
        self._root.protocol("WM_DELETE_WINDOW", self._on_close)

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        main = ttk.Frame(self._root, padding=_PAD)
        main.pack(fill=tk.BOTH, expand=True)

        # --- Rows (scrollable) ---
        list_frame = ttk.Frame(main)
        list_frame.pack(fill=tk.BOTH, expand=True)

        self._canvas = tk.Canvas(list_frame, highlightthickness=0)
        scrollbar = ttk.Scrollbar(
            list_frame, orient=tk.VERTICAL, command=self._canvas.yview
        )
        self._canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self._rows_frame = ttk.Frame(self._canvas)
        self._rows_frame.columnconfigure(1, weight=1)
        self._rows_window = self._canvas.create_window(
            (0, 0), window=self._rows_frame, anchor=tk.NW
        )
        self._rows_frame.bind(
            "<Configure>",
            lambda _e: self._canvas.configure(scrollregion=self._canvas.bbox(tk.ALL)),
        )
        self._canvas.bind(
            "<Configure>",
            lambda e: self._canvas.itemconfigure(self._rows_window, width=e.width),
        )

        # --- Input + Copy ---
        input_row = ttk.Frame(main)
        input_row.pack(fill=tk.X, pady=(_PAD, 0))

        self._input_var = tk.StringVar(value=self._session.text)
        self._input_entry = ttk.Entry(input_row, textvariable=self._input_var)
        self._input_entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self._input_var.trace_add("write", lambda *_: self._on_text_changed())
        self._input_entry.bind("<Return>", lambda _e: self._root.focus_set())

        self._copy_btn = ttk.Button(input_row, text="Copy", command=self._copy)
        self._copy_btn.pack(side=tk.RIGHT, padx=(_PAD, 0))

        self._input_entry.focus_set()
        self._rebuild_rows()

    def _rebuild_rows(self) -> None:
        for row in self._rows:
            row.destroy()
        self._rows = [
            _Row(self._rows_frame, position, self)
            for position in range(len(self._session))
        ]
        for position in range(len(self._rows)):
            self._paint_row(position)
        self._scroll_to_bottom()

    def _scroll_to_bottom(self) -> None:
        self._root.update_idletasks()
        self._canvas.yview_moveto(1.0)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def _paint_row(self, position: int) -> None:
        row = self._rows[position]
        representation = self._session.row(position)
        row.label.configure(text=representation.character.upper())
        self._repainting = True
        try:
            row.var.set(representation.code_word or "")
        finally:
            self._repainting = False
        self.update_revert_button(position)

    def update_revert_button(self, position: int) -> None:
        if position >= len(self._rows):
            return
        row = self._rows[position]
        representation = self._session.row(position)
        has_focus = self._root.focus_get() is row.entry
        if has_focus and representation.can_revert(row.var.get()):
            row.revert_btn.grid()
        else:
            row.revert_btn.grid_remove()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_text_changed(self) -> None:
        self._session.set_text(self._input_var.get())
        self._rebuild_rows()

    def on_code_word_changed(self, position: int) -> None:
        if self._repainting or position >= len(self._rows):
            return
        new_code_word = self._rows[position].var.get()
        for other in self._session.edit(position, new_code_word):
            if other != position:
                self._paint_row(other)
        self.update_revert_button(position)

    def revert_row(self, position: int) -> None:
        for other in self._session.revert(position):
            self._paint_row(other)

    def _copy(self) -> None:
        self._root.clipboard_clear()
        self._root.clipboard_append(self._session.clipboard_text())
        logger.debug("Copied %d characters to the clipboard", len(self._session))

    def _on_close(self) -> None:
        if self._store is not None:
            if not self._store.close(timeout=config.SAVE_FLUSH_TIMEOUT):
                logger.warning("Closing before all code-word overrides were saved")
        self._root.destroy()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Launch the Tkinter GUI application.

    WHY: Provides a standalone entry point, callable via
    ``python -m spell_it_please`` or ``python -m spell_it_please.gui``.

    HOW: Configures logging, opens the settings file, builds the
    converter and session, and starts the Tk main loop.

    RULES:
    - This function blocks until the window is closed
    - Must be called from the main thread
    """
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = OverrideStore(
        JsonFileKeyValueStore(config.store_path()),
        key=config.STORE_KEY,
    )
    session = SpellingSession(PhoneticConverter(store))
    logger.info("Using settings file %s", config.store_path())

    root = tk.Tk()
    SpellItApp(root, session, store)
    root.mainloop()


if __name__ == "__main__":
    main()
