# app.py
# CustomTkinter GUI for lexbrowse (dark theme).
# - Word cache opened on a background thread (keeps UI responsive).
# - Live suggestions with debounce; the entry turns red when nothing more can complete.
# - Lookup result with navigable regions: dictionary sections and search hits.

from __future__ import annotations
import argparse
import threading
from typing import List, Optional

import tkinter.messagebox as mb
import customtkinter as ctk

from lexcore.config import Settings, add_common_arguments, settings_from_args
from lexcore.errors import LexError, LookupFailed, SoundUnavailable
from lexcore.markup import segments
from lexcore.models import SEARCH, SECTION
from lexcore.session import Session

WELCOME = """ Welcome!

 Type a word or phrase and press Enter.
 Dictionaries: jump to a section of the result.
 Find / Next: search in the text and step through the hits.
 Pronounce: play the recording if the sound base has one."""


# -------------------- main app --------------------

class LexbrowseApp(ctk.CTk):
    """Dark-themed dictionary browser over a lexcore Session."""

    def __init__(self, settings: Settings, rebuild: bool = False) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("lexbrowse")
        self.geometry("900x700")
        self.minsize(820, 560)

        # State
        self.settings = settings
        self._rebuild = rebuild
        self._session: Optional[Session] = None
        self._loading_thread: Optional[threading.Thread] = None
        self._suggest_after_id: Optional[str] = None

        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)  # result

        self._build_header()
        self._build_input()
        self._build_navigation()
        self._build_result()
        self._build_log()

        self._set_status("Opening word cache…")
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._start_loading()

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(header, text="lexbrowse", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10)
        self.lbl_status = ctk.CTkLabel(header, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=1, sticky="e", padx=12, pady=10)

    def _build_input(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(box, text="Enter a word or phrase:", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=10)
        self.entry_word = ctk.CTkEntry(box, placeholder_text="Start typing…")
        self.entry_word.grid(row=0, column=1, sticky="ew", padx=6, pady=10)
        self.entry_word.bind("<KeyRelease>", self._on_word_changed)
        self.entry_word.bind("<Return>", lambda _ev: self._do_lookup())
        self._entry_color = self.entry_word.cget("fg_color")

        self.btn_sound = ctk.CTkButton(box, text="Pronounce", width=100, state="disabled",
                                       command=self._play_sound)
        self.btn_sound.grid(row=0, column=2, padx=(6, 12), pady=10)

        self.menu_suggest = ctk.CTkOptionMenu(box, values=[""], command=self._pick_suggestion)
        self.menu_suggest.grid(row=1, column=1, sticky="ew", padx=6, pady=(0, 10))
        self.menu_suggest.set("")

    def _build_navigation(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=2, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(2, weight=1)

        self.menu_dicts = ctk.CTkOptionMenu(bar, values=["Dictionaries"], command=self._pick_dictionary)
        self.menu_dicts.grid(row=0, column=0, padx=(12, 6), pady=10)
        self.menu_hist = ctk.CTkOptionMenu(bar, values=["History"], command=self._pick_history)
        self.menu_hist.grid(row=0, column=1, padx=6, pady=10)

        self.entry_find = ctk.CTkEntry(bar, placeholder_text="Search in the text")
        self.entry_find.grid(row=0, column=2, sticky="ew", padx=6, pady=10)
        self.entry_find.bind("<Return>", lambda _ev: self._do_find())
        ctk.CTkButton(bar, text="Next", width=70, command=self._do_next).grid(
            row=0, column=3, padx=6, pady=10)
        ctk.CTkButton(bar, text="Clear", width=70, command=self._do_clear).grid(
            row=0, column=4, padx=(6, 12), pady=10)

    def _build_result(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(0, weight=1)

        self.txt_result = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_result.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self.txt_result.tag_config(SECTION, foreground="#06989A")
        self.txt_result.tag_config(SEARCH, foreground="#FCE94F", background="#FF5FFF")
        self.txt_result.tag_config("current", background="#3465A4")
        self._set_plain(WELCOME)

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="ew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)
        self.txt_log = ctk.CTkTextbox(frame, height=80, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=0, column=0, sticky="ew", padx=12, pady=12)

    # --------- loading (threaded) ---------

    def _start_loading(self) -> None:
        self._loading_thread = threading.Thread(target=self._load_worker, daemon=True)
        self._loading_thread.start()

    def _load_worker(self) -> None:
        try:
            session = Session.create(self.settings, rebuild=self._rebuild)
        except LexError as exc:
            self.after(0, lambda e=exc: self._on_load_error(e))
            return
        self.after(0, lambda: self._on_load_ok(session))

    def _on_load_ok(self, session: Session) -> None:
        self._session = session
        n = len(session.engine.index) if session.engine and session.engine.index else 0
        self._set_status(f"{n:,} words cached" if n else "Autocompletion off")
        self._log(f"Session ready ({n} words).")
        self._refresh_history()
        self.entry_word.focus_set()

    def _on_load_error(self, exc: Exception) -> None:
        self._set_status("Cannot open the word cache.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Startup error", str(exc))

    # --------- suggestions ---------

    def _on_word_changed(self, ev=None) -> None:
        if ev is not None and ev.keysym == "Return":
            return
        if self._suggest_after_id is not None:
            self.after_cancel(self._suggest_after_id)
        self._suggest_after_id = self.after(120, self._do_suggest)

    def _do_suggest(self) -> None:
        self._suggest_after_id = None
        if self._session is None:
            return
        c = self._session.suggest(self.entry_word.get())
        self.entry_word.configure(fg_color="#8B1E1E" if c.exhausted else self._entry_color)
        self.menu_suggest.configure(values=c.words or [""])
        self.menu_suggest.set(c.words[0] if c.words else "")

    def _pick_suggestion(self, word: str) -> None:
        if word:
            self.entry_word.delete(0, "end")
            self.entry_word.insert(0, word)
            self._do_lookup()

    # --------- lookup & navigation ---------

    def _do_lookup(self) -> None:
        if self._session is None:
            return
        word = self.entry_word.get()
        try:
            res = self._session.lookup(word)
        except LookupFailed as exc:
            self._log(f"ERROR in lookup: {exc}")
            mb.showerror("Lookup error", str(exc))
            return
        self._render()
        self.menu_dicts.configure(values=res.dictionaries or ["Dictionaries"])
        self.menu_dicts.set("Dictionaries")
        self.btn_sound.configure(state="normal" if res.sound else "disabled")
        self._refresh_history()
        self._log(f"{res.word}: {len(res.dictionaries)} dictionaries")

    def _pick_dictionary(self, name: str) -> None:
        if self._session is None or name not in self._session.dictionaries:
            return
        self._highlight(self._session.jump_to_dictionary(self._session.dictionaries.index(name)))

    def _pick_history(self, word: str) -> None:
        if word and word != "History":
            self.entry_word.delete(0, "end")
            self.entry_word.insert(0, word)
            self._do_lookup()

    def _do_find(self) -> None:
        if self._session is None:
            return
        hits = self._session.search(self.entry_find.get())
        self._render()
        self._log(f"{len(hits)} hits")
        self._do_next()

    def _do_next(self) -> None:
        if self._session is not None:
            self._highlight(self._session.next_hit())

    def _do_clear(self) -> None:
        if self._session is not None:
            self._session.clear_search()
            self._render()

    def _play_sound(self) -> None:
        if self._session is None:
            return
        try:
            self._session.play_sound()
        except SoundUnavailable as exc:
            self._log(f"ERROR in playback: {exc}")

    # --------- rendering ---------

    def _render(self) -> None:
        assert self._session is not None
        doc = self._session.document
        kinds = {r.label: r.kind for r in doc.regions}
        self.txt_result.configure(state="normal")
        self.txt_result.delete("0.0", "end")
        for piece, labels in segments(doc):
            tags: List[str] = [f"region-{n}" for n in labels] + [kinds[n] for n in labels]
            self.txt_result.insert("end", piece, tuple(tags) or None)
        self.txt_result.configure(state="disabled")

    def _highlight(self, label: Optional[int]) -> None:
        self.txt_result.tag_remove("current", "0.0", "end")
        if label is None:
            return
        ranges = self.txt_result.tag_ranges(f"region-{label}")
        if ranges:
            self.txt_result.tag_add("current", ranges[0], ranges[-1])
            self.txt_result.see(ranges[0])

    def _refresh_history(self) -> None:
        items = self._session.history.items() if self._session else []
        self.menu_hist.configure(values=items or ["History"])
        self.menu_hist.set("History")

    # --------- misc UI helpers ---------

    def _set_plain(self, text: str) -> None:
        self.txt_result.configure(state="normal")
        self.txt_result.delete("0.0", "end")
        self.txt_result.insert("end", text)
        self.txt_result.configure(state="disabled")

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        if self._session is not None:
            self._session.close()
        self.destroy()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="lexbrowse desktop app")
    add_common_arguments(parser)
    args = parser.parse_args()
    app = LexbrowseApp(settings_from_args(args), rebuild=args.rebuild)
    app.mainloop()
