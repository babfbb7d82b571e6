from pathlib import Path

import pytest

pytest.importorskip("customtkinter")

import app as gui  # noqa: E402
from conftest import write_stardict  # noqa: E402
from lexcore.errors import StorageUnavailable  # noqa: E402
from lexcore.session import Session  # noqa: E402


class FakeWindow:
    """Stands in for the Tk window: queues after() callbacks and records the outcome."""

    def __init__(self, settings):
        self.settings = settings
        self._rebuild = False
        self.queued = []
        self.errors = []
        self.ready = []

    def after(self, ms, fn):
        self.queued.append(fn)

    def _on_load_error(self, exc):
        self.errors.append(exc)

    def _on_load_ok(self, session):
        self.ready.append(session)

    def run_queued(self):
        for fn in self.queued:
            fn()


def test_startup_storage_error_reaches_the_ui(settings, tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    settings.config_dir = blocker / "sub"
    win = FakeWindow(settings)

    gui.LexbrowseApp._load_worker(win)
    win.run_queued()

    assert win.ready == []
    assert len(win.errors) == 1 and isinstance(win.errors[0], StorageUnavailable)


def test_startup_hands_the_session_to_the_ui(settings, dict_dir: Path):
    write_stardict(dict_dir, "en-ru", ["apple", "banana"])
    win = FakeWindow(settings)

    gui.LexbrowseApp._load_worker(win)
    win.run_queued()

    assert win.errors == []
    session = win.ready[0]
    try:
        assert isinstance(session, Session)
        assert len(session.engine.index) == 2
    finally:
        session.close()
