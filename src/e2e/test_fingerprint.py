import os
from pathlib import Path

from lexcore.DB.fingerprint import FingerprintTracker, compute_fingerprint, is_stale


def test_order_independent_and_sensitive_to_new_identifiers():
    a = compute_fingerprint(["en-ru.ifo", "ru-en.ifo", "de-en.ifo"])
    b = compute_fingerprint(["de-en.ifo", "en-ru.ifo", "ru-en.ifo"])
    assert a == b
    assert compute_fingerprint(["en-ru.ifo", "ru-en.ifo", "de-en.ifo", "fr-en.ifo"]) != a
    assert compute_fingerprint(["en-ru.ifo", "ru-en.ifo"]) != a


def test_is_stale():
    fp = compute_fingerprint(["a.ifo"])
    assert is_stale(None, fp)
    assert not is_stale(fp, fp)
    assert is_stale(compute_fingerprint(["b.ifo"]), fp)


def test_first_run_records_baseline_and_reports_fresh(tmp_path: Path):
    path = tmp_path / "cfg" / "dicts"
    tracker = FingerprintTracker(str(path))
    current = compute_fingerprint(["en-ru.ifo"])

    assert tracker.check(current) is False
    assert path.read_bytes() == current
    assert not os.path.exists(f"{path}.tmp")

    # same set: still fresh; new dictionary: stale
    assert tracker.check(current) is False
    assert tracker.check(compute_fingerprint(["en-ru.ifo", "ru-en.ifo"])) is True
