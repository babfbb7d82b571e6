import subprocess
from pathlib import Path

import pytest

from conftest import write_stardict
from lexcore import lookup
from lexweb.__main__ import main

SDCV_OUT = "-->Mueller\n-->apple\n\n  яблоко\n\n-->WordNet\n-->apple\n\n fruit, apple tree\n"


@pytest.fixture
def argv(tmp_path: Path, dict_dir: Path, monkeypatch):
    write_stardict(dict_dir, "en-ru", ["apple", "apricot", "banana"])
    monkeypatch.delenv("LEXBROWSE_NOAUTO", raising=False)

    def run(cmd, **kw):
        return subprocess.CompletedProcess(cmd, 0, stdout=SDCV_OUT, stderr="")
    monkeypatch.setattr(lookup.subprocess, "run", run)
    return ["--dict-dir", str(dict_dir), "--config-dir", str(tmp_path / "config"),
            "--sound-dir", str(tmp_path / "sounds")]


@pytest.mark.e2e
def test_complete_prints_suggestions(argv, capsys):
    assert main(argv + ["--complete", "AP"]) == 0
    assert capsys.readouterr().out.splitlines() == ["apple", "apricot"]


@pytest.mark.e2e
def test_single_match_prints_no_words(argv, capsys):
    assert main(argv + ["--complete", "ban"]) == 0
    assert capsys.readouterr().out.splitlines() == ["(no further completions)"]


@pytest.mark.e2e
def test_lookup_with_search_lists_hits(argv, capsys):
    assert main(argv + ["--q", "apple", "--search", "apple"]) == 0
    out = capsys.readouterr().out
    assert "fruit, apple tree" in out
    assert "Found in dictionaries: Mueller, WordNet" in out
    rows = out.split("#   Line   Match\n", 1)[1].splitlines()
    assert [row.split()[0] for row in rows] == ["2", "3", "4"]


@pytest.mark.e2e
def test_repl_commands(argv, capsys, monkeypatch):
    lines = iter(["?ap", "apple", ":find fruit", ":next", ":dicts", ":hist", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main(argv + ["--repl"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "apricot" in out
    assert "-> region 2" in out
    assert any(line.split() == ["0", "Mueller"] for line in out)
    assert any(line.split() == ["1", "WordNet"] for line in out)
    assert out[-1] == "apple"


@pytest.mark.e2e
def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "1.0.0"
