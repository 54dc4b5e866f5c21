# tests/test_cli.py - drive the shell with a recording console
import io

import pytest
from rich.console import Console

from suffix_index import SuffixIndex
from suffix_index.cli import CLI, main, render_tree
from suffix_index.utils.config_manager import Config
from suffix_index.utils.logger_utils import Log


@pytest.fixture
def shell(tmp_path):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    log = Log(str(tmp_path / "session.log"), echo=False)
    return CLI(config=Config(None), console=console, log=log)


def output(shell):
    return shell.console.file.getvalue()


def test_bare_line_inserts_words(shell):
    shell.handle("a ab cab")
    assert shell.index.words() == ["a", "ab", "cab"]
    assert shell.index.size() == 4
    assert "+ cab" in output(shell)


def test_insert_erase_and_queries(shell):
    shell.handle("/insert a ab cab")
    shell.handle("/insert ab")
    assert "skipped ab" in output(shell)

    shell.handle("/search ab")
    shell.handle("/endswith cab")
    out = output(shell)
    assert "search ab -> True" in out
    assert "endswith cab -> False" in out

    shell.handle("/erase a zz")
    out = output(shell)
    assert "- a" in out
    assert "skipped zz" in out
    assert shell.index.word_count() == 2
    assert shell.index.search("ab")


def test_timings_recorded(shell):
    shell.handle("/insert abc")
    shell.handle("/search abc")
    assert shell.metrics.n["insert"] == 1
    assert shell.metrics.n["search"] == 1
    assert "insert:" in output(shell)

    shell.cfg.set("show_timings", False)
    shell.console.file.truncate(0)
    shell.console.file.seek(0)
    shell.handle("/search abc")
    assert "ms" not in output(shell)


def test_tree_words_stats(shell):
    shell.handle("/insert abde abc b abd")
    shell.handle("/tree")
    shell.handle("/words")
    shell.handle("/stats")
    out = output(shell)
    assert '"ab"' in out
    assert "refs=0" in out
    assert "4 words" in out
    assert "nodes" in out and "12" in out


def test_render_tree_limit():
    tree = render_tree(SuffixIndex(["abde", "abc", "b", "abd"]), limit=3)
    console = Console(file=io.StringIO(), width=80, color_system=None)
    console.print(tree)
    assert "9 more nodes" in console.file.getvalue()


def test_load_file(shell, tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("alpha\n\n  beta \nalpha\n", encoding="utf8")
    shell.handle(f"/load {p}")
    assert shell.index.words() == ["alpha", "beta"]
    assert "Loaded 2 of 3 words" in output(shell)
    assert "loaded 2/3 words" in (tmp_path / "session.log").read_text(encoding="utf-8")


def test_load_missing_file(shell, tmp_path):
    assert shell.load_file(str(tmp_path / "missing.txt")) == 0
    assert "Cannot read" in output(shell)


def test_check_and_auto_check(shell, tmp_path):
    shell.handle("/check")
    assert "All invariants hold." in output(shell)

    shell.handle("/config check_invariants on")
    assert shell.cfg.get("check_invariants") is True
    shell.handle("ab")
    shell.index.root.children["b"].ref_count = 0
    shell.handle("/insert zz")
    assert "invariant violated" in output(shell)
    assert "invariant check failed" in (tmp_path / "session.log").read_text(encoding="utf-8")


def test_config_and_errors(shell):
    shell.handle("/config")
    shell.handle("/config nope 1")
    shell.handle("/config a")
    shell.handle("/bogus")
    shell.handle('/insert "open')
    out = output(shell)
    assert "tree_limit" in out
    assert "Cannot set nope" in out
    assert "usage: /config" in out
    assert "Unknown command: /bogus" in out
    assert "Bad input" in out


def test_clear_and_quit(shell):
    shell.handle("x y")
    shell.handle("/clear")
    assert shell.index.empty()
    assert shell.handle("/quit") is False
    assert "bye." in output(shell)


def test_run_reads_stdin(shell, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("tomato potato\n/search to\n/quit\n"))
    shell.run()
    assert shell.index.words() == ["potato", "tomato"]
    assert "search to -> False" in output(shell)
    assert not shell.running


def test_run_stops_on_eof(shell, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n"))
    shell.run()
    assert shell.index.search("abc")
    assert not shell.running


def test_main(tmp_path, monkeypatch, capsys):
    words = tmp_path / "w.txt"
    words.write_text("cab\n", encoding="utf8")
    cfg = tmp_path / "cfg.json"
    monkeypatch.setattr("sys.stdin", io.StringIO("/words\n/quit\n"))
    assert main(["a", "ab", "--load", str(words), "--config", str(cfg),
                 "--log", str(tmp_path / "m.log")]) == 0
    out = capsys.readouterr().out
    assert "3 words" in out
    assert cfg.exists()
    assert (tmp_path / "m.log").exists()
