"""
cli.py - interactive shell over a SuffixIndex
Features:
- Insert/erase words and run word/suffix queries line by line
- Tree view, word listing and counters rendered with Rich
- Per-command timings (Metrics) and a session log file (Log)
- Optional full invariant check after every mutation (config: check_invariants)
"""

import argparse
import logging
import shlex
from typing import Iterable, List, Optional

# ui styling with Rich
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.tree import Tree
from rich import box

from suffix_index.core.errors import InvariantError
from suffix_index.core.node import Node
from suffix_index.core.suffix_index import SuffixIndex
from suffix_index.utils.config_manager import Config
from suffix_index.utils.logger_utils import Log
from suffix_index.utils.metrics_tracker import Metrics, timed

HELP = [
    ("/insert <w>...", "insert words (a bare line does the same)"),
    ("/erase <w>...", "erase words"),
    ("/search <w>", "is <w> a stored word"),
    ("/endswith <s>", "is <s> a suffix of some stored word"),
    ("/words", "list stored words"),
    ("/tree", "draw the trie"),
    ("/stats", "counters and timings"),
    ("/check", "run the full invariant check"),
    ("/load <file>", "insert one word per line from a file"),
    ("/clear", "drop everything"),
    ("/config [key val]", "show or change settings"),
    ("/quit", "leave"),
]


def render_tree(index: SuffixIndex, limit: int = 200) -> Tree:
    """Build a Rich tree of the index, drawing at most `limit` nodes below the root."""
    top = Tree(f'[bold]""[/bold]  [dim]size={index.size()} words={index.word_count()}[/dim]')
    stack = [(top, child) for _, child in sorted(index.root.children.items(), reverse=True)]
    drawn = 0
    while stack:
        if drawn >= limit:
            top.add(f"[dim]... {index.size() - drawn} more nodes[/dim]")
            break
        branch, node = stack.pop()
        sub = branch.add(_node_label(node))
        drawn += 1
        for _, child in sorted(node.children.items(), reverse=True):
            stack.append((sub, child))
    return top


def _node_label(node: Node) -> str:
    style = "bold green" if node.is_word_end else "cyan"
    mark = " [green]word[/green]" if node.is_word_end else ""
    return f'[{style}]"{escape(node.label)}"[/{style}]{mark} [dim]refs={node.ref_count}[/dim]'


class CLI:
    """Command loop around one SuffixIndex instance."""

    def __init__(self, index: Optional[SuffixIndex] = None, config: Optional[Config] = None,
                 console: Optional[Console] = None, log: Optional[Log] = None,
                 metrics: Optional[Metrics] = None):
        self.index = index if index is not None else SuffixIndex()
        self.cfg = config if config is not None else Config(None)
        self.console = console or Console()
        self.log = log or Log(self.cfg.get("log_path"), use_color=self.cfg.get("log_color"), echo=False)
        self.metrics = metrics or Metrics()
        self.running = True

    def run(self):
        """
        Main interactive loop:
        - prompts for a line
        - slash commands are dispatched, anything else is inserted word by word
        """
        self.console.rule("[bold magenta]Suffix Index[/bold magenta]")
        self.console.print("[cyan]Type words to insert them. /help lists commands.[/cyan]\n")
        self.log.info("session started")

        while self.running:
            try:
                line = Prompt.ask("[green]index[/green]", console=self.console, default="", show_default=False)
            except (EOFError, KeyboardInterrupt):
                self._exit()
                break
            self.handle(line)

    def handle(self, line: str) -> bool:
        """Process one input line. Returns False once the shell should stop."""
        line = line.strip()
        if not line:
            return self.running
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Bad input:[/red] {escape(str(e))}")
            return self.running
        if not parts:
            return self.running

        if line.startswith("/"):
            self._handle_command(parts[0].lower(), parts[1:])
        else:
            self._insert(parts)
        return self.running

    # COMMAND HANDLING -----------------------------------------------------------
    def _handle_command(self, cmd: str, args: List[str]):
        if cmd in ("/q", "/quit", "/exit"):
            self._exit()
            return

        if cmd == "/help":
            self._show_help()
            return

        if cmd == "/insert" and args:
            self._insert(args)
            return

        if cmd == "/erase" and args:
            self._erase(args)
            return

        if cmd == "/search" and len(args) == 1:
            self._query("search", args[0], self.index.search)
            return

        if cmd == "/endswith" and len(args) == 1:
            self._query("endswith", args[0], self.index.ends_with)
            return

        if cmd == "/words":
            self._show_words()
            return

        if cmd == "/tree":
            self.console.print(render_tree(self.index, self.cfg.get("tree_limit")))
            return

        if cmd == "/stats":
            self._show_stats()
            return

        if cmd == "/check":
            self._check(verbose=True)
            return

        if cmd == "/load" and len(args) == 1:
            self.load_file(args[0])
            return

        if cmd == "/clear":
            self.index.clear()
            self.log.info("index cleared")
            self.console.print("[yellow]Index cleared.[/yellow]")
            return

        if cmd == "/config":
            self._config(args)
            return

        self.console.print(f"[red]Unknown command:[/red] {escape(' '.join([cmd] + args))}")

    # MUTATIONS -------------------------------------------------------------------
    def _insert(self, words: Iterable[str]):
        for w in words:
            ok, dt = timed(self.index.insert)(w)
            self._timing("insert", dt)
            if ok:
                self.console.print(f"[green]+[/green] {escape(w)}")
            else:
                self.console.print(f"[yellow]skipped[/yellow] {escape(w)} [dim](already stored)[/dim]")
        self._after_mutation()

    def _erase(self, words: Iterable[str]):
        for w in words:
            ok, dt = timed(self.index.erase)(w)
            self._timing("erase", dt)
            if ok:
                self.console.print(f"[red]-[/red] {escape(w)}")
            else:
                self.console.print(f"[yellow]skipped[/yellow] {escape(w)} [dim](not stored)[/dim]")
        self._after_mutation()

    def load_file(self, path: str) -> int:
        """Insert one word per non-blank line of `path`. Returns how many were new."""
        try:
            with open(path, "r", encoding="utf8") as f:
                words = [ln.strip() for ln in f if ln.strip()]
        except OSError as e:
            self.log.error(f"load failed for {path}: {e}")
            self.console.print(f"[red]Cannot read[/red] {escape(path)}: {escape(str(e))}")
            return 0
        with self.log.time_block(f"load {path}") as timer:
            added = self.index.insert_many(words)
        self.metrics.record("load", timer.elapsed)
        self.log.info(f"loaded {added}/{len(words)} words from {path}")
        self.console.print(f"Loaded [bold]{added}[/bold] of {len(words)} words from {escape(path)}")
        self._after_mutation()
        return added

    def _after_mutation(self):
        if self.cfg.get("check_invariants"):
            self._check(verbose=False)

    def _check(self, verbose: bool) -> bool:
        try:
            self.index.check_invariants()
        except InvariantError as e:
            self.log.error(f"invariant check failed: {e}")
            self.console.print(Panel(escape(str(e)), title="invariant violated", style="red"))
            return False
        if verbose:
            self.console.print("[green]All invariants hold.[/green]")
        return True

    # QUERIES ---------------------------------------------------------------------
    def _query(self, name: str, arg: str, fn):
        res, dt = timed(fn)(arg)
        self._timing(name, dt)
        color = "green" if res else "red"
        self.console.print(f"{name} {escape(arg)} -> [{color}]{res}[/{color}]")

    def _timing(self, key: str, dt: float):
        self.metrics.record(key, dt)
        if self.cfg.get("show_timings"):
            self.console.print(f"[dim]{key}: {dt * 1000:.3f} ms[/dim]")

    # DISPLAY ---------------------------------------------------------------------
    def _show_help(self):
        table = Table(title="Commands", box=box.SIMPLE)
        table.add_column("Command", style="cyan")
        table.add_column("Does")
        for c, d in HELP:
            table.add_row(escape(c), d)
        self.console.print(table)

    def _show_words(self):
        words = self.index.words()
        if not words:
            self.console.print("[dim](no words)[/dim]")
            return
        table = Table(title=f"{len(words)} words", box=box.SIMPLE)
        table.add_column("Word", style="green")
        for w in words:
            table.add_row(escape(w))
        self.console.print(table)

    def _show_stats(self):
        table = Table(title="Index", box=box.SIMPLE)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("nodes", str(self.index.size()))
        table.add_row("words", str(self.index.word_count()))
        table.add_row("empty", str(self.index.empty()))
        for k in self.metrics.keys():
            table.add_row(f"avg {k} (ms)", f"{self.metrics.avg(k) * 1000:.3f}")
        self.console.print(table)

    def _config(self, args: List[str]):
        if not args:
            table = Table(title="Config", box=box.SIMPLE)
            table.add_column("Key", style="cyan")
            table.add_column("Value")
            for k, v in self.cfg.data.items():
                table.add_row(k, escape(str(v)))
            self.console.print(table)
        elif len(args) == 2:
            if self.cfg.set(args[0], args[1]):
                self.console.print(f"{escape(args[0])} = {escape(str(self.cfg.get(args[0])))}")
            else:
                self.console.print(f"[red]Cannot set[/red] {escape(args[0])}")
        else:
            self.console.print("usage: /config [key val]")

    def _exit(self):
        self.running = False
        self.log.info(f"session ended: {self.index.word_count()} words, {self.index.size()} nodes")
        self.console.print("[bold]bye.[/bold]")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="suffix-index", description="Interactive compressed suffix index.")
    parser.add_argument("words", nargs="*", help="words to insert before the prompt opens")
    parser.add_argument("--config", default=None, help="JSON config file (created if missing)")
    parser.add_argument("--load", action="append", default=[], metavar="FILE",
                        help="insert one word per line from FILE (repeatable)")
    parser.add_argument("--log", default=None, help="session log file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging from the index")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    cfg = Config(args.config)
    if args.log:
        cfg.data["log_path"] = args.log

    cli = CLI(config=cfg)
    for path in args.load:
        cli.load_file(path)
    if args.words:
        cli.index.insert_many(args.words)
    cli.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
