# cli.py - CLI for the predictive text engine

from __future__ import annotations

import argparse
import shlex
import sys
import time
from pathlib import Path
from random import Random
from typing import List, Optional, Sequence

from predictive_text.autocompleter import AutoCompleter
from predictive_text.context.tokenizer import tokenize
from predictive_text.core.trainer import TextSource
from predictive_text.utils.cache_utils import timed
from predictive_text.utils.config_manager import Config
from predictive_text.utils.logger_utils import Log

BANNER = "Predictive Text (type /help for cmds)"
HELP = (
    "cmds: /spell <text>, /next <text>, /phrase <text>, /train <file> [label]\n"
    "      /config [key val], /stats, /bench, /help, /quit\n"
    "plain text -> suggestions (ends in space/punctuation: next word, else spelling)"
)


def suggestion_mode(text: str) -> str:
    """
    Consumer-side mode switch: 'next' when the text ends in whitespace or
    punctuation (or is empty), 'spell' while a word is being typed.
    """
    if not text or text[-1].isspace():
        return "next"
    toks = tokenize(text)
    if not toks or not toks[-1].is_word:
        return "next"
    return "spell"


def read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


class CLI:
    def __init__(self, ac: AutoCompleter, out=None) -> None:
        self.ac = ac
        self.out = out or sys.stdout
        self.sources: List[TextSource] = []
        self.running = True

    def say(self, *parts) -> None:
        print(*parts, file=self.out)

    def start(self) -> None:
        self.say(BANNER)
        while self.running:
            try:
                line = input(">> ")
            except (EOFError, KeyboardInterrupt):
                self.say("\nbye.")
                break
            if not line.strip():
                continue
            if line.startswith("/"):
                self.cmd(line)
            else:
                self.suggest(line)

    def suggest(self, text: str) -> List[str]:
        t0 = time.perf_counter()
        if suggestion_mode(text) == "spell":
            out = self.ac.get_spelling_completions(text)
        else:
            out = self.ac.get_next_word_predictions(text)
        dt = time.perf_counter() - t0
        self.say(" | ".join(out) if out else "(no suggestions)", f"({dt * 1000:.2f} ms)")
        return out

    def cmd(self, line: str) -> None:
        parts = line.split(None, 1)
        if not parts:
            return
        c = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        if c in ("/q", "/quit", "/exit"):
            self.running = False
            self.say("bye.")
        elif c == "/help":
            self.say(HELP)
        elif c == "/spell" and rest:
            self.say(" | ".join(self.ac.get_spelling_completions(rest)) or "(no suggestions)")
        elif c == "/next" and rest:
            self.say(" | ".join(self.ac.get_next_word_predictions(rest)) or "(no suggestions)")
        elif c == "/phrase" and rest:
            self.say(" | ".join(self.ac.get_next_phrase_predictions(rest)) or "(no suggestions)")
        elif c in ("/train", "/config"):
            # file paths and config values may be quoted
            try:
                args = shlex.split(rest)
            except ValueError as e:
                self.say("bad input:", e)
                return
            if c == "/config":
                self.config(args)
            elif args:
                label = args[1] if len(args) > 1 else Path(args[0]).stem
                self.train_file(args[0], label)
            else:
                self.say("usage: /train <file> [label]")
        elif c == "/stats":
            for k, v in self.ac.stats().items():
                self.say(f"{k:16} {v}")
        elif c == "/bench":
            self._bench()
        else:
            self.say("unknown cmd")

    def config(self, args: Sequence[str]) -> None:
        if not args:
            self.say(self.ac.cfg.show())
        elif len(args) == 2:
            try:
                self.ac.cfg.set(args[0], args[1])
            except (KeyError, ValueError) as e:
                self.say("config err:", e)
        else:
            self.say("usage: /config [key val]")

    def train_file(self, path: str, label: str) -> bool:
        try:
            text = read_text(path)
        except OSError as e:
            self.say("err:", e)
            return False
        self.sources.append(TextSource(label, text))
        ok, dt = timed(self.ac.train)(self.sources)
        if ok:
            self.say(f"trained on {len(self.sources)} sources in {dt:.2f}s")
        else:
            self.sources.pop()
            self.say("training failed; previous model kept")
        return ok

    def _bench(self, n: int = 200) -> None:
        rng = Random(0)
        queries = ["the", "i am ", "th", "how are ", "good", "wa"]

        @timed
        def run():
            for _ in range(n):
                q = rng.choice(queries)
                if suggestion_mode(q) == "spell":
                    self.ac.get_spelling_completions(q)
                else:
                    self.ac.get_next_word_predictions(q)

        _, dt = run()
        self.say(f"bench: {dt / n * 1000:.3f} ms avg per query")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="predictive-text", description="Interactive predictive text engine")
    parser.add_argument("--dictionary", action="append", default=[], help="Word list file (one word per line)")
    parser.add_argument("--corpus", action="append", default=[], help="Base corpus text file")
    parser.add_argument("--persona", help="Account persona text file")
    parser.add_argument("--history", help="Message history file (one message per line)")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def load_sources(args: argparse.Namespace) -> List[TextSource]:
    """Sources in precedence order: dictionaries, corpora, persona, history."""
    sources: List[TextSource] = []
    for path in args.dictionary:
        sources.append(TextSource.from_words(Path(path).stem, read_text(path).splitlines()))
    for path in args.corpus:
        sources.append(TextSource(Path(path).stem, read_text(path)))
    if args.persona:
        sources.append(TextSource("persona", read_text(args.persona)))
    if args.history:
        sources.append(TextSource("history", read_text(args.history)))
    return sources


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    Log.configure("DEBUG" if args.verbose else cfg["log_level"])

    ac = AutoCompleter(cfg)
    cli = CLI(ac)
    try:
        sources = load_sources(args)
    except OSError as e:
        print(f"cannot read source: {e}", file=sys.stderr)
        return 2
    if sources:
        cli.sources = sources
        if not ac.train(sources):
            print("initial training failed", file=sys.stderr)
    cli.start()
    ac.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
