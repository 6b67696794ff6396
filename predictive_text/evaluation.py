#!/usr/bin/env python3
"""
evaluation.py - Evaluation harness

- Trains an AutoCompleter on a corpus training split (one sentence per line).
- Spelling: for every test word, types half of it (min 1 char) and checks
  whether the word is among the top-k completions.
- Next word: for every adjacent word pair, checks whether the second word is
  among the top-k predictions given the sentence so far.
- Writes a JSON summary report.

Usage:
python -m predictive_text.evaluation data/corpus.txt --out results.json
"""

from __future__ import annotations

import argparse
import json
import math
import time
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from predictive_text.autocompleter import AutoCompleter
from predictive_text.context.tokenizer import word_tokens
from predictive_text.core.trainer import TextSource


def load_corpus(path: Path) -> List[str]:
    """Load lines from corpus, strip whitespace and ignore empty lines."""
    with path.open("r", encoding="utf-8") as fh:
        return [ln.strip() for ln in fh if ln.strip()]


def split_corpus(corpus: List[str], train_frac: float = 0.8) -> Tuple[List[str], List[str]]:
    """Deterministic train/test split."""
    n = max(1, int(len(corpus) * train_frac))
    return corpus[:n], corpus[n:]


def build_model_from_sentences(sentences: Iterable[str]) -> AutoCompleter:
    ac = AutoCompleter()
    ac.train([TextSource("train", "\n".join(sentences))])
    return ac


def evaluate_on_test(ac: AutoCompleter, test_sentences: Iterable[str], top_k: int = 5) -> Dict:
    stats = {
        "spelling": {"hits": 0, "total": 0, "time": 0.0},
        "next_word": {"hits": 0, "total": 0, "time": 0.0},
    }

    for s in test_sentences:
        words = word_tokens(s)
        for i, w in enumerate(words):
            typed = " ".join(words[:i])
            prefix = w[: max(1, math.ceil(len(w) / 2))]
            query = f"{typed} {prefix}" if typed else prefix

            t0 = time.perf_counter()
            completions = ac.get_spelling_completions(query, limit=top_k)
            stats["spelling"]["time"] += time.perf_counter() - t0
            stats["spelling"]["total"] += 1
            stats["spelling"]["hits"] += int(w in completions)

            if i == 0:
                continue
            t0 = time.perf_counter()
            predictions = ac.get_next_word_predictions(typed, limit=top_k)
            stats["next_word"]["time"] += time.perf_counter() - t0
            stats["next_word"]["total"] += 1
            stats["next_word"]["hits"] += int(w in predictions)

    for v in stats.values():
        v["accuracy"] = round(v["hits"] / v["total"], 4) if v["total"] else 0.0
    return stats


def summarize_and_write(stats: Dict, out_path: Path) -> None:
    """Write JSON summary and print summary to stdout."""
    with out_path.open("w", encoding="utf-8") as fh:
        json.dump(stats, fh, indent=2)

    print("=== Evaluation Summary ===")
    for k, v in stats.items():
        tot = v["total"]
        avg = v["time"] / tot if tot else 0.0
        print(f"{k:10s} | hits: {v['hits']}/{tot} | acc: {v['accuracy'] * 100:.2f}% | avg time/query: {avg:.6f}s")
    print(f"Full JSON written to: {out_path}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate predictive text on a corpus")
    parser.add_argument("corpus", type=str, help="Path to corpus (one sentence per line)")
    parser.add_argument("--out", type=str, default="evaluation_results.json", help="Output JSON file")
    parser.add_argument("--train-frac", type=float, default=0.8, help="Training fraction (0..1)")
    parser.add_argument("--top-k", type=int, default=5)
    args = parser.parse_args(argv)

    corpus_path = Path(args.corpus)
    if not corpus_path.exists():
        print(f"Corpus not found: {corpus_path}")
        return 1

    corpus = load_corpus(corpus_path)
    train_set, test_set = split_corpus(corpus, train_frac=args.train_frac)
    print(f"Loaded {len(corpus)} sentences: train={len(train_set)}, test={len(test_set)}")

    ac = build_model_from_sentences(train_set)
    stats = evaluate_on_test(ac, test_set, top_k=args.top_k)
    summarize_and_write(stats, Path(args.out))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
