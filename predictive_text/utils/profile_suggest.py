# predictive_text/utils/profile_suggest.py
"""
Small profiling harness for per-keystroke queries.
Usage:
  python -m predictive_text.utils.profile_suggest --iters 1000 --corpus data/corpus.txt

Prints mean/median/p90/p99/max latency in ms.
"""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from random import Random
from typing import Dict, List, Sequence

import numpy as np

from predictive_text.autocompleter import AutoCompleter
from predictive_text.core.trainer import TextSource

# small synthetic dataset (or load a corpus file if you have one)
SAMPLE_SENTENCES = [
    "the quick brown fox jumps over the lazy dog",
    "hello world this is a test sentence",
    "please schedule a meeting next monday at nine",
    "thank you for your help with the project",
    "could you show me the latest report",
    "i am happy to see you",
    "i am tired today",
]

QUERIES = ["the qu", "please sch", "thank you ", "hello", "could you ", "i am ", "th", "repo"]


def benchmark(ac: AutoCompleter, queries: Sequence[str], iterations: int = 200, seed: int = 0) -> List[float]:
    """Latency in ms of alternating spelling/next-word queries."""
    rng = Random(seed)
    times = []
    for _ in range(iterations):
        q = rng.choice(queries)
        t0 = time.perf_counter()
        if q.endswith(" "):
            ac.get_next_word_predictions(q)
        else:
            ac.get_spelling_completions(q)
        times.append((time.perf_counter() - t0) * 1000.0)
    return times


def summarize(times: Sequence[float]) -> Dict[str, float]:
    if not len(times):
        return {"count": 0}
    arr = np.asarray(times, dtype=float)
    return {
        "count": int(arr.size),
        "mean_ms": float(arr.mean()),
        "median_ms": float(np.median(arr)),
        "p90_ms": float(np.percentile(arr, 90)),
        "p99_ms": float(np.percentile(arr, 99)),
        "max_ms": float(arr.max()),
    }


def main(argv=None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--warm", type=int, default=50, help="warmup iterations")
    parser.add_argument("--iters", type=int, default=500, help="measured iterations")
    parser.add_argument("--corpus", type=str, help="optional corpus file")
    args = parser.parse_args(argv)

    text = Path(args.corpus).read_text(encoding="utf-8") if args.corpus else "\n".join(SAMPLE_SENTENCES)
    ac = AutoCompleter()
    ac.train([TextSource("profile", text)])

    print("Warming up...")
    benchmark(ac, QUERIES, iterations=args.warm)
    print("Measuring...")
    s = summarize(benchmark(ac, QUERIES, iterations=args.iters))
    if not s["count"]:
        print("No measured iterations.")
    else:
        print(
            "Stats (ms): mean=%.3f median=%.3f p90=%.3f p99=%.3f max=%.3f"
            % (s["mean_ms"], s["median_ms"], s["p90_ms"], s["p99_ms"], s["max_ms"])
        )
    print("Sample:", ac.get_spelling_completions("th"), ac.get_next_word_predictions("i am "))


if __name__ == "__main__":
    main()
