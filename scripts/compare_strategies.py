"""
Run every search strategy on one board and report where they disagree.

Usage:
    python -m scripts.compare_strategies <dictionary_path> <board_path> [--workers N]

Also lists the words the approximate filter lets through but the exact search
rejects (paths that would need to reuse a cell).
"""
import argparse
import sys
import time
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle.grid import Grid
from boggle.search import SearchEngine
from boggle.solver import load_dictionary, solve


def main():
    parser = argparse.ArgumentParser(description="Boggle strategy comparison")
    parser.add_argument("dictionary", help="Path to a word list")
    parser.add_argument("board", help="Path to a board file")
    parser.add_argument("--workers", type=int, default=None, help="Workers for the parallel runs")
    args = parser.parse_args()

    words = load_dictionary(args.dictionary)
    grid = Grid.parse(Path(args.board).read_text())
    print(grid)
    print()

    runs = {}
    for strategy in ("trie", "filter"):
        for parallel in (False, True):
            label = f"{strategy}{'/parallel' if parallel else ''}"
            t0 = time.perf_counter()
            result = solve(grid, words, strategy=strategy, parallel=parallel, workers=args.workers)
            elapsed = (time.perf_counter() - t0) * 1000
            runs[label] = set(result.words)
            print(f"  {label:<16} {result.count:6d} words {elapsed:9.1f}ms")

    reference = runs["trie"]
    disagreements = 0
    for label, found in runs.items():
        missing = reference - found
        extra = found - reference
        if missing or extra:
            disagreements += 1
            print(f"{label}: missing={sorted(missing)} extra={sorted(extra)}")
    print(f"Total disagreements: {disagreements}")

    engine = SearchEngine(grid)
    tree = engine.build_tree(words)
    reuse = [w for w in tree.words() if engine.might_contain(w) and not engine.contains_word(w)]
    print(f"Filter false positives: {len(reuse)}")
    for word in reuse:
        print(f"  {word}")

    return 1 if disagreements else 0


if __name__ == "__main__":
    sys.exit(main())
