"""
Command-line front end.

Usage:
    python -m boggle <dictionary_path> <board_path> [--strategy trie|filter]

Examples:
    python -m boggle words.txt board.txt
    python -m boggle words.txt board.txt --strategy filter --parallel --workers 4
    python -m boggle words.txt board.txt --list --timings
"""
import argparse
import logging

from boggle.errors import USAGE, BoggleError, UsageError
from boggle.metrics import StageTimer
from boggle.settings import STRATEGIES, log_level, settings
from boggle.solver import solve, sort_words

logger = logging.getLogger("boggle")


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(f"{USAGE} ({message})")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="boggle", description="Count dictionary words found on a Boggle board")
    parser.add_argument("dictionary", help="Path to a word list, one word per line")
    parser.add_argument("board", help="Path to a square board, one row of letters per line")
    parser.add_argument("--strategy", choices=STRATEGIES, default=settings.STRATEGY,
                        help="Search strategy (default: %(default)s)")
    parser.add_argument("--parallel", action="store_true", default=settings.PARALLEL,
                        help="Spread the search across worker threads")
    parser.add_argument("--workers", type=int, default=settings.MAX_WORKERS or None,
                        help="Worker threads for --parallel (default: one per core)")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help="Shortest word to look for (default: %(default)s)")
    parser.add_argument("--list", action="store_true", help="Print the words found")
    parser.add_argument("--timings", action="store_true", help="Print per-stage timings")
    return parser


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run(argv: list[str] | None = None) -> int:
    """Solve and print the result; returns the number of words found."""
    args = build_parser().parse_args(argv)
    raw_dict = _read(args.dictionary)
    raw_board = _read(args.board)

    timer = StageTimer()
    result = solve(
        raw_board,
        raw_dict,
        strategy=args.strategy,
        parallel=args.parallel,
        workers=args.workers,
        min_word_length=args.min_length,
        timer=timer,
    )

    if args.list:
        for word in sort_words(result.words):
            print(word)
    print(f"Found {result.count} matches!")
    if args.timings:
        print(timer.format())
    return result.count


def main(argv: list[str] | None = None) -> int:
    level = log_level(settings, settings.CLI_LOG_LEVEL)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logger.setLevel(level)
    try:
        run(argv)
    except (BoggleError, ValueError, OSError) as e:
        print(e)
        return 1
    return 0
