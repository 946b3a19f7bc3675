"""
Solve a Boggle board from the command line.

Usage:
    python -m scripts.solve_board [ROW ...] [--dictionary PATH] [--size N] [--seed S]

Examples:
    python -m scripts.solve_board CATS REPO BONE DIGS
    python -m scripts.solve_board "Qu I T E" "S A N D" "R E A D" "H O M E"
    python -m scripts.solve_board --size 5 --seed 42

Rows are either compact letters ("CATS") or space separated faces when a row
holds a "Qu" tile. With no rows a board is rolled from the dice for --size.
"""
import argparse
import random
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle.settings import settings
from boggle.board import Grid, generate_grid
from boggle.dictionary import load_dictionary
from boggle.solver import enumerate_words, rank_words
from boggle.tiles import DICE_SETS


def parse_row(row: str) -> list[str]:
    if " " in row.strip():
        return row.split()
    return list(row.strip())


def main():
    parser = argparse.ArgumentParser(description="Boggle board solver")
    parser.add_argument("rows", nargs="*", help="Board rows, top to bottom")
    parser.add_argument("--dictionary", type=str, default=None,
                        help=f"Word list path (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--size", type=int, choices=sorted(DICE_SETS), default=settings.GRID_SIZE,
                        help="Board size when rolling a random board")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the rolled board")
    parser.add_argument("--limit", type=int, default=0, help="Only print the top N words (0 = all)")
    args = parser.parse_args()

    if args.dictionary:
        settings.DICTIONARY_PATH = Path(args.dictionary)
    dictionary = load_dictionary(settings)

    if args.rows:
        try:
            grid = Grid.from_letters([parse_row(r) for r in args.rows])
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        grid = generate_grid(DICE_SETS[args.size], args.size, random.Random(args.seed))

    print(f"Board ({grid.size}x{grid.size}, {dictionary.source} dictionary, {len(dictionary)} words):")
    for row in grid.rows():
        print("  " + " ".join(f"{t.display:<2}" for t in row))
    print()

    found = enumerate_words(grid, dictionary.trie, settings.MIN_WORD_LENGTH)
    ranked = rank_words(found)
    if args.limit > 0:
        ranked = ranked[:args.limit]
    for word, score in ranked:
        print(f"  {word:<16} {score:>3}")
    print()
    print(f"{len(found)} words, maximum score {sum(found.values())}")


if __name__ == "__main__":
    main()
