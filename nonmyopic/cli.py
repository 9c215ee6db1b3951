"""
Command line front end.

    nonmyopic 2x2 --example prisoners-dilemma
    nonmyopic 2x2 --payoffs "1,-1 -1,1 -1,1 1,-1" --exact
    nonmyopic 3x3 --example extended-coordination --details --plot votes.png
    nonmyopic 3x3 --interactive --graph votes_graph.png
"""

import argparse
import logging
import re
import sys
from typing import Callable, List, Optional

from nonmyopic.equilibrium import EquilibriumEngine
from nonmyopic.logging_config import configure_logging
from nonmyopic.payoffs import (EXAMPLES_2X2, EXAMPLES_3X3, PayoffMatrix,
                               PayoffMatrix2x2, PayoffMatrix3x3, example_game)
from nonmyopic.predictor import AggregatePredictor
from nonmyopic.report import (format_equilibria, format_game, format_prediction,
                              format_submatrix)

logger = logging.getLogger(__name__)

MATRIX_TYPES = {2: PayoffMatrix2x2, 3: PayoffMatrix3x3}
DEFAULT_EXAMPLES = {2: "prisoners-dilemma", 3: "extended-coordination"}


class PayoffParseError(ValueError):
    """Raised when payoff text cannot be turned into a full matrix."""


def parse_payoffs(text: str, size: int) -> PayoffMatrix:
    """
    Parse cells given row-major as "p0,p1" pairs separated by whitespace or ';'.
    """
    cells = [c for c in re.split(r"[\s;]+", text.strip()) if c]
    if len(cells) != size * size:
        raise PayoffParseError(f"expected {size * size} cells for a {size}x{size} game, got {len(cells)}")

    matrix = MATRIX_TYPES[size]()
    for k, cell in enumerate(cells):
        parts = cell.split(",")
        if len(parts) != 2:
            raise PayoffParseError(f"cell {k + 1} ({cell!r}) must look like 'p0,p1'")
        try:
            p0, p1 = float(parts[0]), float(parts[1])
        except ValueError:
            raise PayoffParseError(f"cell {k + 1} ({cell!r}) has a non-numeric payoff")
        matrix.set(k // size, k % size, 0, p0)
        matrix.set(k // size, k % size, 1, p1)
    return matrix


def prompt_payoffs(size: int, ask: Callable[[str], str] = input) -> PayoffMatrix:
    """Ask for every cell's payoffs, re-asking on non-numeric answers."""
    matrix = MATRIX_TYPES[size]()
    print(f"Enter the payoff matrix for the {size}x{size} game:")
    print("Format: (Player 1 payoff, Player 2 payoff)\n")
    for i in range(size):
        for j in range(size):
            print(f"Position ({i + 1},{j + 1}) - Player 1 strategy {i + 1}, Player 2 strategy {j + 1}:")
            for player in range(2):
                while True:
                    answer = ask(f"Player {player + 1} payoff: ")
                    try:
                        matrix.set(i, j, player, float(answer))
                        break
                    except ValueError:
                        print(f"Not a number: {answer!r}")
    return matrix


def load_matrix(args, size: int, parser: argparse.ArgumentParser) -> PayoffMatrix:
    if args.payoffs:
        try:
            return parse_payoffs(args.payoffs, size)
        except PayoffParseError as e:
            parser.error(str(e))
    if args.interactive:
        try:
            return prompt_payoffs(size)
        except EOFError:
            parser.error("input ended before every payoff was entered")
    name = args.example or DEFAULT_EXAMPLES[size]
    print(f"Using example game: {name}")
    return example_game(name)


def run_2x2(matrix: PayoffMatrix2x2, exact: bool = False, plot_path: Optional[str] = None) -> None:
    engine = EquilibriumEngine(matrix)
    print("\n" + "=" * 50)
    print(format_game(engine.matrix) + "\n")
    print(format_equilibria("Nash Equilibria", engine.find_all_nash_equilibria(),
                            "No Nash equilibria found.") + "\n")
    print(format_equilibria("Non-Myopic Equilibria", engine.find_non_myopic_equilibria(),
                            "No non-myopic equilibria found.") + "\n")
    if exact:
        print(format_equilibria("Support Enumeration Equilibria", engine.exact_nash_equilibria(),
                                "No equilibria found by support enumeration.") + "\n")

    if plot_path:
        from nonmyopic.plotting import plot_best_responses
        plot_best_responses(engine, save_path=plot_path)


def run_3x3(matrix: PayoffMatrix3x3, details: bool = False, dedupe: bool = False,
            plot_path: Optional[str] = None, graph_path: Optional[str] = None) -> None:
    predictor = AggregatePredictor(matrix, deduplicate=dedupe)
    print("\n" + "=" * 60)
    print(format_game(predictor.matrix) + "\n")

    prediction = predictor.predict()
    print(f"Found {len(prediction.analyses)} valid 2x2 submatrices from the 3x3 game.\n")
    if details:
        for analysis in prediction.analyses:
            print(format_submatrix(analysis))
            print("-" * 50 + "\n")

    print("=" * 60)
    print("CALCULATING 3x3 NON-MYOPIC EQUILIBRIUM FROM SUBGAME ANALYSIS")
    print("=" * 60 + "\n")
    print(format_prediction(prediction))

    if plot_path:
        from nonmyopic.plotting import plot_vote_heatmap
        plot_vote_heatmap(prediction, save_path=plot_path)
    if graph_path:
        from nonmyopic.plotting import plot_vote_graph
        plot_vote_graph(prediction, save_path=graph_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nonmyopic",
        description="Nash and non-myopic equilibria of 2x2 games; 3x3 games by 2x2 decomposition",
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-format", default="text", choices=["text", "json"])
    sub = parser.add_subparsers(dest="command", required=True)

    for name, examples in (("2x2", EXAMPLES_2X2), ("3x3", EXAMPLES_3X3)):
        p = sub.add_parser(name, help=f"Solve a {name} game")
        source = p.add_mutually_exclusive_group()
        source.add_argument("--example", choices=sorted(examples), help="Use a built-in example game")
        source.add_argument("--payoffs", help="Cells row-major as 'p0,p1' pairs, e.g. '3,3 0,5 5,0 1,1'")
        source.add_argument("--interactive", action="store_true", help="Type the payoffs in cell by cell")
        p.add_argument("--plot", metavar="PATH", help="Save a plot of the result to PATH")
        if name == "2x2":
            p.add_argument("--exact", action="store_true",
                           help="Also list the equilibria found by support enumeration (nashpy)")
        if name == "3x3":
            p.add_argument("--graph", metavar="PATH",
                           help="Save the submatrix-to-outcome vote graph to PATH")
            p.add_argument("--details", action="store_true", help="Print every submatrix analysis")
            p.add_argument("--dedupe", action="store_true",
                           help="Skip submatrices whose rows and columns were already analysed")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, format=args.log_format)

    size = 2 if args.command == "2x2" else 3
    matrix = load_matrix(args, size, parser)
    logger.info("Solving %dx%d game", size, size)

    if size == 2:
        run_2x2(matrix, exact=args.exact, plot_path=args.plot)
    else:
        run_3x3(matrix, details=args.details, dedupe=args.dedupe, plot_path=args.plot,
                graph_path=args.graph)

    print("\nAnalysis complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
