"""
Plain-text rendering of games and solver results.
"""

from typing import List

from nonmyopic.equilibrium import Equilibrium
from nonmyopic.payoffs import PayoffMatrix
from nonmyopic.predictor import Prediction, SubmatrixAnalysis


def format_payoff(value: float) -> str:
    return f"{value:.1f}"


def format_game(matrix: PayoffMatrix) -> str:
    n = matrix.size
    indent = " " * 12
    lines = [f"{n}x{n} Game Matrix:", indent + "Player 2"]
    lines.append(indent + "    ".join(f"Strategy {j + 1}" for j in range(n)))
    for i in range(n):
        cells = "    ".join(
            f"({format_payoff(matrix.get(i, j, 0))}, {format_payoff(matrix.get(i, j, 1))})"
            for j in range(n)
        )
        lines.append(f"Player 1 Strategy {i + 1}: {cells}")
    return "\n".join(lines)


def format_equilibria(title: str, equilibria: List[Equilibrium], empty: str) -> str:
    lines = [f"{title}:"]
    if not equilibria:
        lines.append(empty)
    for eq in equilibria:
        lines.append(f"- {eq.description}")
    return "\n".join(lines)


def format_submatrix(analysis: SubmatrixAnalysis) -> str:
    mapping = analysis.submatrix.mapping
    positions = ", ".join(f"({r},{c})" for r, c in mapping.positions)
    lines = [
        f"=== Submatrix {analysis.submatrix_id} ===",
        f"2x2 Submatrix from positions: {positions}",
        format_game(analysis.submatrix.game),
        format_equilibria("Nash Equilibria for this submatrix",
                          analysis.nash_equilibria, "No Nash equilibria found."),
        format_equilibria("Non-Myopic Equilibria for this submatrix",
                          analysis.non_myopic_equilibria, "No non-myopic equilibria found."),
    ]
    return "\n".join(lines)


def format_prediction(prediction: Prediction) -> str:
    lines = ["Vote Summary:"]
    for (row, col), entry in prediction.tally.items():
        supporters = " ".join(str(s) for s in entry.supporters)
        lines.append(f"Outcome ({row},{col}): {entry.votes} votes from submatrices: {supporters}")

    lines.append("")
    lines.append("PREDICTED 3x3 NON-MYOPIC EQUILIBRIA:")
    if not prediction.has_consensus:
        lines.append("No clear consensus from subgame analysis.")
    for outcome in prediction.outcomes:
        payoff1, payoff2 = outcome.payoffs
        lines.append(
            f"- Pure strategy: Player 1 plays strategy {outcome.row + 1}, "
            f"Player 2 plays strategy {outcome.col + 1} -> Outcome ({payoff1:g},{payoff2:g}) "
            f"[Supported by {outcome.support} subgames]"
        )

    lines.append("")
    lines.append("DOMINANCE ANALYSIS:")
    rows = " ".join(f"Row {r + 1}({v} votes)" for r, v in sorted(prediction.row_preferences.items()))
    cols = " ".join(f"Col {c + 1}({v} votes)" for c, v in sorted(prediction.col_preferences.items()))
    lines.append(f"Player 1 row preferences: {rows}")
    lines.append(f"Player 2 column preferences: {cols}")
    return "\n".join(lines)
