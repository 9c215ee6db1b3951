"""
Payoff matrices for two-player normal-form games.

Each cell holds a pair (payoff to player 0, payoff to player 1). Reads and
writes outside the matrix are tolerated: `get` returns 0.0 and `set` does
nothing.
"""

from typing import Dict, Sequence, Tuple

import numpy as np

N_PLAYERS = 2


class PayoffMatrix:
    """Square n x n bimatrix stored as a numpy array of shape (n, n, 2)."""

    size = 0

    def __init__(self):
        self._payoffs = np.zeros((self.size, self.size, N_PLAYERS))

    @classmethod
    def from_cells(cls, cells: Sequence[Sequence[Tuple[float, float]]]) -> "PayoffMatrix":
        """
        Build a matrix from nested rows of payoff pairs, the same layout as
        `np.array([[(4, 10), (7, 4)], ...])`.
        """
        values = np.asarray(cells, dtype=float)
        if values.shape != (cls.size, cls.size, N_PLAYERS):
            raise ValueError(
                f"{cls.__name__} needs {cls.size}x{cls.size} cells of payoff pairs, "
                f"got array of shape {values.shape}"
            )
        matrix = cls()
        matrix._payoffs[...] = values
        return matrix

    def _in_range(self, row: int, col: int, player: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size and 0 <= player < N_PLAYERS

    def set(self, row: int, col: int, player: int, value: float) -> None:
        if self._in_range(row, col, player):
            self._payoffs[row, col, player] = value

    def get(self, row: int, col: int, player: int) -> float:
        if self._in_range(row, col, player):
            return float(self._payoffs[row, col, player])
        return 0.0

    def cell(self, row: int, col: int) -> Tuple[float, float]:
        return self.get(row, col, 0), self.get(row, col, 1)

    def player_matrix(self, player: int) -> np.ndarray:
        """Payoffs of one player as an n x n array (rows = player 0's strategies)."""
        return self._payoffs[:, :, player].copy()

    def to_list(self):
        """Nested python lists [row][col][player] of floats."""
        return self._payoffs.tolist()

    @property
    def is_frozen(self) -> bool:
        return not self._payoffs.flags.writeable

    def frozen(self) -> "PayoffMatrix":
        """Return a read-only copy; writing into it raises numpy's ValueError."""
        copy = type(self)()
        copy._payoffs[...] = self._payoffs
        copy._payoffs.flags.writeable = False
        return copy

    def __eq__(self, other):
        if not isinstance(other, PayoffMatrix) or other.size != self.size:
            return NotImplemented
        return bool(np.array_equal(self._payoffs, other._payoffs))

    def __repr__(self):
        rows = [[self.cell(i, j) for j in range(self.size)] for i in range(self.size)]
        return f"{type(self).__name__}({rows})"


class PayoffMatrix2x2(PayoffMatrix):
    size = 2


class PayoffMatrix3x3(PayoffMatrix):
    size = 3


# Example games
PRISONERS_DILEMMA = (
    ((3, 3), (0, 5)),
    ((5, 0), (1, 1)),
)
BATTLE_OF_THE_SEXES = (
    ((3, 2), (0, 0)),
    ((0, 0), (2, 3)),
)
COORDINATION = (
    ((2, 2), (0, 0)),
    ((0, 0), (1, 1)),
)
MATCHING_PENNIES = (
    ((1, -1), (-1, 1)),
    ((-1, 1), (1, -1)),
)
EXTENDED_COORDINATION = (
    ((3, 3), (0, 5), (2, 1)),
    ((5, 0), (1, 1), (4, 2)),
    ((1, 2), (2, 4), (6, 6)),
)

EXAMPLES_2X2: Dict[str, tuple] = {
    "prisoners-dilemma": PRISONERS_DILEMMA,
    "battle-of-the-sexes": BATTLE_OF_THE_SEXES,
    "coordination": COORDINATION,
    "matching-pennies": MATCHING_PENNIES,
}
EXAMPLES_3X3: Dict[str, tuple] = {
    "extended-coordination": EXTENDED_COORDINATION,
}


def example_game(name: str) -> PayoffMatrix:
    """Look up a named example game; raises KeyError for unknown names."""
    if name in EXAMPLES_2X2:
        return PayoffMatrix2x2.from_cells(EXAMPLES_2X2[name])
    if name in EXAMPLES_3X3:
        return PayoffMatrix3x3.from_cells(EXAMPLES_3X3[name])
    raise KeyError(f"Unknown example game: {name}")
