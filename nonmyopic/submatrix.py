"""
Decomposition of a 3x3 game into its 2x2 submatrices.

All C(9, 4) = 126 choices of four cells are enumerated; a choice is kept when
its cells span exactly two rows and two columns. Kept choices are canonicalised
to [top-left, top-right, bottom-left, bottom-right] with rows and columns
sorted ascending.
"""

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import List, Tuple

from nonmyopic.payoffs import PayoffMatrix2x2, PayoffMatrix3x3

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class SubmatrixMapping:
    """Parent coordinates of the four cells of a 2x2 view, in corner order."""
    positions: Tuple[Coordinate, Coordinate, Coordinate, Coordinate]

    @property
    def rows(self) -> Tuple[int, int]:
        return tuple(sorted({row for row, _ in self.positions}))

    @property
    def cols(self) -> Tuple[int, int]:
        return tuple(sorted({col for _, col in self.positions}))

    def to_parent(self, row: int, col: int) -> Coordinate:
        """Translate a 2x2 strategy pair (0/1, 0/1) into 3x3 coordinates."""
        return self.rows[row], self.cols[col]


@dataclass(frozen=True)
class Submatrix:
    game: PayoffMatrix2x2
    mapping: SubmatrixMapping


class SubmatrixExtractor:
    """
    Enumerates the 2x2 submatrices of a 3x3 game.

    With `deduplicate=True` a combination whose sorted rows and columns were
    already emitted is skipped.
    """

    def __init__(self, matrix: PayoffMatrix3x3, deduplicate: bool = False):
        self.matrix = matrix.frozen()
        self.deduplicate = deduplicate

    @staticmethod
    def cell_combinations(n_cells: int = 9, k: int = 4) -> List[Tuple[int, ...]]:
        """All k-subsets of range(n_cells) in lexicographic order."""
        return list(combinations(range(n_cells), k))

    def _build(self, rows: List[int], cols: List[int]) -> Submatrix:
        positions = (
            (rows[0], cols[0]),  # top-left
            (rows[0], cols[1]),  # top-right
            (rows[1], cols[0]),  # bottom-left
            (rows[1], cols[1]),  # bottom-right
        )
        game = PayoffMatrix2x2()
        for i in range(2):
            for j in range(2):
                orig_row, orig_col = positions[i * 2 + j]
                game.set(i, j, 0, self.matrix.get(orig_row, orig_col, 0))
                game.set(i, j, 1, self.matrix.get(orig_row, orig_col, 1))
        return Submatrix(game.frozen(), SubmatrixMapping(positions))

    def extract(self) -> List[Submatrix]:
        size = self.matrix.size
        submatrices = []
        seen = set()
        for combo in self.cell_combinations(size * size, 4):
            cells = [(k // size, k % size) for k in combo]
            rows = sorted({row for row, _ in cells})
            cols = sorted({col for _, col in cells})
            if len(rows) != 2 or len(cols) != 2:
                continue

            shape = (tuple(rows), tuple(cols))
            if self.deduplicate and shape in seen:
                continue
            seen.add(shape)

            submatrices.append(self._build(rows, cols))

        logger.debug("Extracted %d valid 2x2 submatrices", len(submatrices))
        return submatrices


def extract_submatrices(matrix: PayoffMatrix3x3, deduplicate: bool = False) -> List[Submatrix]:
    return SubmatrixExtractor(matrix, deduplicate=deduplicate).extract()
