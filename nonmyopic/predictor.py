"""
3x3 outcome prediction by voting over 2x2 subgames.

Every submatrix is solved on its own. Each of its non-myopic equilibria is
rounded to a pure strategy pair, translated back to 3x3 coordinates, and
counted as one vote. The outcomes with the most votes are the prediction.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from nonmyopic.config import DEFAULT_CONFIG, SolverConfig
from nonmyopic.equilibrium import Equilibrium, EquilibriumEngine
from nonmyopic.payoffs import PayoffMatrix3x3
from nonmyopic.submatrix import Coordinate, Submatrix, SubmatrixExtractor

logger = logging.getLogger(__name__)


@dataclass
class SubmatrixAnalysis:
    submatrix_id: int
    submatrix: Submatrix
    nash_equilibria: List[Equilibrium]
    non_myopic_equilibria: List[Equilibrium]
    votes: List[Coordinate] = field(default_factory=list)


@dataclass
class VoteEntry:
    votes: int = 0
    supporters: List[int] = field(default_factory=list)


class VoteTally:
    """Votes per 3x3 outcome, iterated in ascending (row, col) order."""

    def __init__(self):
        self._entries: Dict[Coordinate, VoteEntry] = {}

    def add(self, outcome: Coordinate, submatrix_id: int) -> None:
        entry = self._entries.setdefault(outcome, VoteEntry())
        entry.votes += 1
        entry.supporters.append(submatrix_id)

    def votes(self, outcome: Coordinate) -> int:
        entry = self._entries.get(outcome)
        return entry.votes if entry else 0

    def supporters(self, outcome: Coordinate) -> List[int]:
        entry = self._entries.get(outcome)
        return list(entry.supporters) if entry else []

    def items(self) -> List[Tuple[Coordinate, VoteEntry]]:
        return sorted(self._entries.items())

    @property
    def max_votes(self) -> int:
        return max((entry.votes for entry in self._entries.values()), default=0)

    @property
    def total_votes(self) -> int:
        return sum(entry.votes for entry in self._entries.values())

    def row_preferences(self) -> Dict[int, int]:
        prefs: Dict[int, int] = {}
        for (row, _), entry in self.items():
            prefs[row] = prefs.get(row, 0) + entry.votes
        return prefs

    def col_preferences(self) -> Dict[int, int]:
        prefs: Dict[int, int] = {}
        for (_, col), entry in self.items():
            prefs[col] = prefs.get(col, 0) + entry.votes
        return prefs

    def __len__(self):
        return len(self._entries)

    def __contains__(self, outcome):
        return outcome in self._entries


@dataclass(frozen=True)
class PredictedOutcome:
    row: int
    col: int
    payoffs: Tuple[float, float]
    votes: int
    total_subgames: int

    @property
    def support(self) -> str:
        return f"{self.votes}/{self.total_subgames}"


@dataclass
class Prediction:
    analyses: List[SubmatrixAnalysis]
    tally: VoteTally
    outcomes: List[PredictedOutcome]
    row_preferences: Dict[int, int]
    col_preferences: Dict[int, int]

    @property
    def max_votes(self) -> int:
        return self.tally.max_votes

    @property
    def has_consensus(self) -> bool:
        return bool(self.outcomes)


class AggregatePredictor:
    """Solves every 2x2 subgame of a 3x3 game and tallies the non-myopic votes."""

    def __init__(self, matrix: PayoffMatrix3x3, config: Optional[SolverConfig] = None,
                 deduplicate: Optional[bool] = None):
        self.matrix = matrix.frozen()
        self.config = config or DEFAULT_CONFIG
        if deduplicate is None:
            deduplicate = self.config.deduplicate_submatrices
        self.deduplicate = deduplicate

    def vote_for(self, equilibrium: Equilibrium) -> Tuple[int, int]:
        """Round a profile to pure strategy indices: p >= threshold -> 0, else 1."""
        threshold = self.config.vote_threshold
        p1_strategy = 0 if equilibrium.profile.p1 >= threshold else 1
        p2_strategy = 0 if equilibrium.profile.p2 >= threshold else 1
        return p1_strategy, p2_strategy

    def analyze(self) -> List[SubmatrixAnalysis]:
        submatrices = SubmatrixExtractor(self.matrix, deduplicate=self.deduplicate).extract()
        analyses = []
        for submatrix_id, submatrix in enumerate(submatrices, start=1):
            engine = EquilibriumEngine(submatrix.game, self.config)
            analysis = SubmatrixAnalysis(
                submatrix_id=submatrix_id,
                submatrix=submatrix,
                nash_equilibria=engine.find_all_nash_equilibria(),
                non_myopic_equilibria=engine.find_non_myopic_equilibria(),
            )
            for nme in analysis.non_myopic_equilibria:
                analysis.votes.append(submatrix.mapping.to_parent(*self.vote_for(nme)))
            analyses.append(analysis)
        return analyses

    def predict(self) -> Prediction:
        analyses = self.analyze()

        tally = VoteTally()
        for analysis in analyses:
            for outcome in analysis.votes:
                tally.add(outcome, analysis.submatrix_id)
                logger.debug("Submatrix %d votes for 3x3 outcome %s", analysis.submatrix_id, outcome)

        max_votes = tally.max_votes
        outcomes = [
            PredictedOutcome(row, col, self.matrix.cell(row, col), entry.votes, len(analyses))
            for (row, col), entry in tally.items()
            if entry.votes == max_votes
        ]

        if outcomes:
            logger.info("Predicted outcome(s) %s with %d/%d votes",
                        [(o.row, o.col) for o in outcomes], max_votes, len(analyses))
        else:
            logger.info("No consensus from %d subgames", len(analyses))

        return Prediction(
            analyses=analyses,
            tally=tally,
            outcomes=outcomes,
            row_preferences=tally.row_preferences(),
            col_preferences=tally.col_preferences(),
        )
