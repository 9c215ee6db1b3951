"""
Equilibrium search for 2x2 normal-form games.

Everything here is a grid search: best responses scan the pure strategies and
then a 101-point grid, mixed equilibria are looked for where player 2 is
indifferent, and non-myopic equilibria are looked for on a coarser 21-point
grid where each player anticipates the opponent's best response.

Strategy probabilities always mean "probability of playing strategy index 0".
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import nashpy as nash

from nonmyopic.config import DEFAULT_CONFIG, SolverConfig
from nonmyopic.payoffs import PayoffMatrix2x2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyProfile:
    """Probabilities (p1, p2) that player 1 / player 2 play strategy index 0."""
    p1: float = 0.5
    p2: float = 0.5

    def probability(self, player: int) -> float:
        return self.p1 if player == 0 else self.p2

    @property
    def is_pure(self) -> bool:
        return self.p1 in (0.0, 1.0) and self.p2 in (0.0, 1.0)


@dataclass(frozen=True)
class Equilibrium:
    profile: StrategyProfile
    is_pure: bool = False
    description: str = ""


def _profile_for(player: int, own_prob: float, other_prob: float) -> StrategyProfile:
    if player == 0:
        return StrategyProfile(own_prob, other_prob)
    return StrategyProfile(other_prob, own_prob)


class EquilibriumEngine:
    """
    Solver bound to one 2x2 game.

    The matrix is copied and frozen on construction, so solving the same game
    twice always gives the same answer.
    """

    def __init__(self, matrix: PayoffMatrix2x2, config: Optional[SolverConfig] = None):
        self.matrix = matrix.frozen()
        self.config = config or DEFAULT_CONFIG
        # [row][col][player] as plain floats for the inner loops
        self._payoffs = self.matrix.to_list()

    def expected_payoff(self, player: int, profile: StrategyProfile) -> float:
        """Probability-weighted payoff of `player` over the four pure outcomes."""
        expected = 0.0
        for i in range(2):
            for j in range(2):
                prob_i = profile.p1 if i == 0 else 1 - profile.p1
                prob_j = profile.p2 if j == 0 else 1 - profile.p2
                expected += prob_i * prob_j * self._payoffs[i][j][player]
        return expected

    def best_response(self, player: int, other_prob: float,
                      tolerance: Optional[float] = None) -> float:
        """
        Best probability for `player` against the opponent's `other_prob`.

        Pure strategies are scanned first, then the fine grid in increasing
        order. A candidate only takes over if it beats the current best by more
        than `tolerance`, so among near-ties the earliest candidate wins.
        """
        if tolerance is None:
            tolerance = self.config.best_response_tolerance

        best_payoff = float("-inf")
        best_strategy = 0.5
        for candidate in [0.0, 1.0] + self.config.fine_grid:
            payoff = self.expected_payoff(player, _profile_for(player, candidate, other_prob))
            if payoff > best_payoff + tolerance:
                best_payoff = payoff
                best_strategy = candidate
        return best_strategy

    def best_response_curve(self, player: int) -> List[float]:
        """Best response of `player` against every point of the fine grid."""
        return [self.best_response(player, q) for q in self.config.fine_grid]

    def is_nash_equilibrium(self, profile: StrategyProfile,
                            tolerance: Optional[float] = None) -> bool:
        if tolerance is None:
            tolerance = self.config.best_response_tolerance

        p1_best = self.best_response(0, profile.p2, tolerance)
        if abs(profile.p1 - p1_best) > tolerance:
            return False

        p2_best = self.best_response(1, profile.p1, tolerance)
        if abs(profile.p2 - p2_best) > tolerance:
            return False

        return True

    def find_pure_nash_equilibria(self) -> List[Equilibrium]:
        """Pure profiles where no unilateral switch strictly improves a payoff."""
        get = self.matrix.get
        equilibria = []
        for i in range(2):
            for j in range(2):
                other_row, other_col = 1 - i, 1 - j
                p1_stays = not get(other_row, j, 0) > get(i, j, 0)
                p2_stays = not get(i, other_col, 1) > get(i, j, 1)
                if p1_stays and p2_stays:
                    # profile stores probabilities, i/j are strategy indices
                    profile = StrategyProfile(float(1 - i), float(1 - j))
                    desc = f"Pure strategy NE: Player 1 plays {i}, Player 2 plays {j}"
                    equilibria.append(Equilibrium(profile, True, desc))

        logger.debug("Found %d pure Nash equilibria", len(equilibria))
        return equilibria

    def find_mixed_nash_equilibria(self) -> List[Equilibrium]:
        """
        Grid points where player 2 is indifferent and (p1, placeholder) passes
        the Nash check. Neighbouring grid points are all reported.
        """
        get = self.matrix.get
        equilibria = []
        for p1 in self.config.fine_grid:
            p2_strategy1_payoff = p1 * get(0, 0, 1) + (1 - p1) * get(1, 0, 1)
            p2_strategy2_payoff = p1 * get(0, 1, 1) + (1 - p1) * get(1, 1, 1)

            if abs(p2_strategy1_payoff - p2_strategy2_payoff) < self.config.indifference_tolerance:
                p2 = self.config.mixed_placeholder
                profile = StrategyProfile(p1, p2)
                if self.is_nash_equilibrium(profile):
                    desc = (f"Mixed strategy NE: Player 1 plays strategy 1 with probability {p1:.6f}, "
                            f"Player 2 plays strategy 1 with probability {p2:.6f}")
                    equilibria.append(Equilibrium(profile, False, desc))

        logger.debug("Found %d mixed Nash equilibria", len(equilibria))
        return equilibria

    def find_all_nash_equilibria(self) -> List[Equilibrium]:
        return self.find_pure_nash_equilibria() + self.find_mixed_nash_equilibria()

    def _anticipated_payoffs(self, player: int, grid: List[float]) -> List[float]:
        # Payoff of `player` at each grid probability once the opponent best-responds to it
        other = 1 - player
        payoffs = []
        for prob in grid:
            reply = self.best_response(other, prob)
            payoffs.append(self.expected_payoff(player, _profile_for(player, prob, reply)))
        return payoffs

    def _lookahead_stable(self, grid: List[float], anticipated: List[float]) -> List[bool]:
        # No other grid point gives a strictly better anticipated payoff
        margin = self.config.deviation_margin
        stable = []
        for k, prob in enumerate(grid):
            stable.append(not any(
                abs(alt - prob) > 1e-6 and anticipated[m] > anticipated[k] + margin
                for m, alt in enumerate(grid)
            ))
        return stable

    def find_non_myopic_equilibria(self) -> List[Equilibrium]:
        """
        Profiles on the coarse grid that neither player wants to leave when
        they expect the opponent to re-optimise after the deviation.

        Player 1's condition only depends on p1 and player 2's only on p2, so
        the anticipated payoffs are computed once per grid point.
        """
        grid = self.config.coarse_grid
        p1_stable = self._lookahead_stable(grid, self._anticipated_payoffs(0, grid))
        p2_stable = self._lookahead_stable(grid, self._anticipated_payoffs(1, grid))

        equilibria = []
        for a, p1 in enumerate(grid):
            for b, p2 in enumerate(grid):
                if p1_stable[a] and p2_stable[b]:
                    profile = StrategyProfile(p1, p2)
                    desc = (f"Non-myopic equilibrium: Player 1 plays strategy 1 with probability {p1:.2f}, "
                            f"Player 2 plays strategy 1 with probability {p2:.2f}")
                    equilibria.append(Equilibrium(profile, profile.is_pure, desc))

        logger.debug("Found %d non-myopic equilibria", len(equilibria))
        return equilibria

    def exact_nash_equilibria(self) -> List[Equilibrium]:
        """
        Nash equilibria by support enumeration (nashpy), for comparison with
        the grid search. Degenerate games may make nashpy warn and miss some.
        """
        game = nash.Game(self.matrix.player_matrix(0), self.matrix.player_matrix(1))
        equilibria = []
        for sigma_r, sigma_c in game.support_enumeration():
            profile = StrategyProfile(float(sigma_r[0]), float(sigma_c[0]))
            desc = (f"Support enumeration NE: Player 1 plays strategy 1 with probability {profile.p1:.6f}, "
                    f"Player 2 plays strategy 1 with probability {profile.p2:.6f}")
            equilibria.append(Equilibrium(profile, profile.is_pure, desc))
        return equilibria
