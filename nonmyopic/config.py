"""
Search policy for the equilibrium solvers.

The defaults reproduce the reference grid search exactly; change them only if
you want a different granularity.
"""

from dataclasses import dataclass, field
from typing import List

# Grid resolutions
FINE_GRID_STEPS = 100  # best responses and mixed search: 0.00, 0.01, ..., 1.00
COARSE_GRID_STEPS = 20  # non-myopic search: 0.00, 0.05, ..., 1.00

# Tolerances
BEST_RESPONSE_TOLERANCE = 1e-6
INDIFFERENCE_TOLERANCE = 0.01
DEVIATION_MARGIN = 1e-6

MIXED_PLACEHOLDER = 0.5  # what an indifferent player 2 is assumed to play
VOTE_THRESHOLD = 0.5  # p >= threshold votes for strategy index 0


def probability_grid(steps: int) -> List[float]:
    """Return the uniform grid 0, 1/steps, ..., 1 (inclusive, increasing)."""
    return [i / steps for i in range(steps + 1)]


@dataclass(frozen=True)
class SolverConfig:
    """Bundle of the search constants, passed to the engine and the predictor."""
    fine_grid_steps: int = FINE_GRID_STEPS
    coarse_grid_steps: int = COARSE_GRID_STEPS
    best_response_tolerance: float = BEST_RESPONSE_TOLERANCE
    indifference_tolerance: float = INDIFFERENCE_TOLERANCE
    deviation_margin: float = DEVIATION_MARGIN
    mixed_placeholder: float = MIXED_PLACEHOLDER
    vote_threshold: float = VOTE_THRESHOLD
    deduplicate_submatrices: bool = False
    fine_grid: List[float] = field(init=False, repr=False, compare=False)
    coarse_grid: List[float] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "fine_grid", probability_grid(self.fine_grid_steps))
        object.__setattr__(self, "coarse_grid", probability_grid(self.coarse_grid_steps))


DEFAULT_CONFIG = SolverConfig()
