"""
Nash and non-myopic equilibria for small two-player normal-form games.

2x2 games are solved directly by grid search; 3x3 games are decomposed into
their 2x2 submatrices and the outcome is predicted by voting.
"""

from nonmyopic.config import DEFAULT_CONFIG, SolverConfig
from nonmyopic.equilibrium import Equilibrium, EquilibriumEngine, StrategyProfile
from nonmyopic.payoffs import PayoffMatrix, PayoffMatrix2x2, PayoffMatrix3x3, example_game
from nonmyopic.predictor import AggregatePredictor, Prediction, VoteTally
from nonmyopic.submatrix import Submatrix, SubmatrixExtractor, SubmatrixMapping

__version__ = "0.1.0"

__all__ = [
    "AggregatePredictor",
    "DEFAULT_CONFIG",
    "Equilibrium",
    "EquilibriumEngine",
    "PayoffMatrix",
    "PayoffMatrix2x2",
    "PayoffMatrix3x3",
    "Prediction",
    "SolverConfig",
    "StrategyProfile",
    "Submatrix",
    "SubmatrixExtractor",
    "SubmatrixMapping",
    "VoteTally",
    "example_game",
]
