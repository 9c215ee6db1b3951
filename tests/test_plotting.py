import matplotlib.pyplot as plt
import pytest

from nonmyopic.equilibrium import EquilibriumEngine
from nonmyopic.plotting import plot_best_responses, plot_vote_graph, plot_vote_heatmap, vote_graph
from nonmyopic.predictor import AggregatePredictor


@pytest.fixture
def prediction(extended_coordination):
    return AggregatePredictor(extended_coordination).predict()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_best_response_plot(matching_pennies):
    fig = plot_best_responses(EquilibriumEngine(matching_pennies))
    ax = fig.axes[0]
    assert len(ax.lines) == 2
    assert ax.get_xlabel() == "P(Player 1 plays strategy 1)"


def test_vote_heatmap(prediction, tmp_path):
    path = tmp_path / "heatmap.png"
    fig = plot_vote_heatmap(prediction, save_path=str(path))
    assert path.exists()
    assert fig.axes[0].images[0].get_array()[2, 2] == 4


def test_vote_graph(prediction):
    G = vote_graph(prediction)
    outcomes = [n for n, d in G.nodes(data=True) if d["kind"] == "outcome"]
    assert sorted(outcomes) == ["(1,1)", "(1,2)", "(2,1)", "(2,2)"]
    assert G.in_degree("(2,2)") == 4
    assert G["S9"]["(2,2)"]["weight"] == 1


def test_vote_graph_plot(prediction):
    fig = plot_vote_graph(prediction)
    assert fig is not None
