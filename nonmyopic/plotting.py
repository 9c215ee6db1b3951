"""
Visualization utilities for solver results.
Requires: pip install matplotlib networkx
"""

from typing import Optional

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np

from nonmyopic.equilibrium import EquilibriumEngine
from nonmyopic.predictor import Prediction


def _finish(fig, save_path: Optional[str], show: bool):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Plot saved to {save_path}")
    if show:
        plt.show()
    return fig


def plot_best_responses(engine: EquilibriumEngine, figsize=(6, 6),
                        save_path: Optional[str] = None, show: bool = False):
    """
    Plot both players' best-response curves on the unit square and mark the
    non-myopic equilibria.

    Args:
        engine: Engine of the 2x2 game to draw
        figsize: Figure size (width, height)
        save_path: Path to save the plot (None to skip saving)
        show: Open an interactive window as well
    """
    grid = engine.config.fine_grid
    p1_replies = engine.best_response_curve(0)  # player 1 reply to each p2
    p2_replies = engine.best_response_curve(1)  # player 2 reply to each p1

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(1, 1, 1)
    ax.step(p1_replies, grid, where='post', color='tab:blue', label='Player 1 best response')
    ax.step(grid, p2_replies, where='post', color='tab:orange', label='Player 2 best response')

    nme = engine.find_non_myopic_equilibria()
    if nme:
        ax.scatter([eq.profile.p1 for eq in nme], [eq.profile.p2 for eq in nme],
                   color='red', marker='x', zorder=3, label='Non-myopic equilibria')

    ax.set_xlim(-0.05, 1.05)
    ax.set_ylim(-0.05, 1.05)
    ax.set_xlabel('P(Player 1 plays strategy 1)')
    ax.set_ylabel('P(Player 2 plays strategy 1)')
    ax.legend(loc='best', fontsize=8)
    return _finish(fig, save_path, show)


def plot_vote_heatmap(prediction: Prediction, size: int = 3, figsize=(5, 5),
                      save_path: Optional[str] = None, show: bool = False):
    """Draw the vote count of every 3x3 outcome, predicted outcomes outlined."""
    votes = np.zeros((size, size))
    for (row, col), entry in prediction.tally.items():
        votes[row, col] = entry.votes

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(1, 1, 1)
    im = ax.imshow(votes, cmap='Blues')
    for row in range(size):
        for col in range(size):
            ax.text(col, row, f"{int(votes[row, col])}", ha='center', va='center')
    for outcome in prediction.outcomes:
        ax.add_patch(plt.Rectangle((outcome.col - 0.5, outcome.row - 0.5), 1, 1,
                                   fill=False, edgecolor='red', linewidth=2))

    ax.set_xticks(range(size))
    ax.set_yticks(range(size))
    ax.set_xticklabels([f"Strategy {j + 1}" for j in range(size)])
    ax.set_yticklabels([f"Strategy {i + 1}" for i in range(size)])
    ax.set_xlabel('Player 2')
    ax.set_ylabel('Player 1')
    fig.colorbar(im, ax=ax, label='votes')
    return _finish(fig, save_path, show)


def vote_graph(prediction: Prediction) -> nx.DiGraph:
    """Directed graph from each submatrix to the 3x3 outcomes it voted for."""
    G = nx.DiGraph()
    for analysis in prediction.analyses:
        G.add_node(f"S{analysis.submatrix_id}", kind='submatrix')
        for row, col in analysis.votes:
            outcome = f"({row},{col})"
            G.add_node(outcome, kind='outcome')
            if G.has_edge(f"S{analysis.submatrix_id}", outcome):
                G[f"S{analysis.submatrix_id}"][outcome]['weight'] += 1
            else:
                G.add_edge(f"S{analysis.submatrix_id}", outcome, weight=1)
    return G


def plot_vote_graph(prediction: Prediction, figsize=(8, 6),
                    save_path: Optional[str] = None, show: bool = False):
    """Bipartite drawing of `vote_graph`: submatrices left, outcomes right."""
    G = vote_graph(prediction)
    submatrices = [n for n, d in G.nodes(data=True) if d['kind'] == 'submatrix']
    pos = nx.bipartite_layout(G, submatrices)
    predicted = {f"({o.row},{o.col})" for o in prediction.outcomes}

    colors = []
    for node, data in G.nodes(data=True):
        if data['kind'] == 'submatrix':
            colors.append('lightblue')
        elif node in predicted:
            colors.append('salmon')
        else:
            colors.append('lightgreen')

    fig = plt.figure(figsize=figsize)
    nx.draw(G, pos,
            with_labels=True,
            node_color=colors,
            node_size=900,
            font_size=8,
            arrows=True,
            edge_color='gray',
            width=[G[u][v]['weight'] for u, v in G.edges()])
    plt.axis('off')
    return _finish(fig, save_path, show)
