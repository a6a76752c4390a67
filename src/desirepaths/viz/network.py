"""
Network rendering with matplotlib.

Draws the current state of a Sim on the unit square:
- edges as line segments, thicker the more they are used
- nodes as small dots
- agents as colored markers, cycling through the palette

Colors come from the Settings palette so the picture matches whatever
the caller configured.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from desirepaths.core.settings import Settings
    from desirepaths.core.sim import Sim


def edge_widths(uses: np.ndarray, min_width: float = 0.5, max_width: float = 4.0) -> np.ndarray:
    """Map usage counts to line widths on a log scale."""
    if uses.size == 0:
        return uses.astype(np.float64)
    log_uses = np.log1p(uses)
    span = log_uses.max() - log_uses.min()
    if span < 1e-10:
        return np.full(uses.shape, min_width, dtype=np.float64)
    return min_width + (log_uses - log_uses.min()) / span * (max_width - min_width)


def plot_network(
    sim: "Sim",
    settings: "Settings | None" = None,
    title: str = "Desire Paths",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    node_size: float = 12.0,
    agent_size: float = 24.0,
) -> tuple[Figure, Axes]:
    """
    Plot nodes, edges and agents of a simulation.

    Args:
        sim: Simulation to draw
        settings: Palette source (defaults to the sim's own settings)
        title: Plot title
        ax: Existing axes (creates new if None)
        node_size: Scatter size for nodes
        agent_size: Scatter size for agents

    Returns:
        (fig, ax) tuple
    """
    if settings is None:
        settings = sim.settings
    palette = settings.palette

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    fig.patch.set_facecolor(palette.background)
    ax.set_facecolor(palette.background)

    # Edges (both directions of a pair share a segment; draw once)
    segments = []
    uses = []
    for edge in sim.edges.values():
        if edge.src < edge.dst:
            reverse = sim.store.find_edge(edge.dst, edge.src)
            total = edge.uses + (reverse.uses if reverse is not None else 0)
            segments.append(sim.get_edge_position(edge.id))
            uses.append(total)
    if segments:
        lines = LineCollection(
            segments,
            colors=palette.edge,
            linewidths=edge_widths(np.array(uses)),
            zorder=1,
        )
        ax.add_collection(lines)

    # Nodes
    if sim.nodes:
        node_xy = np.array([node.position for node in sim.nodes.values()])
        ax.scatter(node_xy[:, 0], node_xy[:, 1], s=node_size, color=palette.node, zorder=2)

    # Agents
    if sim.agents:
        agent_xy = np.array([agent.position for agent in sim.agents.values()])
        colors = [palette.agent_color(i) for i in range(len(agent_xy))]
        ax.scatter(agent_xy[:, 0], agent_xy[:, 1], s=agent_size, c=colors, zorder=3)

    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(f"{title} (tick {sim.elapsed})", color=palette.edge)

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", facecolor=fig.get_facecolor(), **kwargs)
