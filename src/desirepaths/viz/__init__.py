"""
Visualization utilities.

- Network plots (edges weighted by usage, nodes, agents)
"""

from desirepaths.viz.network import edge_widths, plot_network, save_figure

__all__ = [
    "edge_widths",
    "plot_network",
    "save_figure",
]
