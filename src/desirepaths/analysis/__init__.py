"""
Analysis layer: derived quantities for inspection and plotting.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- edge_usage_array / edge_lengths: per-edge arrays
- top_edges: most reinforced edges
- summarize_network: aggregate NetworkSummary
"""

from desirepaths.analysis.network import (
    NetworkSummary,
    edge_lengths,
    edge_usage_array,
    summarize_network,
    top_edges,
)

__all__ = [
    "NetworkSummary",
    "edge_lengths",
    "edge_usage_array",
    "summarize_network",
    "top_edges",
]
