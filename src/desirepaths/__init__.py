"""
desirepaths: a desire-path road network simulator

Agents travel between nodes scattered on the unit square. Every trip
either reuses an existing road or lays a new one, and roads get faster
the more they are used.

Core concepts:
- Nodes appear over time at random positions
- Agents pick a destination and travel hop by hop
- A hop either reinforces an existing edge or creates a new edge pair
- Heavily used edges carry agents faster (log-scaled speed boost)
- Over time a network of well-worn paths emerges

See SPEC_FULL.md and DESIGN.md for full details.
"""

__version__ = "0.1.0"
