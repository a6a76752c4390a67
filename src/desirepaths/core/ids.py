"""Identifier allocation shared by nodes, edges and agents."""

from dataclasses import dataclass, field


@dataclass
class IdAllocator:
    """
    Monotonic id counter.

    One allocator is shared across every entity kind, so a node, an edge
    and an agent can never hold the same id.
    """

    _next: int = field(default=0, init=False)

    def next(self) -> int:
        """Issue a fresh id."""
        new_id = self._next
        self._next += 1
        return new_id
