"""
Presentation settings handed to the engine by its caller.

The engine stores the snapshot but never reads it for mechanics. The
running flag and palette exist for whoever draws the simulation.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Palette:
    """Colors as matplotlib-compatible hex strings."""

    background: str = "#222222"
    node: str = "#444444"
    edge: str = "#666666"
    agent: tuple[str, ...] = ("#448B6B", "#4DC5CA", "#F0C165", "#EC4238")

    def agent_color(self, index: int) -> str:
        """Cycle through the agent colors."""
        return self.agent[index % len(self.agent)]


@dataclass(frozen=True)
class Settings:
    running: bool = True
    palette: Palette = field(default_factory=Palette)


def default_settings() -> Settings:
    """Factory for the default settings snapshot."""
    return Settings(running=True, palette=Palette())
