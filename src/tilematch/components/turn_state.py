from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class ResolutionPhase(Enum):
    """Steps of one caller-visible board operation."""
    IDLE = auto()
    MUTATING = auto()
    DETECTING = auto()
    RESOLVING_MATCHES = auto()
    REFILLING = auto()


@dataclass(slots=True)
class TurnState:
    """Tracks the resolver state shared across systems."""

    phase: ResolutionPhase = ResolutionPhase.IDLE
    action_source: Optional[str] = None
    cascade_depth: int = 0

    @property
    def busy(self) -> bool:
        return self.phase is not ResolutionPhase.IDLE
