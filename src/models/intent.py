"""
Intent domain model

Structured result of parsing one raw command token.
"""

from dataclasses import dataclass
from typing import Optional

from models.enums import AnimationKind, Color


@dataclass(frozen=True)
class Intent:
    """
    Parsed command: which animation to run and with what arguments.

    variant:
        SPIN  → reset variant ("<color>spin2")
        ARMS  → reset variant ("arms2")
        BOUNCE → single-arm variant ("bounce2")
    led:
        SOLID fallback LED id when the token named no color
    """
    kind: AnimationKind
    color: Optional[Color] = None
    variant: bool = False
    led: Optional[int] = None

    @property
    def label(self) -> str:
        """Short human readable name (for logs and task descriptions)"""
        name = self.kind.name.lower()
        if self.color is not None:
            name = f"{name}:{self.color.value}"
        elif self.led is not None:
            name = f"{name}:led{self.led}"
        if self.variant:
            name += "+variant"
        return name
