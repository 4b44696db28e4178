"""
Design entity: one embroidery job within a product customization.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .selections import Selections


class Placement(Enum):
    """Where the design sits on the product."""

    FRONT = "front"
    BACK = "back"
    LEFT_CHEST = "left-chest"
    RIGHT_CHEST = "right-chest"
    SLEEVE = "sleeve"
    MANUAL = "manual"


@dataclass
class Position:
    """Offset of the design on the product preview."""

    x: float = 50.0
    y: float = 50.0


# Preset coordinates for automatic placements
PLACEMENT_POSITIONS: dict[Placement, Position] = {
    Placement.FRONT: Position(150, 120),
    Placement.BACK: Position(150, 120),
    Placement.LEFT_CHEST: Position(100, 120),
    Placement.RIGHT_CHEST: Position(200, 120),
    Placement.SLEEVE: Position(50, 200),
}


@dataclass(frozen=True)
class Dimensions:
    """Physical patch size. Width and height share a unit (inches)."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Dimensions must be positive")

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class DesignFile:
    """
    Uploaded design file.

    ``content`` is ``None`` for a placeholder restored from a snapshot:
    the name and declared size survive, the bytes do not.
    """

    name: str
    size: int
    mime_type: str = "application/octet-stream"
    content: Optional[bytes] = None

    @property
    def is_placeholder(self) -> bool:
        return self.content is None

    @classmethod
    def placeholder(cls, name: str, size: int, mime_type: str) -> "DesignFile":
        """Empty stand-in for a file whose bytes were not persisted."""
        return cls(name=name, size=size, mime_type=mime_type, content=None)


def new_design_id() -> str:
    """Generate a session-local design identifier."""
    return f"design_{uuid.uuid4().hex[:12]}"


@dataclass
class Design:
    """One embroidery placement with its own size and option selections."""

    file: DesignFile
    preview: str
    id: str = field(default_factory=new_design_id)
    dimensions: Optional[Dimensions] = None
    placement: Placement = Placement.FRONT
    position: Position = field(default_factory=Position)
    selections: Selections = field(default_factory=Selections)

    @property
    def name(self) -> str:
        return self.file.name

    @property
    def has_dimensions(self) -> bool:
        return self.dimensions is not None
