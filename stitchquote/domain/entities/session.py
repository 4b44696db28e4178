"""
CustomizationSession aggregate: the working set of designs for one product.
"""

from dataclasses import dataclass, field
from typing import Optional

from .design import Design
from .selections import Selections


@dataclass
class CustomizationSession:
    """
    Full customization state for one product.

    Owned by a single caller and passed explicitly to every operation.
    ``selections`` is the legacy single-design field; it only prices the
    session while ``designs`` is empty.
    """

    product_id: str = ""
    product_name: str = ""
    base_price: float = 0.0
    quantity: int = 1
    max_designs: int = 5
    designs: list[Design] = field(default_factory=list)
    selections: Selections = field(default_factory=Selections)
    color: str = "#000000"
    size: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be a positive integer")
        if self.base_price < 0:
            raise ValueError("base_price cannot be negative")
        if self.max_designs < 1:
            raise ValueError("max_designs must be at least 1")

    @property
    def can_add_design(self) -> bool:
        return len(self.designs) < self.max_designs

    def find_design(self, design_id: str) -> Optional[Design]:
        """Return the design with this id, or None."""
        for design in self.designs:
            if design.id == design_id:
                return design
        return None
