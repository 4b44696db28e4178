"""
EmbroideryOption entity: a priced, catalog-defined choice within a category.
"""

from dataclasses import dataclass, field
from enum import Enum


class OptionCategory(Enum):
    """The seven fixed embroidery option groups."""

    COVERAGE = "coverage"
    MATERIAL = "material"
    BORDER = "border"
    THREADS = "threads"
    BACKING = "backing"
    UPGRADES = "upgrades"
    CUTTING = "cutting"


class OptionLevel(Enum):
    """Informational tier of an option. Has no pricing effect."""

    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


@dataclass(frozen=True)
class EmbroideryOption:
    """
    Catalog entry for one embroidery option.

    Immutable for the duration of a customization session. ``price`` is
    always a normalized, non-negative float; coercion happens once when the
    catalog is loaded.
    """

    id: str
    name: str
    category: OptionCategory
    price: float = 0.0
    level: OptionLevel = OptionLevel.BASIC
    description: str = ""
    stitches: int = 0
    estimated_time: str = ""
    is_popular: bool = False
    is_active: bool = True
    is_default: bool = False
    incompatible_with: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate required fields after initialization."""
        if not self.id:
            raise ValueError("EmbroideryOption id cannot be empty")
        if self.price < 0:
            raise ValueError("EmbroideryOption price cannot be negative")

    @property
    def is_free(self) -> bool:
        """Zero-priced options are valid and shown as free."""
        return self.price == 0

    def conflicts_with(self, other: "EmbroideryOption") -> bool:
        """Check whether either option declares the other incompatible."""
        if other.id == self.id:
            return False
        return other.id in self.incompatible_with or self.id in other.incompatible_with
