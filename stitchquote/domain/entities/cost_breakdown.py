"""
CostBreakdown value object: itemized material cost for one patch size.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CostBreakdown:
    """
    Material cost components for a given width and height.

    Computed, never stored. Each component is rounded to cents and
    ``total_cost`` is the cents-rounded sum of the six components.
    """

    fabric_cost: float
    patch_attach_cost: float
    thread_cost: float
    bobbin_cost: float
    cut_away_stabilizer_cost: float
    wash_away_stabilizer_cost: float
    total_cost: float
    area: float = 0.0
    stitch_count: int = 0

    @classmethod
    def zero(cls) -> "CostBreakdown":
        """Breakdown for a design whose size is not known yet."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def components(self) -> dict[str, float]:
        """The six material components keyed by display name."""
        return {
            "Fabric": self.fabric_cost,
            "Patch Attach": self.patch_attach_cost,
            "Thread": self.thread_cost,
            "Bobbin": self.bobbin_cost,
            "Cut-Away Stabilizer": self.cut_away_stabilizer_cost,
            "Wash-Away Stabilizer": self.wash_away_stabilizer_cost,
        }
