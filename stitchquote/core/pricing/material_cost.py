"""Material cost calculator for embroidered patches.

Maps a patch width and height (inches) to an itemized material cost. Area
materials (fabric, patch attach, both stabilizers) are charged by the share
of a stock roll the patch consumes; thread and bobbin are charged by an
estimated stitch count. Rates come from configuration.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from stitchquote.domain.entities import CostBreakdown
from stitchquote.utils import get_logger, validate_dimensions
from stitchquote.utils.config import MaterialRate, PricingConfig

logger = get_logger(__name__)

# Bobbin cost is quoted per gross (144 bobbins)
BOBBIN_GROSS = 144
STITCHES_PER_THREAD_UNIT = 1_000_000
CENT = Decimal("0.01")


def round_currency(value: float) -> float:
    """Round to cents, halves away from zero."""
    return float(Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class SizeTier:
    """Informational size bracket of a patch."""

    key: str
    label: str
    max_area: float


SIZE_TIERS: tuple[SizeTier, ...] = (
    SizeTier("small", "Small (up to 4 sq in)", 4.0),
    SizeTier("medium", "Medium (4-16 sq in)", 16.0),
    SizeTier("large", "Large (16-36 sq in)", 36.0),
    SizeTier("extra-large", "Extra Large (36+ sq in)", float("inf")),
)


def classify_size(area: float) -> SizeTier:
    """Return the size tier a patch area falls into."""
    for tier in SIZE_TIERS:
        if area <= tier.max_area:
            return tier
    return SIZE_TIERS[-1]


class MaterialCostCalculator:
    """
    Pure calculator from patch dimensions to a ``CostBreakdown``.

    Holds only immutable rate data, so identical input always yields an
    identical breakdown.
    """

    def __init__(self, pricing: Optional[PricingConfig] = None):
        """
        Initialize the calculator.

        Args:
            pricing: Material rates and stitch density (default: built-in rates)
        """
        pricing = pricing or PricingConfig()
        self.fabric = pricing.material("Fabric").model_copy()
        self.patch_attach = pricing.material("Patch Attach").model_copy()
        self.thread = pricing.material("Thread").model_copy()
        self.bobbin = pricing.material("Bobbin").model_copy()
        self.cut_away = pricing.material("Cut-Away Stabilizer").model_copy()
        self.wash_away = pricing.material("Wash-Away Stabilizer").model_copy()
        self.stitches_per_sq_inch = pricing.stitches_per_sq_inch

    def estimate_stitch_count(self, width: float, height: float) -> int:
        """Rough stitch estimate from patch area."""
        return round(width * height * self.stitches_per_sq_inch)

    @staticmethod
    def _area_cost(area: float, rate: MaterialRate) -> float:
        # Share of the stock roll consumed by the patch
        return round_currency(area / (rate.width * rate.length) * rate.cost * rate.waste_factor)

    def _thread_cost(self, stitches: int) -> float:
        rate = self.thread
        return round_currency(stitches / STITCHES_PER_THREAD_UNIT * rate.cost * rate.waste_factor)

    def _bobbin_cost(self, stitches: int) -> float:
        rate = self.bobbin
        return round_currency(stitches / rate.length * (rate.cost / BOBBIN_GROSS) * rate.waste_factor)

    def compute(self, width: float, height: float) -> CostBreakdown:
        """Compute the itemized material cost of a patch.

        Args:
            width: Patch width in inches (> 0)
            height: Patch height in inches (> 0)

        Returns:
            CostBreakdown with six components and their total

        Raises:
            InvalidDimensionsError: If either dimension is missing or not positive
        """
        width, height = validate_dimensions(width, height)
        area = width * height
        stitches = self.estimate_stitch_count(width, height)

        fabric_cost = self._area_cost(area, self.fabric)
        patch_attach_cost = self._area_cost(area, self.patch_attach)
        thread_cost = self._thread_cost(stitches)
        bobbin_cost = self._bobbin_cost(stitches)
        cut_away_cost = self._area_cost(area, self.cut_away)
        wash_away_cost = self._area_cost(area, self.wash_away)

        total_cost = round_currency(
            fabric_cost
            + patch_attach_cost
            + thread_cost
            + bobbin_cost
            + cut_away_cost
            + wash_away_cost
        )

        logger.debug(f"Material cost for {width}x{height}: {total_cost:.2f} ({stitches} stitches)")

        return CostBreakdown(
            fabric_cost=fabric_cost,
            patch_attach_cost=patch_attach_cost,
            thread_cost=thread_cost,
            bobbin_cost=bobbin_cost,
            cut_away_stabilizer_cost=cut_away_cost,
            wash_away_stabilizer_cost=wash_away_cost,
            total_cost=total_cost,
            area=area,
            stitch_count=stitches,
        )


_default_calculator: Optional[MaterialCostCalculator] = None


def compute_material_cost(
    width: float,
    height: float,
    pricing: Optional[PricingConfig] = None,
) -> CostBreakdown:
    """Compute a material cost breakdown with the given or built-in rates.

    Args:
        width: Patch width in inches (> 0)
        height: Patch height in inches (> 0)
        pricing: Optional rate configuration

    Returns:
        CostBreakdown for the patch
    """
    global _default_calculator

    if pricing is not None:
        return MaterialCostCalculator(pricing).compute(width, height)

    if _default_calculator is None:
        _default_calculator = MaterialCostCalculator()
    return _default_calculator.compute(width, height)
