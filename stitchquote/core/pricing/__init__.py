"""Material cost calculation and price aggregation."""

from .material_cost import (
    SIZE_TIERS,
    MaterialCostCalculator,
    SizeTier,
    classify_size,
    compute_material_cost,
    round_currency,
)
from .price_aggregator import (
    DesignQuote,
    OptionLine,
    PriceAggregator,
    SessionQuote,
    format_option_price,
    format_price,
)

__all__ = [
    "SIZE_TIERS",
    "MaterialCostCalculator",
    "SizeTier",
    "classify_size",
    "compute_material_cost",
    "round_currency",
    "DesignQuote",
    "OptionLine",
    "PriceAggregator",
    "SessionQuote",
    "format_option_price",
    "format_price",
]
