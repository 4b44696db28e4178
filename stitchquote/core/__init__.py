"""Core components for StitchQuote: catalog, pricing and option selection."""

from .catalog import DEFAULT_OPTIONS, OptionCatalog
from .pricing import MaterialCostCalculator, PriceAggregator, compute_material_cost
from .selection import SelectionStateMachine
from .use_cases import AddDesignResult, CustomizationService

__all__ = [
    "DEFAULT_OPTIONS",
    "OptionCatalog",
    "MaterialCostCalculator",
    "PriceAggregator",
    "compute_material_cost",
    "SelectionStateMachine",
    "AddDesignResult",
    "CustomizationService",
]
