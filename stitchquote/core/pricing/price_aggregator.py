"""
Price aggregation for designs and customization sessions.

Combines material cost and option prices into per-design and session
totals. All results are rounded to cents.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from stitchquote.domain.entities import (
    CostBreakdown,
    CustomizationSession,
    Design,
    EmbroideryOption,
    OptionCategory,
    Selections,
)
from stitchquote.utils import get_logger, parse_price

from .material_cost import MaterialCostCalculator, classify_size, round_currency

logger = get_logger(__name__)


def format_price(value: Any, symbol: str = "$") -> str:
    """Format an amount for display, e.g. ``$12.34``.

    Strings are parsed tolerantly; anything unparseable is shown as zero.
    """
    try:
        amount = parse_price(value)
    except ValueError:
        amount = 0.0
    return f"{symbol}{round_currency(amount):.2f}"


def format_option_price(price: float, symbol: str = "$") -> str:
    """Display label of an option price: ``Free`` or ``+$x.xx``."""
    if price == 0:
        return "Free"
    return f"+{format_price(price, symbol)}"


@dataclass
class OptionLine:
    """One selected option in a quote."""

    option_id: str
    name: str
    category: OptionCategory
    price: float
    label: str


@dataclass
class DesignQuote:
    """Itemized price of one design."""

    design_id: str
    name: str
    breakdown: CostBreakdown
    option_lines: list[OptionLine]
    options_total: float
    total: float
    size_tier: Optional[str] = None

    @property
    def has_dimensions(self) -> bool:
        return self.size_tier is not None


@dataclass
class SessionQuote:
    """Itemized price of a whole session."""

    base_price: float
    quantity: int
    designs: list[DesignQuote] = field(default_factory=list)
    option_lines: list[OptionLine] = field(default_factory=list)
    unit_price: float = 0.0
    total: float = 0.0
    legacy: bool = False


class PriceAggregator:
    """
    Computes design and session prices.

    Stateless apart from the material calculator's rate data, so repeated
    calls on unchanged input agree.
    """

    def __init__(
        self,
        calculator: Optional[MaterialCostCalculator] = None,
        currency_symbol: str = "$",
    ):
        """
        Initialize the aggregator.

        Args:
            calculator: Material cost calculator (default: built-in rates)
            currency_symbol: Symbol used in display labels
        """
        self.calculator = calculator or MaterialCostCalculator()
        self.currency_symbol = currency_symbol

    def options_price(self, selections: Selections) -> float:
        """Sum of the selected option prices."""
        return round_currency(sum(option.price for option in selections.all_options()))

    def material_cost(self, design: Design) -> CostBreakdown:
        """Material breakdown of a design; zero until it has dimensions."""
        if design.dimensions is None:
            return CostBreakdown.zero()
        return self.calculator.compute(design.dimensions.width, design.dimensions.height)

    def design_price(self, design: Design) -> float:
        """Material cost plus selected option prices of one design."""
        material = self.material_cost(design)
        return round_currency(material.total_cost + self.options_price(design.selections))

    def option_lines(self, selections: Selections) -> list[OptionLine]:
        """Quote lines for every selected option, free ones included."""
        return [self._option_line(option) for option in selections.all_options()]

    def _option_line(self, option: EmbroideryOption) -> OptionLine:
        return OptionLine(
            option_id=option.id,
            name=option.name,
            category=option.category,
            price=option.price,
            label=format_option_price(option.price, self.currency_symbol),
        )

    def design_quote(self, design: Design) -> DesignQuote:
        """Build the itemized quote of one design."""
        breakdown = self.material_cost(design)
        options_total = self.options_price(design.selections)
        size_tier = None
        if design.dimensions is not None:
            size_tier = classify_size(design.dimensions.area).key

        return DesignQuote(
            design_id=design.id,
            name=design.name,
            breakdown=breakdown,
            option_lines=self.option_lines(design.selections),
            options_total=options_total,
            total=round_currency(breakdown.total_cost + options_total),
            size_tier=size_tier,
        )

    def session_total(self, session: CustomizationSession) -> float:
        """
        Total price of a session.

        With designs: (base price + sum of design prices) x quantity.
        Without designs the legacy single-selection field is priced instead:
        (base price + its option prices) x quantity.
        """
        return self._session_price(session)[1]

    def _session_price(self, session: CustomizationSession) -> tuple[float, float]:
        if session.designs:
            designs_total = sum(self.design_price(design) for design in session.designs)
            unit_price = round_currency(session.base_price + designs_total)
        else:
            unit_price = round_currency(session.base_price + self.options_price(session.selections))
        return unit_price, round_currency(unit_price * session.quantity)

    def session_quote(self, session: CustomizationSession) -> SessionQuote:
        """Build the itemized quote of a session."""
        unit_price, total = self._session_price(session)
        legacy = not session.designs

        quote = SessionQuote(
            base_price=session.base_price,
            quantity=session.quantity,
            unit_price=unit_price,
            total=total,
            legacy=legacy,
        )
        if legacy:
            quote.option_lines = self.option_lines(session.selections)
        else:
            quote.designs = [self.design_quote(design) for design in session.designs]

        logger.debug(
            f"Session quote: {len(session.designs)} designs, "
            f"unit {unit_price:.2f} x {session.quantity} = {total:.2f}"
        )
        return quote

    def format_price(self, value: Any) -> str:
        return format_price(value, self.currency_symbol)
