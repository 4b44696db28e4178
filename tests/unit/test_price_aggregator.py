"""Unit tests for design and session price aggregation."""

import pytest

from stitchquote.core.pricing import (
    PriceAggregator,
    compute_material_cost,
    format_option_price,
    format_price,
)
from stitchquote.domain.entities import (
    CostBreakdown,
    CustomizationSession,
    Design,
    DesignFile,
    Dimensions,
    Selections,
)


def _design(selections=None, dimensions=None) -> Design:
    return Design(
        file=DesignFile("logo.png", 10, "image/png", b"0123456789"),
        preview="data:image/png;base64,",
        dimensions=dimensions,
        selections=selections or Selections(),
    )


@pytest.fixture
def aggregator() -> PriceAggregator:
    return PriceAggregator()


class TestFormatting:
    """Test price display helpers."""

    @pytest.mark.parametrize("value, expected", [
        (12.345, "$12.35"),
        (0, "$0.00"),
        ("14.5", "$14.50"),
        ("not a price", "$0.00"),
    ])
    def test_format_price(self, value, expected):
        """Test amounts are shown with two decimals."""
        assert format_price(value) == expected

    def test_option_labels(self):
        """Test free options are labelled as such."""
        assert format_option_price(0) == "Free"
        assert format_option_price(14.5) == "+$14.50"
        assert format_option_price(20.24, symbol="€") == "+€20.24"


class TestDesignPrice:
    """Test per-design pricing."""

    def test_three_by_three_with_coverage(self, aggregator, option):
        """Test a 3x3 patch with 75% coverage."""
        design = _design(Selections(coverage=option("coverage-75")), Dimensions(3, 3))

        expected = compute_material_cost(3, 3).total_cost + 14.50

        assert aggregator.design_price(design) == pytest.approx(expected)

    def test_options_price_sums_all_categories(self, aggregator, option):
        """Test single and multi-select prices are summed."""
        selections = Selections(
            coverage=option("coverage-100"),
            material=option("material-felt"),
            threads={
                "thread-metallic": option("thread-metallic"),
                "thread-neon": option("thread-neon"),
            },
            upgrades={"upgrade-button-loop": option("upgrade-button-loop")},
        )
        assert aggregator.options_price(selections) == pytest.approx(27.00 + 12.78 + 38.34 + 26.63 + 20.24)

    def test_no_dimensions_means_no_material_cost(self, aggregator, option):
        """Test a design without size is priced by its options only."""
        design = _design(Selections(coverage=option("coverage-75")))

        assert aggregator.material_cost(design) == CostBreakdown.zero()
        assert aggregator.design_price(design) == pytest.approx(14.50)

    def test_free_options_listed(self, aggregator, option):
        """Test zero-priced options still appear in the quote."""
        design = _design(Selections(material=option("material-polyester"), coverage=option("coverage-75")))

        quote = aggregator.design_quote(design)

        assert [(line.option_id, line.label) for line in quote.option_lines] == [
            ("coverage-75", "+$14.50"),
            ("material-polyester", "Free"),
        ]
        assert quote.options_total == pytest.approx(14.50)
        assert quote.size_tier is None

    def test_design_quote_totals(self, aggregator, option):
        """Test the quote total agrees with design_price."""
        design = _design(Selections(coverage=option("coverage-100")), Dimensions(10, 10))

        quote = aggregator.design_quote(design)

        assert quote.breakdown.total_cost == pytest.approx(12.11)
        assert quote.total == pytest.approx(aggregator.design_price(design))
        assert quote.total == pytest.approx(39.11)
        assert quote.size_tier == "extra-large"


class TestSessionTotal:
    """Test session aggregation."""

    def test_empty_session_is_free(self, aggregator):
        """Test quantity 1, no base price and nothing selected."""
        assert aggregator.session_total(CustomizationSession()) == 0

    def test_designs_times_quantity(self, aggregator, option):
        """Test (base + sum of designs) x quantity."""
        session = CustomizationSession(base_price=10.0, quantity=2)
        session.designs.append(_design(Selections(coverage=option("coverage-75")), Dimensions(2, 2)))
        session.designs.append(_design(Selections(material=option("material-felt"))))

        # 2x2 material cost is 0.50
        assert aggregator.session_total(session) == pytest.approx((10.0 + 15.00 + 12.78) * 2)

    def test_legacy_selections_without_designs(self, aggregator, option):
        """Test the legacy single-design selections price an empty session."""
        session = CustomizationSession(
            base_price=5.0,
            quantity=3,
            selections=Selections(
                coverage=option("coverage-100"),
                threads={"thread-metallic": option("thread-metallic")},
            ),
        )

        assert aggregator.session_total(session) == pytest.approx(211.02)
        assert aggregator.session_quote(session).legacy

    def test_designs_take_precedence_over_legacy(self, aggregator, option):
        """Test legacy selections are ignored once designs exist."""
        session = CustomizationSession(selections=Selections(coverage=option("coverage-100")))
        session.designs.append(_design(Selections(coverage=option("coverage-75"))))

        quote = aggregator.session_quote(session)

        assert quote.total == pytest.approx(14.50)
        assert not quote.legacy
        assert quote.option_lines == []

    def test_session_quote_matches_total(self, aggregator, option):
        """Test the quote and the plain total agree."""
        session = CustomizationSession(base_price=19.99, quantity=4)
        session.designs.append(_design(Selections(coverage=option("coverage-50")), Dimensions(3, 3)))
        session.designs.append(_design(Selections(coverage=option("coverage-75")), Dimensions(4, 2.5)))

        quote = aggregator.session_quote(session)

        assert quote.total == aggregator.session_total(session)
        assert len(quote.designs) == 2
        assert quote.unit_price == pytest.approx(19.99 + sum(d.total for d in quote.designs))

    def test_repeated_calls_agree(self, aggregator, option):
        """Test totals do not drift between calls."""
        session = CustomizationSession(base_price=7.5, quantity=3)
        session.designs.append(_design(Selections(coverage=option("coverage-75")), Dimensions(3.3, 2.7)))

        totals = {aggregator.session_total(session) for _ in range(5)}

        assert len(totals) == 1
