"""Unit tests for the option selection state machine."""

import pytest

from stitchquote.core.selection import SelectionStateMachine
from stitchquote.domain.entities import EmbroideryOption, OptionCategory, Selections
from stitchquote.utils.exceptions import (
    CategoryArityError,
    IncompatibleOptionError,
    InvalidInputError,
)


@pytest.fixture
def machine() -> SelectionStateMachine:
    return SelectionStateMachine()


class TestSelect:
    """Test single-select transitions."""

    def test_select_sets_option(self, machine, option):
        """Test selecting into an empty category."""
        selections = machine.select(Selections(), OptionCategory.COVERAGE, option("coverage-75"))
        assert selections.coverage.id == "coverage-75"

    def test_select_replaces(self, machine, option):
        """Test selecting another option replaces the current one."""
        selections = Selections(coverage=option("coverage-50"))
        machine.select(selections, OptionCategory.COVERAGE, option("coverage-100"))
        assert selections.coverage.id == "coverage-100"

    def test_reselect_deselects(self, machine, option):
        """Test selecting the current option again clears the category."""
        selections = Selections(coverage=option("coverage-75"))
        machine.select(selections, OptionCategory.COVERAGE, option("coverage-75"))
        assert selections.coverage is None

    def test_select_on_multi_category(self, machine, option):
        """Test select is not allowed for multi-select categories."""
        with pytest.raises(CategoryArityError):
            machine.select(Selections(), OptionCategory.THREADS, option("thread-neon"))

    def test_category_mismatch(self, machine, option):
        """Test an option cannot be filed under another category."""
        with pytest.raises(InvalidInputError):
            machine.select(Selections(), OptionCategory.MATERIAL, option("coverage-75"))

    def test_incompatible_toggle_is_advisory(self, machine, option):
        """Test conflicts do not block selection by default."""
        heavy = EmbroideryOption(
            id="thread-heavy",
            name="Heavy Thread",
            category=OptionCategory.THREADS,
            incompatible_with=frozenset({"border-embroidered"}),
        )
        selections = Selections(border=option("border-embroidered"))

        machine.toggle(selections, OptionCategory.THREADS, heavy)

        assert set(selections.threads) == {"thread-heavy"}
        assert len(machine.conflicts(selections)) == 1


class TestToggle:
    """Test multi-select transitions."""

    def test_toggle_adds_and_removes(self, machine, option):
        """Test toggling twice restores the original state."""
        selections = Selections()
        machine.toggle(selections, OptionCategory.THREADS, option("thread-neon"))
        assert set(selections.threads) == {"thread-neon"}

        machine.toggle(selections, OptionCategory.THREADS, option("thread-neon"))
        assert selections.threads == {}

    def test_toggle_keeps_others(self, machine, option):
        """Test toggling one option leaves the rest of the set alone."""
        selections = Selections()
        machine.toggle(selections, OptionCategory.THREADS, option("thread-neon"))
        machine.toggle(selections, OptionCategory.THREADS, option("thread-metallic"))
        machine.toggle(selections, OptionCategory.THREADS, option("thread-neon"))
        assert set(selections.threads) == {"thread-metallic"}

    def test_toggle_on_single_category(self, machine, option):
        """Test toggle is not allowed for single-select categories."""
        with pytest.raises(CategoryArityError):
            machine.toggle(Selections(), OptionCategory.BACKING, option("backing-iron"))


class TestEnforcement:
    """Test optional incompatibility enforcement."""

    def test_conflicting_toggle_rejected(self, option):
        """Test a conflict is rejected and state is unchanged."""
        machine = SelectionStateMachine(enforce_incompatibility=True)
        embroidered = option("border-embroidered")
        conflicting = EmbroideryOption(
            id="thread-heavy",
            name="Heavy Thread",
            category=OptionCategory.THREADS,
            incompatible_with=frozenset({"border-embroidered"}),
        )
        selections = Selections(border=embroidered)

        with pytest.raises(IncompatibleOptionError) as exc_info:
            machine.toggle(selections, OptionCategory.THREADS, conflicting)

        assert exc_info.value.context["conflicting_ids"] == ["border-embroidered"]
        assert selections.threads == {}
        assert selections.border is embroidered

    def test_replacing_conflicting_option_allowed(self, option):
        """Test the option being replaced does not count as a conflict."""
        machine = SelectionStateMachine(enforce_incompatibility=True)
        selections = Selections(border=option("border-embroidered"))

        machine.select(selections, OptionCategory.BORDER, option("border-merrowed"))

        assert selections.border.id == "border-merrowed"


class TestQueries:
    """Test read-only queries."""

    def test_is_selected_by_id(self, machine, option):
        """Test membership is compared by id."""
        selections = Selections(threads={"thread-neon": option("thread-neon")})
        assert machine.is_selected(selections, OptionCategory.THREADS, option("thread-neon"))
        assert not machine.is_selected(selections, OptionCategory.THREADS, option("thread-puff"))

    def test_can_finalize_requires_three_categories(self, machine, option):
        """Test coverage, material and border are required."""
        selections = Selections(coverage=option("coverage-50"), material=option("material-felt"))
        assert not machine.can_finalize(selections)
        assert machine.missing_required(selections) == [OptionCategory.BORDER]

        selections.border = option("border-none")
        assert machine.can_finalize(selections)

    def test_optional_categories_not_required(self, machine, option):
        """Test threads, backing, upgrades and cutting can stay empty."""
        selections = Selections(
            coverage=option("coverage-50"),
            material=option("material-felt"),
            border=option("border-none"),
        )
        assert machine.missing_required(selections) == []

    def test_conflict_pairs(self, machine, option):
        """Test pairwise conflicts across a design."""
        selections = Selections(border=option("border-embroidered"))
        assert machine.conflicts(selections) == []

        patch = EmbroideryOption(
            id="upgrade-chenille",
            name="Chenille",
            category=OptionCategory.UPGRADES,
            incompatible_with=frozenset({"border-embroidered"}),
        )
        selections.upgrades = {patch.id: patch}
        pairs = machine.conflicts(selections)
        assert [(a.id, b.id) for a, b in pairs] == [("border-embroidered", "upgrade-chenille")]


class TestDefaultsAndCopy:
    """Test catalog defaults and copying between designs."""

    def test_apply_defaults(self, machine, catalog):
        """Test catalog defaults fill empty categories."""
        selections = machine.apply_defaults(Selections(), catalog)

        assert selections.coverage is None
        assert selections.material.id == "material-polyester"
        assert selections.border.id == "border-embroidered"
        assert set(selections.threads) == {"thread-standard"}
        assert selections.backing.id == "backing-none"
        assert selections.cutting.id == "cutting-laser"
        assert selections.upgrades == {}

    def test_apply_defaults_keeps_choices(self, machine, catalog, option):
        """Test defaults never override an existing choice."""
        selections = Selections(material=option("material-felt"))
        machine.apply_defaults(selections, catalog)
        assert selections.material.id == "material-felt"

    def test_copy_is_independent(self, machine, option):
        """Test copied selections do not share multi-select sets."""
        source = Selections(coverage=option("coverage-75"), threads={"thread-neon": option("thread-neon")})
        copy = machine.copy_selections(source)

        machine.toggle(copy, OptionCategory.THREADS, option("thread-puff"))

        assert copy.coverage.id == "coverage-75"
        assert set(source.threads) == {"thread-neon"}
        assert set(copy.threads) == {"thread-neon", "thread-puff"}
