"""
Selection state machine for embroidery options.

Applies select/toggle transitions to a design's ``Selections`` according to
each category's arity. Incompatibility between options is advisory unless
enforcement is switched on.
"""

from typing import TYPE_CHECKING

from stitchquote.domain.entities import (
    EmbroideryOption,
    OptionCategory,
    Selections,
    policy_for,
    required_categories,
)
from stitchquote.utils import get_logger
from stitchquote.utils.exceptions import (
    CategoryArityError,
    IncompatibleOptionError,
    InvalidInputError,
)

if TYPE_CHECKING:
    from stitchquote.core.catalog import OptionCatalog

logger = get_logger(__name__)


class SelectionStateMachine:
    """
    Select/toggle transitions over ``Selections``.

    Transitions mutate the given selections in place and return them. A
    rejected transition raises and leaves the selections unchanged.
    """

    def __init__(self, enforce_incompatibility: bool = False):
        """
        Initialize the state machine.

        Args:
            enforce_incompatibility: Reject selections that conflict with
                options already chosen
        """
        self.enforce_incompatibility = enforce_incompatibility

    # =========================================
    # Transitions
    # =========================================

    def select(
        self,
        selections: Selections,
        category: OptionCategory,
        option: EmbroideryOption,
    ) -> Selections:
        """
        Select an option in a single-select category.

        Selecting the current option again clears the category; any other
        option replaces the current one.

        Raises:
            CategoryArityError: If the category is multi-select
            InvalidInputError: If the option belongs to another category
            IncompatibleOptionError: If enforcement is on and the option
                conflicts with the current selection
        """
        self._check_category(category, option)
        if policy_for(category).is_multi:
            raise CategoryArityError(
                f"Category '{category.value}' is multi-select, use toggle",
                category=category.value,
            )

        current = selections.get(category)
        if current is not None and current.id == option.id:
            setattr(selections, category.value, None)
            logger.debug(f"Deselected {option.id} in {category.value}")
            return selections

        # Ignore the option being replaced
        others = [o for o in selections.all_options() if current is None or o.id != current.id]
        self._check_conflicts(option, others)

        setattr(selections, category.value, option)
        logger.debug(f"Selected {option.id} in {category.value}")
        return selections

    def toggle(
        self,
        selections: Selections,
        category: OptionCategory,
        option: EmbroideryOption,
    ) -> Selections:
        """
        Toggle an option in a multi-select category.

        Raises:
            CategoryArityError: If the category is single-select
            InvalidInputError: If the option belongs to another category
            IncompatibleOptionError: If enforcement is on and adding the
                option conflicts with the current selection
        """
        self._check_category(category, option)
        if not policy_for(category).is_multi:
            raise CategoryArityError(
                f"Category '{category.value}' is single-select, use select",
                category=category.value,
            )

        chosen: dict[str, EmbroideryOption] = selections.get(category)
        if option.id in chosen:
            del chosen[option.id]
            logger.debug(f"Removed {option.id} from {category.value}")
            return selections

        self._check_conflicts(option, selections.all_options())
        chosen[option.id] = option
        logger.debug(f"Added {option.id} to {category.value}")
        return selections

    def apply_defaults(self, selections: Selections, catalog: "OptionCatalog") -> Selections:
        """
        Preselect the catalog's default options.

        Empty single-select categories get their first default option;
        multi-select categories gain every default option. Existing choices
        are kept.
        """
        for category in OptionCategory:
            defaults = catalog.default_options(category)
            if not defaults:
                continue
            if policy_for(category).is_multi:
                chosen = selections.get(category)
                for option in defaults:
                    chosen.setdefault(option.id, option)
            elif selections.get(category) is None:
                setattr(selections, category.value, defaults[0])
        return selections

    @staticmethod
    def copy_selections(source: Selections) -> Selections:
        """Independent copy of a design's selections for another design."""
        return source.copy()

    # =========================================
    # Queries
    # =========================================

    @staticmethod
    def is_selected(selections: Selections, category: OptionCategory, option: EmbroideryOption) -> bool:
        """Whether ``option`` is selected in ``category``, compared by id."""
        return any(o.id == option.id for o in selections.selected_in(category))

    @staticmethod
    def missing_required(selections: Selections) -> list[OptionCategory]:
        """Required categories that have no selection yet."""
        return [c for c in required_categories() if not selections.has_selection(c)]

    def can_finalize(self, selections: Selections) -> bool:
        """Whether every required category holds a selection."""
        return not self.missing_required(selections)

    @staticmethod
    def conflicts(selections: Selections) -> list[tuple[EmbroideryOption, EmbroideryOption]]:
        """Pairs of selected options that declare each other incompatible."""
        options = selections.all_options()
        pairs = []
        for i, first in enumerate(options):
            for second in options[i + 1:]:
                if first.conflicts_with(second):
                    pairs.append((first, second))
        return pairs

    # =========================================
    # Helpers
    # =========================================

    @staticmethod
    def _check_category(category: OptionCategory, option: EmbroideryOption) -> None:
        if option.category is not category:
            raise InvalidInputError(
                f"Option '{option.id}' belongs to '{option.category.value}', not '{category.value}'",
                field="category",
                value=category.value,
            )

    def _check_conflicts(self, option: EmbroideryOption, selected: list[EmbroideryOption]) -> None:
        conflicting = [o.id for o in selected if option.conflicts_with(o)]
        if not conflicting:
            return
        if self.enforce_incompatibility:
            raise IncompatibleOptionError(
                f"'{option.name}' cannot be combined with the current selection",
                option_id=option.id,
                conflicting_ids=conflicting,
            )
        logger.info(f"Option {option.id} conflicts with {', '.join(conflicting)}")
