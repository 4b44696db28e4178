"""
Selections value: one field per option category.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .category_policy import CATEGORY_POLICIES
from .embroidery_option import EmbroideryOption, OptionCategory

SingleSelection = Optional[EmbroideryOption]
MultiSelection = dict[str, EmbroideryOption]


@dataclass
class Selections:
    """
    Option selections of a single design.

    Single-select categories hold one option or ``None``. Multi-select
    categories hold options keyed by id, so membership is by id and
    duplicates cannot occur.
    """

    coverage: SingleSelection = None
    material: SingleSelection = None
    border: SingleSelection = None
    threads: MultiSelection = field(default_factory=dict)
    backing: SingleSelection = None
    upgrades: MultiSelection = field(default_factory=dict)
    cutting: SingleSelection = None

    def get(self, category: OptionCategory) -> Union[SingleSelection, MultiSelection]:
        """Return the raw selection of a category."""
        return getattr(self, category.value)

    def selected_in(self, category: OptionCategory) -> list[EmbroideryOption]:
        """Return the selected options of a category as a list."""
        value = self.get(category)
        if CATEGORY_POLICIES[category].is_multi:
            return list(value.values())
        return [value] if value is not None else []

    def all_options(self) -> list[EmbroideryOption]:
        """Every selected option across all categories, in step order."""
        options: list[EmbroideryOption] = []
        for category in CATEGORY_POLICIES:
            options.extend(self.selected_in(category))
        return options

    def has_selection(self, category: OptionCategory) -> bool:
        return bool(self.selected_in(category))

    def is_empty(self) -> bool:
        return not self.all_options()

    def copy(self) -> "Selections":
        """Independent copy; options themselves are immutable and shared."""
        return Selections(
            coverage=self.coverage,
            material=self.material,
            border=self.border,
            threads=dict(self.threads),
            backing=self.backing,
            upgrades=dict(self.upgrades),
            cutting=self.cutting,
        )
