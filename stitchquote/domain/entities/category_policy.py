"""
Static selection policy for each option category.
"""

from dataclasses import dataclass
from enum import Enum

from .embroidery_option import OptionCategory


class SelectionArity(Enum):
    """Whether a category holds one option or a set of options."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class CategoryPolicy:
    """Selection rules and display labels for one category."""

    category: OptionCategory
    arity: SelectionArity
    required: bool
    title: str
    description: str

    @property
    def is_multi(self) -> bool:
        return self.arity is SelectionArity.MULTI


# Ordered in customization-step order
CATEGORY_POLICIES: dict[OptionCategory, CategoryPolicy] = {
    policy.category: policy
    for policy in (
        CategoryPolicy(OptionCategory.COVERAGE, SelectionArity.SINGLE, True,
                       "Coverage Level", "Select one option"),
        CategoryPolicy(OptionCategory.MATERIAL, SelectionArity.SINGLE, True,
                       "Base Material", "Select one option"),
        CategoryPolicy(OptionCategory.BORDER, SelectionArity.SINGLE, True,
                       "Border & Edge", "Select one option"),
        CategoryPolicy(OptionCategory.THREADS, SelectionArity.MULTI, False,
                       "Thread Options", "Select as many as needed (optional)"),
        CategoryPolicy(OptionCategory.BACKING, SelectionArity.SINGLE, False,
                       "Backing", "Select one option (optional)"),
        CategoryPolicy(OptionCategory.UPGRADES, SelectionArity.MULTI, False,
                       "Upgrades", "Select as many as needed (optional)"),
        CategoryPolicy(OptionCategory.CUTTING, SelectionArity.SINGLE, False,
                       "Cut to Shape Method", "Select one option (optional)"),
    )
}


def policy_for(category: OptionCategory) -> CategoryPolicy:
    """Return the policy of a category."""
    return CATEGORY_POLICIES[category]


def required_categories() -> list[OptionCategory]:
    """Categories that must hold a selection before review."""
    return [c for c, p in CATEGORY_POLICIES.items() if p.required]
