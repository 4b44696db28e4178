# Domain Entities Package
"""
Core business entities as dataclasses.
"""

from .category_policy import (
    CATEGORY_POLICIES,
    CategoryPolicy,
    SelectionArity,
    policy_for,
    required_categories,
)
from .cost_breakdown import CostBreakdown
from .design import (
    PLACEMENT_POSITIONS,
    Design,
    DesignFile,
    Dimensions,
    Placement,
    Position,
    new_design_id,
)
from .embroidery_option import EmbroideryOption, OptionCategory, OptionLevel
from .selections import Selections
from .session import CustomizationSession

__all__ = [
    "CATEGORY_POLICIES",
    "CategoryPolicy",
    "SelectionArity",
    "policy_for",
    "required_categories",
    "CostBreakdown",
    "PLACEMENT_POSITIONS",
    "Design",
    "DesignFile",
    "Dimensions",
    "Placement",
    "Position",
    "new_design_id",
    "EmbroideryOption",
    "OptionCategory",
    "OptionLevel",
    "Selections",
    "CustomizationSession",
]
