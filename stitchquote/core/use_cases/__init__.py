# Use Cases Package
"""
Application use cases (business logic).

Use cases orchestrate the flow of data between domain entities, the
option catalog, pricing and snapshot persistence.
"""

from stitchquote.core.use_cases.customize_product import (
    AddDesignResult,
    CustomizationService,
)

__all__ = [
    "AddDesignResult",
    "CustomizationService",
]
