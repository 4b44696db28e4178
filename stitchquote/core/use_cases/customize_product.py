# Customize Product Use Case
"""
Use case orchestrating a product customization session.
Adds designs, applies option selections, prices the result and saves
snapshots after every change.
"""
import asyncio
from dataclasses import dataclass, replace
from typing import Optional, Union

from stitchquote.core.catalog import OptionCatalog
from stitchquote.core.pricing import (
    MaterialCostCalculator,
    PriceAggregator,
    SessionQuote,
)
from stitchquote.core.selection import SelectionStateMachine
from stitchquote.domain.entities import (
    PLACEMENT_POSITIONS,
    CostBreakdown,
    CustomizationSession,
    Design,
    DesignFile,
    Dimensions,
    EmbroideryOption,
    OptionCategory,
    Placement,
    Position,
    Selections,
)
from stitchquote.infrastructure.storage import SessionSnapshotStore
from stitchquote.utils import (
    encode_preview,
    get_logger,
    validate_design_file,
    validate_dimensions,
)
from stitchquote.utils.config import AppConfig
from stitchquote.utils.exceptions import (
    DesignLimitError,
    DesignNotFoundError,
    InvalidDesignFileError,
    InvalidInputError,
)

logger = get_logger(__name__)

CategoryRef = Union[OptionCategory, str]
OptionRef = Union[EmbroideryOption, str]

# Offset of a duplicated design from its original on the preview
DUPLICATE_OFFSET = 30


@dataclass
class AddDesignResult:
    """Result of adding a design to the session."""
    success: bool
    design_id: str
    message: str


class CustomizationService:
    """
    Caller-facing operations over one customization session.

    The service owns its session; callers read it back through
    ``service.session``. Option selections and quotes never depend on
    stored prices: every total is recomputed from the current state.

    Usage:
        >>> service = CustomizationService(CustomizationSession(base_price=10.0))
        >>> await service.load_catalog()
        >>> result = service.add_design(DesignFile("logo.png", 2048, "image/png", data))
        >>> service.set_dimensions(result.design_id, 3, 3)
        >>> service.calculate_session_total()
    """

    def __init__(
        self,
        session: Optional[CustomizationSession] = None,
        catalog: Optional[OptionCatalog] = None,
        config: Optional[AppConfig] = None,
        snapshot_store: Optional[SessionSnapshotStore] = None,
    ):
        """
        Initialize the service.

        Args:
            session: Session to operate on (default: empty session)
            catalog: Option catalog (default: built-in options)
            config: Application configuration (default: built-in defaults)
            snapshot_store: Where snapshots are saved; None disables saving
        """
        self.config = config or AppConfig()
        self.session = session or self._new_session()
        if catalog is None:
            catalog = OptionCatalog(active_only=self.config.catalog.active_only)
        self.catalog = catalog
        if not self.catalog.is_loaded and self.catalog.source is None:
            self.catalog.use_fallback()
        self.snapshot_store = snapshot_store
        self.selection = SelectionStateMachine(
            enforce_incompatibility=self.config.selection.enforce_incompatibility,
        )
        self.pricing = PriceAggregator(
            MaterialCostCalculator(self.config.pricing),
            currency_symbol=self.config.pricing.currency_symbol,
        )
        self._generation = 0

    def _new_session(self, template: Optional[CustomizationSession] = None) -> CustomizationSession:
        session = CustomizationSession(
            quantity=self.config.session.default_quantity,
            max_designs=self.config.session.max_designs,
        )
        if template is not None:
            session.product_id = template.product_id
            session.product_name = template.product_name
            session.base_price = template.base_price
            session.max_designs = template.max_designs
        return session

    async def load_catalog(self) -> list[EmbroideryOption]:
        """Load the option catalog, falling back to built-in options."""
        return await self.catalog.load_options()

    # =========================================
    # Designs
    # =========================================

    def add_design(self, file: DesignFile) -> AddDesignResult:
        """
        Validate an uploaded file and add it as a new design.

        Rejections are reported in the result and leave the session
        unchanged.

        Args:
            file: Uploaded design file

        Returns:
            AddDesignResult with success status and the new design id
        """
        rejection = self._check_upload(file)
        if rejection is not None:
            return rejection

        preview = encode_preview(file.content or b"", file.mime_type)
        return self._attach_design(file, preview)

    async def add_design_async(self, file: DesignFile) -> AddDesignResult:
        """
        Add a design, encoding its preview off the event loop.

        If the session is reset while the preview is being encoded, the
        upload is discarded.
        """
        rejection = self._check_upload(file)
        if rejection is not None:
            return rejection

        generation = self._generation
        preview = await asyncio.to_thread(encode_preview, file.content or b"", file.mime_type)

        if generation != self._generation:
            logger.info(f"Discarding upload of {file.name!r} after session reset")
            return AddDesignResult(success=False, design_id="", message="Upload cancelled")

        # The limit may have been reached while encoding
        rejection = self._check_upload(file)
        if rejection is not None:
            return rejection

        return self._attach_design(file, preview)

    def _check_upload(self, file: DesignFile) -> Optional[AddDesignResult]:
        if not self.session.can_add_design:
            message = f"You can upload up to {self.session.max_designs} designs"
            logger.warning(f"Design rejected: {message}")
            return AddDesignResult(success=False, design_id="", message=message)

        try:
            validate_design_file(
                file.name,
                file.size,
                file.mime_type,
                max_bytes=self.config.upload.max_file_size_bytes,
                mime_prefix=self.config.upload.allowed_mime_prefix,
            )
        except InvalidDesignFileError as e:
            logger.warning(f"Design file rejected: {e.message} ({e.context})")
            return AddDesignResult(success=False, design_id="", message=e.message)

        return None

    def _attach_design(self, file: DesignFile, preview: str) -> AddDesignResult:
        design = Design(file=file, preview=preview)
        if self.config.selection.apply_catalog_defaults:
            self.selection.apply_defaults(design.selections, self.catalog)

        self.session.designs.append(design)
        logger.info(f"Added design {design.id} ({file.name}), {len(self.session.designs)} in session")
        self._autosave()

        return AddDesignResult(
            success=True,
            design_id=design.id,
            message=f"Design '{file.name}' added",
        )

    def remove_design(self, design_id: str) -> bool:
        """
        Remove a design.

        Returns:
            True if the design existed and was removed
        """
        design = self.session.find_design(design_id)
        if design is None:
            return False

        self.session.designs.remove(design)
        logger.info(f"Removed design {design_id}")
        self._autosave()
        return True

    def duplicate_design(self, design_id: str) -> Design:
        """
        Add a copy of a design with the same file, preview and size.

        The copy is offset from the original and starts without option
        selections.

        Raises:
            DesignNotFoundError: If the id is not part of the session
            DesignLimitError: If the session is full
        """
        original = self.get_design(design_id)
        if not self.session.can_add_design:
            raise DesignLimitError(
                f"You can upload up to {self.session.max_designs} designs",
                max_designs=self.session.max_designs,
            )

        copy = Design(
            file=replace(original.file, name=f"{original.file.name} (Copy)"),
            preview=original.preview,
            dimensions=original.dimensions,
            placement=original.placement,
            position=Position(original.position.x + DUPLICATE_OFFSET, original.position.y + DUPLICATE_OFFSET),
        )
        self.session.designs.append(copy)
        logger.info(f"Duplicated design {design_id} as {copy.id}")
        self._autosave()
        return copy

    def get_design(self, design_id: str) -> Design:
        """
        Return a design of the session.

        Raises:
            DesignNotFoundError: If the id is not part of the session
        """
        design = self.session.find_design(design_id)
        if design is None:
            raise DesignNotFoundError(f"Design not found: {design_id}", design_id=design_id)
        return design

    # =========================================
    # Options
    # =========================================

    def select_style(
        self,
        design_id: Optional[str],
        category: CategoryRef,
        option: OptionRef,
    ) -> Selections:
        """
        Select an option in a single-select category.

        Selecting the current option again clears the category. A
        ``design_id`` of None targets the legacy session-level selections.
        """
        selections = self._selections_for(design_id)
        self.selection.select(selections, self._category(category), self._option(option))
        self._autosave()
        return selections

    def toggle_style(
        self,
        design_id: Optional[str],
        category: CategoryRef,
        option: OptionRef,
    ) -> Selections:
        """Add or remove an option in a multi-select category."""
        selections = self._selections_for(design_id)
        self.selection.toggle(selections, self._category(category), self._option(option))
        self._autosave()
        return selections

    def copy_options(self, from_design_id: str, to_design_id: str) -> Selections:
        """Copy every option selection of one design onto another."""
        source = self.get_design(from_design_id)
        target = self.get_design(to_design_id)
        target.selections = self.selection.copy_selections(source.selections)
        logger.info(f"Copied options from {from_design_id} to {to_design_id}")
        self._autosave()
        return target.selections

    def conflicts(self, design_id: Optional[str] = None) -> list[tuple[EmbroideryOption, EmbroideryOption]]:
        """Advisory list of conflicting option pairs of a design."""
        return self.selection.conflicts(self._selections_for(design_id))

    def _selections_for(self, design_id: Optional[str]) -> Selections:
        if design_id is None:
            return self.session.selections
        return self.get_design(design_id).selections

    @staticmethod
    def _category(category: CategoryRef) -> OptionCategory:
        if isinstance(category, OptionCategory):
            return category
        try:
            return OptionCategory(str(category).lower())
        except ValueError as e:
            raise InvalidInputError(f"Unknown option category: {category}", field="category", value=category) from e

    def _option(self, option: OptionRef) -> EmbroideryOption:
        if isinstance(option, EmbroideryOption):
            return option
        return self.catalog.require(option)

    # =========================================
    # Size, placement and quantity
    # =========================================

    def set_dimensions(self, design_id: str, width: float, height: float) -> Dimensions:
        """
        Set the physical size of a design.

        Raises:
            DesignNotFoundError: If the id is not part of the session
            InvalidDimensionsError: If either value is not a positive number
        """
        design = self.get_design(design_id)
        w, h = validate_dimensions(width, height)
        design.dimensions = Dimensions(w, h)
        self._autosave()
        return design.dimensions

    def set_placement(
        self,
        design_id: str,
        placement: Union[Placement, str],
        position: Optional[Position] = None,
    ) -> Position:
        """
        Move a design to a placement.

        Preset placements snap to their fixed coordinates. ``manual`` keeps
        the current position unless one is given.
        """
        design = self.get_design(design_id)
        try:
            placement = Placement(placement)
        except ValueError as e:
            raise InvalidInputError(f"Unknown placement: {placement}", field="placement", value=placement) from e

        design.placement = placement
        if placement is Placement.MANUAL:
            if position is not None:
                design.position = Position(position.x, position.y)
        else:
            preset = PLACEMENT_POSITIONS[placement]
            design.position = Position(preset.x, preset.y)

        self._autosave()
        return design.position

    def set_quantity(self, quantity: int) -> int:
        """
        Set the order quantity.

        Raises:
            InvalidInputError: If quantity is not a positive integer
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidInputError("Quantity must be a positive integer", field="quantity", value=quantity)
        self.session.quantity = quantity
        self._autosave()
        return quantity

    # =========================================
    # Pricing
    # =========================================

    def calculate_design_price(self, design_id: str) -> float:
        """Material cost plus option prices of one design."""
        return self.pricing.design_price(self.get_design(design_id))

    def calculate_session_total(self) -> float:
        """Total price of the session including quantity."""
        return self.pricing.session_total(self.session)

    def get_cost_breakdown(self, design_id: str) -> CostBreakdown:
        """Material cost breakdown of a design; zero until it has dimensions."""
        return self.pricing.material_cost(self.get_design(design_id))

    def get_quote(self) -> SessionQuote:
        """Itemized quote of the whole session."""
        return self.pricing.session_quote(self.session)

    def recompute(self) -> SessionQuote:
        """Recompute all derived prices from the current state."""
        quote = self.get_quote()
        logger.debug(f"Recomputed session total: {quote.total:.2f}")
        return quote

    def can_finalize(self, design_id: Optional[str] = None) -> bool:
        """
        Whether the session (or one design) is ready for review.

        Every design needs its required categories filled. A session
        without designs is checked against its legacy selections.
        """
        if design_id is not None:
            return self.selection.can_finalize(self.get_design(design_id).selections)
        if not self.session.designs:
            return self.selection.can_finalize(self.session.selections)
        return all(self.selection.can_finalize(d.selections) for d in self.session.designs)

    def missing_required(self, design_id: Optional[str] = None) -> list[OptionCategory]:
        """Required categories without a selection."""
        return self.selection.missing_required(self._selections_for(design_id))

    # =========================================
    # Lifecycle
    # =========================================

    def reset(self) -> CustomizationSession:
        """
        Start over with an empty session for the same product.

        Pending catalog loads and uploads are discarded and the saved
        snapshot is cleared.
        """
        self._generation += 1
        self.catalog.invalidate()
        self.session = self._new_session(template=self.session)
        if self.snapshot_store is not None:
            self.snapshot_store.clear()
        logger.info("Customization session reset")
        return self.session

    def restore(self) -> bool:
        """
        Replace the session with the saved snapshot, if there is one.

        Returns:
            True if a snapshot was restored
        """
        if self.snapshot_store is None:
            return False

        restored = self.snapshot_store.load()
        if restored is None:
            return False

        self.session = restored
        return True

    def _autosave(self) -> None:
        if self.snapshot_store is not None:
            self.snapshot_store.save(self.session)
