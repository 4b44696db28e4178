"""Pydantic models for persisted customization snapshots.

A snapshot keeps everything needed to rebuild a session except the raw bytes
of uploaded files: those are dropped and restored as empty placeholders that
keep the original name, size and MIME type.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from stitchquote.domain.entities import (
    CATEGORY_POLICIES,
    CustomizationSession,
    Design,
    DesignFile,
    Dimensions,
    EmbroideryOption,
    OptionCategory,
    OptionLevel,
    Placement,
    Position,
    Selections,
)
from stitchquote.utils import data_url_size

SNAPSHOT_VERSION = 1


class OptionSnapshot(BaseModel):
    """A selected option, stored whole so restore does not need the catalog."""

    id: str
    name: str
    category: OptionCategory
    price: float = Field(default=0.0, ge=0.0)
    level: OptionLevel = OptionLevel.BASIC
    description: str = ""
    stitches: int = 0
    estimated_time: str = ""
    is_popular: bool = False
    is_active: bool = True
    is_default: bool = False
    incompatible_with: list[str] = Field(default_factory=list)

    @classmethod
    def from_option(cls, option: EmbroideryOption) -> "OptionSnapshot":
        return cls(
            id=option.id,
            name=option.name,
            category=option.category,
            price=option.price,
            level=option.level,
            description=option.description,
            stitches=option.stitches,
            estimated_time=option.estimated_time,
            is_popular=option.is_popular,
            is_active=option.is_active,
            is_default=option.is_default,
            incompatible_with=sorted(option.incompatible_with),
        )

    def to_option(self) -> EmbroideryOption:
        return EmbroideryOption(
            id=self.id,
            name=self.name,
            category=self.category,
            price=self.price,
            level=self.level,
            description=self.description,
            stitches=self.stitches,
            estimated_time=self.estimated_time,
            is_popular=self.is_popular,
            is_active=self.is_active,
            is_default=self.is_default,
            incompatible_with=frozenset(self.incompatible_with),
        )


class SelectionsSnapshot(BaseModel):
    """Selected options grouped by category value."""

    options: dict[str, list[OptionSnapshot]] = Field(default_factory=dict)

    @classmethod
    def from_selections(cls, selections: Selections) -> "SelectionsSnapshot":
        return cls(options={
            category.value: [OptionSnapshot.from_option(o) for o in selections.selected_in(category)]
            for category in CATEGORY_POLICIES
            if selections.has_selection(category)
        })

    def to_selections(self) -> Selections:
        selections = Selections()
        for category, policy in CATEGORY_POLICIES.items():
            stored = [s.to_option() for s in self.options.get(category.value, [])]
            # Entries filed under the wrong category are dropped
            stored = [o for o in stored if o.category is category]
            if not stored:
                continue
            if policy.is_multi:
                setattr(selections, category.value, {o.id: o for o in stored})
            else:
                setattr(selections, category.value, stored[0])
        return selections


class DesignSnapshot(BaseModel):
    """One design without its binary payload."""

    id: str
    file_name: str
    file_size: int = Field(default=0, ge=0)
    file_type: str = "application/octet-stream"
    preview: str = ""
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    placement: Placement = Placement.FRONT
    position_x: float = 50.0
    position_y: float = 50.0
    selections: SelectionsSnapshot = Field(default_factory=SelectionsSnapshot)

    @classmethod
    def from_design(cls, design: Design) -> "DesignSnapshot":
        dimensions = design.dimensions
        return cls(
            id=design.id,
            file_name=design.file.name,
            file_size=design.file.size,
            file_type=design.file.mime_type,
            preview=design.preview,
            width=dimensions.width if dimensions else None,
            height=dimensions.height if dimensions else None,
            placement=design.placement,
            position_x=design.position.x,
            position_y=design.position.y,
            selections=SelectionsSnapshot.from_selections(design.selections),
        )

    def to_design(self) -> Design:
        dimensions = None
        if self.width is not None and self.height is not None:
            dimensions = Dimensions(self.width, self.height)
        return Design(
            id=self.id,
            file=DesignFile.placeholder(
                self.file_name,
                self.file_size or data_url_size(self.preview),
                self.file_type,
            ),
            preview=self.preview,
            dimensions=dimensions,
            placement=self.placement,
            position=Position(self.position_x, self.position_y),
            selections=self.selections.to_selections(),
        )


class SessionSnapshot(BaseModel):
    """Persisted state of a customization session."""

    version: int = SNAPSHOT_VERSION
    saved_at: datetime = Field(default_factory=datetime.now)
    product_id: str = ""
    product_name: str = ""
    base_price: float = Field(default=0.0, ge=0.0)
    quantity: int = Field(default=1, ge=1)
    max_designs: int = Field(default=5, ge=1)
    color: str = "#000000"
    size: str = ""
    notes: str = ""
    designs: list[DesignSnapshot] = Field(default_factory=list)
    selections: SelectionsSnapshot = Field(default_factory=SelectionsSnapshot)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Reject snapshots written by a newer format."""
        if v > SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {v}")
        return v

    @classmethod
    def from_session(cls, session: CustomizationSession) -> "SessionSnapshot":
        return cls(
            product_id=session.product_id,
            product_name=session.product_name,
            base_price=session.base_price,
            quantity=session.quantity,
            max_designs=session.max_designs,
            color=session.color,
            size=session.size,
            notes=session.notes,
            designs=[DesignSnapshot.from_design(d) for d in session.designs],
            selections=SelectionsSnapshot.from_selections(session.selections),
        )

    def to_session(self) -> CustomizationSession:
        return CustomizationSession(
            product_id=self.product_id,
            product_name=self.product_name,
            base_price=self.base_price,
            quantity=self.quantity,
            max_designs=self.max_designs,
            color=self.color,
            size=self.size,
            notes=self.notes,
            designs=[d.to_design() for d in self.designs],
            selections=self.selections.to_selections(),
        )
