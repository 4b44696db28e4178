"""Configuration management system using Pydantic v2 and YAML.

This module provides type-safe configuration loading with validation
for the StitchQuote pricing engine.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from stitchquote.utils.validators import validate_url

from .exceptions import ConfigurationError


class MaterialRate(BaseModel):
    """Purchase price and yield of one raw material used to build a patch.

    ``width`` and ``length`` describe the stock roll or spool in inches
    (thread and bobbin only use ``length``, the yardage/stitch yield).
    """

    name: str = Field(..., description="Material name")
    cost: float = Field(..., ge=0.0, description="Purchase cost of one roll/spool")
    width: float = Field(default=0.0, ge=0.0, description="Stock width in inches")
    length: float = Field(..., gt=0.0, description="Stock length or yield")
    waste_factor: float = Field(default=1.0, ge=1.0, description="Waste multiplier")


def _default_materials() -> list[MaterialRate]:
    return [
        MaterialRate(name="Fabric", cost=34, width=30, length=36, waste_factor=1.5),
        MaterialRate(name="Patch Attach", cost=100, width=9, length=360, waste_factor=1.5),
        MaterialRate(name="Thread", cost=4, width=0, length=5000, waste_factor=1.2),
        MaterialRate(name="Bobbin", cost=50, width=0, length=35000, waste_factor=1.2),
        MaterialRate(name="Cut-Away Stabilizer", cost=180, width=18, length=3600, waste_factor=1.5),
        MaterialRate(name="Wash-Away Stabilizer", cost=60, width=15, length=900, waste_factor=1.5),
    ]


# Names the material cost calculator looks up, in breakdown order
REQUIRED_MATERIALS = (
    "Fabric",
    "Patch Attach",
    "Thread",
    "Bobbin",
    "Cut-Away Stabilizer",
    "Wash-Away Stabilizer",
)

AREA_MATERIALS = ("Fabric", "Patch Attach", "Cut-Away Stabilizer", "Wash-Away Stabilizer")


class PricingConfig(BaseModel):
    """Configuration for material cost and price formatting."""

    materials: list[MaterialRate] = Field(default_factory=_default_materials)
    stitches_per_sq_inch: int = Field(default=1000, gt=0, description="Stitch density estimate")
    currency: str = Field(default="USD", description="ISO currency code")
    currency_symbol: str = Field(default="$", description="Symbol used when formatting prices")

    @model_validator(mode='after')
    def validate_materials(self) -> 'PricingConfig':
        """Ensure every material the calculator needs is configured."""
        names = {m.name for m in self.materials}
        missing = [name for name in REQUIRED_MATERIALS if name not in names]
        if missing:
            raise ValueError(f"Missing material rates: {missing}")
        for material in self.materials:
            if material.name in AREA_MATERIALS and material.width <= 0:
                raise ValueError(f"Material '{material.name}' needs a positive width")
        return self

    def material(self, name: str) -> MaterialRate:
        """Look up a material rate by name."""
        for material in self.materials:
            if material.name == name:
                return material
        raise KeyError(name)


class CatalogConfig(BaseModel):
    """Configuration for the external embroidery option source."""

    api_base_url: Optional[str] = Field(default=None, description="Storefront API base URL; None uses built-in options")
    timeout: float = Field(default=10.0, gt=0.0, description="Request timeout in seconds")
    active_only: bool = Field(default=True, description="Only fetch active options")

    @field_validator('api_base_url')
    @classmethod
    def validate_api_base_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate URL scheme and strip trailing slash."""
        if v is None or v == "":
            return None
        if not v.startswith(('http://', 'https://')) or not validate_url(v):
            raise ValueError("api_base_url must start with http:// or https://")
        return v.rstrip('/')


class SessionConfig(BaseModel):
    """Configuration for customization sessions."""

    max_designs: int = Field(default=5, ge=1, description="Maximum designs per product")
    default_quantity: int = Field(default=1, ge=1, description="Initial quantity")


class UploadConfig(BaseModel):
    """Configuration for design file uploads."""

    max_file_size_mb: float = Field(default=10.0, gt=0.0, description="Maximum upload size in MiB")
    allowed_mime_prefix: str = Field(default="image/", description="Accepted MIME type prefix")

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)


class PersistenceConfig(BaseModel):
    """Configuration for the customization snapshot store."""

    storage_key: str = Field(default="customizationData", description="Key the snapshot is written under")
    max_snapshot_bytes: int = Field(default=2 * 1024 * 1024, gt=0, description="Skip snapshots larger than this")
    storage_path: Optional[str] = Field(default=None, description="JSON file backing the store; None keeps it in memory")
    quota_bytes: Optional[int] = Field(default=5 * 1024 * 1024, description="Total quota shared by every key")

    @model_validator(mode='after')
    def validate_budget(self) -> 'PersistenceConfig':
        """The snapshot budget must fit inside the shared quota."""
        if self.quota_bytes is not None and self.max_snapshot_bytes > self.quota_bytes:
            raise ValueError("max_snapshot_bytes cannot exceed quota_bytes")
        return self


class SelectionConfig(BaseModel):
    """Configuration for option selection behaviour."""

    enforce_incompatibility: bool = Field(
        default=False,
        description="Reject selections that conflict with an option already chosen",
    )
    apply_catalog_defaults: bool = Field(
        default=True,
        description="Preselect catalog default options on new designs",
    )


class AppConfig(BaseModel):
    """Root configuration model containing all sub-configurations."""

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Choose from: {valid_levels}")
        return v_upper

    @classmethod
    def from_yaml(cls, path: Path | str) -> 'AppConfig':
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the file is not valid YAML
            ValueError: If a value fails validation
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Could not parse configuration file: {e}",
                context={"path": str(path)},
            ) from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping",
                context={"path": str(path)},
            )

        return cls.model_validate(config_dict)


# Singleton pattern for configuration
_config: Optional[AppConfig] = None


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. Defaults to the
                    STITCHQUOTE_CONFIG env var, then config/config.yaml
                    relative to project root

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If configuration is invalid
    """
    if config_path is None:
        env_config_path = os.environ.get('STITCHQUOTE_CONFIG')
        if env_config_path:
            config_path = Path(env_config_path)
        else:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        example_path = config_path.parent / "config.example.yaml"
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please copy {example_path} to {config_path} and customize it.\n"
            f"Alternatively, set the STITCHQUOTE_CONFIG environment variable to the config file path."
        )

    return AppConfig.from_yaml(config_path)


def get_config(config_path: Optional[Path | str] = None, reload: bool = False) -> AppConfig:
    """Get configuration instance (singleton pattern).

    Args:
        config_path: Path to configuration file (only used on first call or if reload=True)
        reload: Force reload of configuration

    Returns:
        Cached or newly loaded AppConfig instance
    """
    global _config

    if _config is None or reload:
        _config = load_config(config_path)

    return _config


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    global _config
    _config = None
