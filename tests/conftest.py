"""Pytest fixtures and configuration for StitchQuote tests."""

import os
import tempfile

# Keep test log files out of the project tree
os.environ.setdefault("STITCHQUOTE_LOG_DIR", tempfile.mkdtemp(prefix="stitchquote-logs-"))

import pytest

from stitchquote.core.catalog import OptionCatalog
from stitchquote.core.use_cases import CustomizationService
from stitchquote.domain.entities import CustomizationSession, DesignFile, EmbroideryOption
from stitchquote.infrastructure.storage import InMemoryKeyValueStore, SessionSnapshotStore
from stitchquote.utils.config import AppConfig, reset_config

# Smallest byte string that still looks like a PNG to a MIME sniffer
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 56


@pytest.fixture
def test_config() -> AppConfig:
    """Provide test configuration with built-in rates and in-memory storage."""
    return AppConfig(log_level="DEBUG")


@pytest.fixture
def catalog() -> OptionCatalog:
    """Option catalog holding the built-in options."""
    catalog = OptionCatalog()
    catalog.use_fallback()
    return catalog


@pytest.fixture
def option(catalog):
    """Look up a built-in option by id."""
    def _option(option_id: str) -> EmbroideryOption:
        return catalog.require(option_id)
    return _option


@pytest.fixture
def design_file() -> DesignFile:
    """A small PNG upload."""
    return DesignFile(name="logo.png", size=len(PNG_BYTES), mime_type="image/png", content=PNG_BYTES)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Key-value store with a browser-like 5 MiB quota."""
    return InMemoryKeyValueStore(quota_bytes=5 * 1024 * 1024)


@pytest.fixture
def snapshot_store(memory_store) -> SessionSnapshotStore:
    """Snapshot store over the in-memory store."""
    return SessionSnapshotStore(memory_store)


@pytest.fixture
def session() -> CustomizationSession:
    """Empty customization session for a plain product."""
    return CustomizationSession(product_id="prod-1", product_name="Classic Tee")


@pytest.fixture
def service(session, catalog, test_config, snapshot_store) -> CustomizationService:
    """Customization service with autosave to memory."""
    return CustomizationService(session, catalog, test_config, snapshot_store)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the cached configuration between tests."""
    reset_config()
    yield
    reset_config()
