"""Embroidery option catalog.

Normalizes raw option records from an external source into immutable
``EmbroideryOption`` entities. Loading fails soft: when the source is
unavailable or returns nothing usable, the built-in default catalog is used
so that pricing can proceed without a live connection.
"""

import json
from typing import Any, Iterable, Optional

from stitchquote.domain.entities import (
    EmbroideryOption,
    OptionCategory,
    OptionLevel,
    Selections,
)
from stitchquote.domain.interfaces import OptionSourceInterface
from stitchquote.utils import get_logger, log_execution_time, parse_flag, parse_price
from stitchquote.utils.exceptions import InvalidInputError

from .defaults import DEFAULT_OPTION_RECORDS

logger = get_logger(__name__)


def parse_option_price(value: Any, option_id: Optional[str] = None) -> float:
    """Coerce a raw catalog price to a non-negative float.

    Numbers pass through, numeric strings are parsed tolerantly. Anything
    unparseable, negative or non-finite becomes 0.0 so that a design never
    becomes unpriceable.

    Args:
        value: Raw price (number, string or None)
        option_id: Option id, for log context

    Returns:
        Normalized price
    """
    if value is None or value == "":
        return 0.0
    try:
        return parse_price(value)
    except ValueError as e:
        logger.warning(f"Invalid price for option {option_id!r}, using 0: {e}")
        return 0.0


def parse_incompatible_ids(value: Any, option_id: Optional[str] = None) -> frozenset[str]:
    """Deserialize an incompatibility list.

    Accepts a JSON-encoded list (as stored by the storefront backend), a
    list/tuple/set, or None. Malformed input yields an empty set, meaning
    "no constraint".

    Args:
        value: Raw incompatibility field
        option_id: Option id, for log context

    Returns:
        Set of incompatible option ids as strings
    """
    if value is None or value == "":
        return frozenset()

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Malformed incompatibility list for option {option_id!r}, ignoring")
            return frozenset()

    if not isinstance(value, (list, tuple, set, frozenset)):
        logger.warning(f"Incompatibility list for option {option_id!r} is not a list, ignoring")
        return frozenset()

    return frozenset(str(item) for item in value if item is not None and str(item) != "")


def _as_int(value: Any) -> int:
    try:
        return max(int(float(value)), 0)
    except (TypeError, ValueError):
        return 0


def normalize_option(record: dict[str, Any]) -> Optional[EmbroideryOption]:
    """Map one raw option record to an ``EmbroideryOption``.

    Records without an id or with an unknown category are skipped.

    Args:
        record: Raw record with the storefront's camelCase keys

    Returns:
        Normalized option, or None if the record is unusable
    """
    raw_id = record.get("id")
    if raw_id is None or str(raw_id) == "":
        logger.warning(f"Skipping option record without id: {record.get('name')!r}")
        return None
    option_id = str(raw_id)

    try:
        category = OptionCategory(str(record.get("category", "")).lower())
    except ValueError:
        logger.warning(f"Skipping option {option_id!r} with unknown category {record.get('category')!r}")
        return None

    try:
        level = OptionLevel(str(record.get("level", "basic")).lower())
    except ValueError:
        level = OptionLevel.BASIC

    incompatible_raw = record.get("isIncompatible", record.get("incompatibleWith"))

    return EmbroideryOption(
        id=option_id,
        name=str(record.get("name") or option_id),
        category=category,
        price=parse_option_price(record.get("price"), option_id),
        level=level,
        description=str(record.get("description") or ""),
        stitches=_as_int(record.get("stitches", 0)),
        estimated_time=str(record.get("estimatedTime") or ""),
        is_popular=parse_flag(record.get("isPopular")),
        is_active=parse_flag(record.get("isActive"), default=True),
        is_default=parse_flag(record.get("isSelected", record.get("isDefault"))),
        incompatible_with=parse_incompatible_ids(incompatible_raw, option_id),
    )


def normalize_records(records: Iterable[dict[str, Any]]) -> list[EmbroideryOption]:
    """Normalize a batch of records, dropping unusable ones and duplicate ids."""
    options: dict[str, EmbroideryOption] = {}
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"Skipping non-mapping option record: {record!r}")
            continue
        option = normalize_option(record)
        if option is None:
            continue
        if option.id in options:
            logger.warning(f"Duplicate option id {option.id!r}, keeping the first")
            continue
        options[option.id] = option
    return list(options.values())


DEFAULT_OPTIONS: list[EmbroideryOption] = normalize_records(DEFAULT_OPTION_RECORDS)


class OptionCatalog:
    """
    Read-only catalog of embroidery options for one session.

    Usage:
        >>> catalog = OptionCatalog(HttpOptionSource("https://shop.example/api"))
        >>> await catalog.load_options()
        >>> catalog.by_category(OptionCategory.COVERAGE)
    """

    def __init__(
        self,
        source: Optional[OptionSourceInterface] = None,
        fallback: Optional[list[EmbroideryOption]] = None,
        active_only: bool = True,
    ):
        """
        Initialize the catalog.

        Args:
            source: External option source; None means built-in options only
            fallback: Options used when the source fails (default: built-in catalog)
            active_only: Hide options flagged inactive
        """
        self.source = source
        self.fallback = list(fallback) if fallback is not None else list(DEFAULT_OPTIONS)
        self.active_only = active_only
        self._options: dict[str, EmbroideryOption] = {}
        self._generation = 0
        self.is_loaded = False
        self.used_fallback = False

    async def load_options(self) -> list[EmbroideryOption]:
        """Fetch and normalize the catalog, falling back to built-in options.

        Never raises for source failures. If ``invalidate()`` is called while
        the fetch is in flight, the response is discarded.

        Returns:
            The options now held by the catalog
        """
        generation = self._generation
        records: Optional[list[dict[str, Any]]] = None

        if self.source is None:
            logger.info("No option source configured, using built-in catalog")
        else:
            try:
                with log_execution_time(logger, "option catalog fetch"):
                    records = await self.source.fetch(active_only=self.active_only)
            except Exception as e:
                logger.error(f"Option source unavailable, using built-in catalog: {e}")
                records = None

        if generation != self._generation:
            logger.debug("Discarding stale option catalog response")
            return self.options

        options = self._visible(normalize_records(records)) if records else []
        if options:
            self._install(options, used_fallback=False)
        else:
            if records is not None:
                logger.warning("Option source returned no usable options, using built-in catalog")
            self._install(self.fallback, used_fallback=True)

        return self.options

    def use_fallback(self) -> list[EmbroideryOption]:
        """Install the built-in options without contacting the source."""
        self._install(self.fallback, used_fallback=True)
        return self.options

    def invalidate(self) -> None:
        """Mark any in-flight fetch as stale (session reset or teardown)."""
        self._generation += 1

    def _visible(self, options: Iterable[EmbroideryOption]) -> list[EmbroideryOption]:
        return [option for option in options if option.is_active or not self.active_only]

    def _install(self, options: Iterable[EmbroideryOption], used_fallback: bool) -> None:
        self._options = {option.id: option for option in self._visible(options)}
        self.is_loaded = True
        self.used_fallback = used_fallback
        logger.info(
            f"Option catalog ready: {len(self._options)} options"
            f"{' (built-in)' if used_fallback else ''}"
        )

    # =========================================
    # Lookups
    # =========================================

    @property
    def options(self) -> list[EmbroideryOption]:
        return list(self._options.values())

    def get(self, option_id: str) -> Optional[EmbroideryOption]:
        """Return an option by id, or None."""
        return self._options.get(str(option_id))

    def require(self, option_id: str) -> EmbroideryOption:
        """Return an option by id.

        Raises:
            InvalidInputError: If the id is not in the catalog
        """
        option = self.get(option_id)
        if option is None:
            raise InvalidInputError(f"Unknown embroidery option: {option_id}", field="option_id", value=option_id)
        return option

    def by_category(self, category: OptionCategory) -> list[EmbroideryOption]:
        """Options of one category, in catalog order."""
        return [o for o in self._options.values() if o.category is category]

    def default_options(self, category: OptionCategory) -> list[EmbroideryOption]:
        """Options of a category flagged as preselected."""
        return [o for o in self.by_category(category) if o.is_default]

    def conflicts(self, option: EmbroideryOption, selections: Selections) -> list[EmbroideryOption]:
        """Already-selected options that conflict with ``option``.

        Advisory only; selecting never checks this unless enforcement is
        switched on.
        """
        return [selected for selected in selections.all_options() if option.conflicts_with(selected)]

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, option_id: object) -> bool:
        return str(option_id) in self._options
