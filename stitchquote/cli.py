"""Command-line interface for StitchQuote.

Usage:
    python -m stitchquote.cli options --category threads
    python -m stitchquote.cli quote --width 3 --height 3 --option coverage-75
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from stitchquote.core.catalog import OptionCatalog
from stitchquote.core.pricing import SessionQuote, format_price
from stitchquote.core.use_cases import CustomizationService
from stitchquote.domain.entities import (
    CATEGORY_POLICIES,
    CustomizationSession,
    DesignFile,
    EmbroideryOption,
    OptionCategory,
)
from stitchquote.infrastructure.catalog import HttpOptionSource
from stitchquote.utils import AppConfig, get_config, get_logger, set_package_log_level
from stitchquote.utils.exceptions import AppException

logger = get_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="stitchquote",
        description="Price custom embroidered patches",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List the built-in option catalog
  stitchquote options

  # List thread options from a live storefront API
  stitchquote options --category threads --api-url http://localhost:5000/api

  # Quote a 3x3 inch patch with 75% coverage
  stitchquote quote --width 3 --height 3 --option coverage-75

  # Quote 25 shirts with a base price and two thread upgrades
  stitchquote quote --width 4 --height 2.5 --base-price 12 --quantity 25 \\
      --option thread-metallic --option thread-neon
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to configuration file (default: auto-detect, then built-in defaults)'
    )

    parser.add_argument(
        '--api-url',
        type=str,
        default=None,
        help='Storefront API root serving /embroidery-options (overrides config)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Override log level'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    options_parser = subparsers.add_parser('options', help='List embroidery options')
    options_parser.add_argument(
        '--category',
        type=str,
        choices=[c.value for c in OptionCategory],
        default=None,
        help='Only list one category'
    )

    quote_parser = subparsers.add_parser('quote', help='Price a single design')
    quote_parser.add_argument('--width', type=float, required=True, help='Patch width in inches')
    quote_parser.add_argument('--height', type=float, required=True, help='Patch height in inches')
    quote_parser.add_argument(
        '--option',
        dest='options',
        action='append',
        default=[],
        metavar='ID',
        help='Option id to select (repeatable); replaces the default of its category'
    )
    quote_parser.add_argument('--quantity', type=int, default=1, help='Number of items (default: 1)')
    quote_parser.add_argument('--base-price', type=float, default=0.0, help='Product base price (default: 0)')
    quote_parser.add_argument(
        '--no-defaults',
        action='store_true',
        help='Start without the catalog default options'
    )

    return parser.parse_args(argv)


def _load_config(config_path: Optional[Path]) -> AppConfig:
    if config_path is not None:
        return get_config(config_path, reload=True)
    try:
        return get_config()
    except FileNotFoundError:
        logger.debug("No configuration file found, using built-in defaults")
        return AppConfig()


def _build_catalog(config: AppConfig, api_url: Optional[str]) -> OptionCatalog:
    base_url = api_url or config.catalog.api_base_url
    source = HttpOptionSource(base_url, timeout=config.catalog.timeout) if base_url else None
    return OptionCatalog(source, active_only=config.catalog.active_only)


def print_options(catalog: OptionCatalog, category: Optional[str], symbol: str) -> None:
    """Print the catalog grouped by category."""
    categories = [OptionCategory(category)] if category else list(CATEGORY_POLICIES)
    for cat in categories:
        policy = CATEGORY_POLICIES[cat]
        print(f"\n{policy.title} ({policy.description})")
        print("-" * 60)
        for option in catalog.by_category(cat):
            price = "Free" if option.is_free else format_price(option.price, symbol)
            marker = "*" if option.is_default else " "
            print(f" {marker} {option.id:<24} {price:>10}  {option.name}")


def print_quote(quote: SessionQuote, symbol: str) -> None:
    """Print an itemized session quote."""
    print("\n" + "=" * 60)
    print("EMBROIDERY QUOTE")
    print("=" * 60)
    for design in quote.designs:
        breakdown = design.breakdown
        print(f"Design: {design.name}")
        if design.has_dimensions:
            print(f"  Area: {breakdown.area:g} sq in ({design.size_tier}), ~{breakdown.stitch_count} stitches")
        print("  Material cost:")
        for name, cost in breakdown.components().items():
            print(f"    {name:<24} {format_price(cost, symbol):>10}")
        print(f"    {'Total material':<24} {format_price(breakdown.total_cost, symbol):>10}")
        print("  Options:")
        for line in design.option_lines:
            print(f"    {line.name:<40} {line.label:>10}")
        print(f"  Design total: {format_price(design.total, symbol)}")
    print("-" * 60)
    print(f"Base price: {format_price(quote.base_price, symbol)}")
    print(f"Unit price: {format_price(quote.unit_price, symbol)}")
    print(f"Quantity:   {quote.quantity}")
    print(f"TOTAL:      {format_price(quote.total, symbol)}")
    print("=" * 60)


def _choose_option(service: CustomizationService, design_id: str, option: EmbroideryOption) -> None:
    selections = service.get_design(design_id).selections
    if service.selection.is_selected(selections, option.category, option):
        return
    if CATEGORY_POLICIES[option.category].is_multi:
        service.toggle_style(design_id, option.category, option)
    else:
        service.select_style(design_id, option.category, option)


async def run(args: argparse.Namespace) -> int:
    """Execute a parsed command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    config = _load_config(args.config)
    if args.log_level:
        set_package_log_level(args.log_level)

    catalog = _build_catalog(config, args.api_url)
    await catalog.load_options()
    if catalog.used_fallback and catalog.source is not None:
        print("! Option service unavailable, showing built-in options", file=sys.stderr)

    symbol = config.pricing.currency_symbol

    if args.command == 'options':
        print_options(catalog, args.category, symbol)
        return 0

    if not args.no_defaults:
        defaults_config = config
    else:
        defaults_config = config.model_copy(deep=True)
        defaults_config.selection.apply_catalog_defaults = False

    session = CustomizationSession(base_price=args.base_price, max_designs=config.session.max_designs)
    service = CustomizationService(session, catalog, defaults_config)
    service.set_quantity(args.quantity)

    result = service.add_design(DesignFile("cli-design.png", 0, "image/png", b""))
    if not result.success:
        print(f"✗ {result.message}")
        return 1
    service.set_dimensions(result.design_id, args.width, args.height)

    for option_id in args.options:
        _choose_option(service, result.design_id, catalog.require(option_id))

    for first, second in service.conflicts(result.design_id):
        print(f"! '{first.name}' is not compatible with '{second.name}'", file=sys.stderr)

    missing = service.missing_required(result.design_id)
    if missing:
        print(f"! Missing required options: {', '.join(c.value for c in missing)}", file=sys.stderr)

    print_quote(service.get_quote(), symbol)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)

    try:
        return asyncio.run(run(args))

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n✗ Cancelled by user")
        return 1

    except AppException as e:
        logger.error(f"Command failed: {e}")
        print(f"\n✗ {e.message}")
        return 1

    except Exception as e:
        logger.error(f"Command failed: {e}", exc_info=True)
        print(f"\n✗ Command failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
