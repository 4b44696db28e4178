"""Integration tests for the command-line interface."""

import logging

import pytest

from stitchquote.cli import main, parse_args
from stitchquote.core.pricing import compute_material_cost, format_price


@pytest.fixture
def config_path(tmp_path):
    """Minimal configuration file with built-in options."""
    path = tmp_path / "config.yaml"
    path.write_text("log_level: WARNING\n")
    return path


class TestParseArgs:
    """Test argument parsing."""

    def test_quote_arguments(self):
        """Test repeatable options and defaults."""
        args = parse_args(["quote", "--width", "3", "--height", "2.5", "--option", "a", "--option", "b"])

        assert args.command == "quote"
        assert (args.width, args.height) == (3.0, 2.5)
        assert args.options == ["a", "b"]
        assert args.quantity == 1
        assert not args.no_defaults

    def test_command_required(self):
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestLogLevel:
    """Test the global log level flag."""

    def test_applies_to_every_module_logger(self, config_path):
        """Test --log-level reaches catalog, pricing and storage loggers."""
        names = [
            "stitchquote.core.catalog.option_catalog",
            "stitchquote.core.pricing.material_cost",
            "stitchquote.infrastructure.storage.snapshot_store",
        ]
        loggers = [logging.getLogger(name) for name in names]
        previous = [(logger.level, [h.level for h in logger.handlers]) for logger in loggers]
        try:
            assert main(["--config", str(config_path), "--log-level", "ERROR", "options"]) == 0

            for logger in loggers:
                assert logger.level == logging.ERROR
                assert all(handler.level == logging.ERROR for handler in logger.handlers)
        finally:
            for logger, (level, handler_levels) in zip(loggers, previous):
                logger.setLevel(level)
                for handler, handler_level in zip(logger.handlers, handler_levels):
                    handler.setLevel(handler_level)


class TestOptionsCommand:
    """Test listing the catalog."""

    def test_list_one_category(self, config_path, capsys):
        """Test listing coverage options."""
        assert main(["--config", str(config_path), "options", "--category", "coverage"]) == 0

        out = capsys.readouterr().out
        assert "coverage-75" in out
        assert "$14.50" in out
        assert "material-felt" not in out

    def test_list_all(self, config_path, capsys):
        """Test listing every category marks defaults."""
        assert main(["--config", str(config_path), "options"]) == 0

        out = capsys.readouterr().out
        assert "* material-polyester" in out
        assert "thread-metallic" in out


class TestQuoteCommand:
    """Test quoting a design."""

    def test_quote_with_coverage(self, config_path, capsys):
        """Test a 3x3 patch with 75% coverage."""
        code = main([
            "--config", str(config_path),
            "quote", "--width", "3", "--height", "3", "--option", "coverage-75",
        ])

        captured = capsys.readouterr()
        expected = compute_material_cost(3, 3).total_cost + 14.50
        assert code == 0
        assert f"TOTAL:      {format_price(expected)}" in captured.out
        assert "~9000 stitches" in captured.out
        assert "Missing required" not in captured.err

    def test_quote_quantity_and_base_price(self, config_path, capsys):
        """Test base price and quantity multiply through."""
        code = main([
            "--config", str(config_path),
            "quote", "--width", "2", "--height", "2", "--base-price", "12", "--quantity", "10",
        ])

        captured = capsys.readouterr()
        assert code == 0
        assert "TOTAL:      $125.00" in captured.out
        assert "Missing required options: coverage" in captured.err

    def test_no_defaults(self, config_path, capsys):
        """Test starting without catalog defaults."""
        main(["--config", str(config_path), "quote", "--width", "2", "--height", "2", "--no-defaults"])

        assert "Missing required options: coverage, material, border" in capsys.readouterr().err

    def test_unknown_option(self, config_path, capsys):
        """Test an unknown option id fails cleanly."""
        code = main([
            "--config", str(config_path),
            "quote", "--width", "3", "--height", "3", "--option", "coverage-150",
        ])

        assert code == 1
        assert "Unknown embroidery option: coverage-150" in capsys.readouterr().out

    @pytest.mark.parametrize("extra", [
        ["--width", "-1", "--height", "3"],
        ["--width", "3", "--height", "3", "--quantity", "0"],
    ])
    def test_invalid_input(self, config_path, capsys, extra):
        """Test invalid sizes and quantities exit with an error."""
        assert main(["--config", str(config_path), "quote", *extra]) == 1
        assert "✗" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path, capsys):
        """Test an explicit config path must exist."""
        code = main(["--config", str(tmp_path / "absent.yaml"), "options"])

        assert code == 1
        assert "Configuration file not found" in capsys.readouterr().out
