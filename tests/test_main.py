"""Main test module for timetrack-summary."""

import runpy
import sys
from unittest.mock import patch

import pytest

import timetrack_summary


class TestVersion:
    """Test version information."""

    def test_version_format(self) -> None:
        """Verifies version follows semantic versioning format.

        Business context:
        The version is shown in the dashboard footer and by --version;
        self-hosters compare it against release notes.

        Assertion Strategy:
        Validates 3 parts, all numeric.
        """
        parts = timetrack_summary.__version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)

    def test_title(self) -> None:
        assert timetrack_summary.__title__ == "timetrack_summary"


class TestModuleEntryPoint:
    """Tests for python -m timetrack_summary."""

    def test_runs_cli_main(self) -> None:
        """Verifies the module entry point exits with main()'s return code."""
        with (
            patch.object(sys, "argv", ["timetrack_summary"]),
            patch("timetrack_summary.cli.run_serve") as mock_serve,
            pytest.raises(SystemExit) as exc_info,
        ):
            runpy.run_module("timetrack_summary", run_name="__main__")

        assert exc_info.value.code == 0
        mock_serve.assert_called_once_with()
