"""Unit tests for console and logging helpers (crateforge.utils)."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from crateforge.utils import (
    _resolve_level,
    configure_logging,
    print_error,
    print_success,
    print_summary_table,
)


class TestResolveLevel:
    @pytest.mark.unit
    def test_names(self):
        assert _resolve_level("debug") == logging.DEBUG
        assert _resolve_level(" WARNING ") == logging.WARNING

    @pytest.mark.unit
    def test_int_passthrough(self):
        assert _resolve_level(logging.ERROR) == logging.ERROR

    @pytest.mark.unit
    def test_unknown_falls_back_to_info(self):
        assert _resolve_level("chatty") == logging.INFO


class TestConfigureLogging:
    @pytest.mark.unit
    def test_updates_level_when_handlers_exist(self):
        root = logging.getLogger()
        previous = root.level
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            configure_logging("ERROR")
            assert root.level == logging.ERROR
            assert handler in root.handlers
        finally:
            root.removeHandler(handler)
            root.setLevel(previous)

    @pytest.mark.unit
    def test_installs_rich_handler_on_bare_root(self):
        root = logging.getLogger()
        with patch.object(root, "hasHandlers", return_value=False):
            with patch("logging.basicConfig") as basic_config:
                configure_logging("DEBUG")
        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert type(kwargs["handlers"][0]).__name__ == "RichHandler"


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_helpers(self):
        with patch("crateforge.utils.console") as mock_console:
            print_success("done")
            print_error("failed")
        printed = [call.args[0] for call in mock_console.print.call_args_list]
        assert "[bold green]done[/bold green]" in printed
        assert "[bold red]failed[/bold red]" in printed

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("crateforge.utils.console") as mock_console:
            print_summary_table({"Package": "demo"}, title="Generated")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "Generated"
        assert table.row_count == 1
