"""Tests for the output system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- JSON and plain payload rendering
- Global instance management and the library default
"""

from __future__ import annotations

import json

import pytest

from gw2api import output as output_module
from gw2api.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    monkeypatch.setattr("gw2api.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    monkeypatch.setattr("gw2api.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStreams:
    @pytest.mark.parametrize("level", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, level):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, level)("message text")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "message text" in captured.err

    def test_payload_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.info("loading")
        mgr.format_response({"id": 15})
        mgr.success("done")
        captured = capfd.readouterr()
        assert json.loads(captured.out) == {"id": 15}
        assert "loading" in captured.err
        assert "done" in captured.err

    def test_error_and_warning_prefixes(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.error("bad key")
        mgr.warning("slow")
        err = capfd.readouterr().err
        assert "Error: bad key" in err
        assert "Warning: slow" in err


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors_and_data(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.error("critical")
        mgr.print_data("payload")
        captured = capfd.readouterr()
        assert "critical" in captured.err
        assert "payload" in captured.out

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("trace")
        assert capfd.readouterr().err == ""

    def test_debug_shown_with_verbose(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.debug("Cache hit: /build")
        assert "[debug] Cache hit: /build" in capfd.readouterr().err

    def test_properties(self, non_tty):
        mgr = OutputManager(quiet=True, verbose=True)
        assert mgr.is_quiet is True
        assert mgr.is_verbose is True


# ------------------------------------------------------------------ #
# Payload rendering
# ------------------------------------------------------------------ #


class TestFormats:
    def test_json_list(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response([{"id": 1}, None])
        assert json.loads(capfd.readouterr().out) == [{"id": 1}, None]

    def test_json_keeps_unicode(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"name": "Äxte"})
        assert "Äxte" in capfd.readouterr().out

    def test_plain_dict(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response({"id": 5, "name": "Copper Ore"})
        assert capfd.readouterr().out.splitlines() == ["id\t5", "name\tCopper Ore"]

    def test_plain_list_of_dicts(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response(
            [{"id": 5, "count": 250}, {"id": 7, "count": 1}]
        )
        assert capfd.readouterr().out.splitlines() == ["5\t250", "7\t1"]

    def test_plain_list_with_holes(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response([15, None, {"id": 7}])
        assert capfd.readouterr().out.splitlines() == ["15", "-", "7"]

    def test_plain_nested_values_as_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response(
            {"id": 1, "level": {"min": 1, "max": 80}}
        )
        lines = capfd.readouterr().out.splitlines()
        assert lines[1] == 'level\t{"min": 1, "max": 80}'

    def test_plain_scalar(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).format_response(115267)
        assert capfd.readouterr().out.strip() == "115267"

    def test_rich_renders_json(self, capfd, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        OutputManager(format=OutputFormat.RICH).format_response({"id": 15})
        assert "15" in capfd.readouterr().out


# ------------------------------------------------------------------ #
# Global instance management
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_library_default_is_silent(self, capfd):
        reset_output()
        mgr = get_output()
        assert mgr.is_quiet is True
        assert mgr.is_verbose is False
        mgr.info("hidden")
        mgr.debug("hidden")
        assert capfd.readouterr().err == ""

    def test_get_output_is_cached(self):
        reset_output()
        assert get_output() is get_output()

    def test_set_and_reset(self, non_tty):
        custom = OutputManager(format=OutputFormat.JSON)
        set_output(custom)
        assert get_output() is custom
        reset_output()
        assert get_output() is not custom

    def test_module_helpers_use_installed_manager(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        output_module.info("info line")
        output_module.warning("warn line")
        output_module.debug("debug line")
        output_module.format_response({"id": 1})
        captured = capfd.readouterr()
        assert "info line" in captured.err
        assert "warn line" in captured.err
        assert "[debug] debug line" in captured.err
        assert "id\t1" in captured.out
