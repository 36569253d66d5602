"""Tests for the command line interface."""

from __future__ import annotations

import argparse

import pytest

from sdswatch import cli
from sdswatch.exceptions import TransportError
from sdswatch.models import StreamRef


@pytest.fixture
def patched_client(monkeypatch, fake_access):
    """Route the CLI through the in-memory store."""
    monkeypatch.setattr(cli, "SdsClient", lambda settings: fake_access)
    return fake_access


def make_args(**kwargs) -> argparse.Namespace:
    defaults = {"resource": None, "tenant": None, "api_version": None}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


class TestBuildSettings:
    """Tests for build_settings."""

    def test_uses_environment_without_flags(self, monkeypatch) -> None:
        monkeypatch.setenv("SDSWATCH_TENANT_ID", "tenant")
        settings = cli.build_settings(make_args())
        assert settings.tenant_id == "tenant"
        assert settings.refresh_ms == 5000

    def test_flags_override_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("SDSWATCH_RESOURCE", "http://env")
        settings = cli.build_settings(make_args(resource="http://flag", refresh=1000, events=10))
        assert settings.resource == "http://flag"
        assert settings.refresh_ms == 1000
        assert settings.event_count == 10

    def test_invalid_flag_raises(self) -> None:
        with pytest.raises(ValueError):
            cli.build_settings(make_args(events=0))


class TestListCommands:
    """Tests for the listing subcommands."""

    def test_list_namespaces(self, patched_client, settings, capsys) -> None:
        assert cli.list_namespaces(settings) == 0
        assert capsys.readouterr().out.splitlines() == ["Id"]
        assert patched_client.closed

    def test_list_namespaces_error(self, patched_client, settings, capsys) -> None:
        patched_client.errors["list_namespaces"] = TransportError("Error getting namespaces")
        assert cli.list_namespaces(settings) == 1
        assert "Error getting namespaces" in capsys.readouterr().out

    def test_list_streams_shows_index_key(self, patched_client, settings, capsys) -> None:
        patched_client.streams.append(StreamRef(id="Other", type_id="Missing"))

        assert cli.list_streams(settings, "Id", None) == 0

        assert capsys.readouterr().out.splitlines() == ["StreamId\tTypeId\tkey=Timestamp"]
        assert patched_client.calls_to("list_streams")[0][1] is None

    def test_list_streams_all(self, patched_client, settings, capsys) -> None:
        patched_client.streams.append(StreamRef(id="Other", type_id="Missing"))

        cli.list_streams(settings, "Id", "S", show_all=True)

        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == "Other\tMissing\t(not chartable)"

    def test_list_streams_unknown_namespace(self, patched_client, settings, capsys) -> None:
        assert cli.list_streams(settings, "Nope", None) == 1
        assert "Unknown namespace: Nope" in capsys.readouterr().out


class TestMain:
    """Tests for argument dispatch."""

    def test_namespaces_command(self, monkeypatch) -> None:
        seen = []
        monkeypatch.setattr(cli, "list_namespaces", lambda settings: seen.append(settings.tenant_id) or 0)
        monkeypatch.setattr("sys.argv", ["sdswatch", "--tenant", "tenant", "namespaces"])

        with pytest.raises(SystemExit) as excinfo:
            cli.main()

        assert excinfo.value.code == 0
        assert seen == ["tenant"]

    def test_streams_command(self, monkeypatch) -> None:
        seen = []

        def fake_list_streams(settings, namespace_id, query, show_all=False):
            seen.append((namespace_id, query, show_all))
            return 0

        monkeypatch.setattr(cli, "list_streams", fake_list_streams)
        monkeypatch.setattr("sys.argv", ["sdswatch", "streams", "Id", "--query", "Str", "--all"])

        with pytest.raises(SystemExit):
            cli.main()

        assert seen == [("Id", "Str", True)]

    def test_default_command_starts_tui(self, monkeypatch) -> None:
        started = []
        monkeypatch.setattr(cli, "run_tui", lambda settings: started.append(settings))
        monkeypatch.setattr("sys.argv", ["sdswatch"])

        cli.main()

        assert len(started) == 1

    def test_tui_flags(self, monkeypatch) -> None:
        started = []
        monkeypatch.setattr(cli, "run_tui", lambda settings: started.append(settings))
        monkeypatch.setattr("sys.argv", ["sdswatch", "tui", "--refresh", "1000", "--events", "20"])

        cli.main()

        assert started[0].refresh_ms == 1000
        assert started[0].event_count == 20

    def test_invalid_settings_exit(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.argv", ["sdswatch", "tui", "--events", "0"])

        with pytest.raises(SystemExit) as excinfo:
            cli.main()

        assert excinfo.value.code == 1
        assert "Invalid settings" in capsys.readouterr().out
