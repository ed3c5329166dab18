"""Tests for the command-line entry point."""

import pytest

from personachat import cli
from personachat.stores.seed import ECHO_ID


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MODE_FLAG_PATH", str(tmp_path / "flag" / "demo_mode"))
    monkeypatch.setenv("BACKEND_URL", "http://127.0.0.1:9")
    return tmp_path


def test_mode_toggle(isolated_env, capsys):
    assert cli.main(["mode"]) == 0
    assert "live" in capsys.readouterr().out

    assert cli.main(["mode", "demo"]) == 0
    assert (isolated_env / "flag" / "demo_mode").read_text() == "true"
    assert "demo" in capsys.readouterr().out


def test_demo_characters(capsys):
    assert cli.main(["--mode", "demo", "characters"]) == 0
    assert "Zara" in capsys.readouterr().out


def test_persisted_flag_selects_demo(capsys):
    cli.main(["mode", "demo"])
    capsys.readouterr()

    assert cli.main(["history", ECHO_ID]) == 0
    assert "No conversation with Echo" in capsys.readouterr().out


def test_demo_send(capsys):
    assert cli.main(["--mode", "demo", "send", ECHO_ID, "Hello Echo"]) == 0
    assert "Hello Echo" in capsys.readouterr().out


def test_send_to_unknown_character_fails(capsys):
    assert cli.main(["--mode", "demo", "send", "ghost", "hello"]) == 1


def test_unreachable_backend_shows_empty_list(capsys):
    # Live store errors surface as empty results, never exceptions
    assert cli.main(["--mode", "live", "characters"]) == 0
