"""Unit tests for the persisted demo/live flag."""

from personachat.mode import ModeFlag
from personachat.schemas import DataMode


def test_missing_flag_means_live(tmp_path):
    assert ModeFlag(tmp_path / "absent").read() == DataMode.LIVE


def test_enable_and_disable_demo(tmp_path):
    flag = ModeFlag(tmp_path / "nested" / "demo_mode")

    flag.enable_demo()
    assert flag.path.read_text() == "true"
    assert flag.read() == DataMode.DEMO

    flag.disable_demo()
    assert flag.path.read_text() == "false"
    assert flag.read() == DataMode.LIVE


def test_unrecognised_content_means_live(tmp_path):
    path = tmp_path / "demo_mode"
    path.write_text("yes please")
    assert ModeFlag(path).read() == DataMode.LIVE


def test_flag_tolerates_whitespace_and_case(tmp_path):
    path = tmp_path / "demo_mode"
    path.write_text("TRUE\n")
    assert ModeFlag(path).read() == DataMode.DEMO


def test_unreadable_flag_means_live(tmp_path):
    # A directory in place of the file raises an OSError on read
    path = tmp_path / "demo_mode"
    path.mkdir()
    assert ModeFlag(path).read() == DataMode.LIVE
