"""Tests for Zellij layout discovery."""
import pytest

from sessmux.layouts import resolve_layout, scan_layouts


@pytest.fixture
def layout_folder(tmp_path):
    folder = tmp_path / "layouts"
    folder.mkdir()
    for name in ("web.kdl", "dev.kdl", "notes.txt"):
        (folder / name).write_text("layout {}")
    (folder / "nested").mkdir()
    (folder / "nested" / "deep.kdl").write_text("layout {}")
    return folder


def test_scan_layouts_sorted_by_name(layout_folder):
    layouts = scan_layouts(layout_folder)

    assert list(layouts) == ["dev", "web"]
    assert layouts["dev"] == (layout_folder / "dev.kdl").resolve()


def test_scan_layouts_missing_folder(tmp_path):
    assert scan_layouts(tmp_path / "missing") == {}


def test_scan_layouts_unset():
    assert scan_layouts(None) == {}


def test_resolve_layout_by_index_and_name(layout_folder):
    layouts = scan_layouts(layout_folder)

    assert resolve_layout("2", layouts) == layouts["web"]
    assert resolve_layout("dev", layouts) == layouts["dev"]


@pytest.mark.parametrize("choice", ["", "  ", "3", "0", "missing"])
def test_resolve_layout_no_match(layout_folder, choice):
    assert resolve_layout(choice, scan_layouts(layout_folder)) is None
