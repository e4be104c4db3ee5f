from __future__ import annotations

import re

import pytest

from weavesmith.core.devices import GraphicsDevice, SceneFormat, dev2ext
from weavesmith.core.options import ChunkOptions
from weavesmith.core.paths import all_figs, fig_path, sanitize_identifier, valid_path


IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def test_single_figure_has_no_index() -> None:
    options = ChunkOptions(label="fig", fig_path="out/", fig_num=1)
    assert all_figs(options, "png") == ["out/fig.png"]


def test_multiple_figures_are_numbered_in_order() -> None:
    options = ChunkOptions(label="fig", fig_path="out/", fig_num=3)
    assert all_figs(options, "png") == ["out/fig1.png", "out/fig2.png", "out/fig3.png"]


@pytest.mark.parametrize("count", [0, 1, 2, 5, 12])
def test_path_count_matches_figure_count(count: int) -> None:
    options = ChunkOptions(label="plot", fig_num=count)
    paths = all_figs(options, "pdf")
    assert len(paths) == max(count, 1)
    assert len(set(paths)) == len(paths)
    assert paths == all_figs(options, "pdf")


def test_explicit_count_overrides_recorded_count() -> None:
    options = ChunkOptions(label="plot", fig_num=4)
    assert all_figs(options, "png", 1) == ["figure/plot.png"]


def test_label_is_made_filesystem_safe() -> None:
    options = ChunkOptions(label="my plot!")
    assert fig_path(".png", options) == "figure/my_plot_.png"
    assert valid_path("figs/", "a/b-c d") == "figs/a/b-c_d"


def test_extension_falls_back_to_device_default() -> None:
    assert ChunkOptions(dev="pdf").extension == "pdf"
    assert ChunkOptions(dev="postscript", fig_ext="none").extension == "eps"
    assert ChunkOptions(dev="png", fig_ext=".jpg").extension == "jpg"
    assert all_figs(ChunkOptions(label="a", dev="svg")) == ["figure/a.svg"]


def test_dev2ext_lookup() -> None:
    assert dev2ext("postscript") == "eps"
    assert dev2ext(GraphicsDevice.CAIRO_PDF) == "pdf"
    assert dev2ext("tikz") == "tex"
    with pytest.raises(ValueError):
        dev2ext("not-a-device")


def test_scene_formats_follow_devices() -> None:
    assert GraphicsDevice.POSTSCRIPT.scene_format is SceneFormat.EPS
    assert GraphicsDevice.PDF.scene_format is SceneFormat.PDF
    assert GraphicsDevice.JPEG.scene_format is SceneFormat.PNG


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("3d-plot!", "_3d_plot_"),
        ("plot", "plot"),
        ("_private", "_private"),
        ("scene 1", "scene_1"),
        ("", "_"),
        ("é", "_"),
    ],
)
def test_sanitize_identifier(label: str, expected: str) -> None:
    identifier = sanitize_identifier(label)
    assert identifier == expected
    assert IDENTIFIER.match(identifier)
