from __future__ import annotations

from pathlib import Path

import pytest

from weavesmith.core.devices import SceneFormat
from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions
from weavesmith.hooks.plot import hook_plot_custom
from weavesmith.hooks.scene import clean_html, hook_scene, hook_webgl, webgl_template
from weavesmith.renderers.rst import render_rst


class FakeScene:
    def __init__(self, *, fail_export: bool = False) -> None:
        self.windows: list[tuple[int, int, int, int]] = []
        self.written: list[tuple[str, str]] = []
        self.exports: list[dict[str, object]] = []
        self.fail_export = fail_export

    def resize(self, window: tuple[int, int, int, int]) -> None:
        self.windows.append(window)

    def snapshot(self, path: Path) -> None:
        path.write_bytes(b"png")
        self.written.append((str(path), "png"))

    def postscript(self, path: Path, fmt: SceneFormat) -> None:
        path.write_bytes(b"vector")
        self.written.append((str(path), fmt.value))

    def export_webgl(self, *, directory: Path, filename: Path, template: Path, prefix: str) -> None:
        self.exports.append(
            {
                "directory": directory,
                "filename": filename,
                "template": template.read_text(encoding="utf-8"),
                "prefix": prefix,
            }
        )
        if self.fail_export:
            raise RuntimeError("no WebGL support")
        filename.write_text(
            "<html>\n\n   <body>\n  <div id='scene'></div>\n\n</body>\n</html>\n",
            encoding="utf-8",
        )


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_scene_hook_without_scene_does_nothing(in_tmp, make_context) -> None:
    context = make_context()

    assert hook_scene(HookPhase.AFTER, ChunkOptions(scene=True), context) is None
    assert not (in_tmp / "figure").exists()


def test_scene_hook_snapshots_and_embeds(in_tmp, make_context) -> None:
    scene = FakeScene()
    pauses: list[float] = []
    context = make_context(scene_provider=lambda: scene, sleep=pauses.append)
    context.config.resize_delay = 0.5
    options = ChunkOptions(label="surface", dpi=100, fig_width=5, fig_height=4, scene=True)

    result = hook_scene(HookPhase.AFTER, options, context)

    assert scene.windows == [(100, 100, 600, 500)]
    assert pauses == [0.5]
    assert scene.written == [("figure/surface.png", "png")]
    assert result == "figure/surface.png"


def test_scene_formats_are_deduplicated(in_tmp, make_context) -> None:
    scene = FakeScene()
    context = make_context(scene_provider=lambda: scene)
    options = ChunkOptions(
        label="s", dev=["postscript", "cairo_ps", "pdf", "png", "jpeg"], scene=True
    )

    result = hook_scene(HookPhase.AFTER, options, context)

    assert scene.written == [
        ("figure/s.eps", "eps"),
        ("figure/s.pdf", "pdf"),
        ("figure/s.png", "png"),
    ]
    assert result == "figure/s.eps"


def test_scene_hook_goes_through_plot_hook(in_tmp, make_context) -> None:
    scene = FakeScene()
    context = render_rst(make_context(scene_provider=lambda: scene))
    options = context.make_options(label="surface", fig_cap="A surface", scene=True)

    result = hook_scene(HookPhase.AFTER, options, context)

    assert result is not None
    assert result.startswith("\n.. figure:: figure/surface.png\n")
    assert ":alt: A surface" in result


def test_scene_hook_before_phase_is_a_no_op(in_tmp, make_context) -> None:
    scene = FakeScene()
    context = make_context(scene_provider=lambda: scene)

    assert hook_scene(HookPhase.BEFORE, ChunkOptions(scene=True), context) is None
    assert scene.windows == []


def test_webgl_hook_exports_cleaned_html(in_tmp, make_context) -> None:
    scene = FakeScene()
    context = make_context(scene_provider=lambda: scene)
    options = ChunkOptions(label="3d-plot", webgl=True)

    result = hook_webgl(HookPhase.AFTER, options, context)

    assert result == "<html>\n<body>\n<div id='scene'></div>\n</body>\n</html>"
    (export,) = scene.exports
    assert export["prefix"] == "_3d_plot"
    assert export["template"] == webgl_template("_3d_plot")
    assert export["directory"] == in_tmp
    assert list(in_tmp.iterdir()) == []


def test_webgl_failure_is_a_warning_and_cleans_up(in_tmp, make_context, emitter) -> None:
    scene = FakeScene(fail_export=True)
    context = make_context(scene_provider=lambda: scene)

    assert hook_webgl(HookPhase.AFTER, ChunkOptions(label="w", webgl=True), context) is None
    assert len(emitter.warnings) == 1
    assert "no WebGL support" in emitter.warnings[0]
    assert list(in_tmp.iterdir()) == []


def test_webgl_template() -> None:
    assert webgl_template("_a") == "%_aWebGL%\n<script>_awebGLStart();</script>\n"


def test_clean_html() -> None:
    assert clean_html("  <p>\n\n\t<b>x</b>\ntext\n") == "<p>\n<b>x</b>\ntext"


def test_plot_custom_hides_figures(make_context) -> None:
    context = make_context()
    options = ChunkOptions(label="p", fig_num=2, fig_show="hide", plot_custom=True)

    assert hook_plot_custom(HookPhase.AFTER, options, context) is None


def test_plot_custom_treats_zero_figures_as_one(make_context) -> None:
    context = make_context()
    options = ChunkOptions(label="p", fig_num=0, plot_custom=True)

    assert hook_plot_custom(HookPhase.AFTER, options, context) == "figure/p.png"


def test_plot_custom_renders_each_figure(make_context) -> None:
    context = render_rst(make_context())
    options = context.make_options(
        label="p", fig_num=3, fig_cap=["one", "two"], plot_custom=True
    )

    result = hook_plot_custom(HookPhase.AFTER, options, context)

    assert result is not None
    assert result.count(".. figure::") == 3
    for number, caption in ((1, "one"), (2, "two"), (3, "one")):
        assert f".. figure:: figure/p{number}.png\n" in result
        assert f":alt: {caption}" in result
