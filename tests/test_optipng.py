from __future__ import annotations

from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions
from weavesmith.hooks.optipng import hook_optipng, optipng_arguments


def test_non_png_extension_warns_once(make_context, emitter) -> None:
    context = make_context(tools=["optipng"])
    options = ChunkOptions(label="plot", fig_ext="jpg", fig_num=1, optipng=True)

    assert hook_optipng(HookPhase.AFTER, options, context) is None
    assert context.runner.calls == []
    assert len(emitter.warnings) == 1
    assert "PNG" in emitter.warnings[0]


def test_missing_optipng_warns_once(make_context, emitter) -> None:
    context = make_context()

    hook_optipng(HookPhase.AFTER, ChunkOptions(fig_num=1, optipng=True), context)

    assert context.runner.calls == []
    assert emitter.warnings == ["Cannot find optipng; please install it and put it in PATH"]


def test_runs_once_per_figure_with_extra_arguments(make_context, emitter) -> None:
    context = make_context(tools=["optipng"])
    options = ChunkOptions(label="plot", fig_path="figs/", fig_num=2, optipng="-o7 -quiet")

    hook_optipng(HookPhase.AFTER, options, context)

    assert context.runner.calls == [
        ["optipng", "-o7", "-quiet", "figs/plot1.png"],
        ["optipng", "-o7", "-quiet", "figs/plot2.png"],
    ]
    assert emitter.paths("png_optimise") == ["figs/plot1.png", "figs/plot2.png"]
    assert emitter.warnings == []


def test_extension_check_is_case_insensitive(make_context) -> None:
    context = make_context(tools=["optipng"])

    hook_optipng(HookPhase.AFTER, ChunkOptions(label="a", fig_ext="PNG", optipng=True), context)

    assert context.runner.calls == [["optipng", "figure/a.png"]]


def test_before_phase_is_a_no_op(make_context, emitter) -> None:
    context = make_context(tools=["optipng"])

    hook_optipng(HookPhase.BEFORE, ChunkOptions(fig_ext="jpg", optipng=True), context)

    assert context.runner.calls == []
    assert emitter.warnings == []


def test_failed_run_does_not_stop_remaining_figures(make_context, emitter) -> None:
    context = make_context(tools=["optipng"], fail=["figure/a1.png"])

    hook_optipng(HookPhase.AFTER, ChunkOptions(label="a", fig_num=2, optipng=True), context)

    assert [call[-1] for call in context.runner.calls] == ["figure/a1.png", "figure/a2.png"]
    assert len(emitter.warnings) == 1
    assert "figure/a1.png" in emitter.warnings[0]


def test_optipng_arguments() -> None:
    assert optipng_arguments("-o7 -strip all") == ["-o7", "-strip", "all"]
    assert optipng_arguments(True) == []
    assert optipng_arguments(None) == []
