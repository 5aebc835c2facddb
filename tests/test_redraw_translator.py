from __future__ import annotations

from typing import Any

import pytest

from grid_engine.protocol import (
    AppendText,
    Bell,
    ChangeMode,
    ClearAll,
    ClearToEndOfLine,
    DirectiveKind,
    Flush,
    MoveCursor,
    ProtocolError,
    RedrawTranslator,
    Resize,
    Scroll,
    SetBusy,
    SetIcon,
    SetMouse,
    SetScrollRegion,
    SetTitle,
    Unrecognized,
    UpdateColor,
)


def translate(*events: list[Any], keep_unrecognized: bool = False) -> list[Any]:
    return RedrawTranslator(keep_unrecognized=keep_unrecognized).translate(events)


def test_highlight_set_merges_left_to_right() -> None:
    (directive,) = translate(["highlight_set", [{"bold": True}], [], [{"fg": 5}]])

    assert directive.kind is DirectiveKind.SET_HIGHLIGHT
    assert directive.attrs == {"bold": True, "fg": 5}


def test_highlight_set_later_keys_win() -> None:
    (directive,) = translate(["highlight_set", [{"fg": 1, "bold": True}], [{"fg": 2}]])

    assert directive.attrs == {"fg": 2, "bold": True}


def test_resize_swaps_width_and_height() -> None:
    assert translate(["resize", [80, 24]]) == [Resize(rows=24, cols=80)]


def test_put_collects_runs() -> None:
    (directive,) = translate(["put", ["h"], ["i"], ["!"]])

    assert directive == AppendText(runs=("h", "i", "!"))
    assert directive.text == "hi!"


def test_put_without_arguments_is_dropped() -> None:
    assert translate(["put"]) == []


def test_unknown_event_is_skipped_and_batch_continues() -> None:
    directives = translate(
        ["cursor_goto", [1, 2]],
        ["no_such_event", [1]],
        ["clear", []],
    )

    assert directives == [MoveCursor(line=1, col=2), ClearAll()]


def test_unknown_event_kept_as_fallback_variant() -> None:
    directives = translate(["grid_line", [1, 2, 3]], keep_unrecognized=True)

    assert directives == [Unrecognized(name="grid_line", args=([1, 2, 3],))]


def test_mode_info_set_keys_by_name() -> None:
    (directive,) = translate(
        [
            "mode_info_set",
            [
                True,
                [
                    {"name": "normal", "cursor_shape": "block"},
                    {"name": "insert", "cursor_shape": "vertical"},
                ],
            ],
        ]
    )

    assert set(directive.modes) == {"normal", "insert"}
    assert directive.modes["insert"]["cursor_shape"] == "vertical"


@pytest.mark.parametrize(
    ("event", "expected"),
    [
        (["eol_clear", []], ClearToEndOfLine()),
        (["scroll", [-3]], Scroll(count=-3)),
        (["set_scroll_region", [1, 10, 2, 20]], SetScrollRegion(1, 10, 2, 20)),
        (["update_fg", [16777215]], UpdateColor(role="fg", value=16777215)),
        (["update_bg", [0]], UpdateColor(role="bg", value=0)),
        (["update_sp", [255]], UpdateColor(role="sp", value=255)),
        (["mode_change", ["insert", 1]], ChangeMode(name="insert")),
        (["busy_start", []], SetBusy(busy=True)),
        (["busy_stop", []], SetBusy(busy=False)),
        (["mouse_on", []], SetMouse(enabled=True)),
        (["mouse_off", []], SetMouse(enabled=False)),
        (["bell", []], Bell(visual=False)),
        (["visual_bell", []], Bell(visual=True)),
        (["set_title", ["main.py"]], SetTitle(text="main.py")),
        (["set_icon", ["nvim"]], SetIcon(text="nvim")),
        (["flush", []], Flush()),
    ],
)
def test_single_event_translation(event: list[Any], expected: Any) -> None:
    assert translate(event) == [expected]


def test_batch_order_is_preserved() -> None:
    directives = translate(
        ["cursor_goto", [0, 0]],
        ["put", ["a"]],
        ["cursor_goto", [1, 0]],
        ["flush", []],
    )

    assert [directive.kind for directive in directives] == [
        DirectiveKind.MOVE_CURSOR,
        DirectiveKind.APPEND_TEXT,
        DirectiveKind.MOVE_CURSOR,
        DirectiveKind.FLUSH,
    ]


def test_malformed_arguments_raise_protocol_error() -> None:
    with pytest.raises(ProtocolError) as info:
        translate(["cursor_goto", [1]])

    assert info.value.event == "cursor_goto"


def test_non_integer_argument_raises_protocol_error() -> None:
    with pytest.raises(ProtocolError):
        translate(["scroll", ["up"]])


def test_event_without_name_raises_protocol_error() -> None:
    with pytest.raises(ProtocolError):
        translate([])
