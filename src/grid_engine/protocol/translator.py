"""Translate ``redraw`` event batches into grid directives."""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from grid_engine.runtime import telemetry

from .directives import (
    AppendText,
    Bell,
    ChangeMode,
    ClearAll,
    ClearToEndOfLine,
    Directive,
    Flush,
    MoveCursor,
    Resize,
    Scroll,
    SetBusy,
    SetHighlight,
    SetIcon,
    SetModeInfo,
    SetMouse,
    SetScrollRegion,
    SetTitle,
    Unrecognized,
    UpdateColor,
)
from .errors import ProtocolError

ArgumentLists = Sequence[Sequence[Any]]
EventHandler = Callable[[str, ArgumentLists], Optional[Directive]]


class RedrawTranslator:
    """Stateless per-batch translator.

    A batch is a sequence of events shaped ``[name, args, args, ...]`` where
    each ``args`` is one argument list of the event. Unknown names are logged
    and skipped; with ``keep_unrecognized`` they come back as
    :class:`Unrecognized` directives instead of disappearing.
    """

    def __init__(
        self, *, keep_unrecognized: bool = False, logger_name: str | None = None
    ) -> None:
        self.keep_unrecognized = keep_unrecognized
        self._logger_name = logger_name

    def translate(self, events: Iterable[Sequence[Any]]) -> List[Directive]:
        batch = list(events)
        directives: List[Directive] = []
        with telemetry.span(
            "protocol::redraw",
            logger_name=self._logger_name,
            metadata={"events": len(batch)},
        ) as handle:
            for event in batch:
                if not event or not isinstance(event[0], str):
                    raise ProtocolError("event without a name", args=event)
                name, arg_lists = event[0], event[1:]
                handler = _EVENT_HANDLERS.get(name)
                if handler is None:
                    self._unknown_event(name, arg_lists, directives)
                    continue
                directive = handler(name, arg_lists)
                if directive is not None:
                    directives.append(directive)
            handle.add_metadata("directives", len(directives))
        return directives

    def _unknown_event(
        self, name: str, arg_lists: ArgumentLists, directives: List[Directive]
    ) -> None:
        telemetry.record_event(
            "protocol.unknown_event",
            data={"name": name, "args": list(arg_lists)},
            logger_name=self._logger_name,
        )
        if self.keep_unrecognized:
            directives.append(Unrecognized(name=name, args=tuple(arg_lists)))


def _first_args(name: str, arg_lists: ArgumentLists, count: int) -> Sequence[Any]:
    if not arg_lists:
        raise ProtocolError(f"'{name}' without arguments", event=name)
    args = arg_lists[0]
    if not isinstance(args, (list, tuple)) or len(args) < count:
        raise ProtocolError(
            f"'{name}' expects {count} argument(s), got {args!r}",
            event=name,
            args=args,
        )
    return args


def _int_arg(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolError(f"'{name}' expects an integer, got {value!r}", event=name)
    return value


def _put(name: str, arg_lists: ArgumentLists) -> Optional[Directive]:
    if not arg_lists:
        return None
    runs = []
    for args in arg_lists:
        if isinstance(args, str):
            runs.append(args)
        elif isinstance(args, (list, tuple)) and all(isinstance(c, str) for c in args):
            runs.append("".join(args))
        else:
            raise ProtocolError(f"'{name}' run is not text: {args!r}", event=name)
    return AppendText(runs=tuple(runs))


def _cursor_goto(name: str, arg_lists: ArgumentLists) -> Directive:
    row, col = _first_args(name, arg_lists, 2)[:2]
    return MoveCursor(line=_int_arg(name, row), col=_int_arg(name, col))


def _highlight_set(name: str, arg_lists: ArgumentLists) -> Directive:
    # [[{...}], [], [{...}]] -> one mapping, later keys win
    merged: Dict[str, Any] = {}
    for args in arg_lists:
        for attrs in args:
            if not isinstance(attrs, Mapping):
                raise ProtocolError(
                    f"'{name}' expects attribute maps, got {attrs!r}", event=name
                )
            merged.update(attrs)
    return SetHighlight(attrs=merged)


def _scroll(name: str, arg_lists: ArgumentLists) -> Directive:
    count = _first_args(name, arg_lists, 1)[0]
    return Scroll(count=_int_arg(name, count))


def _set_scroll_region(name: str, arg_lists: ArgumentLists) -> Directive:
    top, bottom, left, right = (
        _int_arg(name, value) for value in _first_args(name, arg_lists, 4)[:4]
    )
    return SetScrollRegion(top=top, bottom=bottom, left=left, right=right)


def _resize(name: str, arg_lists: ArgumentLists) -> Directive:
    # The backend sends [width, height].
    cols, rows = _first_args(name, arg_lists, 2)[:2]
    return Resize(rows=_int_arg(name, rows), cols=_int_arg(name, cols))


def _update_color(name: str, arg_lists: ArgumentLists, *, role: str) -> Directive:
    value = _first_args(name, arg_lists, 1)[0]
    return UpdateColor(role=role, value=_int_arg(name, value))


def _mode_info_set(name: str, arg_lists: ArgumentLists) -> Directive:
    descriptors = _first_args(name, arg_lists, 2)[1]
    if not isinstance(descriptors, (list, tuple)):
        raise ProtocolError(f"'{name}' expects a list of modes", event=name)
    modes: Dict[str, Mapping[str, Any]] = {}
    for info in descriptors:
        if not isinstance(info, Mapping) or "name" not in info:
            raise ProtocolError(f"'{name}' mode without a name: {info!r}", event=name)
        modes[str(info["name"])] = info
    return SetModeInfo(modes=modes)


def _mode_change(name: str, arg_lists: ArgumentLists) -> Directive:
    return ChangeMode(name=str(_first_args(name, arg_lists, 1)[0]))


def _text_arg(name: str, arg_lists: ArgumentLists) -> str:
    return str(_first_args(name, arg_lists, 1)[0])


def _constant(directive: Directive) -> EventHandler:
    return lambda _name, _arg_lists: directive


_EVENT_HANDLERS: Dict[str, EventHandler] = {
    "put": _put,
    "cursor_goto": _cursor_goto,
    "highlight_set": _highlight_set,
    "clear": _constant(ClearAll()),
    "eol_clear": _constant(ClearToEndOfLine()),
    "scroll": _scroll,
    "set_scroll_region": _set_scroll_region,
    "resize": _resize,
    "update_fg": partial(_update_color, role="fg"),
    "update_bg": partial(_update_color, role="bg"),
    "update_sp": partial(_update_color, role="sp"),
    "mode_info_set": _mode_info_set,
    "mode_change": _mode_change,
    "busy_start": _constant(SetBusy(busy=True)),
    "busy_stop": _constant(SetBusy(busy=False)),
    "mouse_on": _constant(SetMouse(enabled=True)),
    "mouse_off": _constant(SetMouse(enabled=False)),
    "bell": _constant(Bell(visual=False)),
    "visual_bell": _constant(Bell(visual=True)),
    "set_title": lambda name, arg_lists: SetTitle(text=_text_arg(name, arg_lists)),
    "set_icon": lambda name, arg_lists: SetIcon(text=_text_arg(name, arg_lists)),
    "flush": _constant(Flush()),
}

SUPPORTED_EVENTS = frozenset(_EVENT_HANDLERS)


__all__ = ["RedrawTranslator", "SUPPORTED_EVENTS"]
