"""Directive records produced by the redraw translator.

Each backend event maps to one of a closed set of frozen records tagged with
a :class:`DirectiveKind`. :class:`Unrecognized` carries wire names the
translator does not know, for hosts that want to see them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Union


class DirectiveKind(str, Enum):
    APPEND_TEXT = "append_text"
    MOVE_CURSOR = "move_cursor"
    SET_HIGHLIGHT = "set_highlight"
    CLEAR_ALL = "clear_all"
    CLEAR_TO_EOL = "clear_to_eol"
    SCROLL = "scroll"
    SET_SCROLL_REGION = "set_scroll_region"
    RESIZE = "resize"
    UPDATE_COLOR = "update_color"
    SET_MODE_INFO = "set_mode_info"
    CHANGE_MODE = "change_mode"
    SET_BUSY = "set_busy"
    SET_MOUSE = "set_mouse"
    BELL = "bell"
    SET_TITLE = "set_title"
    SET_ICON = "set_icon"
    FLUSH = "flush"
    TOGGLE_FILE_FINDER = "toggle_file_finder"
    UNRECOGNIZED = "unrecognized"


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class AppendText:
    kind: ClassVar[DirectiveKind] = DirectiveKind.APPEND_TEXT

    runs: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(self.runs)


@dataclass(frozen=True, slots=True)
class MoveCursor:
    kind: ClassVar[DirectiveKind] = DirectiveKind.MOVE_CURSOR

    line: int
    col: int


@dataclass(frozen=True, slots=True)
class SetHighlight:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_HIGHLIGHT

    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", _freeze(self.attrs))


@dataclass(frozen=True, slots=True)
class ClearAll:
    kind: ClassVar[DirectiveKind] = DirectiveKind.CLEAR_ALL


@dataclass(frozen=True, slots=True)
class ClearToEndOfLine:
    kind: ClassVar[DirectiveKind] = DirectiveKind.CLEAR_TO_EOL


@dataclass(frozen=True, slots=True)
class Scroll:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SCROLL

    count: int


@dataclass(frozen=True, slots=True)
class SetScrollRegion:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_SCROLL_REGION

    top: int
    bottom: int
    left: int
    right: int


@dataclass(frozen=True, slots=True)
class Resize:
    kind: ClassVar[DirectiveKind] = DirectiveKind.RESIZE

    rows: int
    cols: int


@dataclass(frozen=True, slots=True)
class UpdateColor:
    kind: ClassVar[DirectiveKind] = DirectiveKind.UPDATE_COLOR

    role: str  # fg, bg or sp
    value: int


@dataclass(frozen=True, slots=True)
class SetModeInfo:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_MODE_INFO

    modes: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: _freeze(info) for name, info in self.modes.items()}
        object.__setattr__(self, "modes", MappingProxyType(frozen))


@dataclass(frozen=True, slots=True)
class ChangeMode:
    kind: ClassVar[DirectiveKind] = DirectiveKind.CHANGE_MODE

    name: str


@dataclass(frozen=True, slots=True)
class SetBusy:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_BUSY

    busy: bool


@dataclass(frozen=True, slots=True)
class SetMouse:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_MOUSE

    enabled: bool


@dataclass(frozen=True, slots=True)
class Bell:
    kind: ClassVar[DirectiveKind] = DirectiveKind.BELL

    visual: bool = False


@dataclass(frozen=True, slots=True)
class SetTitle:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_TITLE

    text: str


@dataclass(frozen=True, slots=True)
class SetIcon:
    kind: ClassVar[DirectiveKind] = DirectiveKind.SET_ICON

    text: str


@dataclass(frozen=True, slots=True)
class Flush:
    kind: ClassVar[DirectiveKind] = DirectiveKind.FLUSH


@dataclass(frozen=True, slots=True)
class ToggleFileFinder:
    kind: ClassVar[DirectiveKind] = DirectiveKind.TOGGLE_FILE_FINDER

    args: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Unrecognized:
    kind: ClassVar[DirectiveKind] = DirectiveKind.UNRECOGNIZED

    name: str
    args: tuple[Any, ...] = ()


Directive = Union[
    AppendText,
    MoveCursor,
    SetHighlight,
    ClearAll,
    ClearToEndOfLine,
    Scroll,
    SetScrollRegion,
    Resize,
    UpdateColor,
    SetModeInfo,
    ChangeMode,
    SetBusy,
    SetMouse,
    Bell,
    SetTitle,
    SetIcon,
    Flush,
    ToggleFileFinder,
    Unrecognized,
]


__all__ = [
    "DirectiveKind",
    "Directive",
    "AppendText",
    "MoveCursor",
    "SetHighlight",
    "ClearAll",
    "ClearToEndOfLine",
    "Scroll",
    "SetScrollRegion",
    "Resize",
    "UpdateColor",
    "SetModeInfo",
    "ChangeMode",
    "SetBusy",
    "SetMouse",
    "Bell",
    "SetTitle",
    "SetIcon",
    "Flush",
    "ToggleFileFinder",
    "Unrecognized",
]
