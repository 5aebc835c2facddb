"""Backend notification decoding and directive records."""

from .directives import (
    AppendText,
    Bell,
    ChangeMode,
    ClearAll,
    ClearToEndOfLine,
    Directive,
    DirectiveKind,
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
    ToggleFileFinder,
    Unrecognized,
    UpdateColor,
)
from .errors import ProtocolError, UnknownNotificationError
from .notifications import (
    NOTIFICATION_POLICIES,
    SUPPORTED_COMMANDS,
    NotificationPolicy,
    NotificationRouter,
)
from .translator import SUPPORTED_EVENTS, RedrawTranslator

__all__ = [
    "Directive",
    "DirectiveKind",
    "AppendText",
    "Bell",
    "ChangeMode",
    "ClearAll",
    "ClearToEndOfLine",
    "Flush",
    "MoveCursor",
    "Resize",
    "Scroll",
    "SetBusy",
    "SetHighlight",
    "SetIcon",
    "SetModeInfo",
    "SetMouse",
    "SetScrollRegion",
    "SetTitle",
    "ToggleFileFinder",
    "Unrecognized",
    "UpdateColor",
    "ProtocolError",
    "UnknownNotificationError",
    "NotificationRouter",
    "NotificationPolicy",
    "NOTIFICATION_POLICIES",
    "SUPPORTED_COMMANDS",
    "RedrawTranslator",
    "SUPPORTED_EVENTS",
]
