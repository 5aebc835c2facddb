"""Route top-level backend notifications to the right decoder."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Literal, Sequence

from grid_engine.config import NOTIFICATION_POLICIES
from grid_engine.runtime import telemetry

from .directives import Directive, ToggleFileFinder
from .errors import ProtocolError, UnknownNotificationError
from .translator import RedrawTranslator

NotificationPolicy = Literal["strict", "lenient"]
CommandHandler = Callable[[Sequence[Any]], List[Directive]]


def _file_finder(args: Sequence[Any]) -> List[Directive]:
    return [ToggleFileFinder(args=tuple(args))]


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "FileFinder": _file_finder,
}


class NotificationRouter:
    """Dispatches ``redraw``, ``command`` and ``autocmd`` notifications.

    Any other category is unknown. Under the ``strict`` policy that raises
    :class:`UnknownNotificationError` and the host is expected to end the
    session; ``lenient`` logs it and carries on.
    """

    def __init__(
        self,
        translator: RedrawTranslator | None = None,
        *,
        policy: NotificationPolicy = "strict",
        logger_name: str | None = None,
    ) -> None:
        if policy not in NOTIFICATION_POLICIES:
            raise ValueError(f"Unknown notification policy '{policy}'")
        self._logger_name = logger_name
        self.translator = translator or RedrawTranslator(logger_name=logger_name)
        self.policy = policy

    def route(self, method: str, args: Sequence[Any]) -> List[Directive]:
        if method == "redraw":
            return self.translator.translate(args)
        if method == "command":
            return self._command(args)
        if method == "autocmd":
            telemetry.record_event(
                "protocol.autocmd",
                data={"args": list(args)},
                logger_name=self._logger_name,
            )
            return []

        telemetry.record_event(
            "protocol.unknown_notification",
            level="error" if self.policy == "strict" else "warning",
            data={"method": method, "policy": self.policy},
            logger_name=self._logger_name,
        )
        if self.policy == "strict":
            raise UnknownNotificationError(method, args)
        return []

    def _command(self, args: Sequence[Any]) -> List[Directive]:
        if not args or not isinstance(args[0], (list, tuple)) or not args[0]:
            raise ProtocolError("command notification without a name", event="command")
        name, *command_args = args[0]
        handler = _COMMAND_HANDLERS.get(str(name))
        if handler is None:
            telemetry.record_event(
                "protocol.unknown_command",
                data={"name": name, "args": command_args},
                logger_name=self._logger_name,
            )
            return []
        return handler(command_args)


SUPPORTED_COMMANDS = frozenset(_COMMAND_HANDLERS)


__all__ = [
    "NotificationRouter",
    "NotificationPolicy",
    "NOTIFICATION_POLICIES",
    "SUPPORTED_COMMANDS",
]
