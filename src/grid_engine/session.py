"""Session façade wiring router, translator and applier around one grid."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from grid_engine.applier import DirectiveApplier, UIState
from grid_engine.config import EngineConfig
from grid_engine.grid import Grid
from grid_engine.protocol import Directive, NotificationRouter, RedrawTranslator
from grid_engine.runtime import telemetry

FlushCallback = Callable[["RedrawSession"], None]


class RedrawSession:
    """Everything attached to one viewport of one backend connection.

    Nothing is persisted; :meth:`reset` rebuilds the grid from scratch on
    reattachment.
    """

    def __init__(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        *,
        config: Optional[EngineConfig] = None,
        keep_unrecognized: bool = False,
        logger_name: str | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._logger_name = logger_name
        self._flush_callbacks: List[FlushCallback] = []
        self.router = NotificationRouter(
            RedrawTranslator(
                keep_unrecognized=keep_unrecognized, logger_name=logger_name
            ),
            policy=self.config.notification_policy,  # type: ignore[arg-type]
            logger_name=logger_name,
        )
        self.reset(
            self.config.rows if rows is None else rows,
            self.config.cols if cols is None else cols,
        )

    @property
    def grid(self) -> Grid:
        return self.applier.grid

    @property
    def state(self) -> UIState:
        return self.applier.state

    def on_flush(self, callback: FlushCallback) -> None:
        self._flush_callbacks.append(callback)

    def reset(self, rows: int, cols: int) -> None:
        self.applier = DirectiveApplier(
            Grid(rows, cols, logger_name=self._logger_name),
            UIState(),
            desync_policy=self.config.desync_policy,
            logger_name=self._logger_name,
        )
        telemetry.record_event(
            "session.reset",
            data={"rows": rows, "cols": cols},
            logger_name=self._logger_name,
        )

    def handle_notification(self, method: str, args: Sequence[Any]) -> List[Directive]:
        """Route one notification, apply its directives and fire flush hooks."""

        directives = self.router.route(method, args)
        for directive in directives:
            if self.applier.apply(directive):
                for callback in list(self._flush_callbacks):
                    callback(self)
        return directives

    def snapshot(self) -> str:
        return self.grid.get_text(self.state.cursor)


__all__ = ["RedrawSession", "FlushCallback"]
