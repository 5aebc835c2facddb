"""Hook-based adapter that pushes grid snapshots into a Textual host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from grid_engine.protocol import Directive
from grid_engine.session import RedrawSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_grid: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    update_title: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualGridAdapter:
    """Feeds notifications to a session and repaints on every flush."""

    def __init__(self, session: RedrawSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._last_title = session.state.title
        session.on_flush(self._on_flush)
        self._refresh_grid()

    def handle_notification(self, method: str, args: Sequence[Any]) -> List[Directive]:
        self._log_state("notification ->", method=method, size=len(args))
        directives = self.session.handle_notification(method, args)
        self._log_state("directives <-", count=len(directives))
        return directives

    def _on_flush(self, session: RedrawSession) -> None:
        del session
        self._refresh_grid()
        self.hooks.update_status(self.status_line())
        title = self.session.state.title
        if title != self._last_title:
            self._last_title = title
            self.hooks.update_title(title)

    def status_line(self) -> str:
        state = self.session.state
        parts = [
            f"mode={state.mode}",
            f"cursor={state.cursor.line}:{state.cursor.col}",
            f"size={self.session.grid.rows}x{self.session.grid.cols}",
        ]
        if state.busy:
            parts.append("busy")
        if state.needs_resync:
            parts.append("desync")
        return " ".join(parts)

    def _refresh_grid(self) -> None:
        self.hooks.update_grid(self.session.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.session.state
        return {
            "mode": state.mode,
            "cursor": (state.cursor.line, state.cursor.col),
            "flushes": state.flush_count,
        }


__all__ = ["TextualGridAdapter", "TextualUIHooks"]
