"""Executable Textual app that replays recorded redraw notifications."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the viewer is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use grid_engine.adapters.textual.app"
    ) from exc

from grid_engine.adapters.replay import Notification, ReplayCursor, load_recording
from grid_engine.config import EngineConfig
from grid_engine.protocol import UnknownNotificationError
from grid_engine.runtime import telemetry
from grid_engine.session import RedrawSession

from .controller import TextualGridAdapter, TextualUIHooks


class GridReplayApp(App[None]):
    """Shows the grid after each replayed batch."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#grid-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("n", "step", "Next notification"),
        ("f", "step_flush", "Next flush"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self, notifications: Sequence[Notification], *, config: EngineConfig
    ) -> None:
        super().__init__()
        self.session = RedrawSession(config=config)
        self._grid_widget: Static | None = None
        self._status_widget: Static | None = None
        self.adapter = TextualGridAdapter(
            self.session,
            TextualUIHooks(
                update_grid=self._update_grid,
                update_status=self._update_status,
                update_title=self._update_title,
            ),
        )
        self.replay = ReplayCursor(notifications, self.adapter.handle_notification)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="grid-area"):
            self._grid_widget = Static(self.session.snapshot(), id="grid-view")
            yield self._grid_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def action_step(self) -> None:
        self._advance(self.replay.step)

    def action_step_flush(self) -> None:
        self._advance(self.replay.step_to_flush)

    def _advance(self, step) -> None:
        if self.replay.finished:
            self._update_status("end of recording")
            return
        try:
            step()
        except UnknownNotificationError as exc:
            self._update_status(str(exc))
            self.exit(return_code=1)
            return
        # Batches without a flush still move the cursor, repaint anyway.
        self._update_grid(self.session.snapshot())
        position = f"{self.replay.position}/{len(self.replay.notifications)}"
        self._update_status(f"{position} {self.adapter.status_line()}")

    def _update_grid(self, text: str) -> None:
        if self._grid_widget:
            self._grid_widget.update(text)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _update_title(self, title: str) -> None:
        self.title = title or "grid-engine"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = EngineConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Replay recorded redraw notifications onto a grid."
    )
    parser.add_argument("recording", help="JSON-lines file of [method, args]")
    parser.add_argument("--rows", type=int, default=defaults.rows)
    parser.add_argument("--cols", type=int, default=defaults.cols)
    parser.add_argument(
        "--policy",
        choices=("strict", "lenient"),
        default=defaults.notification_policy,
        help="How unknown notification categories are handled",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=os.environ.get("GRID_ENGINE_LOG_PRESET", "replay"),
        help="telelog preset used while the viewer owns the terminal",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    config = EngineConfig(
        rows=args.rows,
        cols=args.cols,
        notification_policy=args.policy,
        desync_policy=EngineConfig.from_env().desync_policy,
    )
    app = GridReplayApp(load_recording(args.recording), config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
