from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from grid_engine.adapters.textual.app import _parse_args
from grid_engine.grid import Cursor, ScrollRegion, Token
from grid_engine.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: List[Tuple[str, str, dict]] = []
        self.components: List[str] = []
        self.context: dict = {}

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        yield

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        del self.context[key]

    def __getattr__(self, name: str) -> Any:
        if not name.endswith("_with"):
            raise AttributeError(name)
        level = name[: -len("_with")]
        return lambda message, pairs: self.lines.append((level, message, dict(pairs)))


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_describe_renders_grid_values() -> None:
    assert telemetry.describe(Cursor(2, 5)) == "2:5"
    assert telemetry.describe(ScrollRegion(0, 3, 0, 79)) == "rows 0-3 cols 0-79"
    assert telemetry.describe(Token("ab", {"fg": 1})) == "'ab'@{fg=1}"
    assert telemetry.describe(Token("ab")) == "'ab'"


def test_describe_truncates_long_argument_lists() -> None:
    rendered = telemetry.describe(list(range(10)))

    assert rendered.startswith("[0, 1,")
    assert rendered.endswith("... 2 more]")


def test_event_level_follows_namespace_table(recorder: RecordingLogger) -> None:
    telemetry.record_event("grid.desync", data={"row": 3})
    telemetry.record_event("protocol.unknown_event", data={"name": "x"})
    telemetry.record_event("protocol.autocmd", level="debug")

    assert [level for level, _, _ in recorder.lines] == ["error", "warning", "debug"]
    level, message, payload = recorder.lines[0]
    assert message == "event::grid.desync"
    assert payload == {"event": "grid.desync", "component": "grid", "row": "3"}


def test_span_tracks_namespace_and_reports_metadata(recorder: RecordingLogger) -> None:
    region = ScrollRegion(0, 1, 0, 9)
    with telemetry.span("grid::scroll", metadata={"region": region}) as handle:
        assert recorder.context == {"region": "rows 0-1 cols 0-9"}
        handle.add_metadata("count", 1)

    assert recorder.components == ["grid"]
    assert recorder.context == {}
    level, message, payload = recorder.lines[-1]
    assert (level, message) == ("debug", "span::done")
    assert payload["region"] == "rows 0-1 cols 0-9"
    assert payload["count"] == "1"


def test_span_reports_failure_and_reraises(recorder: RecordingLogger) -> None:
    with pytest.raises(ValueError):
        with telemetry.span("protocol::redraw"):
            raise ValueError("bad batch")

    level, message, payload = recorder.lines[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["component"] == "protocol"
    assert payload["error"] == "ValueError"
    assert payload["reason"] == "bad batch"


def test_unknown_preset_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="production")


def test_replay_cli_offers_known_presets() -> None:
    args = _parse_args(["session.jsonl", "--log-preset", "console"])

    assert args.log_preset == "console"
    with pytest.raises(SystemExit):
        _parse_args(["session.jsonl", "--log-preset", "production"])
