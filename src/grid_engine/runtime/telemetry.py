"""Telemetry for the grid engine, built on telelog.

Callers use four entry points: ``configure`` picks a preset or an explicit
``telelog.Config``, ``get_logger`` hands out cached loggers, ``record_event``
writes ``event::<namespace>.<what>`` lines and ``span`` profiles a
``<namespace>::<operation>`` block. The namespace (``grid``, ``protocol``,
``session``) doubles as the telelog component and picks the default level of
an event. Payload values go through :func:`describe`, so cursors, scroll
regions and tokens show up as ``2:5`` or ``rows 0-3 cols 0-79`` instead of
dataclass reprs.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Iterator,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    cast,
)

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "GRID_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "grid_engine")

# ``console`` follows the GRID_ENGINE_* environment; ``replay`` writes JSON to a
# file because Textual owns the terminal while a recording plays.
PRESETS = ("console", "replay")

EVENT_LEVELS: Mapping[str, str] = {
    "grid.desync": "error",
    "protocol.unknown_event": "warning",
    "protocol.unknown_command": "warning",
    "protocol.autocmd": "warning",
    "protocol.unknown_notification": "error",
    "session.reset": "debug",
}

_PAYLOAD_ITEMS = 8

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def describe(value: Any) -> str:
    """Render a payload value compactly for a log line."""

    if isinstance(value, str):
        return value
    if hasattr(value, "line") and hasattr(value, "col"):
        return f"{value.line}:{value.col}"
    if all(hasattr(value, attr) for attr in ("top", "bottom", "left", "right")):
        return f"rows {value.top}-{value.bottom} cols {value.left}-{value.right}"
    if hasattr(value, "text") and hasattr(value, "attr"):
        if value.attr is None:
            return repr(value.text)
        return f"{value.text!r}@{describe(value.attr)}"
    if isinstance(value, Mapping):
        pairs = ", ".join(f"{key}={describe(val)}" for key, val in value.items())
        return "{" + pairs + "}"
    if isinstance(value, (list, tuple)):
        shown = ", ".join(describe(item) for item in value[:_PAYLOAD_ITEMS])
        if len(value) > _PAYLOAD_ITEMS:
            shown += f", ... {len(value) - _PAYLOAD_ITEMS} more"
        return f"[{shown}]"
    return str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), describe(value)) for key, value in data.items()]


def _namespace(name: str) -> str:
    for separator in ("::", "."):
        if separator in name:
            return name.split(separator, 1)[0]
    return name


def _console_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    if _env_flag("DISABLE_CONSOLE", False):
        config.with_console_output(False)
    else:
        config.with_console_output(True)
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    return config


def _replay_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "DEBUG").upper())
    config.with_console_output(False)
    config.with_json_format(True)
    config.with_file_output(_env("LOG_FILE") or "grid_engine-replay.log")
    return config


_PRESET_BUILDERS = {"console": _console_config, "replay": _replay_config}


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    ``preset`` is one of :data:`PRESETS`; ``config`` is an explicit
    ``telelog.Config``. Passing neither rebuilds the ``console`` preset.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if config is None:
        key = (preset or "console").lower()
        if key not in _PRESET_BUILDERS:
            raise ValueError(f"Unknown preset '{preset}', expected one of {PRESETS}.")
        config = _PRESET_BUILDERS[key]()

    # Spans rely on telelog's profiler.
    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name`` (default engine logger)."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ACTIVE_CONFIG
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    name = level.lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    method = getattr(logger, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return method, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {_format_pairs(payload)}")


def record_event(
    name: str,
    *,
    level: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>``; ``level`` defaults from :data:`EVENT_LEVELS`."""

    payload = {"event": name, "component": _namespace(name), **(data or {})}
    _emit(
        get_logger(logger_name),
        level or EVENT_LEVELS.get(name, "info"),
        f"event::{name}",
        payload,
    )


@dataclass
class SpanHandle:
    """Collects metadata reported when the span closes."""

    logger: Any
    span_name: str
    component_name: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def _payload(self, **extra: Any) -> Dict[str, Any]:
        payload = {"span": self.span_name, "component": self.component_name}
        payload.update(self.metadata)
        payload.update(extra)
        return payload

    def done(self) -> None:
        _emit(self.logger, "debug", "span::done", self._payload())

    def fail(self, exc: BaseException) -> None:
        _emit(
            self.logger,
            "error",
            "span::fail",
            self._payload(error=type(exc).__name__, reason=str(exc)),
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile ``<namespace>::<operation>`` and track it under its namespace.

    ``metadata`` is attached as logger context while the block runs and
    reported again, with anything added through the handle, in the closing
    ``span::done`` or ``span::fail`` line.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=_namespace(name),
        metadata=dict(metadata or {}),
    )

    with ExitStack() as stack:
        stack.enter_context(log.track_component(handle.component_name))
        stack.enter_context(log.profile(name))
        for key, value in handle.metadata.items():
            log.add_context(key, describe(value))
            stack.callback(log.remove_context, key)
        try:
            yield handle
        except Exception as exc:
            handle.fail(exc)
            raise
        handle.done()


__all__ = [
    "EVENT_LEVELS",
    "PRESETS",
    "SpanHandle",
    "configure",
    "describe",
    "get_logger",
    "record_event",
    "span",
]
