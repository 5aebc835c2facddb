"""Recorded notification streams for offline replay."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from grid_engine.protocol import Directive, DirectiveKind, ProtocolError

Notification = Tuple[str, Sequence[Any]]


def parse_recording(lines: Iterable[str]) -> List[Notification]:
    """Decode JSON lines shaped ``[method, args]``; blank and ``#`` lines skip."""

    notifications: List[Notification] = []
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ProtocolError(f"line {number}: {exc.msg}") from exc
        if (
            not isinstance(entry, list)
            or len(entry) != 2
            or not isinstance(entry[0], str)
            or not isinstance(entry[1], list)
        ):
            raise ProtocolError(f"line {number}: expected [method, args]")
        notifications.append((entry[0], entry[1]))
    return notifications


def load_recording(path: str | Path) -> List[Notification]:
    with open(path, encoding="utf-8") as handle:
        return parse_recording(handle)


@dataclass
class ReplayCursor:
    """Steps through a recording, handing each notification to ``sink``."""

    notifications: Sequence[Notification]
    sink: Callable[[str, Sequence[Any]], List[Directive]]
    position: int = 0

    @property
    def finished(self) -> bool:
        return self.position >= len(self.notifications)

    def step(self) -> List[Directive]:
        if self.finished:
            return []
        method, args = self.notifications[self.position]
        self.position += 1
        return self.sink(method, args)

    def step_to_flush(self) -> int:
        """Replay until a batch containing a flush was applied; return steps."""

        steps = 0
        while not self.finished:
            directives = self.step()
            steps += 1
            if any(item.kind is DirectiveKind.FLUSH for item in directives):
                break
        return steps


__all__ = ["Notification", "parse_recording", "load_recording", "ReplayCursor"]
