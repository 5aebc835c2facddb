"""UI state tracked alongside the grid while directives are applied."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from grid_engine.grid import Cursor, ScrollRegion


@dataclass(slots=True)
class UIState:
    """Everything a renderer needs besides the grid contents."""

    cursor: Cursor = Cursor(0, 0)
    highlight: Mapping[str, Any] = field(default_factory=dict)
    scroll_region: Optional[ScrollRegion] = None
    colors: Dict[str, int] = field(default_factory=dict)
    mode_info: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    mode: str = "normal"
    busy: bool = False
    mouse_enabled: bool = False
    title: str = ""
    icon: str = ""
    bell_count: int = 0
    visual_bell_count: int = 0
    flush_count: int = 0
    file_finder_open: bool = False
    needs_resync: bool = False

    def set_cursor(self, line: int, col: int) -> None:
        self.cursor = Cursor(line, col)

    def region_for(self, rows: int, cols: int) -> ScrollRegion:
        """Active scroll region, or the whole grid when none was set."""

        return self.scroll_region or ScrollRegion.full(rows, cols)


__all__ = ["UIState"]
