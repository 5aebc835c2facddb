"""Viewport grid: a fixed-size stack of token lines."""

from __future__ import annotations

from typing import Iterator, List, Optional

from grid_engine.runtime.telemetry import span

from .errors import GridDesyncError, GridIndexError
from .line import Line
from .models import Cursor, ScrollRegion, Token

CURSOR_GLYPH = "█"


class Grid:
    """Owns ``rows`` lines, each ``cols`` characters wide."""

    def __init__(self, rows: int, cols: int, *, logger_name: str | None = None) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"invalid grid size {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._lines: List[Line] = [Line(cols) for _ in range(rows)]
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def line(self, row: int) -> Line:
        if row < 0 or row >= self.rows:
            raise GridIndexError(f"row {row} outside grid of {self.rows} rows", row=row)
        return self._lines[row]

    def resize(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"invalid grid size {rows}x{cols}")
        with span(
            "grid::resize",
            logger_name=self._logger_name,
            metadata={"from": (self.rows, self.cols), "to": (rows, cols)},
        ):
            if rows < len(self._lines):
                del self._lines[rows:]
            else:
                self._lines.extend(Line(cols) for _ in range(rows - len(self._lines)))

            if cols != self.cols:
                for line in self._lines:
                    line.set_length(cols)

            self.rows = rows
            self.cols = cols

    def put(self, cursor: Cursor, token: Token) -> None:
        """Overwrite the cells starting at ``cursor`` with ``token``.

        Raises :class:`GridDesyncError` if the write would run past the last
        column; the line is left exactly as it was before the call.
        """

        line = self.line(cursor.line)
        if cursor.col < 0:
            raise GridIndexError(
                f"negative column {cursor.col}", row=cursor.line, col=cursor.col
            )
        previous = line.tokens
        line.insert(cursor.col, token)
        if line.rendered_width > self.cols:
            width = line.rendered_width
            line.restore(previous)
            raise GridDesyncError(
                f"put at {cursor.line}:{cursor.col} of {token.width} cells "
                f"overflows {self.cols} columns",
                cursor=cursor,
                token=token,
                width=width,
            )

    def scroll(self, region: ScrollRegion, count: int) -> None:
        """Shift ``region`` vertically by ``count`` rows.

        Positive counts move content up, negative counts move it down. Rows
        whose source falls outside the region receive a blank run; the
        backend is expected to repaint them.
        """

        if not count:
            return
        if (
            region.top < 0
            or region.left < 0
            or region.bottom >= self.rows
            or region.right >= self.cols
        ):
            raise GridIndexError(
                f"scroll region {region!r} outside {self.rows}x{self.cols}",
                row=region.bottom,
                col=region.right,
            )
        with span(
            "grid::scroll",
            logger_name=self._logger_name,
            metadata={"count": count, "region": region},
        ):
            if count > 0:
                destinations = range(region.top, region.bottom + 1)
            else:
                destinations = range(region.bottom, region.top - 1, -1)

            for row in destinations:
                source = row + count
                if region.top <= source <= region.bottom:
                    tokens = self._lines[source].slice(region.left, region.right + 1)
                else:
                    tokens = (Token.blank(region.width),)
                self._lines[row].insert_tokens(region.left, tokens)

    def clear_line(self, row: int, col: int = 0) -> None:
        self.line(row).clear(col)

    def clear_all(self) -> None:
        for line in self._lines:
            line.clear()

    def get_token_at(self, row: int, col: int) -> Token:
        line = self.line(row)
        if col < 0 or col >= self.cols:
            raise GridIndexError(f"column {col} outside grid", row=row, col=col)
        return line.token_at(col)

    def get_text(self, cursor: Optional[Cursor] = None) -> str:
        """Render the grid inside a box, one numbered row per line."""

        rows = [f"   ╭{'─' * self.cols}╮"]
        for index, line in enumerate(self._lines):
            text = line.text()
            if cursor is not None and cursor.line == index and 0 <= cursor.col < self.cols:
                text = text[: cursor.col] + CURSOR_GLYPH + text[cursor.col + 1 :]
            rows.append(f"{index:<2} │{text}│")
        rows.append(f"   ╰{'─' * self.cols}╯")
        return "\n".join(rows) + "\n"


__all__ = ["Grid", "CURSOR_GLYPH"]
