"""Apply translated directives to a grid and its UI state."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from grid_engine.config import DESYNC_POLICIES
from grid_engine.grid import (
    Grid,
    GridDesyncError,
    GridIndexError,
    ScrollRegion,
    Token,
)
from grid_engine.protocol import directives as d
from grid_engine.runtime import telemetry

from .state import UIState


class DirectiveApplier:
    """Single writer for one grid.

    ``apply`` returns ``True`` for render checkpoints (``Flush``) so callers
    know when to paint. Writes that overflow a line are rolled back by the
    grid; with the ``resync`` policy the offending row is then cleared and
    :attr:`UIState.needs_resync` is raised, with ``raise`` the error
    propagates.
    """

    def __init__(
        self,
        grid: Grid,
        state: Optional[UIState] = None,
        *,
        desync_policy: str = "resync",
        logger_name: str | None = None,
    ) -> None:
        if desync_policy not in DESYNC_POLICIES:
            raise ValueError(f"Unknown desync policy '{desync_policy}'")
        self.grid = grid
        self.state = state or UIState()
        self.desync_policy = desync_policy
        self._logger_name = logger_name
        self._handlers: Dict[d.DirectiveKind, Callable[..., None]] = {
            d.DirectiveKind.APPEND_TEXT: self._append_text,
            d.DirectiveKind.MOVE_CURSOR: self._move_cursor,
            d.DirectiveKind.SET_HIGHLIGHT: self._set_highlight,
            d.DirectiveKind.CLEAR_ALL: self._clear_all,
            d.DirectiveKind.CLEAR_TO_EOL: self._clear_to_eol,
            d.DirectiveKind.SCROLL: self._scroll,
            d.DirectiveKind.SET_SCROLL_REGION: self._set_scroll_region,
            d.DirectiveKind.RESIZE: self._resize,
            d.DirectiveKind.UPDATE_COLOR: self._update_color,
            d.DirectiveKind.SET_MODE_INFO: self._set_mode_info,
            d.DirectiveKind.CHANGE_MODE: self._change_mode,
            d.DirectiveKind.SET_BUSY: self._set_busy,
            d.DirectiveKind.SET_MOUSE: self._set_mouse,
            d.DirectiveKind.BELL: self._bell,
            d.DirectiveKind.SET_TITLE: self._set_title,
            d.DirectiveKind.SET_ICON: self._set_icon,
            d.DirectiveKind.FLUSH: self._flush,
            d.DirectiveKind.TOGGLE_FILE_FINDER: self._toggle_file_finder,
            d.DirectiveKind.UNRECOGNIZED: self._ignore,
        }

    def apply(self, directive: d.Directive) -> bool:
        self._handlers[directive.kind](directive)
        return directive.kind is d.DirectiveKind.FLUSH

    def apply_all(self, directives: Iterable[d.Directive]) -> int:
        """Apply in order and return how many flushes were seen."""

        return sum(1 for directive in directives if self.apply(directive))

    def _append_text(self, directive: d.AppendText) -> None:
        text = directive.text
        if not text:
            return
        cursor = self.state.cursor
        token = Token(text, self.state.highlight or None)
        try:
            self.grid.put(cursor, token)
        except (GridDesyncError, GridIndexError) as exc:
            self._recover(exc, cursor.line)
        self.state.cursor = cursor.advance(token.width)

    def _recover(self, exc: Exception, row: Optional[int] = None) -> None:
        """Report a write the grid rejected and apply the desync policy.

        Under ``raise`` the active exception propagates. Under ``resync`` the
        row (when given and still on the grid) is blanked and the state is
        flagged so the host can request a full redraw.
        """

        self._report_desync(exc, row)
        if self.desync_policy == "raise":
            raise exc
        if row is not None and 0 <= row < self.grid.rows:
            self.grid.clear_line(row)
        self.state.needs_resync = True

    def _report_desync(self, exc: Exception, row: Optional[int]) -> None:
        telemetry.record_event(
            "grid.desync",
            data={"reason": str(exc), "row": row, "policy": self.desync_policy},
            logger_name=self._logger_name,
        )

    def _move_cursor(self, directive: d.MoveCursor) -> None:
        self.state.set_cursor(directive.line, directive.col)

    def _set_highlight(self, directive: d.SetHighlight) -> None:
        self.state.highlight = directive.attrs

    def _clear_all(self, directive: d.ClearAll) -> None:
        del directive
        self.grid.clear_all()
        self.state.set_cursor(0, 0)
        self.state.needs_resync = False

    def _clear_to_eol(self, directive: d.ClearToEndOfLine) -> None:
        del directive
        cursor = self.state.cursor
        try:
            self.grid.clear_line(cursor.line, cursor.col)
        except GridIndexError as exc:
            self._recover(exc)

    def _scroll(self, directive: d.Scroll) -> None:
        region = self.state.region_for(self.grid.rows, self.grid.cols)
        try:
            self.grid.scroll(region, directive.count)
        except GridIndexError as exc:
            self._recover(exc)

    def _set_scroll_region(self, directive: d.SetScrollRegion) -> None:
        self.state.scroll_region = ScrollRegion(
            top=directive.top,
            bottom=directive.bottom,
            left=directive.left,
            right=directive.right,
        )

    def _resize(self, directive: d.Resize) -> None:
        self.grid.resize(directive.rows, directive.cols)
        self.state.scroll_region = None
        cursor = self.state.cursor
        self.state.set_cursor(
            min(cursor.line, max(directive.rows - 1, 0)),
            min(cursor.col, max(directive.cols - 1, 0)),
        )

    def _update_color(self, directive: d.UpdateColor) -> None:
        self.state.colors[directive.role] = directive.value

    def _set_mode_info(self, directive: d.SetModeInfo) -> None:
        self.state.mode_info = directive.modes

    def _change_mode(self, directive: d.ChangeMode) -> None:
        self.state.mode = directive.name

    def _set_busy(self, directive: d.SetBusy) -> None:
        self.state.busy = directive.busy

    def _set_mouse(self, directive: d.SetMouse) -> None:
        self.state.mouse_enabled = directive.enabled

    def _bell(self, directive: d.Bell) -> None:
        if directive.visual:
            self.state.visual_bell_count += 1
        else:
            self.state.bell_count += 1

    def _set_title(self, directive: d.SetTitle) -> None:
        self.state.title = directive.text

    def _set_icon(self, directive: d.SetIcon) -> None:
        self.state.icon = directive.text

    def _flush(self, directive: d.Flush) -> None:
        del directive
        self.state.flush_count += 1

    def _toggle_file_finder(self, directive: d.ToggleFileFinder) -> None:
        del directive
        self.state.file_finder_open = not self.state.file_finder_open

    def _ignore(self, directive: d.Directive) -> None:
        del directive


__all__ = ["DirectiveApplier"]
