"""Single grid row stored as attribute-tagged runs."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .models import Token


class Line:
    """One viewport row: ordered tokens whose widths sum to ``length``.

    Positions are character offsets, never token indexes. Every public
    mutation leaves ``sum(token.width) == length`` as long as the written range
    stays inside the line; callers that may write past the end (``Grid.put``)
    check :attr:`rendered_width` afterwards.
    """

    def __init__(self, length: int, tokens: Optional[Iterable[Token]] = None) -> None:
        self.length = length
        if tokens is None:
            self._tokens: List[Token] = [Token.blank(length)] if length else []
        else:
            self._tokens = [token for token in tokens if token.width]

    @property
    def tokens(self) -> Sequence[Token]:
        return tuple(self._tokens)

    @property
    def rendered_width(self) -> int:
        return sum(token.width for token in self._tokens)

    def text(self) -> str:
        text = "".join(token.text for token in self._tokens)
        return text.ljust(self.length)

    def slice(self, start: int, end: int) -> tuple[Token, ...]:
        """Tokens covering ``[start, end)``; ``end`` is clamped to the line."""

        if start < 0 or start >= self.length:
            raise IndexError(f"slice start {start} outside line of {self.length}")
        end = min(end, self.length)
        if start >= end:
            return ()
        first, last = self._locate(start, end - start)
        return tuple(self._tokens[first:last])

    def insert(self, position: int, token: Token) -> None:
        """Overwrite ``[position, position + token.width)`` with ``token``."""

        if not token.width:
            return
        first, last = self._locate(position, token.width)
        self._tokens[first:last] = [token]

    def insert_tokens(self, position: int, tokens: Iterable[Token]) -> None:
        payload = [token for token in tokens if token.width]
        width = sum(token.width for token in payload)
        if not width:
            return
        first, last = self._locate(position, width)
        self._tokens[first:last] = payload

    def clear(self, position: int = 0) -> None:
        if position <= 0:
            self._tokens = [Token.blank(self.length)] if self.length else []
            return
        if position >= self.length:
            return
        first, last = self._locate(position, self.length - position)
        self._tokens[first:last] = [Token.blank(self.length - position)]

    def restore(self, tokens: Iterable[Token]) -> None:
        """Replace every token, e.g. to roll back a rejected write."""

        self._tokens = [token for token in tokens if token.width]

    def set_length(self, length: int) -> None:
        if length < self.length:
            cut = self._boundary(length)
            del self._tokens[cut:]
        elif length > self.length:
            self._tokens.append(Token.blank(length - self.length))
        self.length = length

    def token_at(self, col: int) -> Token:
        offset = 0
        for token in self._tokens:
            if col < offset + token.width:
                return token
            offset += token.width
        raise IndexError(f"column {col} past rendered width {offset}")

    def _locate(self, position: int, length: int) -> tuple[int, int]:
        """Return the half-open token index range covering exactly the span.

        Boundary tokens are split so the range starts at ``position`` and
        stops at ``position + length``. A ``position`` past the last token is
        padded with one blank run and reported as an empty append range.
        """

        first = self._boundary(position)
        if first == len(self._tokens):
            return first, first
        return first, self._boundary(position + length)

    def _boundary(self, offset: int) -> int:
        """Split tokens so one starts at ``offset`` and return its index."""

        start = 0
        for index, token in enumerate(self._tokens):
            end = start + token.width
            if offset == start:
                return index
            if offset < end:
                self._tokens[index : index + 1] = token.split(offset - start)
                return index + 1
            start = end
        if offset > start:
            self._tokens.append(Token.blank(offset - start))
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"Line(length={self.length}, tokens={self._tokens!r})"


__all__ = ["Line"]
