"""Value records shared by lines and grids."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

Attributes = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class Token:
    """Run of text sharing one highlight attribute.

    ``attr`` is an opaque highlight mapping; ``None`` means the default
    highlight. Tokens are never mutated in place, edits build new ones.
    """

    text: str
    attr: Optional[Attributes] = None

    def __post_init__(self) -> None:
        if self.attr is not None and not isinstance(self.attr, MappingProxyType):
            object.__setattr__(self, "attr", MappingProxyType(dict(self.attr)))

    def __hash__(self) -> int:
        # MappingProxyType is unhashable; hash its items instead.
        attr = tuple(sorted(self.attr.items())) if self.attr is not None else None
        return hash((self.text, attr))

    @classmethod
    def blank(cls, width: int) -> "Token":
        return cls(" " * width)

    @property
    def width(self) -> int:
        return len(self.text)

    def split(self, offset: int) -> tuple["Token", "Token"]:
        """Return the parts left and right of ``offset``, both keeping ``attr``."""

        if offset <= 0 or offset >= self.width:
            raise ValueError(
                f"split offset {offset} outside token of width {self.width}"
            )
        return (
            Token(self.text[:offset], self.attr),
            Token(self.text[offset:], self.attr),
        )


@dataclass(frozen=True, slots=True)
class Cursor:
    line: int = 0
    col: int = 0

    def advance(self, width: int) -> "Cursor":
        return Cursor(self.line, self.col + width)


@dataclass(frozen=True, slots=True)
class ScrollRegion:
    """Inclusive rectangle a scroll is confined to."""

    top: int
    bottom: int
    left: int
    right: int

    def __post_init__(self) -> None:
        if self.top > self.bottom or self.left > self.right:
            raise ValueError(f"empty scroll region {self!r}")

    @classmethod
    def full(cls, rows: int, cols: int) -> "ScrollRegion":
        return cls(top=0, bottom=max(rows - 1, 0), left=0, right=max(cols - 1, 0))

    @property
    def width(self) -> int:
        return self.right - self.left + 1


__all__ = ["Attributes", "Token", "Cursor", "ScrollRegion"]
