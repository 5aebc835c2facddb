"""Textual host integration."""

from .controller import TextualGridAdapter, TextualUIHooks

__all__ = ["TextualGridAdapter", "TextualUIHooks"]
