"""Directive application: the single writer path into a grid."""

from .applier import DirectiveApplier
from .state import UIState

__all__ = ["DirectiveApplier", "UIState"]
