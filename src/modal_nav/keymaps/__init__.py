"""Key bindings, their registry and resolver, and the command source."""

from .models import Binding, KeySequence, KeyStroke, WhenClause, normalize_key
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionResult
from .defaults import DEFAULT_BINDINGS, DEFAULT_KEYS, load_default_keymaps
from .source import CommandResolution, CommandSource, KeyInput

__all__ = [
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "normalize_key",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "DEFAULT_BINDINGS",
    "DEFAULT_KEYS",
    "load_default_keymaps",
    "KeyInput",
    "CommandResolution",
    "CommandSource",
]
