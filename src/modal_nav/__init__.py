"""Modal keyboard navigation and visual-mode yank over ordered items."""

__all__ = [
    "adapters",
    "config",
    "keymaps",
    "navigation",
    "runtime",
    "session",
]

__version__ = "0.1.0"
