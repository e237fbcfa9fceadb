"""Textual host for modal navigation."""

from .controller import TextualNavAdapter, TextualUIHooks, create_default_adapter

__all__ = ["TextualNavAdapter", "TextualUIHooks", "create_default_adapter"]
