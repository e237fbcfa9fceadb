"""Navigable item handles consumed by the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class NavigableItem(Protocol):
    """Anything the controller can step through.

    Hosts may pass their own widget or element wrappers as long as they
    expose these attributes.
    """

    @property
    def text(self) -> str: ...

    @property
    def activation_target(self) -> Optional[str]: ...

    @property
    def is_activatable(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Item:
    """Plain navigable target with optional link destination."""

    text: str
    activation_target: Optional[str] = None
    geometry: object | None = None

    @property
    def is_activatable(self) -> bool:
        return bool(self.activation_target)


__all__ = ["NavigableItem", "Item"]
