"""Binding storage with conflict checks and a revision counter."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from modal_nav.runtime.telemetry import span

from .models import Binding


class KeymapConflictError(RuntimeError):
    """Raised when a binding shares keys with one it cannot be told apart from."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({binding.signature}) conflicts with "
            f"{[other.id for other in self.conflicts]}"
        )


class KeymapRegistry:
    """Bindings keyed by id, in registration order.

    Two bindings on the same keys may coexist only when a flag gates them in
    opposite directions; anything else would make resolution ambiguous.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self.revision = 0

    def __iter__(self) -> Iterator[Binding]:
        return iter(tuple(self._bindings.values()))

    def __len__(self) -> int:
        return len(self._bindings)

    def get(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def conflicts_with(self, binding: Binding) -> List[Binding]:
        return [
            other
            for other in self._bindings.values()
            if other.id != binding.id
            and other.signature == binding.signature
            and not binding.excludes(other)
        ]

    def add(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Register ``binding``; ``replace`` evicts the same id and any conflicts."""

        with span(
            "keymaps::add",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.signature},
        ) as handle:
            conflicts = self.conflicts_with(binding)
            if not replace:
                if conflicts:
                    handle.add_metadata("conflicts", [c.id for c in conflicts])
                    raise KeymapConflictError(binding, conflicts)
                if binding.id in self._bindings:
                    raise ValueError(f"Binding id '{binding.id}' already registered")

            for evicted in conflicts:
                del self._bindings[evicted.id]
            self._bindings[binding.id] = binding
            self.revision += 1
            return binding


__all__ = ["KeymapRegistry", "KeymapConflictError"]
