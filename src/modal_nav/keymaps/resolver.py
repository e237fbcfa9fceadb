"""Prefix-tree lookup from key tokens to bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Mapping, Optional, Sequence

from modal_nav.navigation import KeyCommand
from modal_nav.runtime.telemetry import span

from .models import Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class _Node:
    bindings: List[Binding] = field(default_factory=list)
    children: Dict[str, "_Node"] = field(default_factory=dict)
    # Shortest timeout among bindings that continue past this node.
    wait_ms: Optional[int] = None


def _build(bindings: Sequence[Binding]) -> _Node:
    root = _Node()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            if node.wait_ms is None or binding.sequence.timeout_ms < node.wait_ms:
                node.wait_ms = binding.sequence.timeout_ms
            node = node.children.setdefault(token, _Node())
        node.bindings.append(binding)
    return root


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    binding: Optional[Binding] = None
    # Tokens walked before the lookup stopped.
    consumed: int = 0
    timeout_ms: Optional[int] = None

    @property
    def command(self) -> Optional[KeyCommand]:
        return self.binding.command if self.binding else None


class KeymapResolver:
    """Resolves token tuples against a registry.

    The tree is rebuilt lazily whenever the registry revision changes.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._revision = -1
        self._root = _Node()

    def resolve(
        self,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"tokens": " ".join(tokens)},
        ) as handle:
            result = self._walk(tuple(tokens), flags)
            handle.add_metadata("status", result.status)
            if result.binding is not None:
                handle.add_metadata("binding_id", result.binding.id)
            return result

    def _walk(
        self, tokens: tuple[str, ...], flags: Mapping[str, bool]
    ) -> ResolutionResult:
        node = self._tree()
        for depth, token in enumerate(tokens):
            if token not in node.children:
                return ResolutionResult("miss", consumed=depth)
            node = node.children[token]

        # The registry lets at most one of these match a given flag set.
        for binding in node.bindings:
            if binding.allows(flags):
                return ResolutionResult("match", binding=binding, consumed=len(tokens))
        if tokens and node.children:
            return ResolutionResult(
                "pending", consumed=len(tokens), timeout_ms=node.wait_ms
            )
        return ResolutionResult("miss", consumed=len(tokens))

    def _tree(self) -> _Node:
        if self._revision != self._registry.revision:
            self._root = _build(list(self._registry))
            self._revision = self._registry.revision
        return self._root


__all__ = ["KeymapResolver", "ResolutionResult"]
