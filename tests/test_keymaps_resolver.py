from __future__ import annotations

from modal_nav.keymaps import (
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)
from modal_nav.navigation import KeyCommand


def make_binding(
    binding_id: str,
    *,
    keys: tuple[str, ...] = ("g", "g"),
    command: KeyCommand = KeyCommand.MOVE_UP,
    when: tuple[WhenClause, ...] = (),
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        sequence=KeySequence.from_strings(*keys, timeout_ms=timeout_ms),
        command=command,
        when=when,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for binding in bindings:
        registry.add(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("gg")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(("g", "g"))

    assert result.status == "match"
    assert result.binding is not None
    assert result.binding.id == binding.id
    assert result.command is KeyCommand.MOVE_UP


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(build_registry([make_binding("gg")]))

    result = resolver.resolve(("g",))

    assert result.status == "pending"
    assert result.binding is None
    assert result.command is None


def test_resolver_reports_miss_for_unknown_key() -> None:
    resolver = KeymapResolver(build_registry([make_binding("gg")]))

    result = resolver.resolve(("g", "x"))

    assert result.status == "miss"
    assert result.consumed == 1


def test_resolver_honors_when_clauses() -> None:
    gated = make_binding(
        "visual.gg",
        when=(WhenClause("visual_active"),),
    )
    resolver = KeymapResolver(build_registry([gated]))

    miss = resolver.resolve(("g", "g"), context={})
    assert miss.status == "miss"

    hit = resolver.resolve(("g", "g"), context={"visual_active": True})
    assert hit.status == "match"
    assert hit.binding is not None
    assert hit.binding.id == gated.id


def test_resolver_picks_binding_by_flags() -> None:
    normal = make_binding(
        "normal", keys=("x",), when=(WhenClause.parse("!visual_active"),)
    )
    visual = make_binding(
        "visual",
        keys=("x",),
        command=KeyCommand.YANK,
        when=(WhenClause("visual_active"),),
    )
    resolver = KeymapResolver(build_registry([normal, visual]))

    in_visual = resolver.resolve(("x",), context={"visual_active": True})
    in_normal = resolver.resolve(("x",), context={"visual_active": False})

    assert in_visual.command is KeyCommand.YANK
    assert in_normal.binding is not None
    assert in_normal.binding.id == "normal"


def test_resolver_pending_returns_timeout_hint() -> None:
    resolver = KeymapResolver(build_registry([make_binding("gg", timeout_ms=1500)]))

    result = resolver.resolve(("g",))

    assert result.status == "pending"
    assert result.timeout_ms == 1500


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    assert resolver.resolve(("x",)).status == "miss"

    registry.add(make_binding("x", keys=("x",)))

    match = resolver.resolve(("x",))
    assert match.status == "match"
    assert match.binding is not None
    assert match.binding.id == "x"


def test_resolver_pending_uses_shortest_continuation_timeout() -> None:
    registry = build_registry(
        [
            make_binding("gg", timeout_ms=1500),
            make_binding("gj", keys=("g", "j"), timeout_ms=300),
            make_binding("x", keys=("x",), timeout_ms=50),
        ]
    )
    resolver = KeymapResolver(registry)

    result = resolver.resolve(("g",))

    assert result.timeout_ms == 300


def test_resolver_exact_match_wins_over_longer_sequence() -> None:
    registry = build_registry(
        [
            make_binding("g", keys=("g",), command=KeyCommand.MOVE_DOWN),
            make_binding("gg"),
        ]
    )

    result = KeymapResolver(registry).resolve(("g",))

    assert result.status == "match"
    assert result.command is KeyCommand.MOVE_DOWN
