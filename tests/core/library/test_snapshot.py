# tests/core/library/test_snapshot.py
"""
Testes de LibrarySnapshot e LibraryHandle (troca atômica).

Invariantes:
    - Um snapshot exige registry congelado
    - `swap` devolve o snapshot anterior e incrementa a versão
    - Um Resolver criado a partir de um snapshot não enxerga trocas posteriores
"""

import threading

import pytest

from alz_archetypes.core.library import DefinitionLibrary, LibraryHandle, LibrarySnapshot
from alz_archetypes.core.model import BaseArchetype
from alz_archetypes.core.registry import ArchetypeRegistry
from alz_archetypes.core.resolver import Resolver


def _snapshot(*archetypes, policies=()):
    return LibrarySnapshot(
        library=DefinitionLibrary(policy_definitions=set(policies)),
        registry=ArchetypeRegistry.of(archetypes),
    )


def test_snapshot_requires_frozen_registry():
    with pytest.raises(ValueError):
        LibrarySnapshot(library=DefinitionLibrary(), registry=ArchetypeRegistry())


def test_swap_returns_previous_and_bumps_version():
    first = _snapshot(BaseArchetype(name="a"))
    handle = LibraryHandle(first)

    previous = handle.swap(_snapshot(BaseArchetype(name="b")))

    assert previous is first
    assert handle.current().version == 1
    assert handle.current().registry.names() == ["b"]


def test_in_flight_resolver_keeps_its_snapshot():
    handle = LibraryHandle(_snapshot(BaseArchetype(name="a", policy_definitions={"p"}), policies={"p"}))
    resolver = Resolver.from_snapshot(handle.current())

    handle.swap(_snapshot(BaseArchetype(name="b")))

    effective = resolver.resolve("a", None, {"location": "westeurope"}, "alz")
    assert effective.policy_definitions == frozenset({"p"})


def test_concurrent_swaps_increment_version_once_each():
    handle = LibraryHandle(_snapshot(BaseArchetype(name="a")))

    def worker():
        for _ in range(25):
            handle.swap(_snapshot(BaseArchetype(name="a")))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert handle.current().version == 100
