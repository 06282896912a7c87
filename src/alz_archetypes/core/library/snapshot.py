"""Snapshots imutáveis de library + registry e troca atômica (hot-reload).

Uma resolução sempre trabalha sobre UM snapshot: se a library for
recarregada durante a resolução, a resolução em andamento continua vendo
o snapshot com que começou.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from ..registry import ArchetypeRegistry
from .catalog import DefinitionLibrary


@dataclass(frozen=True)
class LibrarySnapshot:
    """Par imutável (Definition Library, Archetype Registry congelado)."""

    library: DefinitionLibrary
    registry: ArchetypeRegistry
    source: Optional[str] = None
    version: int = 0

    def __post_init__(self) -> None:
        if not self.registry.frozen:
            raise ValueError("LibrarySnapshot requires a frozen ArchetypeRegistry")


class LibraryHandle:
    """Referência compartilhada ao snapshot corrente.

    `swap` instala um novo snapshot de forma atômica (troca de referência
    sob lock); `current` devolve o snapshot vigente sem bloquear leitores
    além da leitura da referência.
    """

    def __init__(self, snapshot: LibrarySnapshot):
        self._lock = threading.Lock()
        self._snapshot = snapshot

    def current(self) -> LibrarySnapshot:
        return self._snapshot

    def swap(self, snapshot: LibrarySnapshot) -> LibrarySnapshot:
        """Instala `snapshot` e devolve o anterior. A versão é incrementada."""
        with self._lock:
            previous = self._snapshot
            self._snapshot = LibrarySnapshot(
                library=snapshot.library,
                registry=snapshot.registry,
                source=snapshot.source,
                version=previous.version + 1,
            )
            return previous
