# src/alz_archetypes/core/context.py
"""
Contexto de uma resolução de archetype.

Este módulo define o `ResolutionContext`, a estrutura canônica utilizada
para registrar, de forma explícita e estruturada, o que aconteceu durante
uma única chamada ao Resolver.

O ResolutionContext atua como o único meio permitido de:
    - registro de eventos estruturados por estágio do algoritmo
    - coleta de warnings não fatais (ex.: remoção tolerada de item ausente)

Princípios fundamentais:
    - Isolamento por resolução (cada chamada possui seu próprio contexto)
    - Ausência de logger global ou estado compartilhado entre resoluções
    - Eventos são dados, não strings livres

Invariantes:
    - Eventos sempre incluem `resolution_id`, `archetype` e `stage`
    - Warnings são agrupados por `stage`
    - A ordem dos eventos reflete a ordem real do algoritmo

Limites explícitos:
    - Não resolve archetypes
    - Não decide se uma falha é fatal
    - Não persiste eventos

Este módulo existe para garantir rastreabilidade e inspeção posterior
de cada resolução sem acoplar o core a um framework de logging.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class ResolutionContext:
    """
    Contexto de observabilidade de uma resolução.

    Campos canônicos:
    - resolution_id: identificador único da resolução
    - created_at: timestamp UTC (ISO 8601) de criação do contexto
    - archetype: nome do base archetype solicitado
    - events: log estruturado de eventos
    - warnings: warnings por stage
    """

    resolution_id: str
    created_at: str
    archetype: str

    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def new(cls, archetype: str, *, resolution_id: Optional[str] = None) -> "ResolutionContext":
        return cls(
            resolution_id=resolution_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc).isoformat(),
            archetype=archetype,
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "resolution_id": self.resolution_id,
            "archetype": self.archetype,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)
        self.log(stage=stage, level="WARNING", message=message)

    def events_for(self, stage: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("stage") == stage]
