# src/alz_archetypes/core/registry.py
"""
Archetype Registry.

Este módulo define o `ArchetypeRegistry`, o mapeamento canônico
`nome do archetype -> BaseArchetype` consultado pelo Resolver.

Responsabilidades do módulo:
    - Validar unicidade de nomes de archetype no registro
    - Preservar a ordem de registro
    - Expor `lookup(name)` com falha explícita (`NotFoundError`)

Decisões arquiteturais:
    - O registry é populado uma vez (loader externo ou testes) e então
      congelado com `freeze()`; após isso é somente leitura
    - Lookups concorrentes de várias resoluções são seguros, pois nenhuma
      mutação ocorre após o congelamento
    - Referências a definições NÃO são validadas no registro (validação
      diferida para o momento da resolução)

Limites explícitos:
    - Não consulta o Definition Library
    - Não aplica customizações
    - Não carrega arquivos (ver `core.library.loader`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .exceptions import NotFoundError
from .model import BaseArchetype


class DuplicateArchetypeError(ValueError):
    """
    Exceção levantada quando dois archetypes são registrados com o mesmo nome.

    A duplicidade é tratada como erro fatal de carga: nenhum dos dois é
    escolhido silenciosamente.
    """


class RegistryFrozenError(RuntimeError):
    """Tentativa de registrar archetype após `freeze()`."""


@dataclass
class ArchetypeRegistry:
    """
    Registro canônico de base archetypes.

    Invariantes:
        - Cada nome é único no registry
        - `names()` reflete exatamente a ordem de registro
        - Após `freeze()`, nenhum archetype é adicionado
    """

    _archetypes: Dict[str, BaseArchetype] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    @classmethod
    def of(cls, archetypes: Iterable[BaseArchetype]) -> "ArchetypeRegistry":
        """Constrói e congela um registry a partir de um iterável."""
        reg = cls()
        for archetype in archetypes:
            reg.add(archetype)
        return reg.freeze()

    def add(self, archetype: BaseArchetype) -> None:
        if self._frozen:
            raise RegistryFrozenError("archetype registry is read-only after freeze()")

        name = getattr(archetype, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("archetype.name must be a non-empty string")

        if name in self._archetypes:
            raise DuplicateArchetypeError(f"Duplicate archetype name: {name}")

        self._archetypes[name] = archetype
        self._order.append(name)

    def freeze(self) -> "ArchetypeRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> BaseArchetype:
        try:
            return self._archetypes[name]
        except KeyError:
            raise NotFoundError(
                message=f"archetype not found: {name}",
                details={"kind": "archetype", "name": name, "known": list(self._order)},
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._archetypes

    def __len__(self) -> int:
        return len(self._order)

    def names(self) -> List[str]:
        return list(self._order)
