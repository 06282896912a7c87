# src/alz_archetypes/core/library/catalog.py
"""
Definition Library: catálogo imutável de definições conhecidas.

O Definition Library mapeia nomes para as definições conhecidas de:
    - policy definitions
    - policy set definitions
    - role definitions

Para a resolução, basta saber se um nome existe (`lookup`) e enumerar os
nomes conhecidos (`names`); o conteúdo das definições não é necessário.

Decisões arquiteturais:
    - O catálogo é um valor imutável (frozensets), carregado uma vez e
      compartilhado por referência entre resoluções
    - Não existe instância global: o chamador passa o catálogo explicitamente

Invariantes:
    - Nomes nunca mudam após a construção
    - Leituras concorrentes dispensam locking
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet


class DefinitionKind(str, Enum):
    """Categorias de definição do catálogo."""
    POLICY_DEFINITION = "policy_definition"
    POLICY_SET_DEFINITION = "policy_set_definition"
    ROLE_DEFINITION = "role_definition"


@dataclass(frozen=True)
class DefinitionLibrary:
    """Catálogo imutável de nomes de definições."""

    policy_definitions: FrozenSet[str] = frozenset()
    policy_set_definitions: FrozenSet[str] = frozenset()
    role_definitions: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "policy_definitions", frozenset(self.policy_definitions))
        object.__setattr__(self, "policy_set_definitions", frozenset(self.policy_set_definitions))
        object.__setattr__(self, "role_definitions", frozenset(self.role_definitions))

    def names(self, kind: DefinitionKind) -> FrozenSet[str]:
        kind = DefinitionKind(kind)
        if kind is DefinitionKind.POLICY_DEFINITION:
            return self.policy_definitions
        if kind is DefinitionKind.POLICY_SET_DEFINITION:
            return self.policy_set_definitions
        return self.role_definitions

    def lookup(self, kind: DefinitionKind, name: str) -> bool:
        return name in self.names(kind)

    def has_policy_definition(self, name: str) -> bool:
        return name in self.policy_definitions

    def has_policy_set_definition(self, name: str) -> bool:
        return name in self.policy_set_definitions

    def has_role_definition(self, name: str) -> bool:
        return name in self.role_definitions

    def has_assignable_policy(self, name: str) -> bool:
        """Um assignment pode apontar para uma policy definition ou um policy set."""
        return name in self.policy_definitions or name in self.policy_set_definitions
