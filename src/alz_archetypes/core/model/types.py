# src/alz_archetypes/core/model/types.py
"""
Tipos canônicos do modelo de archetypes.

Este módulo define as estruturas fundamentais trocadas entre Registry,
Resolver e Validator:

    - EnforcementMode / IdentityType → enums de domínio (valores textuais ARM)
    - NonComplianceMessage           → mensagem exibida em não conformidade
    - PolicyAssignmentSpec           → um policy assignment a criar
    - RoleAssignmentSpec             → um role assignment a criar
    - BaseArchetype                  → definição base, longa duração
    - CustomizationSpec              → overlay por node (por requisição)
    - Defaults                       → valores default do node
    - EffectiveArchetype             → resultado imutável da resolução

Princípios fundamentais:
    - Estruturas imutáveis (frozen) e sem lógica de resolução
    - Campos de enum preservam o valor bruto recebido, para que o
      Validator possa classificar valores inválidos em vez de falhar no parse
    - Conjuntos são `frozenset`; sequências expostas ao chamador são tuplas
      que preservam ordem

Limites explícitos:
    - Não valida regras de campo (ver `core.validation`)
    - Não consulta o Definition Library
    - Não aplica customizações
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from .parameters import thaw_parameters


class EnforcementMode(str, Enum):
    """
    Modo de enforcement de um policy assignment.

    Valores textuais idênticos aos da API ARM. Ausência de valor equivale
    a `DEFAULT`.
    """
    DEFAULT = "Default"
    DO_NOT_ENFORCE = "DoNotEnforce"


class IdentityType(str, Enum):
    """
    Tipo de identidade gerenciada de um policy assignment.

    Ausência de identidade é representada por `None` no spec, não por um
    membro do enum.
    """
    SYSTEM_ASSIGNED = "SystemAssigned"
    USER_ASSIGNED = "UserAssigned"


@dataclass(frozen=True)
class NonComplianceMessage:
    """Mensagem de não conformidade.

    `policy_definition_reference_id` só é usado quando o assignment aponta
    para um policy set (referencia a definição dentro do set).
    """
    message: Optional[str]
    policy_definition_reference_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "policy_definition_reference_id": self.policy_definition_reference_id,
        }


@dataclass(frozen=True)
class PolicyAssignmentSpec:
    """
    Um policy assignment a ser criado no node.

    Exatamente um entre `policy_definition_name` (resolvido via library) e
    `policy_definition_id` (resource id opaco) deve estar presente; a regra
    é verificada pelo Validator, não aqui.

    `parameters` guarda o valor recebido (mapa ou string JSON); a forma
    decodificada e congelada é produzida pelo Resolver após a validação.
    """
    display_name: Optional[str] = None
    policy_definition_name: Optional[str] = None
    policy_definition_id: Optional[str] = None
    enforcement_mode: Optional[str] = None
    identity: Optional[str] = None
    identity_ids: Tuple[str, ...] = ()
    non_compliance_messages: Tuple[NonComplianceMessage, ...] = ()
    parameters: Any = None

    @property
    def effective_enforcement_mode(self) -> str:
        return self.enforcement_mode or EnforcementMode.DEFAULT.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display_name": self.display_name,
            "policy_definition_name": self.policy_definition_name,
            "policy_definition_id": self.policy_definition_id,
            "enforcement_mode": self.effective_enforcement_mode,
            "identity": self.identity,
            "identity_ids": list(self.identity_ids),
            "non_compliance_messages": [m.to_dict() for m in self.non_compliance_messages],
            "parameters": thaw_parameters(self.parameters),
        }


@dataclass(frozen=True)
class RoleAssignmentSpec:
    """Role assignment: definição (nome ou resource id) + principal."""
    definition: str
    object_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"definition": self.definition, "object_id": self.object_id}


@dataclass(frozen=True)
class BaseArchetype:
    """
    Definição base de um archetype, pertencente ao Archetype Registry.

    As referências a nomes NÃO são validadas na carga: a verificação contra
    o Definition Library acontece no momento da resolução.
    """
    name: str
    policy_definitions: FrozenSet[str] = frozenset()
    policy_set_definitions: FrozenSet[str] = frozenset()
    policy_assignments: Mapping[str, PolicyAssignmentSpec] = field(default_factory=dict)
    role_definitions: FrozenSet[str] = frozenset()
    role_assignments: Mapping[str, RoleAssignmentSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "policy_definitions", frozenset(self.policy_definitions))
        object.__setattr__(self, "policy_set_definitions", frozenset(self.policy_set_definitions))
        object.__setattr__(self, "role_definitions", frozenset(self.role_definitions))
        object.__setattr__(self, "policy_assignments", MappingProxyType(dict(self.policy_assignments)))
        object.__setattr__(self, "role_assignments", MappingProxyType(dict(self.role_assignments)))


@dataclass(frozen=True)
class CustomizationSpec:
    """
    Overlay por node, fornecido pelo chamador a cada resolução.

    Listas de adição/remoção preservam a forma recebida (tuplas) para que
    duplicatas possam ser reportadas; o Resolver as trata como conjuntos.
    """
    policy_definitions_to_add: Tuple[str, ...] = ()
    policy_definitions_to_remove: Tuple[str, ...] = ()
    policy_set_definitions_to_add: Tuple[str, ...] = ()
    policy_set_definitions_to_remove: Tuple[str, ...] = ()
    role_definitions_to_add: Tuple[str, ...] = ()
    role_definitions_to_remove: Tuple[str, ...] = ()
    policy_assignments_to_remove: Tuple[str, ...] = ()
    policy_assignments_to_add: Mapping[str, PolicyAssignmentSpec] = field(default_factory=dict)
    role_assignments_to_add: Mapping[str, RoleAssignmentSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in (
            "policy_definitions_to_add",
            "policy_definitions_to_remove",
            "policy_set_definitions_to_add",
            "policy_set_definitions_to_remove",
            "role_definitions_to_add",
            "role_definitions_to_remove",
            "policy_assignments_to_remove",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "policy_assignments_to_add", MappingProxyType(dict(self.policy_assignments_to_add)))
        object.__setattr__(self, "role_assignments_to_add", MappingProxyType(dict(self.role_assignments_to_add)))


@dataclass(frozen=True)
class Defaults:
    """Defaults do node; `log_analytics_workspace_id` é opcional."""
    location: Optional[str]
    log_analytics_workspace_id: Optional[str] = None

    def value_for(self, key: str) -> Optional[str]:
        return getattr(self, key, None)


@dataclass(frozen=True)
class EffectiveArchetype:
    """
    Resultado imutável da resolução de um archetype para um node.

    Consumido por um deployer externo. `to_dict()` produz a forma canônica
    (conjuntos ordenados, chaves ordenadas) usada em hashing e relatórios.
    """
    name: str
    parent_id: str
    base_archetype: str
    display_name: Optional[str] = None
    subscription_ids: Tuple[str, ...] = ()
    policy_definitions: FrozenSet[str] = frozenset()
    policy_set_definitions: FrozenSet[str] = frozenset()
    policy_assignments: Mapping[str, PolicyAssignmentSpec] = field(default_factory=dict)
    role_definitions: FrozenSet[str] = frozenset()
    role_assignments: Mapping[str, RoleAssignmentSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "subscription_ids", tuple(self.subscription_ids))
        object.__setattr__(self, "policy_definitions", frozenset(self.policy_definitions))
        object.__setattr__(self, "policy_set_definitions", frozenset(self.policy_set_definitions))
        object.__setattr__(self, "role_definitions", frozenset(self.role_definitions))
        object.__setattr__(self, "policy_assignments", MappingProxyType(dict(self.policy_assignments)))
        object.__setattr__(self, "role_assignments", MappingProxyType(dict(self.role_assignments)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parent_id": self.parent_id,
            "base_archetype": self.base_archetype,
            "display_name": self.display_name,
            "subscription_ids": list(self.subscription_ids),
            "policy_definitions": sorted(self.policy_definitions),
            "policy_set_definitions": sorted(self.policy_set_definitions),
            "policy_assignments": {
                k: self.policy_assignments[k].to_dict() for k in sorted(self.policy_assignments)
            },
            "role_definitions": sorted(self.role_definitions),
            "role_assignments": {
                k: self.role_assignments[k].to_dict() for k in sorted(self.role_assignments)
            },
        }
