"""Materialização do modelo a partir de mapeamentos simples (YAML/JSON/host).

Os nomes de chave seguem a superfície declarativa do host (snake_case):
`policy_assignments_to_add`, `identity_ids`, `non_compliance_message`, ...

Regras:
- Apenas erros de FORMA (ex.: lista esperada, string recebida) levantam
  `ModelParseError` aqui.
- Regras de valor (enums, UUIDs, exclusão mútua) pertencem ao Validator,
  para que todas as violações sejam reportadas juntas.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from .types import (
    BaseArchetype,
    CustomizationSpec,
    Defaults,
    NonComplianceMessage,
    PolicyAssignmentSpec,
    RoleAssignmentSpec,
)


class ModelParseError(ValueError):
    """Entrada não tem a forma esperada pelo modelo."""


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise ModelParseError(msg)


def _opt_str(data: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    _expect(value is None or isinstance(value, str), f"{where}.{key} must be a string")
    return value


def _str_list(data: Mapping[str, Any], key: str, where: str) -> Tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    _expect(isinstance(value, (list, tuple, set, frozenset)), f"{where}.{key} must be a list")
    for i, item in enumerate(value):
        _expect(isinstance(item, str), f"{where}.{key}[{i}] must be a string")
    # conjuntos não têm ordem: ordena apenas depois de garantir que são strings
    if isinstance(value, (set, frozenset)):
        value = sorted(value)
    return tuple(value)


def _mapping(data: Mapping[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    _expect(isinstance(value, Mapping), f"{where}.{key} must be a mapping")
    return dict(value)


def parse_non_compliance_message(data: Any, *, where: str = "non_compliance_message") -> NonComplianceMessage:
    if isinstance(data, NonComplianceMessage):
        return data
    if isinstance(data, str):
        return NonComplianceMessage(message=data)
    _expect(isinstance(data, Mapping), f"{where} must be a mapping")
    return NonComplianceMessage(
        message=_opt_str(data, "message", where),
        policy_definition_reference_id=_opt_str(data, "policy_definition_reference_id", where),
    )


def parse_policy_assignment(data: Any, *, where: str = "policy_assignment") -> PolicyAssignmentSpec:
    if isinstance(data, PolicyAssignmentSpec):
        return data
    _expect(isinstance(data, Mapping), f"{where} must be a mapping")

    # o host usa o singular `non_compliance_message` para o conjunto
    raw_messages = data.get("non_compliance_messages", data.get("non_compliance_message"))
    if raw_messages is None:
        messages: Tuple[NonComplianceMessage, ...] = ()
    else:
        _expect(isinstance(raw_messages, (list, tuple, set, frozenset)), f"{where}.non_compliance_message must be a list")
        messages = tuple(
            parse_non_compliance_message(m, where=f"{where}.non_compliance_message[{i}]")
            for i, m in enumerate(raw_messages)
        )

    return PolicyAssignmentSpec(
        display_name=_opt_str(data, "display_name", where),
        policy_definition_name=_opt_str(data, "policy_definition_name", where),
        policy_definition_id=_opt_str(data, "policy_definition_id", where),
        enforcement_mode=_opt_str(data, "enforcement_mode", where),
        identity=_opt_str(data, "identity", where),
        identity_ids=_str_list(data, "identity_ids", where),
        non_compliance_messages=messages,
        parameters=data.get("parameters"),
    )


def parse_role_assignment(data: Any, *, where: str = "role_assignment") -> RoleAssignmentSpec:
    if isinstance(data, RoleAssignmentSpec):
        return data
    _expect(isinstance(data, Mapping), f"{where} must be a mapping")
    definition = _opt_str(data, "definition", where)
    object_id = _opt_str(data, "object_id", where)
    _expect(definition is not None, f"{where}.definition is required")
    _expect(object_id is not None, f"{where}.object_id is required")
    return RoleAssignmentSpec(definition=definition, object_id=object_id)


def parse_customization(data: Optional[Mapping[str, Any]]) -> CustomizationSpec:
    """Materializa um CustomizationSpec; `None` equivale a nenhuma customização."""
    if data is None:
        return CustomizationSpec()
    if isinstance(data, CustomizationSpec):
        return data
    _expect(isinstance(data, Mapping), "customization must be a mapping")

    where = "customization"
    return CustomizationSpec(
        policy_definitions_to_add=_str_list(data, "policy_definitions_to_add", where),
        policy_definitions_to_remove=_str_list(data, "policy_definitions_to_remove", where),
        policy_set_definitions_to_add=_str_list(data, "policy_set_definitions_to_add", where),
        policy_set_definitions_to_remove=_str_list(data, "policy_set_definitions_to_remove", where),
        role_definitions_to_add=_str_list(data, "role_definitions_to_add", where),
        role_definitions_to_remove=_str_list(data, "role_definitions_to_remove", where),
        policy_assignments_to_remove=_str_list(data, "policy_assignments_to_remove", where),
        policy_assignments_to_add={
            key: parse_policy_assignment(value, where=f"{where}.policy_assignments_to_add.{key}")
            for key, value in _mapping(data, "policy_assignments_to_add", where).items()
        },
        role_assignments_to_add={
            key: parse_role_assignment(value, where=f"{where}.role_assignments_to_add.{key}")
            for key, value in _mapping(data, "role_assignments_to_add", where).items()
        },
    )


def parse_defaults(data: Any) -> Defaults:
    if isinstance(data, Defaults):
        return data
    _expect(isinstance(data, Mapping), "defaults must be a mapping")
    return Defaults(
        location=_opt_str(data, "location", "defaults"),
        log_analytics_workspace_id=_opt_str(data, "log_analytics_workspace_id", "defaults"),
    )


def parse_base_archetype(data: Any, *, name: Optional[str] = None) -> BaseArchetype:
    """Materializa um BaseArchetype (ex.: arquivo `*.alz_archetype_definition.yaml`)."""
    if isinstance(data, BaseArchetype):
        return data
    _expect(isinstance(data, Mapping), "archetype definition must be a mapping")

    archetype_name = data.get("name", name)
    _expect(isinstance(archetype_name, str) and bool(archetype_name.strip()), "archetype name is required")

    where = f"archetype.{archetype_name}"
    return BaseArchetype(
        name=archetype_name,
        policy_definitions=frozenset(_str_list(data, "policy_definitions", where)),
        policy_set_definitions=frozenset(_str_list(data, "policy_set_definitions", where)),
        policy_assignments={
            key: parse_policy_assignment(value, where=f"{where}.policy_assignments.{key}")
            for key, value in _mapping(data, "policy_assignments", where).items()
        },
        role_definitions=frozenset(_str_list(data, "role_definitions", where)),
        role_assignments={
            key: parse_role_assignment(value, where=f"{where}.role_assignments.{key}")
            for key, value in _mapping(data, "role_assignments", where).items()
        },
    )
