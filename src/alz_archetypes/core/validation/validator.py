# src/alz_archetypes/core/validation/validator.py
"""
Validator de policy assignments, role assignments e dados do node.

Este módulo implementa as regras de campo e as regras entre campos
(exclusão mútua, requisitos condicionais, formatos) como funções puras
sobre o modelo, independentes de qualquer mecanismo de binding de input.

Política de avaliação:
    - Todas as regras são avaliadas de forma independente (sem short-circuit)
    - Cada violação produz exatamente um `ValidationError`, carregando
      a chave do assignment, os campos envolvidos e a regra violada
    - O Validator nunca muta o input: ele apenas classifica

Regras de PolicyAssignmentSpec:
    - display_name obrigatório
    - policy_definition_name XOR policy_definition_id (ausência de ambos e
      presença de ambos são erros distintos, cada um reportado uma vez)
    - enforcement_mode, se presente ∈ {Default, DoNotEnforce}
    - identity, se presente ∈ {SystemAssigned, UserAssigned}
    - identity = UserAssigned exige identity_ids não vazio
    - identity_ids presentes exigem identity = UserAssigned
    - identity_ids únicos; cada um é o resource id de uma user assigned
      identity ou um UUID canônico
    - cada non compliance message exige `message`
    - parameters estruturalmente bem formados (tipos por parâmetro NÃO
      são validados: dependem do schema da policy definition)

Limites explícitos:
    - Não consulta o Definition Library (ver Resolver)
    - Não decide se uma violação é fatal (o Resolver decide)
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..exceptions import ValidationError
from ..model import (
    Defaults,
    EnforcementMode,
    IdentityType,
    ParameterStructureError,
    PolicyAssignmentSpec,
    RoleAssignmentSpec,
    decode_parameters,
)
from .formats import (
    is_canonical_uuid,
    is_log_analytics_workspace_id,
    is_user_assigned_identity_id,
)


_ENFORCEMENT_MODES = tuple(m.value for m in EnforcementMode)
_IDENTITY_TYPES = tuple(t.value for t in IdentityType)


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def _violation(
    *,
    assignment: Optional[str],
    fields: Sequence[str],
    rule: str,
    message: str,
    **extra: Any,
) -> ValidationError:
    details = {"assignment": assignment, "fields": list(fields), "rule": rule}
    details.update(extra)
    prefix = f"policy assignment '{assignment}': " if assignment is not None else ""
    return ValidationError(message=prefix + message, details=details)


def _duplicates(values: Iterable[Any]) -> List[Any]:
    seen = set()
    dups: List[Any] = []
    for v in values:
        if v in seen and v not in dups:
            dups.append(v)
        seen.add(v)
    return dups


def validate_policy_assignment(
    spec: PolicyAssignmentSpec,
    *,
    assignment: Optional[str] = None,
) -> List[ValidationError]:
    """Valida um PolicyAssignmentSpec e devolve todas as violações encontradas."""
    errors: List[ValidationError] = []

    if not (isinstance(spec.display_name, str) and spec.display_name.strip()):
        errors.append(_violation(
            assignment=assignment,
            fields=("display_name",),
            rule="required",
            message="display_name is required",
        ))

    # exclusão mútua: nome na library XOR resource id
    has_name = _is_set(spec.policy_definition_name)
    has_id = _is_set(spec.policy_definition_id)
    if has_name and has_id:
        errors.append(_violation(
            assignment=assignment,
            fields=("policy_definition_name", "policy_definition_id"),
            rule="mutually_exclusive",
            message="policy_definition_name conflicts with policy_definition_id; set only one",
        ))
    elif not has_name and not has_id:
        errors.append(_violation(
            assignment=assignment,
            fields=("policy_definition_name", "policy_definition_id"),
            rule="exactly_one_required",
            message="one of policy_definition_name or policy_definition_id is required",
        ))

    if spec.enforcement_mode is not None and spec.enforcement_mode not in _ENFORCEMENT_MODES:
        errors.append(_violation(
            assignment=assignment,
            fields=("enforcement_mode",),
            rule="one_of",
            message=f"enforcement_mode must be one of {list(_ENFORCEMENT_MODES)}, got {spec.enforcement_mode!r}",
        ))

    if spec.identity is not None and spec.identity not in _IDENTITY_TYPES:
        errors.append(_violation(
            assignment=assignment,
            fields=("identity",),
            rule="one_of",
            message=f"identity must be one of {list(_IDENTITY_TYPES)}, got {spec.identity!r}",
        ))

    errors.extend(_validate_identity_ids(spec, assignment=assignment))

    for i, ncm in enumerate(spec.non_compliance_messages):
        if not (isinstance(ncm.message, str) and ncm.message.strip()):
            errors.append(_violation(
                assignment=assignment,
                fields=(f"non_compliance_messages[{i}].message",),
                rule="required",
                message=f"non_compliance_messages[{i}].message is required",
            ))
        ref = ncm.policy_definition_reference_id
        if ref is not None and not (isinstance(ref, str) and ref.strip()):
            errors.append(_violation(
                assignment=assignment,
                fields=(f"non_compliance_messages[{i}].policy_definition_reference_id",),
                rule="non_empty",
                message="policy_definition_reference_id must be a non-empty string when set",
            ))

    try:
        decode_parameters(spec.parameters)
    except ParameterStructureError as e:
        errors.append(_violation(
            assignment=assignment,
            fields=("parameters",),
            rule="well_formed",
            message=str(e),
        ))

    return errors


def _validate_identity_ids(
    spec: PolicyAssignmentSpec,
    *,
    assignment: Optional[str],
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    ids = tuple(spec.identity_ids or ())
    user_assigned = spec.identity == IdentityType.USER_ASSIGNED.value

    if user_assigned and not ids:
        errors.append(_violation(
            assignment=assignment,
            fields=("identity_ids", "identity"),
            rule="required_if",
            message="identity_ids must be a non-empty list when identity is UserAssigned",
        ))

    if ids and not user_assigned:
        errors.append(_violation(
            assignment=assignment,
            fields=("identity_ids", "identity"),
            rule="also_requires",
            message="identity_ids requires identity to be UserAssigned",
        ))

    dups = _duplicates(ids)
    if dups:
        errors.append(_violation(
            assignment=assignment,
            fields=("identity_ids",),
            rule="unique_values",
            message=f"identity_ids contains duplicate values: {dups}",
            values=dups,
        ))

    for i, identity_id in enumerate(ids):
        if not (is_user_assigned_identity_id(identity_id) or is_canonical_uuid(identity_id)):
            errors.append(_violation(
                assignment=assignment,
                fields=(f"identity_ids[{i}]",),
                rule="resource_id",
                message=(
                    f"identity_ids[{i}] must be a Microsoft.ManagedIdentity/userAssignedIdentities "
                    f"resource id or a lowercase UUID, got {identity_id!r}"
                ),
            ))

    return errors


def validate_role_assignment(spec: RoleAssignmentSpec, *, assignment: Optional[str] = None) -> List[ValidationError]:
    errors: List[ValidationError] = []
    prefix = f"role assignment '{assignment}': " if assignment is not None else ""

    if not (isinstance(spec.definition, str) and spec.definition.strip()):
        errors.append(ValidationError(
            message=prefix + "definition is required",
            details={"assignment": assignment, "fields": ["definition"], "rule": "required"},
        ))

    if not is_canonical_uuid(spec.object_id):
        errors.append(ValidationError(
            message=prefix + f"object_id must be a valid lowercase UUID, got {spec.object_id!r}",
            details={"assignment": assignment, "fields": ["object_id"], "rule": "uuid"},
        ))

    return errors


def validate_defaults(defaults: Defaults) -> List[ValidationError]:
    errors: List[ValidationError] = []

    if not (isinstance(defaults.location, str) and defaults.location.strip()):
        errors.append(_violation(
            assignment=None,
            fields=("defaults.location",),
            rule="required",
            message="defaults.location is required",
        ))

    workspace = defaults.log_analytics_workspace_id
    if workspace is not None and not is_log_analytics_workspace_id(workspace):
        errors.append(_violation(
            assignment=None,
            fields=("defaults.log_analytics_workspace_id",),
            rule="resource_id",
            message=(
                "defaults.log_analytics_workspace_id must be a "
                f"Microsoft.OperationalInsights/workspaces resource id, got {workspace!r}"
            ),
        ))

    return errors


def validate_subscription_ids(subscription_ids: Sequence[str]) -> List[ValidationError]:
    if isinstance(subscription_ids, str):
        return [_violation(
            assignment=None,
            fields=("subscription_ids",),
            rule="list",
            message=f"subscription_ids must be a list of UUIDs, got a single string {subscription_ids!r}",
        )]

    errors: List[ValidationError] = []
    for i, sub in enumerate(subscription_ids):
        if not is_canonical_uuid(sub):
            errors.append(_violation(
                assignment=None,
                fields=(f"subscription_ids[{i}]",),
                rule="uuid",
                message=f"subscription id must be a valid lowercase UUID, got {sub!r}",
            ))
    return errors


def validate_unique_lists(lists: Mapping[str, Sequence[str]]) -> List[ValidationError]:
    """Cada lista de adição/remoção não pode conter valores repetidos."""
    errors: List[ValidationError] = []
    for field_name, values in lists.items():
        dups = _duplicates(values)
        if dups:
            errors.append(_violation(
                assignment=None,
                fields=(field_name,),
                rule="unique_values",
                message=f"{field_name} contains duplicate values: {dups}",
                values=dups,
            ))
    return errors
