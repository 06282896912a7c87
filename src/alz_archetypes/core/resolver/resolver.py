# src/alz_archetypes/core/resolver/resolver.py
"""
Resolver de archetypes.

Este módulo implementa o algoritmo central: dado o nome de um base
archetype, uma customização por node e os defaults do node, produz um
único `EffectiveArchetype` consistente, ou falha com o conjunto completo
de erros atribuíveis.

Algoritmo (determinístico; ordem irrelevante em conjuntos, ordem
preservada em listas expostas ao chamador):
    1. Busca o BaseArchetype no Registry (`NotFoundError` → short-circuit)
    2. Definições (policy, policy set, role):
           efetivo = (base ∪ add) − remove
       Um nome em add e remove na mesma categoria → ConflictingCustomizationError
    3. Policy assignments: remove afeta apenas entradas do base; add
       sobrescreve em colisão de chave (add sempre vence)
    4. Role assignments: união base + add; add sobrescreve em colisão
    5. Referências inexistentes no Definition Library → UnresolvedReferenceError
    6. Cada assignment passa pelo Validator
    7. Parâmetros ligados a defaults recebem o valor do default
    8. Retorna o EffectiveArchetype, ou levanta ArchetypeResolutionError
       com TODOS os erros dos passos 2–7

Tabela de desempate:
    | categoria              | remove ∩ add              | base vs add          |
    |------------------------|---------------------------|----------------------|
    | definições (conjuntos) | conflito (erro explícito) | remove vence o base  |
    | policy assignments     | add vence                 | add sobrescreve base |
    | role assignments       | (sem remoção)             | add sobrescreve base |

Decisões arquiteturais:
    - Tudo-ou-nada: nenhum resultado parcial é retornado
    - Remoção de item inexistente é no-op (warning) por padrão; em modo
      strict gera `NotFoundError` (acumulado, não short-circuit)
    - Library e Registry são passados explicitamente; nenhum singleton
    - Nenhum estado mutável é compartilhado entre resoluções: o Resolver
      pode ser usado concorrentemente por várias threads

Limites explícitos:
    - Não implanta nada em control plane
    - Não gerencia hierarquia de management groups
    - Não persiste o resultado
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from ..config import ResolverSettings
from ..context import ResolutionContext
from ..errors import INVALID_INPUT, ArchetypeErrorPayload, default_hint, payload_from_exception
from ..exceptions import (
    ArchetypeException,
    ArchetypeResolutionError,
    ConflictingCustomizationError,
    NotFoundError,
    RemovalTargetNotFoundError,
    UnresolvedReferenceError,
    ValidationError,
)
from ..library import DefinitionKind, DefinitionLibrary, LibrarySnapshot
from ..model import (
    BaseArchetype,
    CustomizationSpec,
    Defaults,
    EffectiveArchetype,
    EnforcementMode,
    IdentityType,
    ModelParseError,
    NonComplianceMessage,
    PolicyAssignmentSpec,
    RoleAssignmentSpec,
    decode_parameters,
    freeze_parameters,
    parse_customization,
    parse_defaults,
)
from ..registry import ArchetypeRegistry
from ..validation import (
    validate_defaults,
    validate_policy_assignment,
    validate_role_assignment,
    validate_subscription_ids,
    validate_unique_lists,
)
from .defaults import substitute_defaults
from .hashing import compute_archetype_hash


POLICY_DEFINITIONS = "policy_definitions"
POLICY_SET_DEFINITIONS = "policy_set_definitions"
ROLE_DEFINITIONS = "role_definitions"
POLICY_ASSIGNMENTS = "policy_assignments"
ROLE_ASSIGNMENTS = "role_assignments"

_CATEGORY_KINDS = {
    POLICY_DEFINITIONS: DefinitionKind.POLICY_DEFINITION,
    POLICY_SET_DEFINITIONS: DefinitionKind.POLICY_SET_DEFINITION,
    ROLE_DEFINITIONS: DefinitionKind.ROLE_DEFINITION,
}


@dataclass(frozen=True)
class ResolutionResult:
    """Par (EffectiveArchetype | None, erros serializáveis) de uma resolução."""

    effective: Optional[EffectiveArchetype]
    errors: List[Dict[str, Any]] = field(default_factory=list)
    context: Optional[ResolutionContext] = None

    @property
    def ok(self) -> bool:
        return self.effective is not None and not self.errors


class Resolver:
    """Resolver canônico (Registry + Library + Validator)."""

    def __init__(
        self,
        library: DefinitionLibrary,
        registry: ArchetypeRegistry,
        *,
        settings: Optional[ResolverSettings] = None,
    ):
        self.library = library
        self.registry = registry
        self.settings = settings or ResolverSettings()

    @classmethod
    def from_snapshot(cls, snapshot: LibrarySnapshot, *, settings: Optional[ResolverSettings] = None) -> "Resolver":
        return cls(snapshot.library, snapshot.registry, settings=settings)

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------

    def resolve(
        self,
        archetype_name: str,
        customization: Union[CustomizationSpec, Mapping[str, Any], None] = None,
        defaults: Union[Defaults, Mapping[str, Any], None] = None,
        parent_id: Optional[str] = None,
        subscription_ids: Sequence[str] = (),
        *,
        name: Optional[str] = None,
        display_name: Optional[str] = None,
        strict: Optional[bool] = None,
        ctx: Optional[ResolutionContext] = None,
    ) -> EffectiveArchetype:
        """Resolve um archetype para um node.

        Raises:
            NotFoundError: base archetype inexistente (short-circuit).
            ArchetypeResolutionError: agregado de todas as demais falhas.
            ModelParseError: customização/defaults com forma inválida.
        """
        custom = parse_customization(customization)
        node_defaults = parse_defaults(defaults) if defaults is not None else Defaults(location=None)
        strict_removals = self.settings.strict_removals if strict is None else bool(strict)
        node_name = name or archetype_name
        ctx = ctx or ResolutionContext.new(archetype_name)

        # 1. base archetype
        try:
            base = self.registry.lookup(archetype_name)
        except NotFoundError:
            ctx.log(stage="registry.lookup", level="ERROR", message=f"archetype not found: {archetype_name}")
            raise
        ctx.log(stage="registry.lookup", level="INFO", message=f"base archetype loaded: {base.name}")

        errors: List[ArchetypeException] = []
        errors.extend(self._validate_node(node_name, parent_id, subscription_ids, node_defaults, custom))

        # 2. definições
        definitions: Dict[str, Set[str]] = {}
        for category, base_names, to_add, to_remove in _definition_categories(base, custom):
            definitions[category] = self._merge_definitions(
                category, base_names, to_add, to_remove,
                strict=strict_removals, ctx=ctx, errors=errors,
            )

        # 3. e 4. assignments
        policy_assignments = self._merge_policy_assignments(
            base, custom, strict=strict_removals, ctx=ctx, errors=errors,
        )
        role_assignments: Dict[str, RoleAssignmentSpec] = dict(base.role_assignments)
        role_assignments.update(custom.role_assignments_to_add)
        ctx.log(
            stage="merge.role_assignments",
            level="INFO",
            message=f"{len(role_assignments)} role assignment(s) after merge",
            overridden=sorted(set(base.role_assignments) & set(custom.role_assignments_to_add)),
        )

        # 5. referências
        unresolved = self._check_references(definitions, policy_assignments, role_assignments)
        errors.extend(unresolved)
        ctx.log(stage="references", level="INFO" if not unresolved else "ERROR",
                message=f"{len(unresolved)} unresolved reference(s)")

        # 6. e 7. validação + defaults
        resolved_assignments: Dict[str, PolicyAssignmentSpec] = {}
        for key, spec in policy_assignments.items():
            violations = validate_policy_assignment(spec, assignment=key)
            if violations:
                errors.extend(violations)
                continue
            parameters, missing = substitute_defaults(
                decode_parameters(spec.parameters), node_defaults, self.settings, assignment=key,
            )
            errors.extend(missing)
            resolved_assignments[key] = _normalize_assignment(spec, parameters)

        for key, spec in role_assignments.items():
            errors.extend(validate_role_assignment(spec, assignment=key))

        # 8. tudo-ou-nada
        if errors:
            ctx.log(
                stage="resolve",
                level="ERROR",
                message=f"resolution failed with {len(errors)} error(s)",
                error_types=sorted({e.code for e in errors}),
            )
            raise ArchetypeResolutionError(
                message=f"archetype '{archetype_name}' resolution failed with {len(errors)} error(s)",
                details={
                    "archetype": archetype_name,
                    "name": node_name,
                    "error_count": len(errors),
                    "error_types": sorted({e.code for e in errors}),
                },
                errors=tuple(errors),
            )

        effective = EffectiveArchetype(
            name=node_name,
            parent_id=parent_id,
            base_archetype=base.name,
            display_name=display_name,
            subscription_ids=tuple(subscription_ids),
            policy_definitions=definitions[POLICY_DEFINITIONS],
            policy_set_definitions=definitions[POLICY_SET_DEFINITIONS],
            policy_assignments=resolved_assignments,
            role_definitions=definitions[ROLE_DEFINITIONS],
            role_assignments=role_assignments,
        )
        ctx.log(
            stage="resolve",
            level="INFO",
            message="archetype resolved",
            archetype_hash=compute_archetype_hash(effective),
        )
        return effective

    def try_resolve(self, archetype_name: str, *args: Any, **kwargs: Any) -> ResolutionResult:
        """Como `resolve`, mas devolve erros como payloads em vez de levantar.

        Aceita os mesmos argumentos de `resolve`.
        """
        ctx = kwargs.pop("ctx", None) or ResolutionContext.new(archetype_name)
        try:
            effective = self.resolve(archetype_name, *args, ctx=ctx, **kwargs)
        except ArchetypeResolutionError as e:
            return ResolutionResult(
                effective=None,
                errors=[payload_from_exception(err).to_dict() for err in e.errors],
                context=ctx,
            )
        except ArchetypeException as e:
            return ResolutionResult(effective=None, errors=[payload_from_exception(e).to_dict()], context=ctx)
        except ModelParseError as e:
            payload = ArchetypeErrorPayload(
                type=INVALID_INPUT,
                message=str(e),
                details={"exception_class": e.__class__.__name__},
                hint=default_hint(INVALID_INPUT),
            )
            return ResolutionResult(effective=None, errors=[payload.to_dict()], context=ctx)

        return ResolutionResult(effective=effective, errors=[], context=ctx)

    # ------------------------------------------------------------------
    # Etapas internas
    # ------------------------------------------------------------------

    def _validate_node(
        self,
        node_name: str,
        parent_id: Optional[str],
        subscription_ids: Sequence[str],
        defaults: Defaults,
        custom: CustomizationSpec,
    ) -> List[ArchetypeException]:
        errors: List[ArchetypeException] = []

        for field_name, value in (("name", node_name), ("parent_id", parent_id)):
            if not (isinstance(value, str) and value.strip()):
                errors.append(ValidationError(
                    message=f"{field_name} is required",
                    details={"assignment": None, "fields": [field_name], "rule": "required"},
                ))

        errors.extend(validate_subscription_ids(subscription_ids))
        errors.extend(validate_defaults(defaults))
        errors.extend(validate_unique_lists({
            "policy_definitions_to_add": custom.policy_definitions_to_add,
            "policy_definitions_to_remove": custom.policy_definitions_to_remove,
            "policy_set_definitions_to_add": custom.policy_set_definitions_to_add,
            "policy_set_definitions_to_remove": custom.policy_set_definitions_to_remove,
            "role_definitions_to_add": custom.role_definitions_to_add,
            "role_definitions_to_remove": custom.role_definitions_to_remove,
            "policy_assignments_to_remove": custom.policy_assignments_to_remove,
        }))
        return errors

    def _merge_definitions(
        self,
        category: str,
        base_names: Set[str],
        to_add: Sequence[str],
        to_remove: Sequence[str],
        *,
        strict: bool,
        ctx: ResolutionContext,
        errors: List[ArchetypeException],
    ) -> Set[str]:
        add, remove = set(to_add), set(to_remove)

        conflicts = sorted(add & remove)
        if conflicts:
            errors.append(ConflictingCustomizationError(
                message=f"{category}: {conflicts} listed in both add and remove",
                details={"category": category, "names": conflicts},
            ))

        for missing in sorted(remove - base_names - add):
            self._missing_removal(category, missing, strict=strict, ctx=ctx, errors=errors)

        effective = (set(base_names) | add) - remove
        ctx.log(
            stage=f"merge.{category}",
            level="INFO",
            message=f"{len(effective)} {category} after merge",
            added=sorted(add - set(base_names)),
            removed=sorted(remove & set(base_names)),
        )
        return effective

    def _merge_policy_assignments(
        self,
        base: BaseArchetype,
        custom: CustomizationSpec,
        *,
        strict: bool,
        ctx: ResolutionContext,
        errors: List[ArchetypeException],
    ) -> Dict[str, PolicyAssignmentSpec]:
        assignments: Dict[str, PolicyAssignmentSpec] = dict(base.policy_assignments)

        removed: List[str] = []
        # duplicatas já são reportadas como `unique_values`
        for key in dict.fromkeys(custom.policy_assignments_to_remove):
            if key in assignments:
                del assignments[key]
                removed.append(key)
            else:
                self._missing_removal(POLICY_ASSIGNMENTS, key, strict=strict, ctx=ctx, errors=errors)

        overridden = sorted(k for k in custom.policy_assignments_to_add if k in assignments)
        assignments.update(custom.policy_assignments_to_add)

        ctx.log(
            stage="merge.policy_assignments",
            level="INFO",
            message=f"{len(assignments)} policy assignment(s) after merge",
            removed=removed,
            overridden=overridden,
        )
        return assignments

    def _missing_removal(
        self,
        category: str,
        name: str,
        *,
        strict: bool,
        ctx: ResolutionContext,
        errors: List[ArchetypeException],
    ) -> None:
        if strict:
            errors.append(RemovalTargetNotFoundError(
                message=f"{category}: cannot remove '{name}', not present in base archetype",
                details={"kind": category, "name": name},
            ))
        else:
            ctx.add_warning(
                stage=f"merge.{category}",
                message=f"remove of '{name}' ignored: not present in base archetype",
            )

    def _check_references(
        self,
        definitions: Mapping[str, Set[str]],
        policy_assignments: Mapping[str, PolicyAssignmentSpec],
        role_assignments: Mapping[str, RoleAssignmentSpec],
    ) -> List[UnresolvedReferenceError]:
        errors: List[UnresolvedReferenceError] = []

        for category, kind in _CATEGORY_KINDS.items():
            known = self.library.names(kind)
            for missing in sorted(definitions[category] - known):
                errors.append(UnresolvedReferenceError(
                    message=f"{kind.value} '{missing}' not found in definition library",
                    details={"category": category, "reference": missing, "referenced_by": None},
                ))

        for key, spec in policy_assignments.items():
            ref = spec.policy_definition_name
            if isinstance(ref, str) and ref and not self.library.has_assignable_policy(ref):
                errors.append(UnresolvedReferenceError(
                    message=(
                        f"policy assignment '{key}': policy definition '{ref}' "
                        "not found in definition library"
                    ),
                    details={"category": POLICY_ASSIGNMENTS, "reference": ref, "referenced_by": key},
                ))

        for key, spec in role_assignments.items():
            ref = spec.definition
            # resource ids são opacos; apenas nomes são resolvidos no library
            if isinstance(ref, str) and ref and not ref.startswith("/") and not self.library.has_role_definition(ref):
                errors.append(UnresolvedReferenceError(
                    message=f"role assignment '{key}': role definition '{ref}' not found in definition library",
                    details={"category": ROLE_ASSIGNMENTS, "reference": ref, "referenced_by": key},
                ))

        return errors


def _definition_categories(
    base: BaseArchetype,
    custom: CustomizationSpec,
) -> List[Tuple[str, Set[str], Sequence[str], Sequence[str]]]:
    return [
        (POLICY_DEFINITIONS, set(base.policy_definitions),
         custom.policy_definitions_to_add, custom.policy_definitions_to_remove),
        (POLICY_SET_DEFINITIONS, set(base.policy_set_definitions),
         custom.policy_set_definitions_to_add, custom.policy_set_definitions_to_remove),
        (ROLE_DEFINITIONS, set(base.role_definitions),
         custom.role_definitions_to_add, custom.role_definitions_to_remove),
    ]


def _normalize_assignment(spec: PolicyAssignmentSpec, parameters: Dict[str, Any]) -> PolicyAssignmentSpec:
    """Forma final do assignment: enums explícitos, mensagens sem duplicatas, parâmetros congelados."""
    messages: List[NonComplianceMessage] = []
    for m in spec.non_compliance_messages:
        if m not in messages:
            messages.append(m)

    return replace(
        spec,
        enforcement_mode=EnforcementMode(spec.effective_enforcement_mode).value,
        identity=IdentityType(spec.identity).value if spec.identity is not None else None,
        identity_ids=tuple(spec.identity_ids),
        non_compliance_messages=tuple(messages),
        parameters=freeze_parameters(parameters),
    )
