# tests/core/resolver/test_resolver_errors.py
"""
Testes de falhas da resolução e da agregação de erros.

Os testes asseguram que:
- base archetype ausente interrompe imediatamente com `NotFoundError`
- um nome em add e remove da mesma categoria gera
  `ConflictingCustomizationError` (nenhum lado é escolhido)
- referências inexistentes no Definition Library geram
  `UnresolvedReferenceError` nomeando a referência exata
- violações do Validator são agregadas com o assignment de origem
- remoções de itens ausentes são no-op (warning) ou erro em modo strict
- todos os erros de uma resolução aparecem em um único agregado

Invariantes:
    - Nenhum Effective Archetype parcial é retornado em caso de erro
"""

import pytest

try:
    from alz_archetypes.core.config import ResolverSettings
    from alz_archetypes.core.context import ResolutionContext
    from alz_archetypes.core.exceptions import (
        ArchetypeResolutionError,
        ConflictingCustomizationError,
        MissingDefaultError,
        NotFoundError,
        RemovalTargetNotFoundError,
        UnresolvedReferenceError,
        ValidationError,
    )
    from alz_archetypes.core.resolver import Resolver
except Exception as e:  # noqa: BLE001
    Resolver = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing resolver/exceptions modules. Implement:\n"
            "- src/alz_archetypes/core/resolver/resolver.py (Resolver)\n"
            "- src/alz_archetypes/core/exceptions.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _failure(resolve, **kwargs):
    with pytest.raises(ArchetypeResolutionError) as ei:
        resolve(**kwargs)
    return ei.value


def test_missing_base_archetype_short_circuits(resolve):
    """
    Verifica que um base archetype inexistente interrompe a resolução.

    Decisões arquiteturais:
        - Sem base não há o que validar: o erro NÃO é agregado
        - O contexto registra o evento de erro no stage de lookup
    """
    _require_imports()
    ctx = ResolutionContext.new("online")
    with pytest.raises(NotFoundError) as ei:
        resolve("online", ctx=ctx, customization={"policy_definitions_to_add": ["nope"]})

    assert not isinstance(ei.value, ArchetypeResolutionError)
    assert ei.value.name == "online"
    assert [e["level"] for e in ctx.events_for("registry.lookup")] == ["ERROR"]


@pytest.mark.parametrize(
    "prefix,name",
    [
        ("policy_definitions", "deny-public-ip"),
        ("policy_set_definitions", "deploy-mdfc-config"),
        ("role_definitions", "security-operations"),
    ],
)
def test_add_and_remove_same_name_conflicts(resolve, prefix, name):
    """
    Verifica que um nome em add e remove na mesma categoria é conflito explícito.
    """
    _require_imports()
    err = _failure(resolve, customization={f"{prefix}_to_add": [name], f"{prefix}_to_remove": [name]})

    conflicts = err.of_type(ConflictingCustomizationError)
    assert len(conflicts) == 1
    assert conflicts[0].category == prefix
    assert conflicts[0].names == (name,)


def test_unknown_definition_reference(resolve):
    """
    Verifica que uma adição inexistente no library gera UnresolvedReferenceError
    nomeando exatamente a definição ausente.
    """
    _require_imports()
    err = _failure(resolve, customization={"policy_definitions_to_add": ["require-tag", "does-not-exist"]})

    unresolved = err.of_type(UnresolvedReferenceError)
    assert [u.reference for u in unresolved] == ["does-not-exist"]
    assert unresolved[0].category == "policy_definitions"
    assert "does-not-exist" in unresolved[0].message


def test_unknown_reference_returns_no_effective(resolver, defaults):
    _require_imports()
    result = resolver.try_resolve(
        "foundation", {"policy_set_definitions_to_add": ["ghost-set"]}, defaults, "alz",
    )
    assert result.effective is None
    assert not result.ok
    assert [e["type"] for e in result.errors] == ["UNRESOLVED_REFERENCE"]
    assert result.errors[0]["details"]["reference"] == "ghost-set"


def test_assignment_definition_name_must_exist(resolve):
    _require_imports()
    err = _failure(resolve, customization={
        "policy_assignments_to_add": {
            "ghost": {"display_name": "Ghost", "policy_definition_name": "ghost-policy"},
        }
    })
    unresolved = err.of_type(UnresolvedReferenceError)
    assert len(unresolved) == 1
    assert unresolved[0].reference == "ghost-policy"
    assert unresolved[0].details["referenced_by"] == "ghost"


def test_role_assignment_definition_name_must_exist(resolve):
    _require_imports()
    err = _failure(resolve, customization={
        "role_assignments_to_add": {
            "ops": {"definition": "ghost-role", "object_id": "11111111-2222-3333-4444-555555555555"},
        }
    })
    assert [u.reference for u in err.of_type(UnresolvedReferenceError)] == ["ghost-role"]


def test_invalid_assignment_is_reported_with_its_key(resolve):
    """
    Verifica que violações do Validator chegam ao agregado com o assignment.
    """
    _require_imports()
    err = _failure(resolve, customization={
        "policy_assignments_to_add": {
            "both": {
                "display_name": "Both set",
                "policy_definition_name": "require-tag",
                "policy_definition_id": "/providers/Microsoft.Authorization/policyDefinitions/x",
            },
            "uami": {
                "display_name": "UAMI without ids",
                "policy_definition_name": "require-tag",
                "identity": "UserAssigned",
            },
        }
    })
    violations = err.of_type(ValidationError)
    assert [(v.assignment, v.rule) for v in violations] == [
        ("both", "mutually_exclusive"),
        ("uami", "required_if"),
    ]


def test_tolerant_removal_of_missing_name_warns(resolver, defaults):
    """
    Verifica que, em modo tolerante, remover um nome ausente é no-op com warning.
    """
    _require_imports()
    ctx = ResolutionContext.new("foundation")
    eff = resolver.resolve(
        "foundation",
        {"policy_definitions_to_remove": ["not-in-base"], "policy_assignments_to_remove": ["ghost"]},
        defaults,
        "alz",
        ctx=ctx,
    )

    assert eff.policy_definitions == frozenset({"deny-public-ip"})
    assert set(ctx.warnings) == {"merge.policy_definitions", "merge.policy_assignments"}
    assert "not-in-base" in ctx.warnings["merge.policy_definitions"][0]


def test_strict_removal_of_missing_name_fails(resolve):
    _require_imports()
    err = _failure(
        resolve,
        strict=True,
        customization={"role_definitions_to_remove": ["not-in-base"], "policy_assignments_to_remove": ["ghost"]},
    )
    missing = err.of_type(RemovalTargetNotFoundError)
    assert [(m.kind, m.name) for m in missing] == [("role_definitions", "not-in-base"), ("policy_assignments", "ghost")]
    assert all(isinstance(m, NotFoundError) for m in missing)


def test_strict_mode_from_settings(library, registry, defaults):
    _require_imports()
    resolver = Resolver(library, registry, settings=ResolverSettings(strict_removals=True))
    with pytest.raises(ArchetypeResolutionError) as ei:
        resolver.resolve("foundation", {"policy_definitions_to_remove": ["ghost"]}, defaults, "alz")
    assert len(ei.value.of_type(RemovalTargetNotFoundError)) == 1

    # o argumento explícito vence a configuração
    eff = resolver.resolve("foundation", {"policy_definitions_to_remove": ["ghost"]}, defaults, "alz", strict=False)
    assert eff.policy_definitions == frozenset({"deny-public-ip"})


def test_strict_duplicate_assignment_removal_is_not_reported_missing(resolve):
    """
    Verifica que remover duas vezes um assignment presente no base gera
    apenas o erro de duplicata, nunca um falso "not present in base".
    """
    _require_imports()
    err = _failure(resolve, strict=True, customization={"policy_assignments_to_remove": ["audit-1", "audit-1"]})

    assert err.of_type(RemovalTargetNotFoundError) == ()
    violations = err.of_type(ValidationError)
    assert [(v.fields, v.rule) for v in violations] == [(("policy_assignments_to_remove",), "unique_values")]


def test_single_string_subscription_ids_is_one_error(resolve):
    _require_imports()
    err = _failure(resolve, subscription_ids="00000000-0000-0000-0000-000000000000")
    violations = err.of_type(ValidationError)
    assert [(v.fields, v.rule) for v in violations] == [(("subscription_ids",), "list")]


def test_duplicate_entries_in_a_list_are_rejected(resolve):
    _require_imports()
    err = _failure(resolve, customization={"policy_definitions_to_add": ["require-tag", "require-tag"]})
    violations = err.of_type(ValidationError)
    assert [(v.fields, v.rule) for v in violations] == [(("policy_definitions_to_add",), "unique_values")]


def test_node_fields_are_validated(resolve):
    _require_imports()
    err = _failure(resolve, parent_id=None, subscription_ids=["not-a-uuid"], defaults={"location": ""})
    fields = [v.fields[0] for v in err.of_type(ValidationError)]
    assert fields == ["parent_id", "subscription_ids[0]", "defaults.location"]


def test_all_errors_are_collected_in_one_pass(resolve):
    """
    Verifica que erros independentes são reportados juntos.

    Invariantes:
        - Conflito, referência inexistente, violação de validação e default
          ausente aparecem no MESMO agregado
        - `details.error_types` resume os códigos presentes
    """
    _require_imports()
    err = _failure(
        resolve,
        defaults={"location": "westeurope"},
        customization={
            "policy_definitions_to_add": ["deny-public-ip", "ghost"],
            "policy_definitions_to_remove": ["deny-public-ip"],
            "policy_assignments_to_add": {
                "bad": {"display_name": "", "policy_definition_name": "require-tag"},
            },
        },
    )

    kinds = {type(e) for e in err.errors}
    assert kinds == {ConflictingCustomizationError, UnresolvedReferenceError, ValidationError, MissingDefaultError}
    assert err.details["error_count"] == len(err.errors)
    assert err.details["error_types"] == sorted(
        ["CONFLICTING_CUSTOMIZATION", "UNRESOLVED_REFERENCE", "VALIDATION_FAILED", "MISSING_DEFAULT"]
    )
