# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Este módulo valida o comportamento da função `deep_merge`, responsável
por resolver a configuração final do resolver a partir de uma
configuração base (defaults) e um conjunto de overrides explícitos.

Os testes asseguram que:
- valores escalares são sobrescritos corretamente
- dicionários são mesclados de forma recursiva
- listas são sobrescritas integralmente
- conflitos de tipo são detectados e rejeitados explicitamente
- objetos de entrada não são mutados durante o merge

Invariantes:
    - Chaves não sobrescritas são preservadas
    - Nenhum merge parcial é produzido em caso de erro

Limites explícitos:
    - Não valida carregamento de arquivos YAML
    - Não valida a composição de archetypes (regras de conjunto próprias)
"""

import pytest

try:
    from alz_archetypes.core.config.merge import deep_merge
    from alz_archetypes.core.config.errors import ConfigTypeConflictError
except Exception as e:  # noqa: BLE001
    deep_merge = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de config estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `deep_merge`
    e/ou `ConfigTypeConflictError` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge modules. Implement:\n"
            "- src/alz_archetypes/core/config/merge.py (deep_merge)\n"
            "- src/alz_archetypes/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    """
    Verifica o override de valores escalares sem mutar as entradas.

    Invariantes:
        - O valor sobrescrito reflete exatamente o override
        - `base` e `override` não sofrem mutação
    """
    _require_imports()
    base = {"resolver": {"strict_removals": False}}
    override = {"resolver": {"strict_removals": True}}
    out = deep_merge(base, override)
    assert out == {"resolver": {"strict_removals": True}}
    assert base == {"resolver": {"strict_removals": False}}
    assert override == {"resolver": {"strict_removals": True}}


def test_merge_nested_dict():
    """
    Verifica que dicionários aninhados são mesclados recursivamente.

    Apenas `location` é sobrescrito; o mapeamento de
    `log_analytics_workspace_id` vem da base.
    """
    _require_imports()
    base = {
        "resolver": {
            "default_parameter_names": {
                "location": ["location"],
                "log_analytics_workspace_id": ["logAnalytics"],
            }
        }
    }
    override = {"resolver": {"default_parameter_names": {"location": ["region"]}}}
    out = deep_merge(base, override)
    assert out["resolver"]["default_parameter_names"] == {
        "location": ["region"],
        "log_analytics_workspace_id": ["logAnalytics"],
    }


def test_merge_list_override_total():
    """
    Verifica que listas são sobrescritas integralmente durante o deep-merge.

    Decisões arquiteturais:
        - Listas não são mescladas elemento a elemento
        - Não há heurística implícita para merge de coleções ordenadas
    """
    _require_imports()
    base = {"names": ["logAnalytics", "logAnalyticsWorkspaceId"]}
    override = {"names": ["workspaceId"]}
    assert deep_merge(base, override) == {"names": ["workspaceId"]}


def test_merge_none_base_is_replaced():
    _require_imports()
    out = deep_merge({"resolver": None}, {"resolver": {"strict_removals": True}})
    assert out == {"resolver": {"strict_removals": True}}


def test_merge_type_conflict_raises():
    """
    Verifica que conflitos de tipo durante o deep-merge são rejeitados explicitamente.

    Invariantes:
        - A exceção utilizada é específica (`ConfigTypeConflictError`)
        - Nenhum merge parcial é produzido em caso de conflito
    """
    _require_imports()
    if ConfigTypeConflictError is None:
        pytest.fail("ConfigTypeConflictError must be defined in errors.py")
    base = {"resolver": {"strict_removals": False}}
    override = {"resolver": "strict"}  # dict vs str
    with pytest.raises(ConfigTypeConflictError):
        deep_merge(base, override)


def test_merge_type_conflict_names_the_key():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as ei:
        deep_merge({"resolver": {"strict_removals": False}}, {"resolver": {"strict_removals": "yes"}})
    assert "strict_removals" in str(ei.value)


def test_merge_non_dict_root_raises():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["a"])
