# tests/conftest.py
"""
Fixtures compartilhados para testes do ALZ Archetypes.

Este módulo define fixtures reutilizáveis que fornecem:
- um Definition Library mínimo e determinístico
- um Archetype Registry com o archetype base "foundation"
- defaults de node válidos
- um Resolver pronto para uso
- configurações YAML de exemplo (defaults + local)

O objetivo destas fixtures é permitir testes do core (config, model,
registry, validation, resolver) sem depender de arquivos reais de
library.

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo
    - Todos os nomes referenciados pelo "foundation" existem no library

Limites explícitos:
    - Não substituir testes de integração com a library em disco
    - Não conter lógica condicional complexa
"""

import pytest


SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"
PRINCIPAL_ID = "11111111-2222-3333-4444-555555555555"
WORKSPACE_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg-management"
    "/providers/Microsoft.OperationalInsights/workspaces/law-central"
)
IDENTITY_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg-identity"
    "/providers/Microsoft.ManagedIdentity/userAssignedIdentities/uami-policy"
)


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    Fixture que fornece um YAML de configuração padrão (defaults) do resolver.

    Representa o conteúdo típico de um arquivo `config.defaults.yaml`,
    servindo como base sobre a qual configurações locais são aplicadas
    via deep-merge.

    Returns:
        str: Conteúdo YAML representando configuração padrão (defaults).
    """
    return """\
resolver:
  strict_removals: false
  default_parameter_names:
    location:
      - location
      - effectiveLocation
    log_analytics_workspace_id:
      - logAnalytics
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    Fixture que fornece um YAML de configuração local (override).

    Returns:
        str: Conteúdo YAML contendo apenas overrides locais.
    """
    return """\
resolver:
  strict_removals: true
  default_parameter_names:
    log_analytics_workspace_id:
      - workspaceId
"""


# =====================================================
# Library + Registry fixtures
# =====================================================

@pytest.fixture
def library():
    """
    Fixture que fornece um Definition Library mínimo.

    Decisões arquiteturais:
        - Apenas nomes: o conteúdo das definições não é relevante para a resolução
        - `require-tag` existe no library mas não no base archetype,
          permitindo testar adições válidas

    Returns:
        DefinitionLibrary: Catálogo imutável de nomes conhecidos.
    """
    from alz_archetypes.core.library import DefinitionLibrary

    return DefinitionLibrary(
        policy_definitions={
            "deny-public-ip",
            "require-tag",
            "audit-vm-backup",
            "deploy-diag-loganalytics",
            "deny-storage-http",
        },
        policy_set_definitions={"enforce-encryption", "deploy-mdfc-config"},
        role_definitions={"network-subnet-contributor", "security-operations"},
    )


@pytest.fixture
def foundation():
    """
    Fixture que fornece o base archetype "foundation".

    Contém:
        - policy definition `deny-public-ip`
        - policy set `enforce-encryption`
        - assignment `audit-1` (enforcement Default)
        - assignment `deploy-diag` com parâmetro ligado ao default de workspace
        - role definition e role assignment

    Returns:
        BaseArchetype: Archetype base imutável.
    """
    from alz_archetypes.core.model import BaseArchetype, PolicyAssignmentSpec, RoleAssignmentSpec

    return BaseArchetype(
        name="foundation",
        policy_definitions={"deny-public-ip"},
        policy_set_definitions={"enforce-encryption"},
        policy_assignments={
            "audit-1": PolicyAssignmentSpec(
                display_name="Audit VM backup",
                policy_definition_name="audit-vm-backup",
                enforcement_mode="Default",
            ),
            "deploy-diag": PolicyAssignmentSpec(
                display_name="Deploy diagnostic settings",
                policy_definition_name="deploy-diag-loganalytics",
                identity="SystemAssigned",
                parameters={"logAnalytics": None, "effect": "DeployIfNotExists"},
            ),
        },
        role_definitions={"network-subnet-contributor"},
        role_assignments={
            "subnet-ops": RoleAssignmentSpec(
                definition="network-subnet-contributor",
                object_id=PRINCIPAL_ID,
            ),
        },
    )


@pytest.fixture
def registry(foundation):
    """Registry congelado contendo "foundation" e um archetype vazio "empty"."""
    from alz_archetypes.core.model import BaseArchetype
    from alz_archetypes.core.registry import ArchetypeRegistry

    return ArchetypeRegistry.of([foundation, BaseArchetype(name="empty")])


@pytest.fixture
def defaults():
    """Defaults de node completos (location + workspace)."""
    from alz_archetypes.core.model import Defaults

    return Defaults(location="westeurope", log_analytics_workspace_id=WORKSPACE_ID)


@pytest.fixture
def resolver(library, registry):
    """Resolver com settings padrão (remoções tolerantes)."""
    from alz_archetypes.core.resolver import Resolver

    return Resolver(library, registry)


@pytest.fixture
def resolve(resolver, defaults):
    """
    Fixture factory: atalho para `resolver.resolve` com parent/defaults fixos.

    Returns:
        Callable: `resolve(archetype="foundation", customization=None, **kwargs)`.
    """

    def _resolve(archetype="foundation", customization=None, **kwargs):
        kwargs.setdefault("defaults", defaults)
        kwargs.setdefault("parent_id", "alz")
        return resolver.resolve(archetype, customization, **kwargs)

    return _resolve
