# src/alz_archetypes/__init__.py
"""
ALZ Archetypes: motor de resolução e validação de archetypes de governança.

Um archetype é um pacote nomeado e reutilizável de policy definitions,
policy set definitions, policy assignments, role definitions e role
assignments. Este pacote resolve um archetype base, somado a uma
customização por node (management group), em um `EffectiveArchetype`
concreto, ou falha com o conjunto completo de erros atribuíveis.

Arquitetura em alto nível:
    - core.library    → Definition Library (nomes conhecidos)
    - core.registry   → Archetype Registry (base archetypes)
    - core.resolver   → merge, integridade referencial e defaults
    - core.validation → regras de campo e entre campos
    - report          → relatório Markdown determinístico de uma resolução

Uso típico:
    snapshot = load_library("lib/")
    resolver = Resolver.from_snapshot(snapshot, settings=load_settings())
    effective = resolver.resolve("corp", customization, defaults, parent_id)
"""

from .core.config import ResolverSettings, load_config, load_settings
from .core.context import ResolutionContext
from .core.errors import ArchetypeErrorPayload, payload_from_exception
from .core.exceptions import (
    ArchetypeException,
    ArchetypeResolutionError,
    ConflictingCustomizationError,
    MissingDefaultError,
    NotFoundError,
    RemovalTargetNotFoundError,
    UnresolvedReferenceError,
    ValidationError,
)
from .core.library import DefinitionKind, DefinitionLibrary, LibraryHandle, LibrarySnapshot, load_library
from .core.model import (
    BaseArchetype,
    CustomizationSpec,
    Defaults,
    EffectiveArchetype,
    EnforcementMode,
    IdentityType,
    NonComplianceMessage,
    PolicyAssignmentSpec,
    RoleAssignmentSpec,
)
from .core.registry import ArchetypeRegistry
from .core.resolver import ResolutionResult, Resolver, compute_archetype_hash
from .report import generate_archetype_report

__all__ = [
    "ArchetypeErrorPayload",
    "ArchetypeException",
    "ArchetypeRegistry",
    "ArchetypeResolutionError",
    "BaseArchetype",
    "ConflictingCustomizationError",
    "CustomizationSpec",
    "Defaults",
    "DefinitionKind",
    "DefinitionLibrary",
    "EffectiveArchetype",
    "EnforcementMode",
    "IdentityType",
    "LibraryHandle",
    "LibrarySnapshot",
    "MissingDefaultError",
    "NonComplianceMessage",
    "NotFoundError",
    "PolicyAssignmentSpec",
    "RemovalTargetNotFoundError",
    "ResolutionContext",
    "ResolutionResult",
    "Resolver",
    "ResolverSettings",
    "RoleAssignmentSpec",
    "UnresolvedReferenceError",
    "ValidationError",
    "compute_archetype_hash",
    "generate_archetype_report",
    "load_config",
    "load_library",
    "load_settings",
    "payload_from_exception",
]
