"""
ALZ Archetypes: Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelo Resolver, pelo
Registry e pelo Validator.

Objetivo:
- Permitir que cada falha seja atribuída (assignment, campo, referência)
- Facilitar o mapeamento determinístico para ArchetypeErrorPayload
- Evitar ValueError/RuntimeError genéricos nas regras de resolução

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- `code` é estável e pertence ao catálogo de `core.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple

from . import errors as codes


@dataclass(frozen=True, eq=False)
class ArchetypeException(Exception):
    """Base class para exceções da resolução de archetypes.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    code: ClassVar[str] = codes.UNEXPECTED_ERROR

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    def to_payload(self) -> codes.ArchetypeErrorPayload:
        return codes.payload_from_exception(self)


# ---------------------------------------------------------------------------
# Estruturais
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class NotFoundError(ArchetypeException):
    """Archetype inexistente no Registry ou alvo de remoção inexistente (strict).

    details:
    - kind: "archetype" | categoria da remoção (ex.: "policy_assignments")
    - name: nome procurado
    """

    code: ClassVar[str] = codes.ARCHETYPE_NOT_FOUND

    @property
    def kind(self) -> Optional[str]:
        return self.details.get("kind")

    @property
    def name(self) -> Optional[str]:
        return self.details.get("name")


@dataclass(frozen=True, eq=False)
class RemovalTargetNotFoundError(NotFoundError):
    """Remoção de um nome ausente do base archetype, com strict mode ativo."""

    code: ClassVar[str] = codes.REMOVAL_TARGET_NOT_FOUND


# ---------------------------------------------------------------------------
# Customização / referências
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ConflictingCustomizationError(ArchetypeException):
    """Mesmo nome presente nas listas de adição e remoção de uma categoria."""

    code: ClassVar[str] = codes.CONFLICTING_CUSTOMIZATION

    @property
    def category(self) -> Optional[str]:
        return self.details.get("category")

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self.details.get("names") or ())


@dataclass(frozen=True, eq=False)
class UnresolvedReferenceError(ArchetypeException):
    """Nome referenciado que não existe no Definition Library.

    details:
    - category: categoria onde a referência aparece
    - reference: o nome exato ausente
    - referenced_by: assignment que referencia (quando aplicável)
    """

    code: ClassVar[str] = codes.UNRESOLVED_REFERENCE

    @property
    def category(self) -> Optional[str]:
        return self.details.get("category")

    @property
    def reference(self) -> Optional[str]:
        return self.details.get("reference")


# ---------------------------------------------------------------------------
# Validação
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ValidationError(ArchetypeException):
    """Violação de regra de campo em um assignment (ou nos dados do node).

    details:
    - assignment: chave do assignment (None para campos do node)
    - fields: campos envolvidos na violação
    - rule: identificador estável da regra
    """

    code: ClassVar[str] = codes.VALIDATION_FAILED

    @property
    def assignment(self) -> Optional[str]:
        return self.details.get("assignment")

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self.details.get("fields") or ())

    @property
    def rule(self) -> Optional[str]:
        return self.details.get("rule")


@dataclass(frozen=True, eq=False)
class MissingDefaultError(ArchetypeException):
    """Parâmetro referencia um default que não foi informado."""

    code: ClassVar[str] = codes.MISSING_DEFAULT

    @property
    def assignment(self) -> Optional[str]:
        return self.details.get("assignment")

    @property
    def parameter(self) -> Optional[str]:
        return self.details.get("parameter")


# ---------------------------------------------------------------------------
# Agregado
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ArchetypeResolutionError(ArchetypeException):
    """Conjunto completo de falhas de uma resolução (tudo-ou-nada).

    `errors` preserva a ordem em que as falhas foram detectadas.
    """

    errors: Tuple[ArchetypeException, ...] = ()

    code: ClassVar[str] = codes.RESOLUTION_FAILED

    def of_type(self, exc_type: type) -> Tuple[ArchetypeException, ...]:
        return tuple(e for e in self.errors if isinstance(e, exc_type))
