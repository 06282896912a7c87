"""
ALZ Archetypes: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros da resolução de archetypes.
Erros são artefatos de domínio e fazem parte do contrato com o host
orquestrador, devendo ser:

- explícitos
- serializáveis
- atribuíveis (qual assignment, qual campo, qual referência)
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ArchetypeErrorPayload:
    """
    Payload canônico de erro da resolução de archetypes.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
      (ex.: assignment, fields, category, reference)
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Estruturais (short-circuit)
ARCHETYPE_NOT_FOUND = "ARCHETYPE_NOT_FOUND"

# Customização
REMOVAL_TARGET_NOT_FOUND = "REMOVAL_TARGET_NOT_FOUND"
CONFLICTING_CUSTOMIZATION = "CONFLICTING_CUSTOMIZATION"

# Referências ao Definition Library
UNRESOLVED_REFERENCE = "UNRESOLVED_REFERENCE"

# Validação de campos
VALIDATION_FAILED = "VALIDATION_FAILED"
MISSING_DEFAULT = "MISSING_DEFAULT"

# Agregado
RESOLUTION_FAILED = "RESOLUTION_FAILED"

# Forma de entrada (customização/defaults malformados)
INVALID_INPUT = "INVALID_INPUT"

# Fallback para exceções não tipadas
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


_DEFAULT_HINTS: Dict[str, str] = {
    ARCHETYPE_NOT_FOUND: "Verifique o nome do base archetype e o conteúdo da library carregada.",
    REMOVAL_TARGET_NOT_FOUND: "Remova o item da lista de remoção ou desative o modo strict.",
    CONFLICTING_CUSTOMIZATION: "Declare o nome apenas na lista de adição ou apenas na de remoção.",
    UNRESOLVED_REFERENCE: "Adicione a definição à library ou use `policy_definition_id` com o resource id.",
    VALIDATION_FAILED: "Corrija o campo indicado no assignment antes de resolver novamente.",
    MISSING_DEFAULT: "Informe o valor em `defaults` ou declare o parâmetro explicitamente.",
    INVALID_INPUT: "Ajuste a forma da customização ou dos defaults.",
}


def default_hint(code: str) -> Optional[str]:
    return _DEFAULT_HINTS.get(code)


def payload_from_exception(exc: BaseException) -> ArchetypeErrorPayload:
    """Converte uma exceção em ArchetypeErrorPayload (serializável, acionável).

    Regras:
    - ArchetypeException: já carrega code/message/details/hint.
    - Outras exceções: encapsuladas como UNEXPECTED_ERROR sem stack trace.
    """
    # import local para evitar ciclo errors <-> exceptions
    from .exceptions import ArchetypeException

    if isinstance(exc, ArchetypeException):
        return ArchetypeErrorPayload(
            type=exc.code,
            message=exc.message,
            details=dict(exc.details or {}),
            hint=exc.hint or default_hint(exc.code),
        )

    return ArchetypeErrorPayload(
        type=UNEXPECTED_ERROR,
        message=str(exc) or "Erro inesperado durante a resolução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique os dados de entrada; nenhum fallback é aplicado automaticamente.",
    )
