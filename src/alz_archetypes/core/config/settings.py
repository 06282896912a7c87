# src/alz_archetypes/core/config/settings.py
"""
Configuração efetiva do Resolver.

Este módulo define o `DEFAULT_CONFIG` embutido e a materialização da
configuração resolvida (dict) em `ResolverSettings`, a estrutura imutável
consumida pelo Resolver.

Chaves reconhecidas (v1):
    resolver.strict_removals
        - false (default): remover um nome ausente do base archetype é no-op
          (registrado como warning no ResolutionContext)
        - true: a remoção de um nome ausente gera `NotFoundError`
    resolver.default_parameter_names
        - mapa `chave de default -> nomes de parâmetro`; um parâmetro com
          valor `null` cujo nome aparece aqui recebe o valor do default

Invariantes:
    - ResolverSettings é imutável e seguro para uso concorrente
    - Chaves desconhecidas em `resolver` são rejeitadas explicitamente

Limites explícitos:
    - Não carrega arquivos (ver `loader.py`)
    - Não executa resolução
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from .errors import InvalidSettingsError


DEFAULT_KEY_LOCATION = "location"
DEFAULT_KEY_LOG_ANALYTICS_WORKSPACE_ID = "log_analytics_workspace_id"

KNOWN_DEFAULT_KEYS = (DEFAULT_KEY_LOCATION, DEFAULT_KEY_LOG_ANALYTICS_WORKSPACE_ID)


DEFAULT_CONFIG: Dict[str, Any] = {
    "resolver": {
        "strict_removals": False,
        "default_parameter_names": {
            DEFAULT_KEY_LOCATION: ["location"],
            DEFAULT_KEY_LOG_ANALYTICS_WORKSPACE_ID: [
                "logAnalytics",
                "logAnalyticsWorkspaceId",
            ],
        },
    },
}


def _default_parameter_names() -> Dict[str, Tuple[str, ...]]:
    names = DEFAULT_CONFIG["resolver"]["default_parameter_names"]
    return {k: tuple(v) for k, v in names.items()}


@dataclass(frozen=True)
class ResolverSettings:
    """Configuração imutável do Resolver."""

    strict_removals: bool = False
    default_parameter_names: Mapping[str, Tuple[str, ...]] = field(
        default_factory=_default_parameter_names
    )

    def default_key_for(self, parameter: str) -> str | None:
        """Retorna a chave de default referenciada pelo nome do parâmetro, se houver."""
        for key in KNOWN_DEFAULT_KEYS:
            if parameter in self.default_parameter_names.get(key, ()):
                return key
        return None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ResolverSettings":
        if not isinstance(config, dict):
            raise InvalidSettingsError(
                f"Config deve ser dict, recebido: {type(config).__name__}"
            )

        section = config.get("resolver") or {}
        if not isinstance(section, dict):
            raise InvalidSettingsError("resolver deve ser um mapa")

        unknown = sorted(set(section) - {"strict_removals", "default_parameter_names"})
        if unknown:
            raise InvalidSettingsError(f"Chaves desconhecidas em resolver: {unknown}")

        strict = section.get("strict_removals", False)
        if not isinstance(strict, bool):
            raise InvalidSettingsError("resolver.strict_removals deve ser boolean")

        raw_names = section.get("default_parameter_names")
        if raw_names is None:
            names = _default_parameter_names()
        else:
            if not isinstance(raw_names, dict):
                raise InvalidSettingsError("resolver.default_parameter_names deve ser um mapa")
            names = {}
            for key, value in raw_names.items():
                if key not in KNOWN_DEFAULT_KEYS:
                    raise InvalidSettingsError(
                        f"default desconhecido em default_parameter_names: {key}"
                    )
                if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
                    raise InvalidSettingsError(
                        f"default_parameter_names.{key} deve ser lista de strings"
                    )
                names[key] = tuple(value)

        return cls(strict_removals=strict, default_parameter_names=names)
