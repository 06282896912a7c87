# src/alz_archetypes/core/config/merge.py
"""
Deep-merge canônico da configuração do resolver.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (ex.: `default_parameter_names.location`)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

O merge é puramente funcional: nenhum input é mutado.

Nota: esta política vale apenas para configuração. A composição de
archetypes (base + customização) segue regras próprias de conjunto,
implementadas em `core.resolver`, e não utiliza este módulo.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: DEFAULT_CONFIG).
        override (Dict[str, Any]): Overrides explícitos (ex.: arquivo local).

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            "resolver config merge expects mappings at the root, got "
            f"{type(base).__name__} and {type(override).__name__}"
        )

    merged: Dict[str, Any] = deepcopy(base)
    for key, value in override.items():
        merged[key] = _merge_value(key, merged.get(key), value)
    return merged


def _merge_value(key: str, current: Any, incoming: Any) -> Any:
    # chave nova ou nula na base -> override entra inteiro
    if current is None:
        return deepcopy(incoming)

    # mapping -> merge recursivo (ex.: `resolver.default_parameter_names`)
    if isinstance(current, dict) and isinstance(incoming, dict):
        return deep_merge(current, incoming)

    # lista de nomes -> substitui a lista da base, sem união
    if isinstance(current, list) and isinstance(incoming, list):
        return deepcopy(incoming)

    # tipos diferentes (ex.: `strict_removals: "yes"`)
    if type(current) is not type(incoming):
        raise ConfigTypeConflictError(
            f"config key '{key}' expects {type(current).__name__}, "
            f"got {type(incoming).__name__}"
        )

    # escalar
    return deepcopy(incoming)
