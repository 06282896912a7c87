"""Substituição de defaults em parâmetros de policy assignments.

Convenção: um parâmetro referencia um default quando
- seu valor é `null` (None), e
- seu nome aparece em `ResolverSettings.default_parameter_names[<chave>]`.

Valores explícitos nunca são sobrescritos. Um default opcional ausente
(ex.: `log_analytics_workspace_id`) referenciado por um parâmetro gera
`MissingDefaultError`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from ..config import ResolverSettings
from ..exceptions import MissingDefaultError
from ..model import Defaults


def substitute_defaults(
    parameters: Dict[str, Any],
    defaults: Defaults,
    settings: ResolverSettings,
    *,
    assignment: str,
) -> Tuple[Dict[str, Any], List[MissingDefaultError]]:
    """Retorna (parâmetros com defaults aplicados, erros de default ausente).

    `parameters` não é mutado.
    """
    out = dict(parameters)
    errors: List[MissingDefaultError] = []

    for name, value in parameters.items():
        if value is not None:
            continue
        key = settings.default_key_for(name)
        if key is None:
            continue

        default_value = defaults.value_for(key)
        if default_value is None:
            errors.append(MissingDefaultError(
                message=(
                    f"policy assignment '{assignment}': parameter '{name}' "
                    f"requires default '{key}', which was not supplied"
                ),
                details={"assignment": assignment, "parameter": name, "default": key},
            ))
            continue

        out[name] = default_value

    return out, errors
