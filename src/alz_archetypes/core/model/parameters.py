"""Valores de parâmetros de policy assignments.

Parâmetros são livres: o tipo autoritativo de cada um vem do schema da
própria policy definition, que não é conhecido nesta camada. Por isso a
validação aqui é apenas estrutural.

`ParameterValue` é o tipo estruturado aceito (união marcada por tipo Python):
    None | bool | int | float | str | list[ParameterValue] | dict[str, ParameterValue]

Entradas aceitas por `decode_parameters`:
- um mapeamento `str -> ParameterValue`
- uma string JSON cujo root é um objeto (formato usado por hosts que não
  conseguem tipar valores heterogêneos)

A profundidade de aninhamento é limitada a `MAX_PARAMETER_DEPTH`.

No Effective Archetype os parâmetros ficam congelados (`freeze_parameters`):
mapas viram `MappingProxyType` e listas viram tuplas. `thaw_parameters`
devolve a forma JSON simples usada em `to_dict()`.
"""

from __future__ import annotations

import json
import math
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Union

ParameterValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

MAX_PARAMETER_DEPTH = 64


class ParameterStructureError(ValueError):
    """Parâmetros não formam um mapa chave -> valor estruturado."""


def _check_value(value: Any, path: str, depth: int = 0) -> Any:
    if depth > MAX_PARAMETER_DEPTH:
        raise ParameterStructureError(f"{path}: nesting deeper than {MAX_PARAMETER_DEPTH} levels")
    if value is None or isinstance(value, (bool, str, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParameterStructureError(f"{path}: non-finite number is not allowed")
        return value
    if isinstance(value, (list, tuple)):
        return [_check_value(v, f"{path}[{i}]", depth + 1) for i, v in enumerate(value)]
    if isinstance(value, Mapping):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise ParameterStructureError(f"{path}: keys must be strings, got {type(k).__name__}")
            out[k] = _check_value(v, f"{path}.{k}", depth + 1)
        return out
    raise ParameterStructureError(f"{path}: unsupported value type {type(value).__name__}")


def decode_parameters(raw: Any) -> Dict[str, ParameterValue]:
    """Decodifica e valida estruturalmente os parâmetros de um assignment.

    Retorna sempre um dict novo (o input nunca é mutado). `None` equivale a
    nenhum parâmetro. Parâmetros já congelados são aceitos e voltam à forma
    mutável.

    Raises:
        ParameterStructureError: JSON inválido, root que não é objeto,
            chave não-string, valor de tipo não suportado ou aninhamento
            profundo demais.
    """
    if raw is None:
        return {}

    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParameterStructureError(f"parameters is not valid JSON: {e.msg}") from e
        except RecursionError as e:
            raise ParameterStructureError(
                f"parameters nesting deeper than {MAX_PARAMETER_DEPTH} levels"
            ) from e

    if not isinstance(raw, Mapping):
        raise ParameterStructureError(
            f"parameters must be a mapping, got {type(raw).__name__}"
        )

    try:
        return _check_value(raw, "parameters")
    except RecursionError as e:
        raise ParameterStructureError(
            f"parameters nesting deeper than {MAX_PARAMETER_DEPTH} levels"
        ) from e


def freeze_parameters(value: Any) -> Any:
    """Congela parâmetros decodificados (mapas → MappingProxyType, listas → tuplas)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze_parameters(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_parameters(v) for v in value)
    return value


def thaw_parameters(value: Any) -> Any:
    # strings JSON ainda não decodificadas passam intactas
    if isinstance(value, Mapping):
        return {k: thaw_parameters(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw_parameters(v) for v in value]
    return value
