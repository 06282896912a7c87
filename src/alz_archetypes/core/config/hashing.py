# src/alz_archetypes/core/config/hashing.py
"""Hashing canônico de estruturas resolvidas (configuração e archetypes).

O hash representa a identidade estrutural de um dicionário puro e é usado
para:
- rastrear qual configuração produziu uma resolução
- verificar idempotência (mesma entrada => mesmo Effective Archetype)

Decisão: SHA-256 sobre JSON canônico (sort_keys, separators compactos, UTF-8).
"""

import hashlib
import json
from typing import Any, Dict


def canonical_json(data: Dict[str, Any]) -> str:
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um dicionário de configuração.

    Invariantes:
        - O valor retornado é uma string hexadecimal de 64 caracteres
        - Estruturas equivalentes produzem o mesmo hash, independente
          da ordem original das chaves

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    return hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()
