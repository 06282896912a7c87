"""Hashing canônico do Effective Archetype.

Duas resoluções com a mesma entrada devem produzir o mesmo hash; o hash é
calculado sobre `EffectiveArchetype.to_dict()` (conjuntos e chaves
ordenados), com a mesma política do hash de configuração.
"""

from __future__ import annotations

from ..config import compute_config_hash
from ..model import EffectiveArchetype


def compute_archetype_hash(effective: EffectiveArchetype) -> str:
    """Computa SHA-256 do Effective Archetype em formato canônico."""
    return compute_config_hash(effective.to_dict())
