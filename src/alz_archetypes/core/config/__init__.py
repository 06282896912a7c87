# src/alz_archetypes/core/config/__init__.py

"""
Camada de configuração do resolver de archetypes.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Materialização imutável em `ResolverSettings`
    - Hash canônico para rastreabilidade

A configuração não contém lógica de domínio: ela apenas parametriza o
Resolver (modo strict de remoção, nomes de parâmetros ligados a defaults).
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import canonical_json, compute_config_hash  # noqa: F401
from .loader import load_config, load_settings  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import DEFAULT_CONFIG, ResolverSettings  # noqa: F401
