# src/alz_archetypes/core/config/errors.py
"""
Exceções canônicas da camada de configuração do resolver.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, o merge e a materialização das configurações do Resolver
(`ResolverSettings`).

As exceções aqui definidas representam **violações estruturais
explícitas** da configuração, e não falhas de resolução de archetype.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de resolução ou validação de assignment

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do Resolver, do Registry ou do Library
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do resolver.

    Permite captura genérica de falhas de configuração, distinguindo-as
    das falhas de resolução (`ArchetypeException`).
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de defaults informado explicitamente
    não existe no caminho especificado.

    Decisões arquiteturais:
        - Um defaults_path explícito é obrigatório quando informado
        - Sem arquivo informado, o `DEFAULT_CONFIG` embutido é a base
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"resolver": {"strict_removals": false}}
        - override: {"resolver": "strict"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingsError(ConfigError):
    """
    Exceção levantada quando a configuração efetiva não pode ser
    materializada em `ResolverSettings` (tipo ou chave desconhecida).
    """
