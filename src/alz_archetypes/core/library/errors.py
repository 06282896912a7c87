"""Erros canônicos do carregamento do Definition Library.

Falhas de carga são explícitas e estáveis: nenhuma definição é ignorada
silenciosamente.
"""


class LibraryError(Exception):
    """Erro base do domínio de library."""


class LibraryPathNotFoundError(LibraryError):
    """Diretório da library não existe."""


class LibraryParseError(LibraryError):
    """Falha ao parsear YAML/JSON de um arquivo da library."""


class InvalidLibraryEntryError(LibraryError):
    """Arquivo da library sem `name` válido ou com forma inválida."""


class DuplicateDefinitionError(LibraryError):
    """Mesmo nome declarado duas vezes para a mesma categoria."""
