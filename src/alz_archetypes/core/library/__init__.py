"""ALZ Archetypes: Definition Library (core).

Componentes:
 - catálogo imutável de nomes de definições
 - carga de library a partir de diretório (YAML/JSON)
 - snapshot imutável + handle com troca atômica
"""

from .catalog import DefinitionKind, DefinitionLibrary  # noqa: F401
from .errors import (  # noqa: F401
    DuplicateDefinitionError,
    InvalidLibraryEntryError,
    LibraryError,
    LibraryParseError,
    LibraryPathNotFoundError,
)
from .loader import load_library  # noqa: F401
from .snapshot import LibraryHandle, LibrarySnapshot  # noqa: F401
