"""Loader canônico da library (YAML/JSON).

Convenção de nomes de arquivo (a categoria é inferida pelo penúltimo sufixo):
- `<qualquer>.alz_policy_definition.{json,yaml,yml}`
- `<qualquer>.alz_policy_set_definition.{json,yaml,yml}`
- `<qualquer>.alz_role_definition.{json,yaml,yml}`
- `<qualquer>.alz_archetype_definition.{json,yaml,yml}`

Definições precisam apenas de um campo `name` no root. Archetypes seguem
o formato de `parse_base_archetype`. Arquivos fora da convenção são
ignorados (ex.: README, schemas).

Notas:
- A varredura é recursiva e ordenada, para que a carga seja determinística.
- O resultado é um `LibrarySnapshot` já congelado.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Set, Union

import yaml

from ..model import ModelParseError, parse_base_archetype
from ..registry import ArchetypeRegistry
from .catalog import DefinitionKind, DefinitionLibrary
from .errors import (
    DuplicateDefinitionError,
    InvalidLibraryEntryError,
    LibraryParseError,
    LibraryPathNotFoundError,
)
from .snapshot import LibrarySnapshot


ARCHETYPE_SUFFIX = ".alz_archetype_definition"

_DEFINITION_SUFFIXES = {
    ".alz_policy_definition": DefinitionKind.POLICY_DEFINITION,
    ".alz_policy_set_definition": DefinitionKind.POLICY_SET_DEFINITION,
    ".alz_role_definition": DefinitionKind.ROLE_DEFINITION,
}

_DATA_SUFFIXES = {".json", ".yaml", ".yml"}


def _read(path: Path) -> Dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LibraryParseError(f"failed to parse library file {path}: {e}") from e

    if not isinstance(data, dict):
        raise LibraryParseError(f"library file root must be a mapping: {path}")
    return data


def _entry_kind(path: Path) -> Union[DefinitionKind, str, None]:
    suffixes = [s.lower() for s in path.suffixes]
    if len(suffixes) < 2 or suffixes[-1] not in _DATA_SUFFIXES:
        return None
    marker = suffixes[-2]
    if marker == ARCHETYPE_SUFFIX:
        return ARCHETYPE_SUFFIX
    return _DEFINITION_SUFFIXES.get(marker)


def load_library(path: Union[str, Path]) -> LibrarySnapshot:
    """Carrega definições e archetypes de um diretório de library.

    Raises:
        LibraryPathNotFoundError: se o diretório não existir.
        LibraryParseError: se um arquivo não puder ser parseado.
        InvalidLibraryEntryError: se um arquivo não tiver forma válida.
        DuplicateDefinitionError: se um nome se repetir na mesma categoria.
        DuplicateArchetypeError: se dois archetypes tiverem o mesmo nome.
    """
    root = Path(path)
    if not root.is_dir():
        raise LibraryPathNotFoundError(f"library directory not found: {root}")

    names: Dict[DefinitionKind, Set[str]] = {kind: set() for kind in DefinitionKind}
    archetype_files: List[Path] = []

    for file in sorted(p for p in root.rglob("*") if p.is_file()):
        kind = _entry_kind(file)
        if kind is None:
            continue
        if kind == ARCHETYPE_SUFFIX:
            archetype_files.append(file)
            continue

        data = _read(file)
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidLibraryEntryError(f"definition without name: {file}")
        if name in names[kind]:
            raise DuplicateDefinitionError(f"duplicate {kind.value} name '{name}' in {file}")
        names[kind].add(name)

    registry = ArchetypeRegistry()
    for file in archetype_files:
        try:
            registry.add(parse_base_archetype(_read(file)))
        except ModelParseError as e:
            raise InvalidLibraryEntryError(f"invalid archetype definition {file}: {e}") from e

    library = DefinitionLibrary(
        policy_definitions=names[DefinitionKind.POLICY_DEFINITION],
        policy_set_definitions=names[DefinitionKind.POLICY_SET_DEFINITION],
        role_definitions=names[DefinitionKind.ROLE_DEFINITION],
    )
    return LibrarySnapshot(library=library, registry=registry.freeze(), source=str(root))
