# src/automation_pipelines/core/config/loader.py
"""
Loader canônico de definições de pipeline.

A definição efetiva é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional; ignorado se não existir)

Formatos aceitos são despachados pela extensão do arquivo através de
`_READERS`; um arquivo vazio equivale a uma definição vazia.

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não valida a estrutura de `pipeline`/`nodes` (ver builders)
    - Não constrói nós nem pipelines
"""

import json
from pathlib import Path
from typing import IO, Any, Callable, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

PathLike = Union[str, Path]

_READERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _read_definition(path: Path) -> Dict[str, Any]:
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix or '(sem extensão)'} ({path})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = reader(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"A raiz de {path.name} deve ser um mapeamento, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega os defaults e aplica, quando existir, o arquivo local por cima.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Extensão fora de `.yaml`, `.yml`, `.json`.
        InvalidConfigRootTypeError: Se a raiz de um arquivo não for um dicionário.
        ConfigTypeConflictError: Se o override conflitar com o tipo dos defaults.
    """
    defaults_file = Path(defaults_path)
    if not defaults_file.is_file():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {defaults_file}")

    definition = _read_definition(defaults_file)

    local_file = Path(local_path) if local_path is not None else None
    if local_file is None or not local_file.is_file():
        return definition

    return deep_merge(definition, _read_definition(local_file))
