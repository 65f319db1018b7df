# src/automation_pipelines/core/config/hashing.py
"""
Hash canônico de definições de pipeline.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256

O hash identifica estruturalmente a definição usada para construir um
pipeline e é registrado no evento `pipeline.built` do EventLog.
"""

import hashlib
import json
from typing import Any, Dict


def compute_definition_hash(definition: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da definição efetiva.

    Args:
        definition (Dict[str, Any]): Definição resolvida do pipeline.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se a definição não for um dicionário.
    """

    if not isinstance(definition, dict):
        raise TypeError(
            f"Definição para hashing deve ser dict, recebido: {type(definition).__name__}"
        )

    canonical_json = json.dumps(
        definition,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
