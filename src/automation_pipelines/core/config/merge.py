# src/automation_pipelines/core/config/merge.py
"""
Deep-merge de definições de pipeline.

Política de merge (v1):
    - dict sobre dict → merge recursivo por chave
    - list → sobrescrita total (a lista `nodes` do override substitui a base)
    - `None` em qualquer lado → o override vence (define ou limpa o valor,
      por exemplo `pipeline.default`)
    - demais valores → sobrescrita, desde que o tipo seja o mesmo

Invariantes:
    - Nenhum input é mutado
    - Um conflito de tipo aborta o merge inteiro
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _merge_value(path: str, base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        merged = dict(base)
        for key, value in override.items():
            child = f"{path}.{key}" if path else str(key)
            merged[key] = _merge_value(child, base[key], value) if key in base else deepcopy(value)
        return merged

    compatible = (
        base is None
        or override is None
        or isinstance(override, list)
        or type(base) is type(override)
    )
    if not compatible:
        raise ConfigTypeConflictError(
            f"Conflito de tipo em '{path}': "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return deepcopy(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mescla `override` sobre `base` e devolve um novo dicionário.

    Raises:
        ConfigTypeConflictError: Se um dos lados não for dict ou se uma chave
            mudar de tipo (ex.: `pipeline` dict nos defaults, string no local).
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return deepcopy(_merge_value("", base, override))
