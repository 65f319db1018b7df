# src/automation_pipelines/core/pipeline/registry.py
"""
Registro de tipos de nó por alias.

Este módulo define o `NodeRegistry`, que associa aliases curtos (usados em
definições declarativas de pipeline) a tipos de nó concretos.

Responsabilidades do módulo:
    - Validar que aliases são strings não vazias
    - Garantir unicidade de aliases
    - Preservar a ordem de registro

Limites explícitos:
    - Não constrói nós (ver `NodeFactory`)
    - Não registra nós em pipelines
    - Não valida se o tipo satisfaz `PipelineNode`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Type


class DuplicateNodeAliasError(ValueError):
    """
    Exceção levantada quando um alias já registrado é registrado novamente.

    A duplicidade é tratada como erro de configuração no momento do
    registro; o registry não é alterado.
    """


@dataclass
class NodeRegistry:
    """
    Registro canônico alias → tipo de nó.

    Invariantes:
        - Cada alias é único
        - `list()` reflete exatamente a ordem de registro
    """

    _types: Dict[str, Type[Any]] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, alias: str, node_type: Type[Any]) -> None:
        if not isinstance(alias, str) or not alias.strip():
            raise ValueError("alias must be a non-empty string")

        if alias in self._types:
            raise DuplicateNodeAliasError(f"Duplicate node alias: {alias}")

        self._types[alias] = node_type
        self._order.append(alias)

    def get(self, alias: str) -> Type[Any]:
        return self._types[alias]

    def __contains__(self, alias: object) -> bool:
        return alias in self._types

    def list(self) -> List[Tuple[str, Type[Any]]]:
        return [(alias, self._types[alias]) for alias in self._order]
