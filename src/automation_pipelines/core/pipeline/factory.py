# src/automation_pipelines/core/pipeline/factory.py
"""
Fronteira de fábrica de nós.

O pipeline não conhece a forma como nós concretos são construídos: quando
um *tipo* é registrado em vez de uma instância, a construção é delegada a
uma `NodeFactory`, tipicamente fornecida pela aplicação hospedeira (por
exemplo, um container de injeção de dependências).

Contrato:
    factory(node_type, **kwargs) -> PipelineNode

Limites explícitos:
    - A fábrica padrão apenas chama o construtor
    - O pipeline nunca inspeciona a fábrica nem o objeto produzido
"""

from __future__ import annotations

from typing import Any, Protocol, Type, runtime_checkable

from automation_pipelines.core.node.contract import PipelineNode


@runtime_checkable
class NodeFactory(Protocol):
    """Constrói uma instância pronta para registro a partir de um tipo."""

    def __call__(self, node_type: Type[Any], **kwargs: Any) -> PipelineNode:
        ...


def default_node_factory(node_type: Type[Any], **kwargs: Any) -> PipelineNode:
    return node_type(**kwargs)
