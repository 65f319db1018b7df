# src/automation_pipelines/nodes/passthrough.py
"""Nó que apenas repassa a entrada para a saída."""

from __future__ import annotations

from automation_pipelines.core.node.base import Node, TState


class PassThroughNode(Node[TState]):
    """
    Nó inicialmente desabilitado: toda entrada flui direto para a saída.

    Útil como ponto de extensão em um pipeline: o nó pode ser substituído
    em tempo de montagem ou ter sua saída escrita diretamente (o que o
    reabilita).
    """

    def __init__(self) -> None:
        super().__init__()
        self.disable_node()
