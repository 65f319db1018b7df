# src/automation_pipelines/nodes/function.py
"""
Estágios que delegam a transformação a um callable ou a um `Processor`.

Componentes:
    - FunctionNode: `output = fn(input)`
    - ProcessorNode: `output = processor.process(input)`

Decisões arquiteturais:
    - A transformação é injetada; o nó não conhece a lógica de domínio
    - Toda entrada processada produz exatamente uma escrita de saída
    - Exceções da transformação propagam sem alterar a saída anterior

Limites explícitos:
    - Não trata `None` de forma especial: a transformação recebe o valor como veio
"""

from __future__ import annotations

from typing import Callable, Optional

from automation_pipelines.core.node.base import Node, TState
from automation_pipelines.core.node.contract import Processor


class FunctionNode(Node[TState]):
    """Aplica `fn` a cada entrada processada."""

    def __init__(self, fn: Callable[[Optional[TState]], Optional[TState]]) -> None:
        super().__init__()
        self._fn = fn

    def input_received(self, state: Optional[TState]) -> None:
        self.output = self._fn(state)

    def __str__(self) -> str:
        name = getattr(self._fn, "__name__", None) or type(self._fn).__name__
        return f"{type(self).__name__}({name})"


class ProcessorNode(Node[TState]):
    """Aplica `processor.process` a cada entrada processada."""

    def __init__(self, processor: Processor) -> None:
        super().__init__()
        self.processor = processor

    def input_received(self, state: Optional[TState]) -> None:
        self.output = self.processor.process(state)

    def __str__(self) -> str:
        return f"{type(self).__name__}({type(self.processor).__name__})"
