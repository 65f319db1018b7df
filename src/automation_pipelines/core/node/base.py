# src/automation_pipelines/core/node/base.py
"""
Implementação base de nó do Automation Pipelines.

Este módulo define o `Node`, a classe base que implementa o contrato
`PipelineNode` e concentra o comportamento comum a todos os estágios:

    - bypass quando desabilitado (a entrada flui direto para a saída)
    - hook de processamento `input_received`, sobrescrito por estágios concretos
    - caminho único de escrita de saída, que reabilita o nó e publica o valor

Decisões arquiteturais:
    - O hook padrão ignora a entrada: estágios concretos decidem se e quando
      escrevem a saída
    - Escrever a saída sempre reabilita o nó
    - Desabilitar um nó publica imediatamente a entrada atual como saída
    - Reabilitar não reprocessa a entrada automaticamente

Invariantes:
    - Cada escrita de saída corresponde a uma publicação em `on_new_output`
    - Exceções do hook propagam para quem escreveu `input`; o nó mantém o
      estado parcial produzido até a falha

Limites explícitos:
    - Não é thread-safe
    - Não captura, registra nem recupera erros de processamento
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from .stream import OutputStream

TState = TypeVar("TState")


class Node(Generic[TState]):
    """
    Nó base com bypass por desabilitação e saída observável.

    Estágios concretos sobrescrevem `input_received` e escrevem
    `self.output` quando tiverem um resultado:

        class Doubler(Node[int]):
            def input_received(self, state):
                self.output = None if state is None else state * 2

    Helpers de pass-through único:
        - `disable_on_next_input()`: a próxima entrada desabilita o nó
          (e é repassada) em vez de ser processada
        - `change_output_and_disable_on_next_input(value)`: escreve a saída
          e arma o comportamento acima

    Útil para estágios que influenciam o pipeline uma única vez, por
    exemplo um interruptor ou um sensor de presença.
    """

    def __init__(self) -> None:
        self._on_new_output: OutputStream = OutputStream()
        self._input: Optional[TState] = None
        self._output: Optional[TState] = None
        self._enabled = True
        self._disable_on_next_input = False

    @property
    def on_new_output(self) -> OutputStream:
        return self._on_new_output

    @property
    def input(self) -> Optional[TState]:
        return self._input

    @input.setter
    def input(self, value: Optional[TState]) -> None:
        self._input = value
        if self._disable_on_next_input:
            self.enabled = False
            return
        if not self._enabled:
            self._set_output_internal(value)
            return
        self.input_received(value)

    @property
    def output(self) -> Optional[TState]:
        return self._output

    @output.setter
    def output(self, value: Optional[TState]) -> None:
        # Destinado ao próprio estágio; sempre reabilita o nó.
        self.enabled = True
        self._set_output_internal(value)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._disable_on_next_input = False
        value = bool(value)
        if self._enabled == value:
            return
        self._enabled = value
        if not value:
            self._set_output_internal(self._input)

    def input_received(self, state: Optional[TState]) -> None:
        """Hook de processamento. O padrão ignora a entrada."""

    def disable_node(self) -> None:
        self.enabled = False

    def disable_on_next_input(self) -> None:
        if not self._enabled:
            return
        self._disable_on_next_input = True

    def change_output_and_disable_on_next_input(self, value: Optional[TState]) -> None:
        self.output = value
        self.disable_on_next_input()

    def _set_output_internal(self, value: Optional[Any]) -> None:
        self._output = value
        self._on_new_output.publish(value)

    def __str__(self) -> str:
        return type(self).__name__
