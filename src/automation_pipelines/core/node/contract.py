# src/automation_pipelines/core/node/contract.py
"""
Contratos canônicos de nó do Automation Pipelines.

Este módulo define os protocolos estruturais que qualquer estágio de
processamento (e qualquer pipeline) deve satisfazer para ser encadeado.

Componentes:
    - PipelineNode (Protocol): capacidade mínima de um nó (enabled, input,
      output e stream de novas saídas)
    - Processor (Protocol): capacidade de transformação `process(input)`,
      usada por estágios que delegam a lógica a um objeto injetado

Princípios fundamentais:
    - Conformidade por duck typing (`@runtime_checkable`)
    - O engine depende apenas destes contratos, nunca de estágios concretos
    - Pipelines implementam o mesmo contrato que agregam (aninhamento)

Limites explícitos:
    - Não implementa comportamento (ver `core.node.base`)
    - Não define políticas de encadeamento (ver `core.pipeline`)
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from .stream import OutputStream


@runtime_checkable
class PipelineNode(Protocol):
    """
    Contrato canônico de um nó de pipeline.

    Atributos obrigatórios:
        - enabled: quando False, o nó repassa a entrada para a saída sem processar
        - input: estado de entrada; escrever dispara o processamento
        - output: último estado de saída produzido
        - on_new_output: stream multicast notificado a cada nova saída

    Invariantes:
        - Cada escrita de saída publica exatamente um valor em `on_new_output`
        - `None` representa "ainda sem valor"
    """

    enabled: bool
    input: Optional[Any]

    @property
    def output(self) -> Optional[Any]:
        ...

    @property
    def on_new_output(self) -> OutputStream:
        ...


@runtime_checkable
class Processor(Protocol):
    """Estratégia de transformação: recebe a entrada e devolve a saída."""

    def process(self, state: Optional[Any]) -> Optional[Any]:
        ...
