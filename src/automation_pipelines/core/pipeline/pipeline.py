# src/automation_pipelines/core/pipeline/pipeline.py
"""
Pipeline composto do Automation Pipelines.

Este módulo define o `Pipeline`, um nó composto que mantém uma sequência
ordenada e somente-acréscimo de nós filhos, encadeia a saída de cada nó na
entrada do próximo e expõe um único resultado observável.

Fluxo de controle:
    driver externo → pipeline.input → nodes[0].input → ... → último nó
    → pipeline.output (→ output handler, quando aplicável)

Decisões arquiteturais:
    - O Pipeline é ele próprio um `Node` (pipelines podem ser aninhados)
    - A saída do pipeline acompanha apenas o nó registrado por último
    - Nós intermediários permanecem encadeados por inscrições permanentes
    - O stream de saída do pipeline publica ANTES da chamada do handler
    - Toda propagação é síncrona, em profundidade, na thread do chamador

Invariantes:
    - `nodes` reflete exatamente a ordem de registro e nunca é reordenado
    - Sem nós, a saída do pipeline acompanha a sua própria entrada
    - Registrar um nó sempre produz ao menos um evento de saída

Limites explícitos:
    - Não valida duplicidade nem ciclos de registro
    - Não captura erros de nós, da comparação ou do handler
    - Não é thread-safe

Este módulo existe como o núcleo de composição e propagação do projeto.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

from automation_pipelines.core.node.base import Node, TState
from automation_pipelines.core.node.contract import PipelineNode
from automation_pipelines.core.node.stream import Subscription
from automation_pipelines.core.traceability.event_log import EventLog

from .factory import NodeFactory, default_node_factory

_UNSET: Any = object()


def _fmt(value: Any) -> str:
    return "NULL" if value is None else str(value)


class Pipeline(Node[TState]):
    """
    Pipeline de nós encadeados.

    Uso:
        pipeline = Pipeline(default=1)
        pipeline.set_output_handler(print)      # imprime 1
        pipeline.register_node(Doubler())       # imprime 2
        pipeline.set_default(3)                 # imprime 6

    Construção conveniente:
        Pipeline(n1, n2, default=0, output_handler=apply, name="sala")

    Os nós são registrados primeiro, depois o default é aplicado e por fim
    o handler é definido.

    Args:
        *nodes: nós (ou tipos de nó) registrados em ordem.
        default: estado inicial de entrada (omitido = não aplicado).
        output_handler: callback chamado com novas saídas não nulas.
        distinct_only: quando True, o handler só é chamado se a saída mudou.
        name: nome usado como origem dos eventos de trace.
        node_factory: fábrica usada ao registrar tipos em vez de instâncias.
        event_log: EventLog opcional para diagnóstico.
    """

    def __init__(
        self,
        *nodes: Any,
        default: Any = _UNSET,
        output_handler: Optional[Callable[[TState], None]] = None,
        distinct_only: bool = True,
        name: Optional[str] = None,
        node_factory: Optional[NodeFactory] = None,
        event_log: Optional[EventLog] = None,
    ) -> None:
        super().__init__()
        self.name = name
        self._node_factory: NodeFactory = node_factory or default_node_factory
        self._event_log = event_log
        self._nodes: List[PipelineNode] = []
        self._links: List[Subscription] = []
        self._subscription: Optional[Subscription] = None
        self._handler: Optional[Callable[[TState], None]] = None
        self._distinct_only = True
        self._closed_nodes = 0

        for node in nodes:
            self.register_node(node)
        if default is not _UNSET:
            self.set_default(default)
        if output_handler is not None:
            self.set_output_handler(output_handler, distinct_only)

    @property
    def nodes(self) -> Tuple[PipelineNode, ...]:
        return tuple(self._nodes)

    @property
    def event_log(self) -> Optional[EventLog]:
        return self._event_log

    def set_default(self, state: Optional[TState]) -> "Pipeline[TState]":
        self.input = state
        return self

    def register_node(self, node: Any, **kwargs: Any) -> "Pipeline[TState]":
        """
        Registra um nó no fim do pipeline.

        Aceita uma instância pronta ou um tipo; tipos são construídos pela
        fábrica do pipeline (`kwargs` são repassados a ela).

        Passos:
            1. descarta a inscrição no último nó anterior e passa a observar
               o novo nó
            2. havendo nó anterior, encadeia sua saída na entrada do novo nó
               (inscrição permanente) e copia a saída atual
            3. sendo o primeiro nó, copia a entrada do pipeline
            4. acrescenta o nó à sequência
            5. propaga a saída atual do novo nó para a saída do pipeline
        """
        if isinstance(node, type):
            node = self._node_factory(node, **kwargs)

        index = len(self._nodes)
        self._log("trace", f"Registering [Node {index}] ({node}).")

        if self._subscription is not None:
            self._subscription.dispose()
        self._subscription = node.on_new_output.subscribe(
            lambda value: self._forward_to_output(index, node, value)
        )

        if self._nodes:
            previous = self._nodes[-1]
            self._links.append(
                previous.on_new_output.subscribe(
                    lambda value: self._forward_to_node(index - 1, previous, index, node, value)
                )
            )
            self._log(
                "trace",
                f"Passing [Node {index - 1}] ({previous}) value [{_fmt(previous.output)}] "
                f"to [Node {index}] ({node}).",
            )
            node.input = previous.output
        else:
            node.input = self.input

        self._nodes.append(node)

        current = node.output
        self._log(
            "trace",
            f"[Node {index}] ({node}) registered and passed value [{_fmt(current)}] to pipeline output.",
        )
        self._set_output_and_call_handler(current)
        return self

    def set_output_handler(
        self,
        handler: Callable[[TState], None],
        distinct_only: bool = True,
    ) -> "Pipeline[TState]":
        self._log(
            "trace",
            "Setting output handler."
            if distinct_only
            else "Setting output handler. Handler calls with duplicate values are allowed.",
        )
        self._distinct_only = distinct_only
        self._handler = handler
        if self.output is not None:
            handler(self.output)
            self._log("debug", f"Handler executed with current output [{_fmt(self.output)}].")
        else:
            self._log("trace", "No output value to execute.")
        return self

    def input_received(self, state: Optional[TState]) -> None:
        if not self._nodes:
            self._log(
                "trace",
                f"Input set to [{_fmt(state)}]. No nodes registered, passing to pipeline output immediately.",
            )
            self._set_output_and_call_handler(state)
            return

        first = self._nodes[0]
        self._log("trace", f"Input set to [{_fmt(state)}]. Passing input to first [Node 0] ({first}).")
        first.input = state

    def close(self) -> None:
        """
        Descarta todas as inscrições do pipeline e fecha os nós que
        expõem `close()`.

        Falhas ao fechar um nó são registradas como evento `error` e não
        impedem o fechamento dos demais. Cada nó é fechado uma única vez;
        chamadas repetidas descartam apenas inscrições criadas por registros
        posteriores ao último fechamento.
        """
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        for link in self._links:
            link.dispose()
        self._links.clear()

        start, self._closed_nodes = self._closed_nodes, len(self._nodes)
        for index, node in enumerate(self._nodes[start:], start):
            close = getattr(node, "close", None)
            if not callable(close):
                continue
            try:
                close()
            except Exception as e:  # noqa: BLE001
                self._log(
                    "error",
                    f"Exception when trying to close [Node {index}] ({node}).",
                    exception_class=e.__class__.__name__,
                    error=str(e),
                )

    def __enter__(self) -> "Pipeline[TState]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Propagação
    # ------------------------------------------------------------------
    def _forward_to_node(
        self,
        src_index: int,
        src: PipelineNode,
        dst_index: int,
        dst: PipelineNode,
        value: Optional[TState],
    ) -> None:
        self._log(
            "trace",
            f"[Node {src_index}] ({src}) passed value [{_fmt(value)}] to [Node {dst_index}] ({dst}).",
        )
        dst.input = value

    def _forward_to_output(self, index: int, node: PipelineNode, value: Optional[TState]) -> None:
        self._log("trace", f"[Node {index}] ({node}) passed value [{_fmt(value)}] to pipeline output.")
        self._set_output_and_call_handler(value)

    def _set_output_and_call_handler(self, value: Optional[TState]) -> None:
        changed = value != self.output

        # Publica em on_new_output antes de chamar o handler.
        self.output = value

        if self._handler is None:
            self._log("trace", "No handler set to execute.")
            return
        if value is None:
            self._log("trace", "No output value to execute.")
            return
        if self._distinct_only and not changed:
            self._log("trace", "No handler executed as output has not changed.")
            return

        self._handler(value)
        self._log("debug", f"Handler executed with output [{_fmt(value)}].")

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self._event_log is None:
            return
        self._event_log.log(source=self.name or str(self), level=level, message=message, **extra)
