# src/automation_pipelines/__init__.py
"""
Automation Pipelines — engine de pipelines de nós encadeados.

Um pipeline conecta uma sequência ordenada de estágios ("nós"). Cada nó
consome um estado e produz um estado; atualizações são propagadas por
notificações push, e o pipeline expõe um único resultado observável com
um handler opcional chamado a cada novo resultado distinto.

Arquitetura em alto nível:
    - core.node          → contrato de nó, nó base e stream de saída
    - core.pipeline      → pipeline composto, fábrica e registry de nós
    - core.config        → carregamento, merge e hashing de definições
    - core.traceability  → Event Log estruturado
    - nodes              → estágios prontos (pass-through, função, processor)
    - builders           → montagem de pipelines a partir de definições

Limites explícitos:
    - Execução síncrona e single-thread
    - Sem I/O de rede, persistência, retry ou backoff
"""
from .core.node.base import Node
from .core.node.contract import PipelineNode, Processor
from .core.node.stream import OutputStream, Subscription
from .core.pipeline.pipeline import Pipeline
from .core.traceability.event_log import EventLog

__all__ = [
    "Node",
    "PipelineNode",
    "Processor",
    "OutputStream",
    "Subscription",
    "Pipeline",
    "EventLog",
]
