# src/automation_pipelines/core/node/__init__.py
"""
Nós do Automation Pipelines.

- **contract**: `PipelineNode` e `Processor` (Protocols)
- **stream**: `OutputStream` e `Subscription`
- **base**: `Node`, implementação base com bypass por desabilitação
"""
from .base import Node
from .contract import PipelineNode, Processor
from .stream import OutputStream, Subscription

__all__ = ["Node", "PipelineNode", "Processor", "OutputStream", "Subscription"]
