# src/automation_pipelines/nodes/__init__.py
"""Estágios prontos para uso."""
from .function import FunctionNode, ProcessorNode
from .passthrough import PassThroughNode

__all__ = ["FunctionNode", "ProcessorNode", "PassThroughNode"]
