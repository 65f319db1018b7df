# src/automation_pipelines/core/pipeline/__init__.py
"""
Pipeline composto, fronteira de fábrica e registry de tipos de nó.
"""
from .factory import NodeFactory, default_node_factory
from .pipeline import Pipeline
from .registry import DuplicateNodeAliasError, NodeRegistry

__all__ = [
    "NodeFactory",
    "default_node_factory",
    "Pipeline",
    "DuplicateNodeAliasError",
    "NodeRegistry",
]
