"""
Automation Pipelines — Canonical Exceptions (v1)

Este módulo define exceções tipadas da camada de definição declarativa
e construção de pipelines.

Objetivo:
- Sinalizar definições inválidas com dados estruturados (serializáveis)
- Evitar ValueError/RuntimeError genéricos no builder

Regras:
- O engine de propagação (Node/Pipeline) NÃO levanta estas exceções:
  erros de estágios e handlers propagam como foram levantados.
- Mensagens são curtas e humanas; detalhes vão em `details`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PipelineException(Exception):
    """Base class para exceções internas do Automation Pipelines.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class PipelineDefinitionError(PipelineException):
    """Definição de pipeline estruturalmente inválida."""


@dataclass(frozen=True)
class NodeTypeNotFoundError(PipelineException):
    """Tipo de nó referenciado na definição não pôde ser resolvido."""


@dataclass(frozen=True)
class InvalidNodeError(PipelineException):
    """Objeto construído para a definição não satisfaz o contrato PipelineNode."""
