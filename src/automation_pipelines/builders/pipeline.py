# src/automation_pipelines/builders/pipeline.py
"""
Builder de pipelines a partir de definições declarativas.

Este módulo converte uma definição (dict, tipicamente carregada de YAML ou
JSON via `load_config`) em um `Pipeline` pronto para uso.

Formato da definição (v1):

    pipeline:
      name: sala
      distinct_only: true
      default: 0
      trace:
        enabled: true
        level: debug
        max_events: 1000
    nodes:
      - type: doubler                 # alias do NodeRegistry
      - type: "pacote.modulo:Classe"  # import explícito
        enabled: false
        params: {fator: 3}

Decisões arquiteturais:
    - A definição inteira é validada e todos os nós são construídos ANTES
      de qualquer encadeamento
    - Tipos são resolvidos primeiro pelo registry, depois por import
    - `enabled` explícito é aplicado ao nó antes do registro; omitido, o
      nó mantém o estado que seu construtor definiu
    - Ordem de montagem: nós → default → output handler
    - O evento `pipeline.built` registra o hash da definição

Limites explícitos:
    - Não valida semântica dos `params` (responsabilidade do nó/fábrica)
    - Não captura exceções levantadas pelos construtores dos nós
    - Não persiste a definição
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, Union

from automation_pipelines.core.config.hashing import compute_definition_hash
from automation_pipelines.core.config.loader import load_config
from automation_pipelines.core.exceptions import (
    InvalidNodeError,
    NodeTypeNotFoundError,
    PipelineDefinitionError,
)
from automation_pipelines.core.node.contract import PipelineNode
from automation_pipelines.core.pipeline.factory import NodeFactory, default_node_factory
from automation_pipelines.core.pipeline.pipeline import Pipeline
from automation_pipelines.core.pipeline.registry import NodeRegistry
from automation_pipelines.core.traceability.event_log import EventLog


def _section(definition: Dict[str, Any], key: str, expected: type) -> Any:
    value = definition.get(key)
    if value is None:
        return expected()
    if not isinstance(value, expected):
        raise PipelineDefinitionError(
            message=f"Seção '{key}' deve ser {expected.__name__}",
            details={"section": key, "received": type(value).__name__},
            hint=f"Ajuste a seção '{key}' da definição",
        )
    return value


def _normalize_node_spec(index: int, spec: Any) -> Dict[str, Any]:
    if isinstance(spec, str):
        spec = {"type": spec}

    if not isinstance(spec, dict):
        raise PipelineDefinitionError(
            message="Entrada de nó deve ser dict ou string",
            details={"index": index, "received": type(spec).__name__},
        )

    node_type = spec.get("type")
    if not isinstance(node_type, str) or not node_type.strip():
        raise PipelineDefinitionError(
            message="Entrada de nó requer 'type' não vazio",
            details={"index": index},
            hint="Informe um alias do registry ou 'pacote.modulo:Classe'",
        )

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise PipelineDefinitionError(
            message="'params' do nó deve ser dict",
            details={"index": index, "type": node_type, "received": type(params).__name__},
        )

    enabled = spec.get("enabled")
    if enabled is not None and not isinstance(enabled, bool):
        raise PipelineDefinitionError(
            message="'enabled' do nó deve ser booleano",
            details={"index": index, "type": node_type, "received": type(enabled).__name__},
        )

    return {"type": node_type, "params": params, "enabled": enabled}


def resolve_node_type(type_ref: str, registry: Optional[NodeRegistry] = None) -> Type[Any]:
    """
    Resolve uma referência de tipo de nó.

    Ordem de resolução:
        1. alias no `registry` (quando informado)
        2. import explícito no formato "pacote.modulo:Classe"

    Raises:
        NodeTypeNotFoundError: Se a referência não puder ser resolvida.
    """
    if registry is not None and type_ref in registry:
        return registry.get(type_ref)

    module_name, sep, attr = type_ref.partition(":")
    if not sep or not module_name or not attr:
        raise NodeTypeNotFoundError(
            message=f"Tipo de nó desconhecido: {type_ref}",
            details={"type": type_ref},
            hint="Registre o alias no NodeRegistry ou use 'pacote.modulo:Classe'",
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise NodeTypeNotFoundError(
            message=f"Módulo do nó não encontrado: {module_name}",
            details={"type": type_ref, "exception_class": e.__class__.__name__},
        ) from e

    target: Any = module
    for part in attr.split("."):
        if not hasattr(target, part):
            raise NodeTypeNotFoundError(
                message=f"Atributo '{attr}' não encontrado em {module_name}",
                details={"type": type_ref},
            )
        target = getattr(target, part)

    return target


def build_pipeline(
    definition: Dict[str, Any],
    *,
    registry: Optional[NodeRegistry] = None,
    node_factory: Optional[NodeFactory] = None,
    output_handler: Optional[Callable[[Any], None]] = None,
    event_log: Optional[EventLog] = None,
) -> Pipeline:
    """
    Constrói um `Pipeline` a partir de uma definição declarativa.

    Args:
        definition: Definição resolvida (ver docstring do módulo).
        registry: Registro opcional de aliases de tipos de nó.
        node_factory: Fábrica usada para construir os nós (padrão: construtor).
        output_handler: Handler opcional do pipeline.
        event_log: EventLog explícito; tem precedência sobre `pipeline.trace`.

    Returns:
        Pipeline: Pipeline montado, com default e handler aplicados.

    Raises:
        PipelineDefinitionError: Estrutura da definição inválida.
        NodeTypeNotFoundError: Tipo de nó não resolvido.
        InvalidNodeError: Objeto construído não satisfaz `PipelineNode`.
    """
    if not isinstance(definition, dict):
        raise PipelineDefinitionError(
            message="Definição de pipeline deve ser dict",
            details={"received": type(definition).__name__},
        )

    settings = _section(definition, "pipeline", dict)
    specs = [_normalize_node_spec(i, s) for i, s in enumerate(_section(definition, "nodes", list))]

    name = settings.get("name")
    if name is not None and not isinstance(name, str):
        raise PipelineDefinitionError(
            message="'pipeline.name' deve ser string",
            details={"received": type(name).__name__},
        )

    distinct_only = settings.get("distinct_only", True)
    if not isinstance(distinct_only, bool):
        raise PipelineDefinitionError(
            message="'pipeline.distinct_only' deve ser booleano",
            details={"received": type(distinct_only).__name__},
        )

    if event_log is None:
        trace = settings.get("trace") or {}
        if not isinstance(trace, dict):
            raise PipelineDefinitionError(
                message="'pipeline.trace' deve ser dict",
                details={"received": type(trace).__name__},
            )
        if trace.get("enabled", False):
            try:
                event_log = EventLog(
                    level=trace.get("level", "debug"),
                    max_events=trace.get("max_events"),
                )
            except ValueError as e:
                raise PipelineDefinitionError(
                    message="'pipeline.trace' inválido",
                    details={"level": trace.get("level"), "max_events": trace.get("max_events")},
                    hint="Use level trace, debug, info ou error e max_events inteiro positivo",
                ) from e

    factory = node_factory or default_node_factory
    nodes: List[PipelineNode] = []
    for index, spec in enumerate(specs):
        node_type = resolve_node_type(spec["type"], registry)
        node = factory(node_type, **spec["params"])
        if not isinstance(node, PipelineNode):
            raise InvalidNodeError(
                message=f"Objeto construído para '{spec['type']}' não é um PipelineNode",
                details={"index": index, "type": spec["type"], "received": type(node).__name__},
                hint="Herde de Node ou implemente enabled/input/output/on_new_output",
            )
        if spec["enabled"] is not None:
            node.enabled = spec["enabled"]
        nodes.append(node)

    kwargs: Dict[str, Any] = {}
    if "default" in settings:
        kwargs["default"] = settings["default"]

    pipeline = Pipeline(
        *nodes,
        output_handler=output_handler,
        distinct_only=distinct_only,
        name=name,
        node_factory=factory,
        event_log=event_log,
        **kwargs,
    )

    if event_log is not None:
        event_log.log(
            source=name or str(pipeline),
            level="info",
            message="pipeline.built",
            definition_hash=compute_definition_hash(definition),
            nodes=[spec["type"] for spec in specs],
        )

    return pipeline


def build_pipeline_from_files(
    defaults_path: Union[str, Path],
    local_path: Optional[Union[str, Path]] = None,
    **kwargs: Any,
) -> Pipeline:
    """Carrega a definição (defaults + overrides locais) e constrói o pipeline."""
    definition = load_config(defaults_path=defaults_path, local_path=local_path)
    return build_pipeline(definition, **kwargs)
