# tests/builders/test_build_pipeline.py
"""
Testes do builder declarativo de pipelines.

Os testes asseguram que:
- nós são resolvidos por alias do registry ou por import explícito
- `params` são repassados à fábrica de nós
- `enabled` explícito (true ou false) é aplicado ao nó antes do registro
- default e output handler são aplicados nesta ordem
- o trace cria um EventLog e registra o evento `pipeline.built`
- definições inválidas falham com exceções tipadas

Decisões arquiteturais:
    - Nenhum nó é encadeado se qualquer entrada da definição for inválida
    - O EventLog explícito tem precedência sobre `pipeline.trace`

Limites explícitos:
    - A semântica de propagação é coberta em tests/core/pipeline
"""

from pathlib import Path

import pytest

try:
    from automation_pipelines.builders import (
        build_pipeline,
        build_pipeline_from_files,
        resolve_node_type,
    )
    from automation_pipelines.core.config.hashing import compute_definition_hash
    from automation_pipelines.core.exceptions import (
        InvalidNodeError,
        NodeTypeNotFoundError,
        PipelineDefinitionError,
    )
    from automation_pipelines.core.pipeline.registry import NodeRegistry
    from automation_pipelines.core.traceability.event_log import EventLog
    from tests.fixtures.nodes import Doubler, Incrementer, Multiplier
except Exception as e:  # noqa: BLE001
    build_pipeline = None
    build_pipeline_from_files = None
    resolve_node_type = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing pipeline builder. Implement:\n"
            "- src/automation_pipelines/builders/pipeline.py (build_pipeline, build_pipeline_from_files)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _registry():
    reg = NodeRegistry()
    reg.add("doubler", Doubler)
    reg.add("incrementer", Incrementer)
    return reg


# =====================================================
# Resolução de tipos
# =====================================================

def test_resolve_prefers_registry_alias():
    _require_imports()
    reg = _registry()

    assert resolve_node_type("doubler", reg) is Doubler
    assert resolve_node_type("tests.fixtures.nodes:Multiplier") is Multiplier


@pytest.mark.parametrize(
    "type_ref",
    [
        "doubler",  # sem registry
        "tests.fixtures.nodes:Missing",
        "tests.fixtures.no_such_module:Thing",
        "tests.fixtures.nodes:",
    ],
)
def test_resolve_unknown_type_raises(type_ref):
    _require_imports()
    with pytest.raises(NodeTypeNotFoundError):
        resolve_node_type(type_ref)


# =====================================================
# Montagem
# =====================================================

def test_build_with_aliases_and_params():
    _require_imports()
    definition = {
        "pipeline": {"name": "sala", "default": 2},
        "nodes": [
            "doubler",
            {"type": "tests.fixtures.nodes:Multiplier", "params": {"factor": 3}},
        ],
    }

    pipeline = build_pipeline(definition, registry=_registry())

    assert pipeline.name == "sala"
    assert [type(n) for n in pipeline.nodes] == [Doubler, Multiplier]
    assert pipeline.nodes[1].factor == 3
    assert pipeline.output == 12
    assert pipeline.event_log is None


def test_build_disabled_node_is_bypassed():
    _require_imports()
    definition = {
        "pipeline": {"default": 5},
        "nodes": [
            {"type": "doubler", "enabled": False},
            {"type": "incrementer"},
        ],
    }

    pipeline = build_pipeline(definition, registry=_registry())

    assert pipeline.nodes[0].enabled is False
    assert pipeline.output == 6


def test_build_explicit_enabled_overrides_constructor_state():
    _require_imports()
    definition = {
        "nodes": [
            {"type": "automation_pipelines.nodes:PassThroughNode", "enabled": True},
            {"type": "automation_pipelines.nodes:PassThroughNode"},
        ],
    }

    pipeline = build_pipeline(definition)

    assert pipeline.nodes[0].enabled is True
    assert pipeline.nodes[1].enabled is False


def test_build_applies_default_before_handler(calls):
    _require_imports()
    definition = {"pipeline": {"default": 1}, "nodes": ["doubler"]}

    pipeline = build_pipeline(definition, registry=_registry(), output_handler=calls)

    assert calls.values == [2]

    pipeline.input = 4
    assert calls.values == [2, 8]


def test_build_distinct_only_false_allows_duplicates(calls):
    _require_imports()
    definition = {"pipeline": {"default": 1, "distinct_only": False}, "nodes": ["doubler"]}

    pipeline = build_pipeline(definition, registry=_registry(), output_handler=calls)
    pipeline.input = 1

    assert calls.values == [2, 2]


def test_build_without_default_keeps_output_empty(calls):
    _require_imports()
    pipeline = build_pipeline({"nodes": ["doubler"]}, registry=_registry(), output_handler=calls)

    assert pipeline.input is None
    assert pipeline.output is None
    assert calls.values == []


def test_build_uses_custom_node_factory():
    _require_imports()
    built = []

    def factory(node_type, **kwargs):
        built.append((node_type, kwargs))
        return node_type(**kwargs)

    definition = {
        "nodes": [{"type": "tests.fixtures.nodes:Multiplier", "params": {"factor": 4}}],
    }
    pipeline = build_pipeline(definition, node_factory=factory)
    pipeline.register_node(Incrementer)

    assert built == [(Multiplier, {"factor": 4}), (Incrementer, {})]


# =====================================================
# Trace / EventLog
# =====================================================

def test_build_trace_creates_event_log_with_definition_hash():
    _require_imports()
    definition = {
        "pipeline": {"name": "sala", "default": 1, "trace": {"enabled": True, "level": "info"}},
        "nodes": ["doubler"],
    }

    pipeline = build_pipeline(definition, registry=_registry())

    log = pipeline.event_log
    assert isinstance(log, EventLog)
    assert log.max_events is None
    assert log.messages() == ["pipeline.built"]
    event = log.events[0]
    assert event["source"] == "sala"
    assert event["definition_hash"] == compute_definition_hash(definition)
    assert event["nodes"] == ["doubler"]


def test_build_explicit_event_log_takes_precedence():
    _require_imports()
    log = EventLog(level="trace")
    definition = {"pipeline": {"trace": {"enabled": False}}, "nodes": ["doubler"]}

    pipeline = build_pipeline(definition, registry=_registry(), event_log=log)

    assert pipeline.event_log is log
    assert "Registering [Node 0] (Doubler)." in log.messages()
    assert log.messages()[-1] == "pipeline.built"


# =====================================================
# Erros de definição
# =====================================================

@pytest.mark.parametrize(
    "definition",
    [
        ["not", "a", "dict"],
        {"pipeline": "sala"},
        {"nodes": {"type": "doubler"}},
        {"nodes": [42]},
        {"nodes": [{"params": {}}]},
        {"nodes": [{"type": "doubler", "params": ["x"]}]},
        {"nodes": [{"type": "doubler", "enabled": "no"}]},
        {"pipeline": {"name": 3}},
        {"pipeline": {"distinct_only": "yes"}},
        {"pipeline": {"trace": {"enabled": True, "level": "verbose"}}},
        {"pipeline": {"trace": {"enabled": True, "max_events": 0}}},
    ],
)
def test_build_invalid_definition_raises(definition):
    _require_imports()
    with pytest.raises(PipelineDefinitionError):
        build_pipeline(definition, registry=_registry())


def test_build_unknown_node_type_raises():
    _require_imports()
    with pytest.raises(NodeTypeNotFoundError) as excinfo:
        build_pipeline({"nodes": ["tripler"]}, registry=_registry())

    assert excinfo.value.details == {"type": "tripler"}


def test_build_rejects_object_that_is_not_a_node():
    _require_imports()
    with pytest.raises(InvalidNodeError) as excinfo:
        build_pipeline({"nodes": ["tests.fixtures.nodes:NotANode"]})

    assert excinfo.value.details["index"] == 0
    assert excinfo.value.hint


# =====================================================
# A partir de arquivos
# =====================================================

def test_build_from_defaults_file(tmp_path: Path, pipeline_defaults_yaml):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(pipeline_defaults_yaml, encoding="utf-8")

    pipeline = build_pipeline_from_files(defaults)

    assert pipeline.name == "sala"
    assert pipeline.output == 2
    assert pipeline.event_log is None


def test_build_from_defaults_and_local_files(
    tmp_path: Path, pipeline_defaults_yaml, pipeline_local_yaml, calls
):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(pipeline_defaults_yaml, encoding="utf-8")
    local.write_text(pipeline_local_yaml, encoding="utf-8")

    pipeline = build_pipeline_from_files(defaults, local, output_handler=calls)

    # default 3 -> Doubler 6 -> Multiplier(10) 60
    assert pipeline.output == 60
    assert calls.values == [60]
    built = pipeline.event_log.filter(level="info")
    assert [e["message"] for e in built] == ["pipeline.built"]
    assert built[0]["nodes"] == [
        "tests.fixtures.nodes:Doubler",
        "tests.fixtures.nodes:Multiplier",
    ]


def test_build_trace_max_events_bounds_event_log():
    _require_imports()
    definition = {
        "pipeline": {"default": 1, "trace": {"enabled": True, "level": "trace", "max_events": 3}},
        "nodes": ["doubler", "incrementer"],
    }

    pipeline = build_pipeline(definition, registry=_registry())
    pipeline.input = 7

    assert pipeline.event_log.max_events == 3
    assert len(pipeline.event_log.events) == 3
