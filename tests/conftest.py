# tests/conftest.py
"""
Fixtures compartilhados para testes do Automation Pipelines.

Este módulo define fixtures reutilizáveis que fornecem:
- definições YAML determinísticas (defaults e overrides locais)
- um estágio dummy que dobra a entrada
- um coletor de chamadas para output handlers e assinantes

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture contém lógica de domínio

Este módulo existe como infraestrutura de teste e não
como validação funcional do engine.
"""

import pytest


# =====================================================
# Config / definição declarativa
# =====================================================

@pytest.fixture
def pipeline_defaults_yaml() -> str:
    """
    Fixture que fornece uma definição base (defaults) de pipeline.

    A definição usa apenas referências por import explícito, de forma que
    pode ser construída sem registry.

    Usado por:
        - Testes do loader de definições
        - Testes de deep-merge (defaults + local)
        - Testes do builder a partir de arquivos

    Returns:
        str: Conteúdo YAML representando a definição base.
    """

    return """\
pipeline:
  name: sala
  distinct_only: true
  default: 1
  trace:
    enabled: false
    level: debug
nodes:
  - type: "tests.fixtures.nodes:Doubler"
"""


@pytest.fixture
def pipeline_local_yaml() -> str:
    """
    Fixture que fornece overrides locais para a definição base.

    Substitui o default, liga o trace e troca a lista de nós inteira
    (listas são sobrescritas, não mescladas).

    Returns:
        str: Conteúdo YAML representando overrides locais.
    """

    return """\
pipeline:
  default: 3
  trace:
    enabled: true
nodes:
  - type: "tests.fixtures.nodes:Doubler"
  - type: "tests.fixtures.nodes:Multiplier"
    params:
      factor: 10
"""


# =====================================================
# Nós e coletores
# =====================================================

@pytest.fixture
def Doubler():
    """
    Fixture factory que fornece a *classe* de um estágio que dobra a entrada.

    Returns:
        type: Subclasse de Node que escreve `input * 2` na saída.
    """
    from tests.fixtures.nodes import Doubler as _Doubler

    return _Doubler


@pytest.fixture
def calls():
    """
    Coletor de chamadas: um callable que registra os valores recebidos
    em `calls.values`.
    """

    class _Calls:
        def __init__(self):
            self.values = []

        def __call__(self, value):
            self.values.append(value)

    return _Calls()
