# src/automation_pipelines/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Automation Pipelines.

Este módulo define a hierarquia de exceções levantadas durante o
carregamento e a resolução de definições declarativas de pipeline.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de processamento de um nó

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Node ou Pipeline
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração.

    Permite captura genérica de falhas de carregamento e merge, distintas
    de falhas de propagação no pipeline.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de definição base (defaults) não
    é encontrado no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo não é um `dict`.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"pipeline": {"distinct_only": true}}
        - override: {"pipeline": "sala"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
