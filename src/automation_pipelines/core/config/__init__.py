# src/automation_pipelines/core/config/__init__.py

"""
Camada de configuração do Automation Pipelines.

Responsabilidades do pacote:
    - Carregamento de definições de pipeline (defaults + overrides locais)
    - Resolução da definição final via deep-merge determinístico
    - Geração de hash canônico da definição

Limites explícitos:
    - Não valida a estrutura de pipeline/nós (ver builders)
    - Não constrói pipelines
"""
