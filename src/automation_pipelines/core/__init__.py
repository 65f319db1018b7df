# src/automation_pipelines/core/__init__.py
"""
Core do Automation Pipelines.

Componentes principais:
    - node          → contrato, nó base e stream de saída
    - pipeline      → pipeline composto, fábrica e registry de nós
    - config        → resolução de definições (load, merge, hashing)
    - traceability  → Event Log de diagnóstico

Princípios fundamentais:
    - Propagação síncrona, em profundidade, na thread do chamador
    - Erros de estágios e handlers propagam sem recuperação
    - Nenhuma dependência de estágios concretos de domínio
"""
