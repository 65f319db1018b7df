# src/automation_pipelines/core/traceability/event_log.py
"""
Event Log estruturado do Automation Pipelines.

Este módulo define o `EventLog`, o registro ordenado de eventos de
diagnóstico emitidos por pipelines durante registro de nós, propagação
de valores e execução do output handler.

Cada evento é um dicionário simples e serializável:

    {
        "timestamp": "2026-01-16T00:00:00+00:00",
        "source": "living_room",
        "level": "trace",
        "message": "[Node 0] (Doubler) registered",
        ...extra
    }

Princípios fundamentais:
    - Eventos são registrados apenas por chamadas explícitas
    - A ordem da lista reflete a ordem real de ocorrência
    - UTC é o timezone canônico dos timestamps

Decisões arquiteturais:
    - Níveis ordenados: trace < debug < info < error
    - Eventos abaixo do nível configurado são descartados na origem
    - Pipelines sem EventLog não registram nada

Limites explícitos:
    - Não persiste eventos
    - Sem `max_events`, a retenção é ilimitada: hosts de longa duração
      devem definir um limite ou chamar `clear()` periodicamente
    - Não imprime nem encaminha eventos para handlers externos
    - Não é thread-safe
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

LEVELS: Dict[str, int] = {
    "trace": 0,
    "debug": 10,
    "info": 20,
    "error": 40,
}


def _level_value(level: str) -> int:
    key = str(level).lower()
    if key not in LEVELS:
        raise ValueError(f"Nível de log desconhecido: {level!r}")
    return LEVELS[key]


@dataclass
class EventLog:
    """
    Registro ordenado de eventos estruturados.

    Campos:
        - level: nível mínimo registrado (padrão: "debug")
        - max_events: limite de retenção; ao atingi-lo, os eventos mais
          antigos são descartados (padrão: ilimitado)
        - events: eventos aceitos, em ordem de ocorrência

    Invariantes:
        - Todo evento contém `timestamp`, `source`, `level` e `message`
        - `events` só recebe eventos via `log`
    """

    level: str = "debug"
    max_events: Optional[int] = None
    events: Deque[Dict[str, Any]] = field(default_factory=deque, init=False)

    def __post_init__(self) -> None:
        self.level = str(self.level).lower()
        _level_value(self.level)
        if self.max_events is not None:
            if isinstance(self.max_events, bool) or not isinstance(self.max_events, int) or self.max_events < 1:
                raise ValueError(f"max_events deve ser inteiro positivo: {self.max_events!r}")
        self.events = deque(maxlen=self.max_events)

    def enabled_for(self, level: str) -> bool:
        return _level_value(level) >= _level_value(self.level)

    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        if not self.enabled_for(level):
            return
        event = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "level": str(level).lower(),
            "message": message,
        }
        event.update(extra)
        self.events.append(event)

    def filter(self, *, level: Optional[str] = None, source: Optional[str] = None) -> List[Dict[str, Any]]:
        """Retorna os eventos do nível (exato) e/ou da origem informados."""
        out = []
        for event in self.events:
            if level is not None and event["level"] != str(level).lower():
                continue
            if source is not None and event["source"] != source:
                continue
            out.append(event)
        return out

    def messages(self) -> List[str]:
        return [e["message"] for e in self.events]

    def clear(self) -> None:
        self.events.clear()
