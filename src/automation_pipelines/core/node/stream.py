# src/automation_pipelines/core/node/stream.py
"""
Canal de notificação push dos nós do Automation Pipelines.

Este módulo define o `OutputStream`, o canal multicast através do qual um
nó anuncia cada novo valor de saída, e a `Subscription`, o handle
descartável devolvido a cada assinante.

Princípios fundamentais:
    - Entrega síncrona, na thread de quem publica
    - Sem replay: assinantes tardios não recebem valores passados
    - Cada publicação corresponde exatamente a uma escrita de saída
    - Exceções de assinantes propagam para quem publicou

Invariantes:
    - Assinantes são notificados na ordem de inscrição
    - Descartar uma Subscription afeta apenas aquele assinante
    - Descartar duas vezes é inofensivo

Limites explícitos:
    - Não é thread-safe (um único driver externo é assumido)
    - Não agenda, enfileira nem adia notificações
    - Não captura nem registra erros de assinantes

Este módulo existe para oferecer a única superfície de notificação
exposta pelos nós e pipelines.
"""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Subscription:
    """
    Handle descartável de uma inscrição em um `OutputStream`.

    Chamar `dispose()` interrompe as notificações deste assinante sem
    afetar o stream nem os demais assinantes.
    """

    def __init__(self, stream: "OutputStream", handler: Callable) -> None:
        self._stream: Optional[OutputStream] = stream
        self._handler = handler

    @property
    def disposed(self) -> bool:
        return self._stream is None

    def dispose(self) -> None:
        if self._stream is None:
            return
        self._stream._remove(self)
        self._stream = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()


class OutputStream(Generic[T]):
    """
    Stream multicast e sem replay de valores de saída.

    Uso:
        stream = OutputStream()
        sub = stream.subscribe(print)
        stream.publish(42)   # imprime 42
        sub.dispose()

    Decisões arquiteturais:
        - Handlers são chamados sincronamente por `publish`
        - A lista de assinantes é copiada antes da entrega, de modo que
          inscrições feitas durante uma publicação só recebem a próxima
        - Um assinante descartado durante a entrega não é mais chamado

    Limites explícitos:
        - Não guarda o último valor publicado
        - Não isola falhas: a primeira exceção interrompe a entrega
    """

    def __init__(self) -> None:
        self._subscriptions: List[Subscription] = []

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        subscription = Subscription(self, handler)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, value: T) -> None:
        for subscription in list(self._subscriptions):
            if subscription.disposed:
                continue
            subscription._handler(value)

    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
