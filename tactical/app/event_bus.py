"""Bus d'évènements synchrone du plateau, filtré par type d'évènement.

Les évènements publiés par `BoardService` sont des dataclasses figées
(`tactical.app.events`). Un abonné choisit les types qui l'intéressent:
l'écouteur `on_units_changed` ne reçoit que les `UnitsChangedEvent`, un
journal de débogage peut tout recevoir.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Type, Union

Subscriber = Callable[[object], None]
EventTypes = Union[Type[object], Tuple[Type[object], ...]]


@dataclass(frozen=True, eq=False)
class Subscription:
    """Abonnement: rappel et types acceptés (`None` = tous)."""

    callback: Subscriber
    event_types: Optional[EventTypes] = None

    def accepts(self, event: object) -> bool:
        return self.event_types is None or isinstance(event, self.event_types)


class EventBus:
    """Diffuse les évènements du plateau aux abonnés concernés.

    La diffusion est immédiate, dans l'ordre d'enregistrement, dans le fil du
    gestionnaire d'entrée qui l'a déclenchée. Une exception levée par un
    abonné interrompt la diffusion et remonte à l'appelant.
    """

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: List[Subscription] = []

    def subscribe(
        self,
        callback: Subscriber,
        event_types: Optional[EventTypes] = None,
    ) -> Callable[[], None]:
        """Register `callback` for events of `event_types`.

        Args:
            callback: Called with each accepted event
            event_types: Event class or tuple of classes; None accepts all

        Returns:
            Idempotent unsubscribe function
        """
        subscription = Subscription(callback, event_types)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, event: object) -> int:
        """Deliver `event` to every current subscriber that accepts it.

        Returns:
            Number of subscribers called
        """
        delivered = 0
        # Instantané: un abonné peut se désinscrire pendant la diffusion
        for subscription in tuple(self._subscriptions):
            if subscription.accepts(event):
                subscription.callback(event)
                delivered += 1
        return delivered


__all__ = ["EventBus", "Subscription", "Subscriber"]
