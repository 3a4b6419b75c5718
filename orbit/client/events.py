"""Bus d'événements du client (publish / subscribe)"""

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)

# Événements publiés par le store et l'état ambiant
TASK_LIST_CHANGED = "task_list_changed"   # {"was_empty": bool, "is_empty": bool}
TASK_COMPLETED = "task_completed"         # {"task": dict}
REFLECTION_ADDED = "reflection_added"     # {"reflection": dict}
MODE_CHANGED = "mode_changed"             # {"previous": str, "mode": str}
MOOD_CHANGED = "mood_changed"             # {"previous": str, "mood": str}
ENERGY_CHANGED = "energy_changed"         # {"previous": int, "energy": int}
CHAT_OPENED = "chat_opened"               # {}


class EventBus:
    """
    Les abonnés sont appelés dans l'ordre d'abonnement.

    Une erreur dans un abonné est loggée puis ignorée : celui qui publie
    (une mutation de tâche par ex.) ne dépend jamais du résultat.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Dict[str, Any]], None]]] = defaultdict(list)

    def subscribe(self, event: str, handler: Callable[[Dict[str, Any]], None]) -> Callable[[], None]:
        self._subscribers[event].append(handler)

        def unsubscribe():
            if handler in self._subscribers[event]:
                self._subscribers[event].remove(handler)

        return unsubscribe

    def publish(self, event: str, payload: Dict[str, Any] = None):
        for handler in list(self._subscribers.get(event, [])):
            try:
                handler(payload or {})
            except Exception:
                logger.exception(f"Subscriber for '{event}' failed")
