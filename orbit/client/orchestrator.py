"""
Décide quand l'assistant prend la parole.

Le store et l'état ambiant publient des événements ; ici on les traduit en
déclencheurs, on demande le message à l'API et on l'ajoute au transcript.
Une erreur réseau est loggée, jamais remontée à la mutation d'origine.
"""

import logging
from typing import Optional, List, Callable

from orbit.client import events
from orbit.client.api import APIError, OrbitAPI
from orbit.client.store import OrbitStore
from orbit.schemas.enums import Trigger
from orbit.services.contextual_service import get_time_of_day

logger = logging.getLogger(__name__)

LOW_ENERGY_THRESHOLD = 30


class ContextualMessenger:
    def __init__(self, api: OrbitAPI, store: OrbitStore, ambient=None, bus=None):
        self.api = api
        self.store = store
        self.ambient = ambient or store.ambient
        self.bus = bus or store.bus
        self.current_session: Optional[dict] = None
        self._unsubscribers: List[Callable[[], None]] = []

    def start(self) -> "ContextualMessenger":
        if self._unsubscribers:
            return self
        handlers = {
            events.MODE_CHANGED: self._on_mode_changed,
            events.ENERGY_CHANGED: self._on_energy_changed,
            events.REFLECTION_ADDED: self._on_reflection_added,
            events.TASK_LIST_CHANGED: self._on_task_list_changed,
            events.TASK_COMPLETED: self._on_task_completed,
            events.CHAT_OPENED: self._on_chat_opened,
        }
        for event, handler in handlers.items():
            self._unsubscribers.append(self.bus.subscribe(event, handler))
        return self

    def stop(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def open_chat(self):
        self.bus.publish(events.CHAT_OPENED, {})

    # ============ APPEL API ============

    def _context(self, **overrides) -> dict:
        state = self.ambient.snapshot()
        context = {"mode": state["mode"], "mood": state["mood"], "energyLevel": state["energy"]}
        context.update(overrides)
        return context

    def surface(self, trigger: Trigger, context: Optional[dict] = None) -> Optional[dict]:
        """Récupère le message du déclencheur et l'ajoute au transcript"""
        trigger = Trigger(trigger).value
        try:
            response = self.api.contextual_message(trigger, context or self._context())
            content = response["chatMessage"]["content"]
        except (APIError, KeyError, TypeError) as e:
            logger.error(f"Error fetching contextual message for {trigger}: {e}")
            return None
        return self.store.append_message("assistant", content)

    # ============ HANDLERS ============

    def _on_mode_changed(self, payload: dict):
        mode = payload.get("mode", self.ambient.mode)
        try:
            started = self.api.start_session(mode, energy_level=self.ambient.energy)
            self.current_session = started.get("session")
        except APIError as e:
            logger.error(f"Error starting {mode} session: {e}")
        self.surface(Trigger.MODE_CHANGE, self._context(mode=mode))

    def _on_energy_changed(self, payload: dict):
        previous = payload.get("previous", 100)
        energy = payload.get("energy", self.ambient.energy)
        # seulement au passage sous le seuil, pas à chaque cran en dessous
        if previous >= LOW_ENERGY_THRESHOLD > energy:
            self.surface(Trigger.ENERGY_LOW, self._context(energyLevel=energy))

    def _on_reflection_added(self, payload: dict):
        reflection = payload.get("reflection") or {}
        mood = reflection.get("mood") or self.ambient.mood
        self.surface(Trigger.REFLECTION_LOGGED, self._context(mood=mood))

    def _on_task_list_changed(self, payload: dict):
        if payload.get("was_empty") != payload.get("is_empty"):
            self.surface(Trigger.NO_TASK)

    def _on_task_completed(self, payload: dict):
        self.ambient.mark_focus_day()

    def _on_chat_opened(self, payload: dict):
        self.surface(Trigger.CHAT_OPENED, self._context(timeOfDay=get_time_of_day()))
