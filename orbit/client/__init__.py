"""
Couche d'état côté client : ce que l'application web garde en mémoire
(tâches, réflexions, transcript, mode/humeur/énergie) et la logique qui
décide quand afficher un message contextuel.
"""

from orbit.client.api import OrbitAPI, APIError
from orbit.client.events import EventBus
from orbit.client.ambient import AmbientState
from orbit.client.store import OrbitStore
from orbit.client.orchestrator import ContextualMessenger

__all__ = ["OrbitAPI", "APIError", "EventBus", "AmbientState", "OrbitStore", "ContextualMessenger"]
