"""
État ambiant : mode, humeur, énergie et jours de focus.

Lu par quasiment tout le client. Chaque modification est écrite sur
disque (JSON) et publiée sur le bus ; la lecture du fichier ne se fait
qu'une fois, au démarrage.
"""

import json
import logging
import threading
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, List, Union

from orbit.client import events
from orbit.client.events import EventBus
from orbit.schemas.enums import Mode, Mood

logger = logging.getLogger(__name__)

DEFAULT_MODE = Mode.BUILD.value
DEFAULT_MOOD = Mood.NEUTRAL.value
DEFAULT_ENERGY = 60
STREAK_WINDOW_DAYS = 7


class AmbientState:
    def __init__(self, path: Union[str, Path, None] = None, bus: Optional[EventBus] = None):
        self.path = Path(path) if path else None
        self.bus = bus or EventBus()
        self._lock = threading.RLock()
        self._hydrated = False

        self._mode = DEFAULT_MODE
        self._mood = DEFAULT_MOOD
        self._energy = DEFAULT_ENERGY
        self._focus_days: List[str] = []  # dates ISO des jours avec une tâche terminée

    # ============ PERSISTANCE ============

    def load(self) -> "AmbientState":
        with self._lock:
            if self._hydrated:
                return self
            self._hydrated = True

            if not self.path or not self.path.exists():
                return self

            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                # fichier illisible : on garde les valeurs par défaut
                logger.warning(f"Could not read ambient state from {self.path}: {e}")
                return self

            if data.get("mode") in {m.value for m in Mode}:
                self._mode = data["mode"]
            if data.get("mood") in {m.value for m in Mood}:
                self._mood = data["mood"]
            if isinstance(data.get("energy"), int):
                self._energy = _clamp_energy(data["energy"])
            self._focus_days = [d for d in data.get("focus_days", []) if isinstance(d, str)]
            return self

    def _save(self):
        if not self.path:
            return
        payload = {
            "mode": self._mode,
            "mood": self._mood,
            "energy": self._energy,
            "focus_days": self._focus_days,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload), encoding="utf-8")
        tmp.replace(self.path)

    # ============ LECTURE ============

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def mood(self) -> str:
        return self._mood

    @property
    def energy(self) -> int:
        return self._energy

    def snapshot(self) -> dict:
        with self._lock:
            return {"mode": self._mode, "mood": self._mood, "energy": self._energy}

    def subscribe(self, event: str, handler):
        return self.bus.subscribe(event, handler)

    # ============ ÉCRITURE ============

    def set_mode(self, mode: Union[Mode, str]):
        mode = Mode(mode).value
        with self._lock:
            previous = self._mode
            if mode == previous:
                return
            self._mode = mode
            self._save()
        self.bus.publish(events.MODE_CHANGED, {"previous": previous, "mode": mode})

    def set_mood(self, mood: Union[Mood, str]):
        mood = Mood(mood).value
        with self._lock:
            previous = self._mood
            if mood == previous:
                return
            self._mood = mood
            self._save()
        self.bus.publish(events.MOOD_CHANGED, {"previous": previous, "mood": mood})

    def set_energy(self, energy: int):
        energy = _clamp_energy(energy)
        with self._lock:
            previous = self._energy
            if energy == previous:
                return
            self._energy = energy
            self._save()
        self.bus.publish(events.ENERGY_CHANGED, {"previous": previous, "energy": energy})

    def mark_focus_day(self, day: date = None):
        day_iso = (day or date.today()).isoformat()
        with self._lock:
            if day_iso in self._focus_days:
                return
            self._focus_days = sorted(self._focus_days + [day_iso])[-STREAK_WINDOW_DAYS * 4:]
            self._save()

    def focus_streak(self, today: date = None) -> List[bool]:
        """7 booléens, du jour J-6 à aujourd'hui"""
        today = today or date.today()
        with self._lock:
            days = set(self._focus_days)
        return [
            (today - timedelta(days=offset)).isoformat() in days
            for offset in range(STREAK_WINDOW_DAYS - 1, -1, -1)
        ]


def _clamp_energy(value: int) -> int:
    return max(0, min(100, int(value)))
