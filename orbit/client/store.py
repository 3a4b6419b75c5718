"""
Store optimiste des tâches, réflexions et du transcript du chat.

Chaque mutation suit le même schéma :
1. on garde la valeur de l'entité avant modification
2. on applique la modification localement (synchrone, l'UI la voit tout de suite)
3. on persiste via l'API (en ligne ou sur un executor)
4. si l'appel échoue, on remet l'entité dans son état confirmé

Par entité on tient un compteur de génération : seule la dernière écriture
lancée peut confirmer ou annuler, une réponse plus ancienne est ignorée
(sauf pour mettre à jour la dernière valeur connue du serveur).
"""

import copy
import logging
import threading
import uuid
from concurrent.futures import Executor, Future
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable, Union

from orbit.client import events
from orbit.client.ambient import AmbientState
from orbit.client.api import OrbitAPI
from orbit.client.events import EventBus
from orbit.schemas.enums import Priority, TaskStatus

logger = logging.getLogger(__name__)

LOCAL_ID_PREFIX = "local-"
CHAT_FALLBACK = "I'm here to help you maintain momentum. What specific challenge are you facing right now?"

# champs gérés par le serveur, jamais renvoyés dans un PATCH
READ_ONLY_TASK_FIELDS = ("id", "user_id", "created_at", "last_updated", "friction", "is_ai_generated")


class WriteState(str, Enum):
    CLEAN = "clean"
    PENDING = "pending"
    REVERTING = "reverting"


def _now() -> str:
    return datetime.utcnow().isoformat()


def _local_id() -> str:
    return f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex[:12]}"


def is_local_id(entity_id) -> bool:
    return isinstance(entity_id, str) and entity_id.startswith(LOCAL_ID_PREFIX)


class _PendingWrite:
    __slots__ = ("generation", "base", "state")

    def __init__(self, generation: int, base: Optional[dict]):
        self.generation = generation
        self.base = base  # dernière valeur confirmée, None = entité pas encore créée
        self.state = WriteState.PENDING


class OrbitStore:
    def __init__(
        self,
        api: OrbitAPI,
        ambient: Optional[AmbientState] = None,
        bus: Optional[EventBus] = None,
        executor: Optional[Executor] = None
    ):
        self.api = api
        self.bus = bus or (ambient.bus if ambient else EventBus())
        self.ambient = ambient or AmbientState(bus=self.bus)
        self.executor = executor

        self._lock = threading.RLock()
        self._tasks: List[dict] = []
        self._reflections: List[dict] = []
        self._messages: List[dict] = []

        self._generations: Dict[tuple, int] = {}
        self._pending: Dict[tuple, _PendingWrite] = {}
        # opérations faites sur une tâche pas encore créée côté serveur, dans l'ordre
        self._deferred: Dict[str, List[tuple]] = {}

    # ============ LECTURE ============

    @property
    def tasks(self) -> List[dict]:
        with self._lock:
            return copy.deepcopy(self._tasks)

    @property
    def reflections(self) -> List[dict]:
        with self._lock:
            return copy.deepcopy(self._reflections)

    @property
    def messages(self) -> List[dict]:
        with self._lock:
            return copy.deepcopy(self._messages)

    def get_task(self, task_id) -> Optional[dict]:
        with self._lock:
            task = self._find(self._tasks, task_id)
            return copy.deepcopy(task) if task else None

    def write_state(self, kind: str, entity_id) -> WriteState:
        pending = self._pending.get((kind, entity_id))
        return pending.state if pending else WriteState.CLEAN

    def load(self):
        """Chargement initial depuis l'API ; une erreur est loggée et les listes restent telles quelles"""
        try:
            tasks = self.api.list_tasks()
            reflections = self.api.list_reflections()
        except Exception as e:
            logger.error(f"Error fetching initial data: {e}")
            return

        with self._lock:
            was_empty = not self._tasks
            self._tasks = list(tasks or [])
            self._reflections = list((reflections or {}).get("items", []))
            is_empty = not self._tasks
        self._publish_emptiness(was_empty, is_empty)

    # ============ TÂCHES ============

    def add_task(self, data: Dict[str, Any]) -> dict:
        task = {
            "id": _local_id(),
            "title": data.get("title") or "Untitled task",
            "description": data.get("description"),
            "status": TaskStatus(data.get("status", TaskStatus.TODO)).value,
            "priority": Priority(data.get("priority", Priority.MEDIUM)).value,
            "due_date": data.get("due_date"),
            "estimated_time": data.get("estimated_time"),
            "mode": data.get("mode") or self.ambient.mode,
            "subtasks": copy.deepcopy(data.get("subtasks")),
            "tags": copy.deepcopy(data.get("tags")),
            "friction": 0,
            "is_ai_generated": bool(data.get("is_ai_generated", False)),
            "created_at": _now(),
            "last_updated": None,
        }
        payload = copy.deepcopy({k: v for k, v in task.items() if k not in READ_ONLY_TASK_FIELDS and v is not None})

        # copie prise avant l'appel : en synchrone la confirmation réécrit déjà l'entité
        snapshot = copy.deepcopy(task)
        self._create("task", self._tasks, task, lambda: self.api.create_task(payload))
        return snapshot

    def update_task_status(self, task_id, status: Union[TaskStatus, str]) -> Optional[dict]:
        status = TaskStatus(status).value
        return self._update_task(task_id, {"status": status}, lambda tid: self.api.update_task(tid, {"status": status}))

    def update_task(self, task: Dict[str, Any]) -> Optional[dict]:
        """Enregistrement complet depuis la fenêtre d'édition"""
        changes = {k: v for k, v in task.items() if k not in READ_ONLY_TASK_FIELDS}
        if "status" in changes:
            changes["status"] = TaskStatus(changes["status"]).value
        return self._update_task(task["id"], changes, lambda tid: self.api.update_task(tid, changes))

    def snooze_task(self, task_id) -> Optional[dict]:
        def apply(task):
            task["status"] = TaskStatus.PENDING.value
            task["friction"] = (task.get("friction") or 0) + 1

        return self._update_task(task_id, None, lambda tid: self.api.snooze_task(tid), apply=apply)

    def toggle_subtask(self, task_id, subtask_id: str) -> Optional[dict]:
        def apply(task):
            for subtask in task.get("subtasks") or []:
                if subtask.get("id") == subtask_id:
                    subtask["done"] = not subtask.get("done", False)

        return self._update_task(task_id, None, lambda tid: self.api.toggle_subtask(tid, subtask_id), apply=apply)

    def _update_task(
        self,
        task_id,
        changes: Optional[dict],
        persist: Callable[[Any], dict],
        apply: Optional[Callable[[dict], None]] = None
    ) -> Optional[dict]:
        with self._lock:
            task = self._find(self._tasks, task_id)
            if task is None:
                logger.warning(f"Task {task_id} is not in the local store")
                return None

            was_done = task.get("status") == TaskStatus.DONE.value
            local_changes = dict(changes or {})

            def mutate(entity):
                entity.update(local_changes)
                if apply:
                    apply(entity)
                entity["last_updated"] = _now()

            if is_local_id(task_id):
                # la création n'est pas encore confirmée : on applique localement
                # et on rejouera l'opération avec le vrai id
                mutate(task)
                self._deferred.setdefault(task_id, []).append((mutate, persist))
                result = copy.deepcopy(task)
            else:
                self._mutate("task", self._tasks, task_id, mutate, lambda: persist(task_id))
                # en mode synchrone l'appel est déjà réglé, éventuellement annulé
                result = copy.deepcopy(self._find(self._tasks, task_id))

            is_done = result.get("status") == TaskStatus.DONE.value

        if is_done and not was_done:
            self.bus.publish(events.TASK_COMPLETED, {"task": result})
        return result

    # ============ RÉFLEXIONS ============

    def add_reflection(self, data: Dict[str, Any]) -> dict:
        reflection = dict(data)
        reflection["id"] = _local_id()
        reflection["created_at"] = _now()
        payload = {k: v for k, v in data.items() if v is not None}

        self._create("reflection", self._reflections, reflection, lambda: self.api.create_reflection(payload),
                     prepend=True)
        with self._lock:
            # en synchrone, une création refusée a déjà été retirée
            kept = any(r is reflection for r in self._reflections)
            reflection = copy.deepcopy(reflection)
        if kept:
            self.bus.publish(events.REFLECTION_ADDED, {"reflection": reflection})
        return reflection

    # ============ CHAT ============

    def append_message(self, role: str, content: str) -> dict:
        # transcript append-only : rien n'est jamais retiré ni modifié
        message = {"id": _local_id(), "role": role, "content": content, "timestamp": _now()}
        with self._lock:
            self._messages.append(message)
        return copy.deepcopy(message)

    def send_message(self, content: str) -> dict:
        self.append_message("user", content)
        state = self.ambient.snapshot()
        tasks = [
            {"title": t["title"], "status": t.get("status", "todo"), "priority": t.get("priority", "medium"),
             "description": t.get("description")}
            for t in self.tasks
        ]

        try:
            response = self.api.send_message(content, state["mode"], state["mood"], state["energy"], tasks=tasks)
            reply = response["assistantMessage"]["content"]
            suggestions = response.get("suggestedTasks") or []
        except Exception as e:
            logger.error(f"Error generating AI response: {e}")
            reply, suggestions = CHAT_FALLBACK, []

        message = self.append_message("assistant", reply)
        message["suggested_tasks"] = suggestions
        return message

    # ============ MÉCANIQUE OPTIMISTE ============

    @staticmethod
    def _find(items: List[dict], entity_id) -> Optional[dict]:
        for item in items:
            if item.get("id") == entity_id:
                return item
        return None

    def _next_generation(self, key: tuple, base: Optional[dict]) -> int:
        generation = self._generations.get(key, 0) + 1
        self._generations[key] = generation
        pending = self._pending.get(key)
        if pending is None:
            self._pending[key] = _PendingWrite(generation, base)
        else:
            # déjà une écriture en vol : la base confirmée ne change pas
            pending.generation = generation
            pending.state = WriteState.PENDING
        return generation

    def _run(self, job: Callable[[], None]) -> Optional[Future]:
        if self.executor is None:
            job()
            return None
        return self.executor.submit(job)

    def _mutate(self, kind: str, items: List[dict], entity_id, mutate: Callable[[dict], None],
                persist: Callable[[], dict]) -> Optional[Future]:
        key = (kind, entity_id)
        with self._lock:
            entity = self._find(items, entity_id)
            base = copy.deepcopy(entity)
            generation = self._next_generation(key, base)
            mutate(entity)

        def job():
            try:
                result = persist()
            except Exception as e:
                self._settle_failure(kind, items, key, generation, e)
            else:
                self._settle_success(items, key, generation, result)

        return self._run(job)

    def _create(self, kind: str, items: List[dict], entity: dict, persist: Callable[[], dict],
                prepend: bool = False) -> Optional[Future]:
        local_id = entity["id"]
        key = (kind, local_id)
        with self._lock:
            was_empty = not self._tasks
            self._next_generation(key, None)
            if prepend:
                items.insert(0, entity)
            else:
                items.append(entity)
            is_empty = not self._tasks
        self._publish_emptiness(was_empty, is_empty)

        def job():
            try:
                result = persist()
            except Exception as e:
                self._deferred.pop(local_id, None)
                self._settle_failure(kind, items, key, None, e)
            else:
                self._confirm_create(kind, items, local_id, result)

        return self._run(job)

    def _confirm_create(self, kind: str, items: List[dict], local_id: str, result: dict):
        with self._lock:
            self._pending.pop((kind, local_id), None)
            self._generations.pop((kind, local_id), None)
            entity = self._find(items, local_id)
            if entity is None:
                return
            deferred = self._deferred.pop(local_id, None) or []
            entity.clear()
            entity.update(copy.deepcopy(result))
            server_id = result["id"]

        # chaque opération différée est rejouée sur la version serveur, puis envoyée avec le vrai id
        for mutate, persist in deferred:
            with self._lock:
                if self._find(items, server_id) is None:
                    return
                self._mutate(kind, items, server_id, mutate, lambda persist=persist: persist(server_id))

    def _settle_success(self, items: List[dict], key: tuple, generation: int, result: Optional[dict]):
        with self._lock:
            pending = self._pending.get(key)
            if pending is None:
                return
            if generation != pending.generation:
                # réponse périmée : elle devient juste la dernière valeur connue du serveur
                if result:
                    pending.base = copy.deepcopy(result)
                logger.debug(f"Discarding stale response for {key} (generation {generation})")
                return

            entity = self._find(items, key[1])
            if entity is not None and result:
                entity.clear()
                entity.update(copy.deepcopy(result))
            del self._pending[key]

    def _settle_failure(self, kind: str, items: List[dict], key: tuple, generation: Optional[int], error: Exception):
        logger.error(f"Error persisting {kind} {key[1]}: {error}")
        with self._lock:
            pending = self._pending.get(key)
            if pending is None:
                return
            if generation is not None and generation != pending.generation:
                logger.debug(f"Ignoring failure of stale write for {key} (generation {generation})")
                return

            pending.state = WriteState.REVERTING
            was_empty = not self._tasks
            entity = self._find(items, key[1])
            if pending.base is None:
                if entity is not None:
                    items.remove(entity)
            elif entity is not None:
                entity.clear()
                entity.update(pending.base)
            else:
                items.append(pending.base)
            del self._pending[key]
            is_empty = not self._tasks

        self._publish_emptiness(was_empty, is_empty)

    def _publish_emptiness(self, was_empty: bool, is_empty: bool):
        if was_empty != is_empty:
            self.bus.publish(events.TASK_LIST_CHANGED, {"was_empty": was_empty, "is_empty": is_empty})
