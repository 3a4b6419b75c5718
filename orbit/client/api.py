"""Client HTTP de l'API Orbit (requests)"""

import logging
from typing import Optional, List, Dict, Any

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


class APIError(Exception):
    """Échec d'un appel à l'API (réseau ou statut non 2xx)"""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class OrbitAPI:
    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: int = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise APIError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            raise APIError(f"{method} {path} returned {response.status_code}", response.status_code, detail)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ============ TÂCHES ============

    def list_tasks(self, **filters) -> List[Dict[str, Any]]:
        params = {k: v for k, v in filters.items() if v is not None}
        return self._request("GET", "/api/tasks", params=params)

    def create_task(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/tasks", json=data)

    def update_task(self, task_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/tasks/{task_id}", json=changes)

    def delete_task(self, task_id: int):
        return self._request("DELETE", f"/api/tasks/{task_id}")

    def snooze_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("POST", f"/api/tasks/{task_id}/snooze")

    def toggle_subtask(self, task_id: int, subtask_id: str) -> Dict[str, Any]:
        return self._request("POST", f"/api/tasks/{task_id}/subtasks/{subtask_id}/toggle")

    def generate_subtasks(self, title: str) -> List[str]:
        return self._request("POST", "/api/tasks/subtasks", json={"title": title})["subtasks"]

    # ============ RÉFLEXIONS ============

    def create_reflection(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/reflections", json=data)

    def list_reflections(self, limit: int = 10, cursor: Optional[int] = None) -> Dict[str, Any]:
        params = {"limit": limit}
        if cursor is not None:
            params["cursor"] = cursor
        return self._request("GET", "/api/reflections", params=params)

    # ============ CHAT / IA ============

    def contextual_message(self, trigger: str, context: Optional[Dict[str, Any]] = None,
                           version: str = "v1") -> Dict[str, Any]:
        body = {"trigger": trigger, "version": version}
        if context:
            body["context"] = context
        return self._request("POST", "/api/contextual-message", json=body)

    def send_message(self, content: str, mode: str, mood: str, energy: int,
                     tasks: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
        body = {"content": content, "mode": mode, "mood": mood, "energy": energy}
        if tasks is not None:
            body["tasks"] = tasks
        return self._request("POST", "/api/messages", json=body)

    def get_quote(self, mode: str, mood: str) -> str:
        return self._request("POST", "/api/quotes", json={"mode": mode, "mood": mood})["quote"]

    # ============ SESSIONS ============

    def start_session(self, mode: str, energy_level: int = 50, task_id: Optional[int] = None) -> Dict[str, Any]:
        body = {"mode": mode, "energyLevel": energy_level}
        if task_id is not None:
            body["taskId"] = task_id
        return self._request("POST", "/api/sessions", json=body)

    def end_session(self, session_id: int, energy_level: Optional[int] = None) -> Dict[str, Any]:
        body = {} if energy_level is None else {"energyLevel": energy_level}
        return self._request("POST", f"/api/sessions/{session_id}/end", json=body)
