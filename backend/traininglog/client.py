import logging
import threading
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class TrainingLogClient:
    """Simple REST client for the training log API."""

    def __init__(self, base_url: str = "http://localhost:8000", token: Optional[str] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _get(self, path: str, **params: Any):
        resp = requests.get(f"{self.base_url}{path}", params=params or None, headers=self._headers(), timeout=10)
        resp.raise_for_status()
        return resp.json()

    def _post(self, path: str, payload: dict):
        resp = requests.post(f"{self.base_url}{path}", json=payload, headers=self._headers(), timeout=10)
        resp.raise_for_status()
        return resp.json()

    def login(self, email: str, password: str) -> dict:
        data = self._post("/api/auth/login", {"email": email, "password": password})
        self.token = data["accessToken"]
        return data["user"]

    def list_exercises(self, q: Optional[str] = None, category: Optional[str] = None) -> list:
        params = {k: v for k, v in (("q", q), ("category", category)) if v}
        return self._get("/api/exercises", **params)

    def create_session(self, title: str, category: str, date: str, template_id: Optional[int] = None) -> dict:
        payload = {"title": title, "category": category, "date": date}
        if template_id is not None:
            payload["templateId"] = template_id
        return self._post("/api/sessions", payload)

    def get_session(self, session_id: int) -> dict:
        return self._get(f"/api/sessions/{session_id}")

    def add_session_exercise(self, session_id: int, exercise_id: int, order: int) -> dict:
        return self._post(f"/api/sessions/{session_id}/exercises", {"exerciseId": exercise_id, "order": order})

    def upsert_logs(self, session_id: int, logs: list) -> list:
        return self._post(f"/api/sessions/{session_id}/logs", {"logs": logs})

    def exercise_progress(self, exercise_id: int) -> dict:
        return self._get(f"/api/progress/exercise/{exercise_id}")

    def last_best_set(self, exercise_id: int) -> Optional[dict]:
        return self._get(f"/api/progress/exercise/{exercise_id}/last")["bestSet"]


class SetLogAutosaver:
    """
    Debounced autosave for set-log edits.

    Every ``edit`` restarts the idle timer; when it fires, everything staged since
    the last save goes out as one bulk upsert. Edits to the same set replace each
    other, so only the latest values are sent. A failed timed save keeps the logs
    staged and tries again after another ``delay``.
    """

    def __init__(self, client: TrainingLogClient, session_id: int, delay: float = 1.5) -> None:
        self.client = client
        self.session_id = session_id
        self.delay = delay
        self._pending: dict[tuple[int, int], dict] = {}
        self._timer: Optional[threading.Timer] = None
        # bumped on every (re)schedule; a timer only fires if it is still current
        self._generation = 0
        self._lock = threading.Lock()

    def edit(self, log: dict) -> None:
        key = (log["sessionExerciseId"], log["setIndex"])
        with self._lock:
            self._pending[key] = {**self._pending.get(key, {}), **log}
            self._schedule()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def _schedule(self) -> None:
        # caller holds the lock
        if self._timer is not None:
            self._timer.cancel()
        self._generation += 1
        self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
        self._timer.daemon = True
        self._timer.start()

    def _take(self) -> list:
        # caller holds the lock
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._generation += 1
        logs = list(self._pending.values())
        self._pending.clear()
        return logs

    def _send(self, logs: list) -> list:
        if not logs:
            return []
        try:
            return self.client.upsert_logs(self.session_id, logs)
        except requests.RequestException:
            # put them back unless a newer edit of the same set arrived meanwhile
            with self._lock:
                for log in logs:
                    self._pending.setdefault((log["sessionExerciseId"], log["setIndex"]), log)
            raise

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            logs = self._take()
        try:
            self._send(logs)
        except requests.RequestException:
            logger.warning("Autosave of %d set logs for session %s failed, retrying in %.1fs",
                        len(logs), self.session_id, self.delay, exc_info=True)
            with self._lock:
                if self._timer is None and self._pending:
                    self._schedule()

    def flush(self) -> list:
        with self._lock:
            logs = self._take()
        return self._send(logs)

    def close(self) -> list:
        return self.flush()
