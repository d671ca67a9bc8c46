import threading
from fastapi.testclient import TestClient
from traininglog.main import app
from traininglog.client import SetLogAutosaver, TrainingLogClient
import pytest, requests, uuid

PWD = "StrongPassw0rd!"

class FakeClient:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail
        self.sent = threading.Event()

    def upsert_logs(self, session_id, logs):
        if self.fail:
            raise requests.ConnectionError("offline")
        self.calls.append((session_id, logs))
        self.sent.set()
        return logs

def test_edits_are_debounced_into_one_upsert():
    fake = FakeClient()
    saver = SetLogAutosaver(fake, session_id=7, delay=0.2)
    saver.edit({"sessionExerciseId": 1, "setIndex": 0, "reps": 5})
    saver.edit({"sessionExerciseId": 1, "setIndex": 0, "weight": 100})
    saver.edit({"sessionExerciseId": 1, "setIndex": 1, "reps": 3})
    assert saver.pending == 2
    assert fake.sent.wait(2)
    assert len(fake.calls) == 1
    session_id, logs = fake.calls[0]
    assert session_id == 7
    assert logs == [
        {"sessionExerciseId": 1, "setIndex": 0, "reps": 5, "weight": 100},
        {"sessionExerciseId": 1, "setIndex": 1, "reps": 3},
    ]
    assert saver.pending == 0

def test_close_flushes_immediately():
    fake = FakeClient()
    saver = SetLogAutosaver(fake, session_id=1, delay=60)
    saver.edit({"sessionExerciseId": 2, "setIndex": 0, "reps": 1})
    saver.close()
    assert len(fake.calls) == 1
    assert saver.flush() == []
    assert len(fake.calls) == 1

def test_failed_flush_keeps_edits():
    saver = SetLogAutosaver(FakeClient(fail=True), session_id=1, delay=60)
    saver.edit({"sessionExerciseId": 2, "setIndex": 0, "reps": 1})
    with pytest.raises(requests.ConnectionError):
        saver.flush()
    assert saver.pending == 1

@pytest.fixture
def api(monkeypatch):
    """Route the requests-based client into the app in-process."""
    tc = TestClient(app)
    monkeypatch.setattr(requests, "post", lambda url, json=None, headers=None, timeout=None: tc.post(url, json=json, headers=headers))
    monkeypatch.setattr(requests, "get", lambda url, params=None, headers=None, timeout=None: tc.get(url, params=params, headers=headers))
    return tc

def test_client_round_trip(api):
    email = f"u_{uuid.uuid4().hex[:10]}@example.com"
    api.post("/api/auth/signup", json={"name": "Cli", "email": email, "password": PWD, "confirmPassword": PWD})

    c = TrainingLogClient("http://testserver")
    assert c.login(email, PWD)["email"] == email
    api.post("/api/exercises", headers={"Authorization": f"Bearer {c.token}"}, json={"name": "Squat", "category": "strength"})
    [ex] = c.list_exercises(q="squat")
    s = c.create_session("Legs", "strength", "2024-01-10")
    se = c.add_session_exercise(s["id"], ex["id"], 0)

    saver = SetLogAutosaver(c, s["id"], delay=60)
    saver.edit({"sessionExerciseId": se["id"], "setIndex": 0, "reps": 5, "weight": 100})
    saver.close()

    assert c.get_session(s["id"])["exercises"][0]["setLogs"][0]["reps"] == 5
    assert c.last_best_set(ex["id"]) == {"reps": 5, "weight": 100, "unit": "lb"}
    assert len(c.exercise_progress(ex["id"])["dataPoints"]) == 1

class FlakyClient(FakeClient):
    """Fails the first upsert, then behaves."""
    def __init__(self):
        super().__init__()
        self.attempts = 0

    def upsert_logs(self, session_id, logs):
        self.attempts += 1
        if self.attempts == 1:
            raise requests.ConnectionError("offline")
        return super().upsert_logs(session_id, logs)

def test_timed_save_retries_after_failure():
    fake = FlakyClient()
    saver = SetLogAutosaver(fake, session_id=3, delay=0.05)
    saver.edit({"sessionExerciseId": 1, "setIndex": 0, "reps": 5})
    assert fake.sent.wait(2)
    assert fake.attempts == 2
    assert fake.calls == [(3, [{"sessionExerciseId": 1, "setIndex": 0, "reps": 5}])]
    assert saver.pending == 0

def test_superseded_timer_does_not_send():
    fake = FakeClient()
    saver = SetLogAutosaver(fake, session_id=1, delay=60)
    saver.edit({"sessionExerciseId": 1, "setIndex": 0, "reps": 5})
    stale = saver._generation
    saver.edit({"sessionExerciseId": 1, "setIndex": 1, "reps": 6})
    # an older timer waking up late must leave the newer edit to its own timer
    saver._fire(stale)
    assert fake.calls == []
    assert saver.pending == 2
    saver.close()
    assert len(fake.calls) == 1
