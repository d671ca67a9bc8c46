from datetime import date
from types import SimpleNamespace
from fastapi.testclient import TestClient
from traininglog.main import app
from traininglog.progress import BestSet, best_set, history, last_best_set, recent_prs, summarize
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"

# --- pure functions --------------------------------------------------------

def log(reps=None, weight=None, unit="lb", duration_sec=None, rpe=None):
    return SimpleNamespace(reps=reps, weight=weight, unit=unit, duration_sec=duration_sec, rpe=rpe)

def row(session_id, day, logs):
    return SimpleNamespace(session_id=session_id, session=SimpleNamespace(date=date.fromisoformat(day)), set_logs=logs)

def test_volume_skips_incomplete_sets():
    point = summarize(row(1, "2024-01-10", [log(10, 100), log(None, 50)]))
    assert point.volume == 1000
    assert point.best_set == BestSet(reps=10, weight=100.0, unit="lb")

def test_best_set_ties_keep_first():
    assert best_set([log(5, 100), log(8, 100, unit="kg")]) == BestSet(reps=5, weight=100.0, unit="lb")
    assert best_set([log(5), log(None, 20), log(duration_sec=30)]) is None

def test_duration_and_rpe():
    point = summarize(row(1, "2024-01-10", [log(duration_sec=60, rpe=6), log(duration_sec=90, rpe=8), log(5, 10)]))
    assert point.duration_sec == 150
    assert point.rpe == 8
    assert summarize(row(1, "2024-01-10", [log(5, 10)])).duration_sec is None

def test_history_is_chronological_and_prs_filter():
    rows = [  # most recent first, as the repository returns them
        row(3, "2024-01-12", [log(duration_sec=600)]),
        row(2, "2024-01-11", [log(5, 110)]),
        row(1, "2024-01-10", [log(5, 100)]),
    ]
    points = history(rows)
    assert [p.date for p in points] == ["2024-01-10", "2024-01-11", "2024-01-12"]
    assert [p.session_id for p in recent_prs(points)] == [1, 2]
    assert [p.session_id for p in recent_prs(points, limit=1)] == [2]

def test_last_best_set_uses_most_recent_session_with_data():
    rows = [
        row(3, "2024-01-13", [log(duration_sec=300)]),
        row(2, "2024-01-12", [log(8, 80), log(6, 90)]),
        row(1, "2024-01-10", [log(5, 100)]),
    ]
    assert last_best_set(rows) == BestSet(reps=6, weight=90.0, unit="lb")
    assert last_best_set([]) is None

# --- API -------------------------------------------------------------------

def make_user():
    email = f"u_{uuid.uuid4().hex[:10]}@example.com"
    client.post("/api/auth/signup", json={"name": "U", "email": email, "password": PWD, "confirmPassword": PWD})
    token = client.post("/api/auth/login", json={"email": email, "password": PWD}).json()["accessToken"]
    client.cookies.clear()
    return {"Authorization": f"Bearer {token}"}

def log_session(H, exercise_id, day, sets):
    s = client.post("/api/sessions", headers=H, json={"title": day, "category": "strength", "date": day}).json()
    se = client.post(f"/api/sessions/{s['id']}/exercises", headers=H, json={"exerciseId": exercise_id, "order": 0}).json()
    logs = [{"sessionExerciseId": se["id"], "setIndex": i, **values} for i, values in enumerate(sets)]
    if logs:
        assert client.post(f"/api/sessions/{s['id']}/logs", headers=H, json={"logs": logs}).status_code == 200
    return s["id"]

def test_progress_endpoint():
    H = make_user()
    ex = client.post("/api/exercises", headers=H, json={"name": "Bench", "category": "strength"}).json()
    later = log_session(H, ex["id"], "2024-01-12", [{"reps": 8, "weight": 80}, {"reps": 6, "weight": 90}])
    earlier = log_session(H, ex["id"], "2024-01-10", [{"reps": 10, "weight": 100}, {"reps": None, "weight": 50}])
    empty = log_session(H, ex["id"], "2024-01-14", [])

    r = client.get(f"/api/progress/exercise/{ex['id']}", headers=H)
    assert r.status_code == 200
    body = r.json()
    assert body["exercise"]["name"] == "Bench"
    assert [p["sessionId"] for p in body["dataPoints"]] == [earlier, later, empty]
    first = body["dataPoints"][0]
    assert first["date"] == "2024-01-10"
    assert first["volume"] == 1000
    assert first["bestSet"] == {"reps": 10, "weight": 100, "unit": "lb"}
    assert body["dataPoints"][2]["bestSet"] is None
    assert body["dataPoints"][2]["durationSec"] is None
    assert [p["sessionId"] for p in body["recentPRs"]] == [earlier, later]

    r = client.get(f"/api/progress/exercise/{ex['id']}/last", headers=H)
    assert r.json() == {"bestSet": {"reps": 6, "weight": 90, "unit": "lb"}}

def test_progress_only_counts_own_sessions():
    a, b = make_user(), make_user()
    gid = client.post("/api/exercises", headers=a, json={"name": "Mine", "category": "strength"}).json()["id"]
    log_session(a, gid, "2024-01-10", [{"reps": 5, "weight": 100}])
    assert client.get(f"/api/progress/exercise/{gid}", headers=b).status_code == 404
    assert client.get(f"/api/progress/exercise/{gid}/last", headers=b).json() == {"bestSet": None}

def test_progress_without_history():
    H = make_user()
    ex = client.post("/api/exercises", headers=H, json={"name": "Fresh", "category": "cardio"}).json()
    body = client.get(f"/api/progress/exercise/{ex['id']}", headers=H).json()
    assert body["dataPoints"] == [] and body["recentPRs"] == []
    assert client.get(f"/api/progress/exercise/{ex['id']}/last", headers=H).json() == {"bestSet": None}
    assert client.get("/api/progress/exercise/999999", headers=H).status_code == 404

def test_last_best_set_compares_every_row_of_the_newest_session():
    rows = [  # same exercise listed twice in session 2
        row(2, "2024-01-12", [log(8, 80)]),
        row(2, "2024-01-12", [log(3, 95)]),
        row(1, "2024-01-10", [log(5, 100)]),
    ]
    assert last_best_set(rows) == BestSet(reps=3, weight=95.0, unit="lb")

def test_last_best_set_endpoint_with_exercise_listed_twice():
    H = make_user()
    ex = client.post("/api/exercises", headers=H, json={"name": "Bench", "category": "strength"}).json()
    s = client.post("/api/sessions", headers=H, json={"title": "Twice", "category": "strength", "date": "2024-01-12"}).json()
    first = client.post(f"/api/sessions/{s['id']}/exercises", headers=H, json={"exerciseId": ex["id"], "order": 0}).json()
    second = client.post(f"/api/sessions/{s['id']}/exercises", headers=H, json={"exerciseId": ex["id"], "order": 1}).json()
    client.post(f"/api/sessions/{s['id']}/logs", headers=H, json={"logs": [
        {"sessionExerciseId": first["id"], "setIndex": 0, "reps": 8, "weight": 80},
        {"sessionExerciseId": second["id"], "setIndex": 0, "reps": 3, "weight": 95},
    ]})
    r = client.get(f"/api/progress/exercise/{ex['id']}/last", headers=H)
    assert r.json() == {"bestSet": {"reps": 3, "weight": 95, "unit": "lb"}}

def test_history_keeps_newest_30_sessions_and_10_prs():
    H = make_user()
    ex = client.post("/api/exercises", headers=H, json={"name": "Squat", "category": "strength"}).json()
    days = [f"2024-01-{d:02d}" for d in range(1, 32)] + ["2024-02-01"]
    ids = [log_session(H, ex["id"], day, [{"reps": 5, "weight": 100 + i}]) for i, day in enumerate(days)]

    body = client.get(f"/api/progress/exercise/{ex['id']}", headers=H).json()
    assert [p["date"] for p in body["dataPoints"]] == days[-30:]
    assert [p["sessionId"] for p in body["dataPoints"]] == ids[-30:]
    assert [p["sessionId"] for p in body["recentPRs"]] == ids[-10:]
    assert body["recentPRs"][-1]["bestSet"]["weight"] == 131
