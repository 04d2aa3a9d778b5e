from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tests.conftest import build_synthetic_catalog, build_synthetic_pool


@pytest.fixture
def client(monkeypatch):
    import api.app as app_module

    monkeypatch.setattr(app_module, "POOL", build_synthetic_pool(n_questions=12))
    monkeypatch.setattr(app_module, "CLASSES", build_synthetic_catalog())
    monkeypatch.setattr(app_module, "CFG", {"POOL_SIZE": 8, "TOTAL_ASK": 4, "CLASS_STRATEGY": "rules"})
    return TestClient(app_module.app)


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    h = client.get("/health").json()
    assert h["questions"] == 12 and h["classes"] == 12
    assert h["class_strategy"] == "rules"


def test_questions_and_classes_localized(client):
    qs = client.get("/questions", params={"lang": "en"}).json()
    assert qs["question_count"] == 12
    first = qs["questions"][0]
    assert first["text"] == "Question 0" and first["title"] == "Title 0"
    assert first["choices"][1]["label"] == "Choice 1"
    ja = client.get("/questions").json()["questions"][0]
    assert ja["text"] == "質問0"
    cls = client.get("/classes", params={"lang": "en"}).json()["classes"]
    assert {c["id"] for c in cls} >= {"wind_bard", "thunder_rogue"}


def test_diagnose_by_ids_and_indices(client):
    by_id = client.post("/diagnose", json={"answers": {"q0": "c0", "q1": "c0"}}).json()
    assert by_id["scores"]["emp"] == 1 and by_id["scores"]["soc"] == 1
    assert by_id["total"] == 2 and by_id["level"] == 1
    assert (by_id["topStat"], by_id["secondStat"]) == ("emp", "soc")
    assert by_id["classId"] == "seraphim_healer"
    assert by_id["stats"]["hp"] == 92

    by_idx = client.post("/diagnose", json={"index_answers": {"0": 0, "1": 0}}).json()
    assert by_idx == by_id


def test_diagnose_empty_and_bad_strategy(client):
    empty = client.post("/diagnose", json={}).json()
    assert empty["classId"] == "unknown" and empty["total"] == 0
    assert client.post("/diagnose", json={"strategy": "dice"}).status_code == 400
    cat = client.post("/diagnose", json={"answers": {"q0": "c3"}, "strategy": "catalog", "seed": 3}).json()
    assert cat["classId"] is not None


def test_trace_exports(client):
    body = {"answers": {"q0": "c1", "zz": "c0"}}
    js = client.post("/diagnose/trace.json", json=body).json()
    assert [r["matched"] for r in js["answers"]] == [True, False]
    assert js["answers"][0]["points"] == {"soc": 2}
    csv = client.post("/diagnose/trace.csv", json=body)
    assert csv.headers["content-type"].startswith("text/csv")
    assert csv.text.splitlines()[0] == "question_id,choice_id,matched,points,subtotal"


def test_run_round_trip_to_card(client):
    state = client.post("/run/start", json={"name": "Kael", "lang": "en", "seed": 9}).json()
    assert state["profile"]["name"] == "Kael"
    assert state["totalAsk"] == 4 and len(state["run"]["order"]) == 8
    assert state["question"] is not None and not state["done"]

    for _ in range(4):
        state = client.post("/run/answer", json={
            "profile": state["profile"], "run": state["run"], "choice_index": 2,
        }).json()
    assert state["done"] and state["progress"] == 100
    last = state["last"]
    assert last["answered"] == 4 and last["total"] == 12 and last["name"] == "Kael"

    again = client.post("/run/answer", json={"profile": state["profile"], "run": state["run"], "choice_index": 0})
    assert again.status_code == 404

    card = client.post("/result/card", json={"last": last}).json()
    assert card["card"]["name"] == "Kael"
    assert card["shareText"].startswith("Adventurers Guild / Guild Card")
    html = client.post("/result/card/html", json={"last": last}).json()["html"]
    assert "Kael" in html


def test_run_start_is_seeded_and_restart_clears(client):
    a = client.post("/run/start", json={"name": "A", "seed": 4}).json()
    b = client.post("/run/start", json={"name": "A", "seed": 4}).json()
    assert a["run"]["order"] == b["run"]["order"]

    after = client.post("/run/answer", json={"profile": a["profile"], "run": a["run"], "choice_index": 0}).json()
    assert after["answered"] == 1
    fresh = client.post("/run/restart", json={"profile": after["profile"], "run": after["run"], "seed": 5}).json()
    assert fresh["profile"]["answers"] == {} and fresh["profile"]["name"] == "A"
    assert fresh["run"]["cursor"] == 0


def test_card_without_result_is_404(client):
    assert client.post("/result/card", json={}).status_code == 404
    assert client.post("/result/card/html", json={"last": None}).status_code == 404


def test_card_with_huge_scores_caps_stats(client):
    last = {"ts": 1_700_000_000_000, "name": "Nyx", "lang": "en",
            "scores": {"res": 1e308, "int": None}, "totalPoints": 3, "level": 1}
    resp = client.post("/result/card", json={"last": last})
    assert resp.status_code == 200
    card = resp.json()["card"]
    assert card["stats"]["hp"] == 999 and card["stats"]["def"] == 999
    assert card["scores"]["int"] == 0


def test_random_names(client):
    one = client.post("/names/random", json={"lang": "en", "seed": 77}).json()
    assert one == client.post("/names/random", json={"lang": "en", "seed": 77}).json()
    gen = client.post("/names/random", json={"lang": "en", "seed": 77, "kind": "generated"}).json()
    assert gen["name"] in ["Astra", "Liora", "Kael", "Mira", "Rowan", "Elio", "Seren", "Nyx", "Ciel", "Vey"]
