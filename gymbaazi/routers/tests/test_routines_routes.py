"""Tests for per-category routine editing."""

from __future__ import annotations

from fastapi.testclient import TestClient

from gymbaazi.routers.tests.conftest import API


class TestRoutines:
    def test_list(self, client: TestClient) -> None:
        types = {r["type"] for r in client.get(f"{API}/routines").json()}
        assert {"PUSH", "PULL", "LEGS"} <= types

    def test_get_stock_routine(self, client: TestClient) -> None:
        push = client.get(f"{API}/routines/PUSH").json()
        assert len(push["exercises"]) == 6
        assert push["warmup"]

    def test_custom_is_not_a_routine(self, client: TestClient) -> None:
        assert client.get(f"{API}/routines/CUSTOM").status_code == 404

    def test_unknown_type(self, client: TestClient) -> None:
        assert client.get(f"{API}/routines/CARDIO").status_code == 422

    def test_update_title(self, client: TestClient) -> None:
        response = client.put(f"{API}/routines/PULL", json={"title": "Back Attack"})
        assert response.status_code == 200
        assert client.get(f"{API}/routines/PULL").json()["title"] == "Back Attack"

    def test_add_remove_and_reset(self, client: TestClient) -> None:
        added = client.post(
            f"{API}/routines/PUSH/exercises", json={"name": "Dips", "sets": 3, "reps": "8-12"}
        )
        assert added.status_code == 201
        assert added.json()["exercises"][-1]["name"] == "Dips"
        assert len(added.json()["exercises"]) == 7

        removed = client.delete(f"{API}/routines/PUSH/exercises/6").json()
        assert len(removed["exercises"]) == 6

        client.post(f"{API}/routines/PUSH/exercises", json={"name": "Dips"})
        reset = client.post(f"{API}/routines/PUSH/reset").json()
        assert len(reset["exercises"]) == 6
        assert "Dips" not in [e["name"] for e in reset["exercises"]]

    def test_add_validates_sets(self, client: TestClient) -> None:
        response = client.post(f"{API}/routines/PUSH/exercises", json={"name": "Dips", "sets": 11})
        assert response.status_code == 422

    def test_remove_out_of_range(self, client: TestClient) -> None:
        assert client.delete(f"{API}/routines/PUSH/exercises/99").status_code == 404

    def test_move(self, client: TestClient) -> None:
        names = [e["name"] for e in client.get(f"{API}/routines/LEGS").json()["exercises"]]
        moved = client.post(
            f"{API}/routines/LEGS/exercises/move", json={"source": 0, "destination": 2}
        ).json()
        assert [e["name"] for e in moved["exercises"]] == names[1:3] + [names[0]] + names[3:]

    def test_edits_flow_into_sessions(self, client: TestClient) -> None:
        client.put(
            f"{API}/routines/LEGS",
            json={"exercises": [{"name": "Goblet Squat", "sets": 2, "reps": "15"}]},
        )
        state = client.post(f"{API}/session/start").json()
        assert [s["exercise_name"] for s in state["sets"]] == ["Goblet Squat", "Goblet Squat"]
