import pytest

from app.core.errors import AuthorizationError, NotFoundError
from app.models import StatusSource
from app.services.access_control import AccessControlGate
from app.services.fair_status import FairStatusEvaluator, evaluate_fair_status

from conftest import NOW, HOUR, FixedClock

T = 1_000_000


class TestEvaluateFairStatus:
    def test_schedule_window_is_live(self):
        fair = {"name": "Fall Fair", "startTime": T, "endTime": T + HOUR}
        status = evaluate_fair_status(fair, T + 1000)
        assert status.is_live is True
        assert status.source is StatusSource.schedule
        assert status.name == "Fall Fair"

    def test_after_window_is_not_live(self):
        fair = {"startTime": T, "endTime": T + HOUR}
        assert evaluate_fair_status(fair, T + 4_000_000).is_live is False

    def test_window_bounds_are_inclusive(self):
        fair = {"startTime": T, "endTime": T + HOUR}
        assert evaluate_fair_status(fair, T).is_live is True
        assert evaluate_fair_status(fair, T + HOUR).is_live is True
        assert evaluate_fair_status(fair, T - 1).is_live is False

    def test_manual_override_wins_outside_window(self):
        fair = {"isLive": True, "startTime": T, "endTime": T + HOUR}
        status = evaluate_fair_status(fair, T + 10 * HOUR)
        assert status.is_live is True
        assert status.source is StatusSource.manual

    def test_half_open_schedule_is_ignored(self):
        assert evaluate_fair_status({"startTime": T}, T + 1).is_live is False
        assert evaluate_fair_status({"endTime": T}, T - 1).is_live is False

    def test_not_live_reports_manual_source(self):
        status = evaluate_fair_status({"isLive": False}, T)
        assert status.is_live is False
        assert status.source is StatusSource.manual

    def test_to_dict_uses_api_field_names(self):
        status = evaluate_fair_status({"isLive": True, "name": "N", "description": "D"}, T)
        assert status.to_dict() == {"isLive": True, "source": "manual", "name": "N", "description": "D"}


class TestFairStatusEvaluator:
    def test_missing_fair_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            FairStatusEvaluator(store, FixedClock()).evaluate("nope")

    def test_repeated_evaluation_is_stable(self, store, seed):
        seed.fair("fair-1", startTime=NOW - HOUR, endTime=NOW + HOUR)
        evaluator = FairStatusEvaluator(store, FixedClock())
        assert evaluator.evaluate("fair-1") == evaluator.evaluate("fair-1")

    def test_ensure_visible_blocks_students_when_offline(self, store, seed):
        seed.fair("fair-1")
        seed.user("student-1")
        evaluator = FairStatusEvaluator(store, FixedClock())
        with pytest.raises(AuthorizationError):
            evaluator.ensure_visible("fair-1", "student-1", AccessControlGate(store))

    def test_ensure_visible_lets_admins_through(self, store, seed):
        seed.fair("fair-1")
        seed.admin("admin-1")
        evaluator = FairStatusEvaluator(store, FixedClock())
        status = evaluator.ensure_visible("fair-1", "admin-1", AccessControlGate(store))
        assert status.is_live is False


class TestStatusEndpoint:
    def test_scheduled_fair_moves_from_live_to_offline(self, client, seed, clock):
        seed.fair("fair-1", startTime=NOW, endTime=NOW + HOUR)

        clock.now = NOW + 1000
        res = client.get("/api/fairs/fair-1/status")
        assert res.status_code == 200
        assert res.json()["isLive"] is True
        assert res.json()["source"] == "schedule"

        clock.now = NOW + 4_000_000
        res = client.get("/api/fairs/fair-1/status")
        assert res.json()["isLive"] is False

    def test_status_is_public(self, client, seed):
        seed.fair("fair-1", isLive=True, name="Spring Fair")
        res = client.get("/api/fairs/fair-1/status")
        assert res.status_code == 200
        assert res.json() == {"isLive": True, "source": "manual", "name": "Spring Fair", "description": None}

    def test_unknown_fair_is_404(self, client):
        res = client.get("/api/fairs/missing/status")
        assert res.status_code == 404
        assert res.json() == {"error": "Fair not found"}
