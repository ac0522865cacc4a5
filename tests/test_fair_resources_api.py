import pytest

from app.db import keyspace

from conftest import NOW, HOUR


@pytest.fixture
def fair(seed, store):
    """An offline fair with two enrolled companies' booths and jobs."""
    seed.admin("admin-1")
    seed.user("owner-1", role="companyOwner", company_id="company-1")
    seed.user("owner-2", role="companyOwner", company_id="company-2")
    seed.user("student-1")
    seed.company("company-1", owner_id="owner-1", name="Zenith", booth_id="global-booth-1")
    seed.company("company-2", owner_id="owner-2", name="Aurora")
    seed.booth("global-booth-1", "company-1", companyName="Zenith", industry="Energy")
    seed.fair("fair-1")
    seed.fair("fair-2", invite_code="FALL0001")

    for fair_id in ("fair-1", "fair-2"):
        store.set_document(keyspace.fair_booths(fair_id), "booth-z", {
            "companyId": "company-1", "companyName": "Zenith", "industry": "Energy",
        })
    store.set_document(keyspace.fair_booths("fair-1"), "booth-a", {
        "companyId": "company-2", "companyName": "Aurora", "industry": "Aerospace",
    })
    store.set_document(keyspace.fair_jobs("fair-1"), "job-z", {"companyId": "company-1", "name": "Grid Analyst"})
    store.set_document(keyspace.fair_jobs("fair-1"), "job-a", {"companyId": "company-2", "name": "Test Pilot"})
    return "fair-1"


class TestBoothVisibility:
    def test_offline_fair_hides_booths_from_anonymous(self, client, fair):
        res = client.get(f"/api/fairs/{fair}/booths")
        assert res.status_code == 403
        assert res.json() == {"error": "Fair is not currently live"}

    def test_offline_fair_hides_booths_from_students(self, client, auth, fair):
        assert client.get(f"/api/fairs/{fair}/booths", headers=auth("student-1")).status_code == 403

    def test_admin_sees_offline_fair(self, client, auth, fair):
        res = client.get(f"/api/fairs/{fair}/booths", headers=auth("admin-1"))
        assert res.status_code == 200

    def test_manual_toggle_makes_booths_public(self, client, auth, fair):
        client.post(f"/api/fairs/{fair}/toggle-status", headers=auth("admin-1"))

        res = client.get(f"/api/fairs/{fair}/booths")

        assert res.status_code == 200
        assert [b["companyName"] for b in res.json()["booths"]] == ["Aurora", "Zenith"]

    def test_schedule_window_makes_booths_public(self, client, seed, fair):
        seed.fair(fair, startTime=NOW - HOUR, endTime=NOW + HOUR)
        assert client.get(f"/api/fairs/{fair}/booths").status_code == 200

    def test_schedule_window_in_the_past(self, client, seed, fair):
        seed.fair(fair, startTime=NOW - 2 * HOUR, endTime=NOW - HOUR)
        assert client.get(f"/api/fairs/{fair}/booths").status_code == 403

    def test_missing_fair_is_404(self, client):
        assert client.get("/api/fairs/missing/booths").status_code == 404

    def test_booth_detail(self, client, seed, fair):
        seed.fair(fair, isLive=True)

        res = client.get(f"/api/fairs/{fair}/booths/booth-a")

        assert res.status_code == 200
        assert res.json()["id"] == "booth-a"
        assert res.json()["industry"] == "Aerospace"
        assert client.get(f"/api/fairs/{fair}/booths/nope").status_code == 404


class TestBoothEdit:
    def test_edit_only_touches_this_fair_copy(self, client, auth, fair, store):
        res = client.put(f"/api/fairs/{fair}/booths/booth-z", json={
            "industry": "Renewables",
            "contactEmail": "jobs@zenith.test",
        }, headers=auth("owner-1"))

        assert res.status_code == 200
        edited = store.get_document(keyspace.fair_booths(fair), "booth-z")
        assert edited.get("industry") == "Renewables"
        assert edited.get("contactEmail") == "jobs@zenith.test"
        assert edited.get("updatedAt") == NOW
        assert store.get_document(keyspace.BOOTHS, "global-booth-1").get("industry") == "Energy"
        assert store.get_document(keyspace.fair_booths("fair-2"), "booth-z").get("industry") == "Energy"

    def test_ownership_fields_cannot_be_changed(self, client, auth, fair, store):
        client.put(f"/api/fairs/{fair}/booths/booth-z", json={
            "companyId": "company-2",
            "companyName": "Zenith Power",
        }, headers=auth("owner-1"))

        booth = store.get_document(keyspace.fair_booths(fair), "booth-z")
        assert booth.get("companyId") == "company-1"
        assert booth.get("companyName") == "Zenith Power"

    def test_other_company_cannot_edit(self, client, auth, fair):
        res = client.put(f"/api/fairs/{fair}/booths/booth-z", json={"industry": "x"}, headers=auth("owner-2"))
        assert res.status_code == 403

    def test_admin_can_edit(self, client, auth, fair):
        res = client.put(f"/api/fairs/{fair}/booths/booth-a", json={"industry": "x"}, headers=auth("admin-1"))
        assert res.status_code == 200

    def test_missing_booth_is_404(self, client, auth, fair):
        res = client.put(f"/api/fairs/{fair}/booths/nope", json={"industry": "x"}, headers=auth("admin-1"))
        assert res.status_code == 404


class TestFairJobs:
    def test_list_with_company_filter(self, client, seed, fair):
        seed.fair(fair, isLive=True)

        everything = client.get(f"/api/fairs/{fair}/jobs").json()["jobs"]
        filtered = client.get(f"/api/fairs/{fair}/jobs", params={"companyId": "company-2"}).json()["jobs"]

        assert sorted(j["id"] for j in everything) == ["job-a", "job-z"]
        assert [j["id"] for j in filtered] == ["job-a"]

    def test_list_is_gated(self, client, fair):
        assert client.get(f"/api/fairs/{fair}/jobs").status_code == 403

    def test_company_adds_job(self, client, auth, fair, store):
        res = client.post(f"/api/fairs/{fair}/jobs", json={
            "companyId": "company-1",
            "name": " Data Engineer ",
            "majorsAssociated": "Computer Science",
        }, headers=auth("owner-1"))

        assert res.status_code == 201
        body = res.json()
        assert body["name"] == "Data Engineer"
        assert body["createdAt"] == NOW
        stored = store.get_document(keyspace.fair_jobs(fair), body["id"])
        assert stored.get("companyId") == "company-1"
        assert stored.get("majorsAssociated") == "Computer Science"

    def test_add_requires_company_id(self, client, auth, fair):
        res = client.post(f"/api/fairs/{fair}/jobs", json={"name": "Role"}, headers=auth("admin-1"))
        assert res.status_code == 400
        assert res.json() == {"error": "companyId is required"}

    def test_add_requires_name(self, client, auth, fair):
        res = client.post(f"/api/fairs/{fair}/jobs", json={"companyId": "company-1"}, headers=auth("owner-1"))
        assert res.status_code == 400
        assert res.json() == {"error": "Job name is required"}

    def test_add_for_other_company_is_forbidden(self, client, auth, fair):
        res = client.post(f"/api/fairs/{fair}/jobs", json={
            "companyId": "company-2", "name": "Role",
        }, headers=auth("owner-1"))
        assert res.status_code == 403

    def test_update_job(self, client, auth, fair, store):
        res = client.put(f"/api/fairs/{fair}/jobs/job-z", json={
            "applicationLink": "https://zenith.test/apply",
        }, headers=auth("owner-1"))

        assert res.status_code == 200
        job = store.get_document(keyspace.fair_jobs(fair), "job-z")
        assert job.get("applicationLink") == "https://zenith.test/apply"
        assert job.get("name") == "Grid Analyst"

    def test_update_other_company_job_is_forbidden(self, client, auth, fair):
        res = client.put(f"/api/fairs/{fair}/jobs/job-a", json={"name": "x"}, headers=auth("owner-1"))
        assert res.status_code == 403

    def test_delete_job(self, client, auth, fair, store):
        res = client.delete(f"/api/fairs/{fair}/jobs/job-z", headers=auth("owner-1"))

        assert res.status_code == 200
        assert not store.get_document(keyspace.fair_jobs(fair), "job-z").exists

    def test_delete_missing_job_is_404(self, client, auth, fair):
        res = client.delete(f"/api/fairs/{fair}/jobs/nope", headers=auth("admin-1"))
        assert res.status_code == 404
        assert res.json() == {"error": "Job not found"}

    def test_student_cannot_delete(self, client, auth, fair):
        assert client.delete(f"/api/fairs/{fair}/jobs/job-z", headers=auth("student-1")).status_code == 403
