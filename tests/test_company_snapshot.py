import pytest

from app.core.errors import NotFoundError
from app.models import BOOTH_PROFILE_FIELDS, CompanySnapshot
from app.services.company_snapshot import CompanySnapshotBuilder


def test_booth_fields_win_over_company_fields(store, seed):
    seed.company("company-1", owner_id="owner-1", name="Acme", booth_id="booth-1", industry="Manufacturing")
    seed.booth("booth-1", "company-1", companyName="Acme Robotics", industry="Robotics", website="https://acme.test")

    snapshot = CompanySnapshotBuilder(store).build("company-1")

    assert snapshot.company_name == "Acme"
    assert snapshot.booth.companyName == "Acme Robotics"
    assert snapshot.booth.industry == "Robotics"
    assert snapshot.booth.website == "https://acme.test"


def test_company_fields_fill_gaps_in_booth(store, seed):
    seed.company("company-1", owner_id="owner-1", name="Acme", booth_id="booth-1", location="Toronto")
    seed.booth("booth-1", "company-1", industry="Robotics")

    booth = CompanySnapshotBuilder(store).build("company-1").booth

    assert booth.companyName == "Acme"
    assert booth.location == "Toronto"


def test_every_optional_field_is_present_as_none(store, seed):
    seed.company("company-1", owner_id="owner-1", name="Acme")

    data = CompanySnapshotBuilder(store).build("company-1").booth.to_dict()

    assert data["companyId"] == "company-1"
    assert data["companyName"] == "Acme"
    for field in BOOTH_PROFILE_FIELDS:
        assert field in data
        assert data[field] is None


def test_dangling_booth_reference_falls_back_to_company(store, seed):
    seed.company("company-1", owner_id="owner-1", name="Acme", booth_id="gone")

    booth = CompanySnapshotBuilder(store).build("company-1").booth

    assert booth.companyName == "Acme"
    assert booth.industry is None


def test_missing_company_raises_not_found(store):
    with pytest.raises(NotFoundError):
        CompanySnapshotBuilder(store).build("nope")


def test_snapshot_always_carries_a_booth(store, seed):
    seed.company("company-1", owner_id="owner-1", name="Acme")

    snapshot = CompanySnapshotBuilder(store).build("company-1")

    assert snapshot.booth.companyId == "company-1"
    with pytest.raises(TypeError):
        CompanySnapshot(company_id="company-1")
