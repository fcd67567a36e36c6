"""
Unit tests for Pydantic schemas and the VentureIdList value type.

Tests cover:
- VentureIdList decode failures and encoding
- camelCase aliases on input and output
- VentureCreate defaults and validation
- InvestorShareResponse decoding of the stored id list
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.core.exceptions import MalformedVentureIdList
from app.models.investor_share import VentureIdList
from app.models.venture import VenturePriority
from app.schemas.catalog import (
    BuyerAssessmentCreate,
    SellerRequestUpdate,
    VendorProfileUpdate,
)
from app.schemas.investor_share import (
    InvestorShareCreate,
    InvestorShareResponse,
    ShareVerifyRequest,
)
from app.schemas.venture import VentureCreate, VentureIdsRequest, VentureUpdate

from .conftest import make_share


class TestVentureIdList:
    def test_decode_array(self):
        ids = VentureIdList.decode('["v1", "v2"]')
        assert list(ids) == ["v1", "v2"]
        assert len(ids) == 2

    def test_decode_empty_array(self):
        assert len(VentureIdList.decode("[]")) == 0

    def test_encode_is_json_array(self):
        assert VentureIdList(["v1", "v2"]).encode() == '["v1", "v2"]'

    def test_encode_decode_preserves_order(self):
        ids = VentureIdList(["z", "a", "m"])
        assert VentureIdList.decode(ids.encode()) == ids

    @pytest.mark.parametrize(
        "raw", [None, "", "not json", "{}", '"v1"', "42", "[1]", '["ok", null]']
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedVentureIdList) as exc_info:
            VentureIdList.decode(raw)
        assert exc_info.value.status_code == 500


class TestShareVerifyRequest:
    def test_camel_case_input(self):
        req = ShareVerifyRequest.model_validate({"shareToken": "t", "password": "p"})
        assert req.share_token == "t"

    def test_snake_case_also_accepted(self):
        req = ShareVerifyRequest(share_token="t", password="p")
        assert req.share_token == "t"

    def test_fields_optional(self):
        req = ShareVerifyRequest.model_validate({})
        assert req.share_token is None
        assert req.password is None


class TestInvestorShareSchemas:
    def test_create_defaults(self):
        share = InvestorShareCreate.model_validate(
            {"name": "Acme", "password": "pw", "ventureIds": ["v1"]}
        )
        assert share.view_template == "professional"
        assert share.include_metrics is True
        assert share.allow_download is False
        assert share.expires_at is None

    def test_create_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            InvestorShareCreate.model_validate({"email": "not-an-email"})

    def test_response_decodes_stored_ids(self):
        resp = InvestorShareResponse.model_validate(make_share(venture_ids=["v1", "v2"]))
        assert resp.venture_ids == ["v1", "v2"]

    def test_response_dumps_camel_case_without_password(self):
        data = InvestorShareResponse.model_validate(make_share()).model_dump(by_alias=True)
        assert "shareToken" in data
        assert "accessCount" in data
        assert "lastAccessed" in data
        assert "password" not in data


class TestVentureSchemas:
    def test_create_defaults(self):
        v = VentureCreate(name="Lens")
        assert v.stage == "idea"
        assert v.maturity == 10
        assert v.priority is VenturePriority.MEDIUM
        assert v.status == "active"

    def test_name_stripped(self):
        assert VentureCreate(name="  Lens  ").name == "Lens"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            VentureCreate(name="   ")

    @pytest.mark.parametrize("maturity", [-1, 101])
    def test_maturity_bounds(self, maturity):
        with pytest.raises(ValidationError):
            VentureCreate(name="Lens", maturity=maturity)

    def test_priority_values(self):
        assert VentureCreate(name="x", priority="high").priority is VenturePriority.HIGH
        with pytest.raises(ValidationError):
            VentureCreate(name="x", priority="urgent")

    def test_camel_case_narrative_fields(self):
        v = VentureCreate.model_validate({"name": "x", "problemWorld": "p", "fundingNeed": "$2M"})
        assert v.problem_world == "p"
        assert v.funding_need == "$2M"

    def test_update_tracks_only_supplied_fields(self):
        update = VentureUpdate.model_validate({"maturity": 55, "urgencyTrigger": "now"})
        assert update.model_dump(exclude_unset=True) == {
            "maturity": 55,
            "urgency_trigger": "now",
        }

    def test_update_rejects_null_required_column(self):
        with pytest.raises(ValidationError):
            VentureUpdate.model_validate({"name": None})

    def test_update_allows_null_optional_column(self):
        update = VentureUpdate.model_validate({"description": None})
        assert update.model_dump(exclude_unset=True) == {"description": None}

    def test_ids_request_optional(self):
        assert VentureIdsRequest.model_validate({}).venture_ids is None
        assert VentureIdsRequest.model_validate({"ventureIds": ["a"]}).venture_ids == ["a"]


class TestCatalogSchemas:
    def test_profile_update_partial(self):
        update = VendorProfileUpdate.model_validate({"keyServices": ["Hosting"]})
        assert update.model_dump(exclude_unset=True) == {"key_services": ["Hosting"]}

    @pytest.mark.parametrize("field", ["companyName", "contactEmail", "keyServices"])
    def test_profile_update_rejects_null(self, field):
        with pytest.raises(ValidationError):
            VendorProfileUpdate.model_validate({field: None})

    def test_request_update_rejects_null(self):
        with pytest.raises(ValidationError):
            SellerRequestUpdate.model_validate({"id": "r1", "progress": None})
        assert SellerRequestUpdate.model_validate({"id": "r1"}).progress is None

    def test_assessment_default_urgency(self):
        a = BuyerAssessmentCreate(
            vendor_name="N", vendor_domain="n.example", category="c", requested_by="r"
        )
        assert a.urgency == "medium"
        assert a.estimated_time is None


def test_datetimes_serialise_as_iso():
    created = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    share = make_share()
    share.created_at = created
    data = InvestorShareResponse.model_validate(share).model_dump(mode="json", by_alias=True)
    assert data["createdAt"].startswith("2025-01-02T03:04:05")
