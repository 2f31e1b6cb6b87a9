"""Tests for return and replacement requests."""

import asyncio

import pytest

from storefront_api.app.core.errors import InvalidTransitionError, NotFoundError, ValidationError
from storefront_api.app.schemas.common import ListQuery
from storefront_api.app.schemas.returns import ReturnType
from storefront_api.app.services.return_service import ReturnService


@pytest.fixture()
def service(store):
    return ReturnService(store)


def _submit(service, principal, **overrides):
    data = {"order_id": "ORD-1001", "type": "refund", "reason": "Damaged", "comments": None, "items": []}
    data.update(overrides)
    return asyncio.run(service.submit(data, principal))


def _advance(service, request_id, *statuses):
    for status in statuses:
        request = asyncio.run(service.set_status(request_id, status))
    return request


class TestSubmitReturn:
    def test_new_request_is_pending(self, service, customer):
        request = _submit(service, customer)
        assert request["id"].startswith("RET-")
        assert request["status"] == "Pending"
        assert request["user_id"] == "cust-1"
        assert request["user_name"] == "Jane Doe"
        assert request["request_date"]

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"order_id": ""}, "order_id"),
            ({"reason": "  "}, "reason"),
            ({"type": "exchange"}, "type"),
            ({"items": ["not an object"]}, "items"),
        ],
    )
    def test_invalid_request_rejected(self, service, customer, overrides, field):
        with pytest.raises(ValidationError) as exc:
            _submit(service, customer, **overrides)
        assert exc.value.field == field


class TestReturnLifecycle:
    def test_refund_path(self, service, customer):
        request = _submit(service, customer, type="refund")
        done = _advance(service, request["id"], "Approved", "Picked Up", "Refunded")
        assert done["status"] == "Refunded"

    def test_replacement_path(self, service, customer):
        request = _submit(service, customer, type="replace")
        done = _advance(service, request["id"], "Approved", "Picked Up", "Completed")
        assert done["status"] == "Completed"

    def test_refund_cannot_complete_as_replacement(self, service, customer):
        request = _submit(service, customer, type="refund")
        _advance(service, request["id"], "Approved", "Picked Up")
        with pytest.raises(InvalidTransitionError):
            asyncio.run(service.set_status(request["id"], "Completed"))

    def test_cannot_skip_pickup(self, service, customer):
        request = _submit(service, customer)
        _advance(service, request["id"], "Approved")
        with pytest.raises(InvalidTransitionError):
            asyncio.run(service.set_status(request["id"], "Refunded"))

    def test_rejected_is_terminal(self, service, customer):
        request = _submit(service, customer)
        _advance(service, request["id"], "Rejected")
        with pytest.raises(InvalidTransitionError):
            asyncio.run(service.set_status(request["id"], "Approved"))

    def test_unknown_request(self, service):
        with pytest.raises(NotFoundError):
            asyncio.run(service.set_status("RET-NOPE", "Approved"))


class TestReturnQueues:
    def test_replacements_queue_only_lists_replacements(self, service, customer):
        _submit(service, customer, type="refund", order_id="ORD-1")
        _submit(service, customer, type="replace", order_id="ORD-2")
        _submit(service, customer, type="replace", order_id="ORD-3")

        everything = asyncio.run(service.list_queue(ListQuery()))
        replacements = asyncio.run(service.list_queue(ListQuery(), request_type=ReturnType.REPLACE))

        assert everything.total_items == 3
        assert [r["order_id"] for r in replacements.items] == ["ORD-3", "ORD-2"]

    def test_search_by_order_and_customer(self, service, customer):
        _submit(service, customer, order_id="ORD-777")
        _submit(service, {"user_id": "cust-2", "name": "Mark Lee"}, order_id="ORD-888")

        assert asyncio.run(service.list_queue(ListQuery(search_term="ord-777"))).total_items == 1
        assert asyncio.run(service.list_queue(ListQuery(search_term="mark"))).items[0]["order_id"] == "ORD-888"

    def test_status_filter_uses_return_statuses(self, service, customer):
        request = _submit(service, customer)
        _advance(service, request["id"], "Approved", "Picked Up")
        page = asyncio.run(service.list_queue(ListQuery(status_filter="Picked Up")))
        assert page.total_items == 1
        with pytest.raises(ValidationError):
            asyncio.run(service.list_queue(ListQuery(status_filter="Shipped")))
