"""Credit gate endpoint: authentication and decision to status mapping."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.api.core.messages import MessageCode
from src.modules.billing.credits import CreditLedgerService, CreditLedgerUnavailable
from tests.factories import AccountFactory, UsageRecordFactory
from tests.utils.assertions import (
    assert_authentication_error,
    assert_error_response,
    assert_success_response,
    assert_validation_error,
)

pytestmark = pytest.mark.asyncio

CONSUME_URL = "/v1/credits/consume"


def _payload(account_id, **overrides) -> dict:
    now = datetime.now(timezone.utc)
    payload = {
        "account_id": str(account_id),
        "dedup_key": "dQw4w9WgXcQ",
        "identifier": "user_2abc",
        "tier": "pro",
        "base_limit": 2,
        "period_start": (now - timedelta(days=10)).isoformat(),
        "period_end": (now + timedelta(days=20)).isoformat(),
    }
    payload.update(overrides)
    return payload


class TestAuthentication:
    async def test_missing_internal_key(self, public_client: AsyncClient, account):
        response = await public_client.post(CONSUME_URL, json=_payload(account.id))

        assert_authentication_error(response)

    async def test_wrong_internal_key(self, public_client: AsyncClient, account):
        response = await public_client.post(
            CONSUME_URL,
            json=_payload(account.id),
            headers={"X-Internal-Key": "not-the-key"},
        )

        assert_authentication_error(response, MessageCode.INVALID_API_KEY)


class TestConsume:
    async def test_allowed(self, internal_client: AsyncClient, account):
        response = await internal_client.post(CONSUME_URL, json=_payload(account.id))

        data = assert_success_response(
            response,
            data_assertions={
                "allowed": True,
                "reason": "OK",
                "used_topup": False,
                "deduplicated": False,
                "base_remaining": 1,
                "topup_remaining": 0,
                "total_remaining": 1,
            },
        )
        assert data["usage_record_id"]

    async def test_duplicate_is_transparent_success(
        self, internal_client: AsyncClient, account
    ):
        first = await internal_client.post(CONSUME_URL, json=_payload(account.id))
        second = await internal_client.post(CONSUME_URL, json=_payload(account.id))

        data = assert_success_response(
            second,
            MessageCode.CREDIT_ALREADY_COUNTED,
            data_assertions={"reason": "ALREADY_COUNTED", "deduplicated": True},
        )
        assert data["usage_record_id"] == first.json()["data"]["usage_record_id"]

    async def test_uncounted_request(self, internal_client: AsyncClient, account):
        response = await internal_client.post(
            CONSUME_URL, json=_payload(account.id, base_limit=0, counted=False)
        )

        assert_success_response(response, data_assertions={"allowed": True})

    async def test_topup_spend_reported(
        self, internal_client: AsyncClient, db_session
    ):
        account = await AccountFactory.create_async(
            db_session, topup_credits=1, commit=True
        )

        response = await internal_client.post(
            CONSUME_URL, json=_payload(account.id, base_limit=0)
        )

        assert_success_response(
            response, data_assertions={"used_topup": True, "topup_remaining": 0}
        )

    async def test_limit_reached(
        self, internal_client: AsyncClient, db_session, account
    ):
        await UsageRecordFactory.create_batch_async(
            db_session, 2, account_id=account.id, commit=True
        )

        response = await internal_client.post(CONSUME_URL, json=_payload(account.id))

        body = assert_error_response(response, MessageCode.INSUFFICIENT_CREDITS, 402)
        decision = body["details"]["decision"]
        assert decision["allowed"] is False
        assert decision["reason"] == "LIMIT_REACHED"
        assert decision["usage_record_id"] is None
        assert decision["total_remaining"] == 0

    async def test_unknown_account(self, internal_client: AsyncClient):
        response = await internal_client.post(CONSUME_URL, json=_payload(uuid4()))

        body = assert_error_response(response, MessageCode.ACCOUNT_NOT_FOUND, 404)
        assert body["details"]["decision"]["reason"] == "NO_ACCOUNT"

    async def test_storage_fault_is_retryable(
        self, internal_client: AsyncClient, account
    ):
        with patch.object(
            CreditLedgerService,
            "consume",
            side_effect=CreditLedgerUnavailable("database is locked"),
        ):
            response = await internal_client.post(
                CONSUME_URL, json=_payload(account.id)
            )

        body = assert_error_response(response, MessageCode.SERVICE_UNAVAILABLE, 503)
        assert body["details"]["retryable"] is True
        assert response.headers["Retry-After"] == "1"


class TestValidation:
    async def test_reversed_period(self, internal_client: AsyncClient, account):
        now = datetime.now(timezone.utc)
        response = await internal_client.post(
            CONSUME_URL,
            json=_payload(
                account.id,
                period_start=now.isoformat(),
                period_end=(now - timedelta(days=1)).isoformat(),
            ),
        )

        assert_validation_error(response)

    async def test_negative_base_limit(self, internal_client: AsyncClient, account):
        response = await internal_client.post(
            CONSUME_URL, json=_payload(account.id, base_limit=-1)
        )

        assert_validation_error(response)

    async def test_empty_dedup_key(self, internal_client: AsyncClient, account):
        response = await internal_client.post(
            CONSUME_URL, json=_payload(account.id, dedup_key="")
        )

        assert_validation_error(response)
