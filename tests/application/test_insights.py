import json
from datetime import datetime, timezone

import httpx
import pytest

from compliance_tracker.application.insights import (
    FAILURE_MESSAGE,
    UNAVAILABLE_MESSAGE,
    ComplianceInsightsUseCase,
    build_insight_prompt,
)
from compliance_tracker.domain.due_dates import parse_due_date
from compliance_tracker.domain.models import ComplianceRecord, ComplianceStatus, Criticality, Frequency
from compliance_tracker.infrastructure.insights.gemini_client import BASE_URL, GeminiInsightProvider

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def make_record(record_id: str, status: ComplianceStatus, reason: str | None = None) -> ComplianceRecord:
    return ComplianceRecord(
        id=record_id,
        name=f"Filing {record_id}",
        due_date=parse_due_date("20"),
        frequency=Frequency.MONTHLY,
        status=status,
        criticality=Criticality.HIGH,
        last_updated=NOW,
        delay_reason=reason,
    )


RECORDS = [
    make_record("a", ComplianceStatus.NOT_COMPLETED, "Pending bank verification"),
    make_record("b", ComplianceStatus.WIP),
    make_record("c", ComplianceStatus.COMPLETED),
]


def gemini_response(summary: list[str]) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": json.dumps({"summary": summary})}]}}]}


def make_provider(handler, api_key: str | None = "test-key") -> GeminiInsightProvider:
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return GeminiInsightProvider(api_key=api_key, model="gemini-test", client=client)


def test_prompt_lists_only_pending_records():
    prompt = build_insight_prompt(RECORDS)

    assert "Filing a" in prompt
    assert "Pending bank verification" in prompt
    assert "Not provided" in prompt
    assert "Filing c" not in prompt


def test_missing_provider_degrades_gracefully():
    assert ComplianceInsightsUseCase(None).execute(RECORDS) == [UNAVAILABLE_MESSAGE]


def test_missing_api_key_degrades_gracefully():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    provider = make_provider(handler, api_key=None)

    assert provider.is_available is False
    assert ComplianceInsightsUseCase(provider).execute(RECORDS) == [UNAVAILABLE_MESSAGE]


def test_gemini_summary_is_returned():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=gemini_response(["File GSTR-1 today", "Reconcile TDS"]))

    result = ComplianceInsightsUseCase(make_provider(handler)).execute(RECORDS)

    assert result == ["File GSTR-1 today", "Reconcile TDS"]
    assert len(seen) == 1
    assert "gemini-test" in seen[0].url.path
    assert seen[0].url.path.endswith("generateContent")
    assert seen[0].headers["x-goog-api-key"] == "test-key"
    body = json.loads(seen[0].content)
    assert body["generationConfig"]["responseMimeType"] == "application/json"


def test_server_error_yields_failure_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "unavailable"})

    assert ComplianceInsightsUseCase(make_provider(handler)).execute(RECORDS) == [FAILURE_MESSAGE]


def test_unparseable_payload_yields_failure_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "no json here"}]}}]})

    assert ComplianceInsightsUseCase(make_provider(handler)).execute(RECORDS) == [FAILURE_MESSAGE]


def test_network_error_yields_failure_message():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert ComplianceInsightsUseCase(make_provider(handler)).execute(RECORDS) == [FAILURE_MESSAGE]


@pytest.mark.parametrize(
    "body",
    [
        {"candidates": [{"content": {"parts": None}}]},
        {"candidates": [{"content": {"parts": [{"text": None}]}}]},
    ],
)
def test_null_parts_yield_failure_message(body: dict):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    assert ComplianceInsightsUseCase(make_provider(handler)).execute([]) == [FAILURE_MESSAGE]


def test_provider_closes_only_its_own_client():
    shared = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    with GeminiInsightProvider(api_key="k", model="m", client=shared):
        pass
    assert shared.is_closed is False

    with GeminiInsightProvider(api_key="k", model="m") as provider:
        owned = provider._client
    assert owned.is_closed is True
