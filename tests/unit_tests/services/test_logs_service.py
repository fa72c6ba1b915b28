from datetime import datetime, timezone

import pytest
from aioresponses import aioresponses
from requests_mock.mocker import Mocker

from keywordsai_sdk.http.client import KeywordsAIHTTPClient
from keywordsai_sdk.http.entities import (
    LogFilter,
    LogsResponse,
    Message,
    RequestLog,
    Thread,
)
from keywordsai_sdk.http.errors import APIError, InvalidParameterError
from keywordsai_sdk.services.logs import LogsService


def _log(index: int = 0) -> RequestLog:
    return RequestLog(
        model="gpt-4",
        prompt_messages=[Message(role="user", content=f"Hello {index}")],
        completion_message=Message(role="assistant", content="Hi"),
    )


def test_create_posts_log(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.post(f"{api_url}/api/request-logs/create/", json={})
    service = LogsService(client=http_client)

    # when
    service.create(
        log=RequestLog(
            model="gpt-4",
            prompt_messages=[Message(role="user", content="Hello")],
            cost=0.5,
            timestamp=datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
        )
    )

    # then
    assert requests_mock.last_request.method == "POST"
    assert requests_mock.last_request.json() == {
        "model": "gpt-4",
        "prompt_messages": [{"role": "user", "content": "Hello"}],
        "cost": 0.5,
        "timestamp": "2024-01-01T12:00:00Z",
    }


def test_batch_create_when_batch_is_at_the_limit(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.post(f"{api_url}/api/request-logs/batch/create", json={})
    service = LogsService(client=http_client)

    # when
    service.batch_create(logs=[_log(index=i) for i in range(5000)])

    # then
    assert requests_mock.call_count == 1
    assert len(requests_mock.last_request.json()["logs"]) == 5000


def test_batch_create_when_batch_exceeds_the_limit(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
) -> None:
    # given
    service = LogsService(client=http_client)

    # when
    with pytest.raises(InvalidParameterError):
        service.batch_create(logs=[_log(index=i) for i in range(5001)])

    # then
    assert requests_mock.called is False


def test_list_when_filter_given(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(
        f"{api_url}/api/request-logs",
        json={
            "logs": [{"model": "gpt-4", "prompt_messages": []}],
            "total_count": 1,
        },
    )
    service = LogsService(client=http_client)

    # when
    result = service.list(
        log_filter=LogFilter(
            model="gpt-4",
            failed=False,
            start_time=datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
            limit=10,
        )
    )

    # then
    assert result == LogsResponse(logs=[RequestLog(model="gpt-4")], total_count=1)
    assert requests_mock.last_request.url == (
        f"{api_url}/api/request-logs"
        "?failed=false&limit=10&model=gpt-4&start_time=2024-01-01T12%3A00%3A00Z"
    )


def test_list_when_filter_not_given(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(f"{api_url}/api/request-logs", json={"logs": []})
    service = LogsService(client=http_client)

    # when
    result = service.list()

    # then
    assert result == LogsResponse()
    assert requests_mock.last_request.url == f"{api_url}/api/request-logs"


def test_get_encodes_log_id_in_path(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(
        f"{api_url}/api/request-logs/log%2F1", json={"model": "gpt-4"}
    )
    service = LogsService(client=http_client)

    # when
    result = service.get(log_id="log/1")

    # then
    assert result == RequestLog(model="gpt-4")


def test_update_sends_partial_payload(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.patch(f"{api_url}/api/request-logs/log-1", json={})
    service = LogsService(client=http_client)

    # when
    service.update(log_id="log-1", updates={"metadata": {"reviewed": True}})

    # then
    assert requests_mock.last_request.method == "PATCH"
    assert requests_mock.last_request.json() == {"metadata": {"reviewed": True}}


def test_update_when_log_not_found(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.patch(
        f"{api_url}/api/request-logs/log-1",
        json={"error": "Not found"},
        status_code=404,
    )
    service = LogsService(client=http_client)

    # when
    with pytest.raises(APIError) as error:
        service.update(log_id="log-1", updates={"failed": True})

    # then
    assert error.value.status_code == 404


def test_list_threads_when_customer_given(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(
        f"{api_url}/api/threads",
        json=[{"id": "t-1", "customer_identifier": "customer-1"}],
    )
    service = LogsService(client=http_client)

    # when
    result = service.list_threads(customer_identifier="customer-1")

    # then
    assert result == [Thread(id="t-1", customer_identifier="customer-1")]
    assert requests_mock.last_request.method == "GET"
    assert requests_mock.last_request.url == (
        f"{api_url}/api/threads?customer_identifier=customer-1"
    )


def test_list_threads_when_customer_not_given(
    requests_mock: Mocker,
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    requests_mock.get(f"{api_url}/api/threads", json=[])
    service = LogsService(client=http_client)

    # when
    result = service.list_threads()

    # then
    assert result == []
    assert requests_mock.last_request.url == f"{api_url}/api/threads"


@pytest.mark.asyncio
async def test_batch_create_async_when_batch_exceeds_the_limit(
    http_client: KeywordsAIHTTPClient,
) -> None:
    # given
    service = LogsService(client=http_client)

    with aioresponses() as m:
        # when
        with pytest.raises(InvalidParameterError):
            await service.batch_create_async(
                logs=[_log(index=i) for i in range(5001)]
            )

        # then
        assert len(m.requests) == 0


@pytest.mark.asyncio
async def test_list_async_when_filter_given(
    http_client: KeywordsAIHTTPClient,
    api_url: str,
) -> None:
    # given
    service = LogsService(client=http_client)

    with aioresponses() as m:
        m.get(
            f"{api_url}/api/request-logs?customer_identifier=customer-1&offset=20",
            payload={"logs": [], "total_count": 40, "next_offset": 30},
        )

        # when
        result = await service.list_async(
            log_filter=LogFilter(customer_identifier="customer-1", offset=20)
        )

    # then
    assert result == LogsResponse(logs=[], total_count=40, next_offset=30)
