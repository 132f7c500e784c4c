"""
Failure paths shared by every ImagesClient operation
"""

import asyncio

import httpx
import pytest

from cfimages import (
    AggregateApiError,
    DecodeFault,
    ImagesClient,
    StatusFault,
    TransportFault,
    from_bytes,
)
from cfimages.core.result import Failure, Success
from helpers import ACCOUNT_ID, API_TOKEN, json_response, make_envelope, make_image


class TestStatusHandling:
    async def test_server_error_without_envelope(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(500, text="Internal Server Error"))

        result = await client.get_details("abc")

        assert isinstance(result, Failure)
        assert result.message == "request failed with status 500"
        assert isinstance(result.cause, StatusFault)
        assert result.cause.status_code == 500
        assert result.cause.body == "Internal Server Error"

    async def test_error_status_with_success_envelope_is_status_fault(self, make_client) -> None:
        client = make_client(
            lambda request: json_response(make_envelope(make_image()), status_code=502)
        )

        result = await client.get_details("abc")

        assert isinstance(result.cause, StatusFault)

    async def test_error_status_with_envelope_errors(self, make_client) -> None:
        client = make_client(
            lambda request: json_response(
                make_envelope(
                    success=False,
                    errors=[
                        {"code": 10000, "message": "Authentication error"},
                        {"code": 10001, "message": "Token expired"},
                    ],
                ),
                status_code=403,
            )
        )

        result = await client.list()

        assert isinstance(result, Failure)
        assert result.message == "Authentication error"
        error = result.cause
        assert isinstance(error, AggregateApiError)
        assert error.all_codes == [10000, 10001]
        assert error.all_messages == ["Authentication error", "Token expired"]

    async def test_success_false_on_ok_status(self, make_client) -> None:
        client = make_client(
            lambda request: json_response(
                make_envelope(success=False, errors=[{"code": 7, "message": "Rate limited"}])
            )
        )

        result = await client.usage_stats()

        assert result.message == "Rate limited"
        assert isinstance(result.cause, AggregateApiError)

    async def test_success_false_without_errors_uses_operation_fallback(
        self, make_client
    ) -> None:
        client = make_client(lambda request: json_response(make_envelope(success=False)))

        result = await client.upload(from_bytes(b"abc"))

        assert result.message == "Upload failed"
        assert result.cause.errors == []


class TestDecodeFailures:
    async def test_body_is_not_json(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>gateway</html>"))

        result = await client.get_details("abc")

        assert isinstance(result, Failure)
        assert isinstance(result.cause, DecodeFault)

    async def test_result_does_not_match_image(self, make_client) -> None:
        client = make_client(lambda request: json_response(make_envelope({"id": 12})))

        result = await client.get_details("abc")

        assert isinstance(result.cause, DecodeFault)

    async def test_envelope_missing_success_flag(self, make_client) -> None:
        client = make_client(lambda request: json_response({"result": make_image()}))

        result = await client.get_details("abc")

        assert isinstance(result.cause, DecodeFault)


class TestTransportFailures:
    async def test_timeout(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        client = make_client(handler)

        result = await client.get_details("abc")

        assert isinstance(result, Failure)
        assert isinstance(result.cause, TransportFault)
        assert result.cause.error_code == "TIMEOUT"

    async def test_connection_refused(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        result = await client.delete("abc")

        assert isinstance(result.cause, TransportFault)
        assert "connection refused" in result.message

    async def test_cancellation_is_not_converted(self, make_client) -> None:
        started = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            started.set()
            await asyncio.sleep(10)
            return json_response(make_envelope(make_image()))

        client = make_client(handler)
        task = asyncio.create_task(client.get_details("abc"))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestClientLifecycle:
    async def test_operations_after_close_fail(self, make_client, recorded_requests) -> None:
        client = make_client(lambda request: json_response(make_envelope(make_image())))
        await client.aclose()

        result = await client.get_details("abc")

        assert client.is_closed
        assert isinstance(result, Failure)
        assert result.message == "client is closed"
        assert recorded_requests == []

    async def test_async_context_manager_closes(self) -> None:
        transport = httpx.MockTransport(lambda request: json_response(make_envelope({})))

        async with ImagesClient(
            ACCOUNT_ID, API_TOKEN, enable_logging=False, transport=transport
        ) as client:
            assert (await client.delete("abc")).is_success

        assert client.is_closed

    async def test_concurrent_operations_share_one_client(self, make_client) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0)
            image_id = request.url.path.rsplit("/", 1)[-1]
            return json_response(make_envelope(make_image(image_id)))

        client = make_client(handler)
        ids = [f"img-{n}" for n in range(10)]

        results = await asyncio.gather(*(client.get_details(image_id) for image_id in ids))

        assert all(isinstance(result, Success) for result in results)
        assert [result.data.id for result in results] == ids

    async def test_base_url_override(self, recorded_requests) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return json_response(make_envelope(make_image("abc")))

        async with ImagesClient(
            api_token=API_TOKEN,
            base_url="http://localhost:8787/images/",
            enable_logging=False,
            transport=httpx.MockTransport(handler),
        ) as client:
            await client.get_details("abc")

        assert str(recorded_requests[0].url) == "http://localhost:8787/images/abc"
