"""Tests for the forum channel client."""

import json

import httpx
import pytest

from forumsync.core.discord.client import DiscordForumClient
from forumsync.core.discord.http import DiscordHTTP
from forumsync.core.discord.models import Embed, MessagePayload
from forumsync.core.errors import DiscordAPIError


class FakeDiscordAPI:
    """Routes requests to canned responses keyed by (method, path)."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, dict]] = []
        self.responses: dict[tuple[str, str], httpx.Response] = {}
        self.failures: dict[tuple[str, str], Exception] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/v10")
        body = json.loads(request.content) if request.content else {}
        self.requests.append((request.method, path, body))
        if (request.method, path) in self.failures:
            raise self.failures[(request.method, path)]
        return self.responses.get((request.method, path), httpx.Response(200, json={}))


async def _no_sleep(seconds: float) -> None:
    return None


@pytest.fixture
def api() -> FakeDiscordAPI:
    return FakeDiscordAPI()


@pytest.fixture
def client(api: FakeDiscordAPI) -> DiscordForumClient:
    http = DiscordHTTP(
        "token",
        client=httpx.AsyncClient(transport=httpx.MockTransport(api.handler)),
        sleep=_no_sleep,
    )
    return DiscordForumClient(http, "987", auto_archive_minutes=1440)


PAYLOAD = MessagePayload(content="Progress: 0% (0/0)", embeds=(Embed(title="Task summary"),))


class TestCreateOrUpdateThread:
    """Test suite for create_or_update_thread."""

    @pytest.mark.asyncio
    async def test_create(self, api: FakeDiscordAPI, client: DiscordForumClient) -> None:
        """Test that a missing thread id creates a forum thread."""
        api.responses[("POST", "/channels/987/threads")] = httpx.Response(
            201, json={"id": "555", "message": {"id": "555"}}
        )

        ref = await client.create_or_update_thread(None, PAYLOAD, name="Launch | 0%")

        assert ref.thread_id == "555"
        assert ref.message_id == "555"
        assert len(api.requests) == 1
        method, path, body = api.requests[0]
        assert (method, path) == ("POST", "/channels/987/threads")
        assert body["name"] == "Launch | 0%"
        assert body["auto_archive_duration"] == 1440
        assert body["message"] == PAYLOAD.to_api()

    @pytest.mark.asyncio
    async def test_create_name_fallback_and_limit(
        self, api: FakeDiscordAPI, client: DiscordForumClient
    ) -> None:
        api.responses[("POST", "/channels/987/threads")] = httpx.Response(201, json={"id": 1})

        ref = await client.create_or_update_thread(None, MessagePayload(content="x" * 80))
        assert ref.thread_id == "1"
        assert ref.message_id is None
        assert api.requests[0][2]["name"] == "x" * 50

        await client.create_or_update_thread(None, PAYLOAD, name="n" * 150)
        assert api.requests[1][2]["name"] == "n" * 100

    @pytest.mark.asyncio
    async def test_post_into_existing_thread(
        self, api: FakeDiscordAPI, client: DiscordForumClient
    ) -> None:
        api.responses[("POST", "/channels/555/messages")] = httpx.Response(200, json={"id": "777"})

        ref = await client.create_or_update_thread("555", PAYLOAD)

        assert ref.thread_id == "555"
        assert ref.message_id == "777"
        assert api.requests == [("POST", "/channels/555/messages", PAYLOAD.to_api())]


class TestUpdateThreadMetadata:
    """Test suite for update_thread_metadata."""

    @pytest.mark.asyncio
    async def test_rename_and_edit_starter(
        self, api: FakeDiscordAPI, client: DiscordForumClient
    ) -> None:
        api.responses[("PATCH", "/channels/555")] = httpx.Response(
            200, json={"id": "555", "name": "Launch | 50%"}
        )

        identity = await client.update_thread_metadata("555", "Launch | 50%", PAYLOAD)

        assert identity.thread_id == "555"
        assert identity.name == "Launch | 50%"
        assert [(m, p) for m, p, _ in api.requests] == [
            ("PATCH", "/channels/555"),
            ("PATCH", "/channels/555/messages/555"),
        ]
        assert api.requests[0][2] == {"name": "Launch | 50%"}
        assert api.requests[1][2] == PAYLOAD.to_api()

    @pytest.mark.asyncio
    async def test_rename_only(self, api: FakeDiscordAPI, client: DiscordForumClient) -> None:
        identity = await client.update_thread_metadata("555", "Launch | 50%")

        assert identity.name == "Launch | 50%"
        assert [(m, p) for m, p, _ in api.requests] == [("PATCH", "/channels/555")]

    @pytest.mark.asyncio
    async def test_starter_edit_failure_tolerated(
        self, api: FakeDiscordAPI, client: DiscordForumClient, caplog
    ) -> None:
        """Test that a failed starter-message edit does not fail the rename."""
        api.responses[("PATCH", "/channels/555/messages/555")] = httpx.Response(
            403, json={"message": "Cannot edit a message authored by another user"}
        )

        identity = await client.update_thread_metadata("555", "Launch | 50%", PAYLOAD)

        assert identity.name == "Launch | 50%"
        assert "Starter message update failed" in caplog.text

    @pytest.mark.asyncio
    async def test_starter_edit_timeout_tolerated(
        self, api: FakeDiscordAPI, client: DiscordForumClient, caplog
    ) -> None:
        """Test that a transport failure on the starter edit keeps the rename."""
        api.failures[("PATCH", "/channels/555/messages/555")] = httpx.ReadTimeout("timed out")

        identity = await client.update_thread_metadata("555", "Launch | 50%", PAYLOAD)

        assert identity.name == "Launch | 50%"
        assert [r[:2] for r in api.requests] == [
            ("PATCH", "/channels/555"),
            ("PATCH", "/channels/555/messages/555"),
        ]
        assert "Starter message update failed" in caplog.text

    @pytest.mark.asyncio
    async def test_rename_failure_propagates(
        self, api: FakeDiscordAPI, client: DiscordForumClient
    ) -> None:
        api.responses[("PATCH", "/channels/555")] = httpx.Response(404, json={"message": "Unknown"})

        with pytest.raises(DiscordAPIError) as exc_info:
            await client.update_thread_metadata("555", "Launch | 50%", PAYLOAD)

        assert exc_info.value.status_code == 404
        assert len(api.requests) == 1


class TestEditMessage:
    @pytest.mark.asyncio
    async def test_edit(self, api: FakeDiscordAPI, client: DiscordForumClient) -> None:
        await client.edit_message("1", "2", PAYLOAD)
        assert api.requests == [("PATCH", "/channels/1/messages/2", PAYLOAD.to_api())]
