"""Tests that request logs never carry admin identifiers."""

import logging

from structlog.testing import capture_logs

UNKNOWN_ID = "b" * 10


class TestRequestLogging:
    """Test request and error logging."""

    async def test_admin_id_is_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO)
        stream = (await client.post("/stream")).json()
        admin_id = stream["admin"]

        with capture_logs() as logs:
            await client.get(f"/{admin_id}/admin")
            await client.get(f"/{admin_id}/hubs")
            await client.put(f"/{admin_id}/admin", content="https://hub.example/callback")
            await client.post(
                f"/{admin_id}", files={"audio": ("chunk.opus", b"data", "audio/ogg")}
            )
            await client.post(f"/{admin_id}", content=b"not multipart")
            await client.get(f"/{admin_id}/admin/extra")
            await client.put(f"/{UNKNOWN_ID}/admin", content="https://hub.example/")

        assert logs
        assert admin_id not in repr(logs)
        assert UNKNOWN_ID not in repr(logs)
        assert admin_id not in caplog.text

    async def test_route_template_is_logged(self, client):
        stream = (await client.post("/stream")).json()

        with capture_logs() as logs:
            response = await client.get(f"/{stream['admin']}/admin")

        completed = [log for log in logs if log["event"] == "request_completed"]
        assert len(completed) == 1
        assert completed[0]["route"] == "/{admin_id}/admin"
        assert completed[0]["request_id"] == response.headers["x-request-id"]

    async def test_unmatched_path_is_not_logged(self, client):
        with capture_logs() as logs:
            await client.get(f"/{UNKNOWN_ID}/hubs/and/more")

        assert UNKNOWN_ID not in repr(logs)
        completed = [log for log in logs if log["event"] == "request_completed"]
        assert completed[0]["route"] == "<unmatched>"
