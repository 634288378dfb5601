"""
Notefile Backend — /notes Endpoint Tests
=========================================

What:  HTTP-level behavior: status codes, body shapes, headers, formatting.
How:   HTTPX AsyncClient over ASGITransport; each test has its own notes file.
"""

import asyncio
import json
import logging
from unittest.mock import patch

import aiofiles
import pytest


def _failing_write_open():
    real_open = aiofiles.open

    def fake_open(path, mode="r", *args, **kwargs):
        if "w" in mode:
            raise OSError(28, "No space left on device (disk full)")
        return real_open(path, mode, *args, **kwargs)

    return fake_open


class TestScenario:

    @pytest.mark.asyncio
    async def test_full_crud_flow_from_empty(self, test_client):
        resp = await test_client.post("/notes", json={"title": "A", "description": "d1"})
        assert resp.status_code == 201
        assert resp.json() == {"message": "Note created successfully.", "id": 1}

        resp = await test_client.post("/notes", json={"title": "B", "description": "d2"})
        assert resp.status_code == 201
        assert resp.json()["id"] == 2

        resp = await test_client.get("/notes")
        assert resp.status_code == 200
        assert resp.json() == [
            {"id": 1, "title": "A", "description": "d1"},
            {"id": 2, "title": "B", "description": "d2"},
        ]

        resp = await test_client.patch("/notes/1", json={"title": "A2", "description": "d1b"})
        assert resp.status_code == 200
        assert resp.json() == {"message": "Note updated successfully.", "id": 1}

        resp = await test_client.get("/notes/1")
        assert resp.status_code == 200
        assert resp.json()["title"] == "A2"

        resp = await test_client.delete("/notes/2")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Note deleted successfully.", "id": 2}

        resp = await test_client.get("/notes/2")
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"


class TestFormatting:

    @pytest.mark.asyncio
    async def test_list_is_indented_json(self, seeded_client):
        resp = await seeded_client.get("/notes")
        assert resp.headers["content-type"] == "application/json"
        assert resp.text == json.dumps(resp.json(), indent=2, ensure_ascii=False)

    @pytest.mark.asyncio
    async def test_errors_are_indented_json(self, seeded_client):
        resp = await seeded_client.get("/notes/404")
        assert resp.headers["content-type"] == "application/json"
        assert resp.text == json.dumps(resp.json(), indent=2, ensure_ascii=False)

    @pytest.mark.asyncio
    async def test_empty_collection_lists_as_empty_array(self, test_client):
        resp = await test_client.get("/notes")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, seeded_client):
        resp = await seeded_client.get("/notes", headers={"X-Request-ID": "trace-123"})
        assert resp.headers["x-request-id"] == "trace-123"


class TestBadIds:
    """A non-integer id is a 400 on every `{id}` route, delete included."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, kwargs",
        [
            ("get", {}),
            ("patch", {"json": {"title": "t", "description": "d"}}),
            ("delete", {}),
        ],
    )
    async def test_non_integer_id_is_400(self, seeded_client, seeded_notes_file, method, kwargs):
        before = seeded_notes_file.read_bytes()
        resp = await getattr(seeded_client, method)("/notes/abc", **kwargs)
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "id"
        assert seeded_notes_file.read_bytes() == before

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "patch", "delete"])
    async def test_out_of_range_id_is_400(self, seeded_client, method):
        kwargs = {"json": {"title": "t", "description": "d"}} if method == "patch" else {}
        resp = await getattr(seeded_client, method)("/notes/99999999999999999999999", **kwargs)
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "id"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete"])
    async def test_unknown_id_is_404(self, seeded_client, method):
        resp = await getattr(seeded_client, method)("/notes/3")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_404_and_file_unchanged(self, seeded_client, seeded_notes_file):
        before = seeded_notes_file.read_bytes()
        resp = await seeded_client.patch("/notes/3", json={"title": "t", "description": "d"})
        assert resp.status_code == 404
        assert seeded_notes_file.read_bytes() == before


class TestBodies:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"title": "", "description": "d"},
            {"title": "t", "description": ""},
            {"title": "t"},
            {},
        ],
    )
    async def test_create_rejects_empty_fields(self, test_client, notes_file, body):
        resp = await test_client.post("/notes", json=body)
        assert resp.status_code == 400
        assert notes_file.read_text(encoding="utf-8") == "[]"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [b"{not json", b"[1, 2]", b'{"title": 5, "description": "d"}', b'"text"', b""],
    )
    async def test_malformed_body_is_400(self, seeded_client, content):
        for method, url in (("POST", "/notes"), ("PATCH", "/notes/1")):
            resp = await seeded_client.request(
                method, url, content=content, headers={"Content-Type": "application/json"}
            )
            assert resp.status_code == 400, (method, content)
            assert resp.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_body_id_is_ignored_on_create(self, seeded_client):
        resp = await seeded_client.post("/notes", json={"id": 1, "title": "t", "description": "d"})
        assert resp.status_code == 201
        assert resp.json()["id"] == 6

    @pytest.mark.asyncio
    async def test_body_id_is_ignored_on_update(self, seeded_client):
        resp = await seeded_client.patch("/notes/2", json={"id": 77, "title": "t", "description": "d"})
        assert resp.status_code == 200
        assert resp.json()["id"] == 2
        assert (await seeded_client.get("/notes/77")).status_code == 404
        assert (await seeded_client.get("/notes/2")).json()["title"] == "t"

    @pytest.mark.asyncio
    async def test_update_with_empty_fields_is_accepted(self, seeded_client):
        resp = await seeded_client.patch("/notes/5", json={})
        assert resp.status_code == 200
        assert (await seeded_client.get("/notes/5")).json() == {"id": 5, "title": "", "description": ""}

    @pytest.mark.asyncio
    async def test_update_with_null_fields_stores_empty_strings(self, seeded_client):
        resp = await seeded_client.patch("/notes/1", json={"title": None, "description": None})
        assert resp.status_code == 200
        assert (await seeded_client.get("/notes/1")).json() == {"id": 1, "title": "", "description": ""}

    @pytest.mark.asyncio
    async def test_create_with_null_title_is_400(self, test_client, notes_file):
        resp = await test_client.post("/notes", json={"title": None, "description": "d"})
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "title"
        assert notes_file.read_text(encoding="utf-8") == "[]"


class TestStorageFailures:
    """Unreadable, corrupt or unwritable files give a generic 500 on every route."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, url, kwargs",
        [
            ("get", "/notes", {}),
            ("get", "/notes/1", {}),
            ("post", "/notes", {"json": {"title": "t", "description": "d"}}),
            ("patch", "/notes/1", {"json": {"title": "t", "description": "d"}}),
            ("delete", "/notes/1", {}),
        ],
    )
    async def test_corrupt_file_is_500(self, test_client, notes_file, method, url, kwargs):
        notes_file.write_text("{corrupt", encoding="utf-8")
        resp = await getattr(test_client, method)(url, **kwargs)
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "server_error"
        assert str(notes_file) not in resp.text
        assert notes_file.read_text(encoding="utf-8") == "{corrupt"

    @pytest.mark.asyncio
    async def test_missing_file_is_500(self, test_client, notes_file):
        notes_file.unlink()
        resp = await test_client.get("/notes")
        assert resp.status_code == 500
        assert not notes_file.exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, url, kwargs",
        [
            ("post", "/notes", {"json": {"title": "t", "description": "d"}}),
            ("patch", "/notes/1", {"json": {"title": "t", "description": "d"}}),
            ("delete", "/notes/1", {}),
        ],
    )
    async def test_failed_write_is_500_and_frees_lock(
        self, seeded_client, seeded_store, seeded_notes_file, method, url, kwargs
    ):
        before = seeded_notes_file.read_bytes()
        with patch("notefile.store.aiofiles.open", side_effect=_failing_write_open()):
            resp = await getattr(seeded_client, method)(url, **kwargs)

        assert resp.status_code == 500
        assert resp.json()["error"] == "server_error"
        assert "disk full" not in resp.text
        assert seeded_notes_file.read_bytes() == before
        assert seeded_store.lock.writer_active is False

        resp = await seeded_client.post("/notes", json={"title": "after", "description": "d"})
        assert resp.status_code == 201
        assert resp.json()["id"] == 6


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_concurrent_posts_yield_ids_one_to_n(self, test_client):
        n = 20
        responses = await asyncio.gather(
            *(
                test_client.post("/notes", json={"title": f"t{i}", "description": "d"})
                for i in range(n)
            )
        )
        assert all(r.status_code == 201 for r in responses)
        assert {r.json()["id"] for r in responses} == set(range(1, n + 1))

        listed = (await test_client.get("/notes")).json()
        assert sorted(note["id"] for note in listed) == list(range(1, n + 1))

    @pytest.mark.asyncio
    async def test_reads_during_writes_see_whole_collections(self, seeded_client):
        writes = [
            seeded_client.post("/notes", json={"title": f"w{i}", "description": "d"})
            for i in range(10)
        ]
        reads = [seeded_client.get("/notes") for _ in range(10)]
        results = await asyncio.gather(*writes, *reads)
        for resp in results[10:]:
            assert resp.status_code == 200
            ids = [note["id"] for note in resp.json()]
            assert ids[:3] == [1, 2, 5]
            assert len(ids) == len(set(ids))


class TestRouting:

    @pytest.mark.asyncio
    async def test_unknown_route_is_json_404(self, test_client):
        resp = await test_client.get("/nothing-here")
        assert resp.status_code == 404
        assert resp.json()["error"] == "http_error"

    @pytest.mark.asyncio
    async def test_unsupported_method_is_405(self, test_client):
        resp = await test_client.put("/notes/1", json={"title": "t", "description": "d"})
        assert resp.status_code == 405


class TestAccessLog:
    """One notefile.access record per request, keyed by route template."""

    @pytest.mark.asyncio
    async def test_record_names_route_template_and_path(self, seeded_client, caplog):
        caplog.set_level(logging.INFO, logger="notefile.access")
        await seeded_client.get("/notes/1", headers={"X-Request-ID": "trace-9"})

        records = [r for r in caplog.records if r.name == "notefile.access"]
        assert len(records) == 1
        record = records[0]
        assert record.levelno == logging.INFO
        assert record.route == "/notes/{note_id}"
        assert record.path == "/notes/1"
        assert record.request_id == "trace-9"
        assert "GET /notes/{note_id} → 200" in record.getMessage()

    @pytest.mark.asyncio
    async def test_client_errors_log_as_warning(self, seeded_client, caplog):
        caplog.set_level(logging.INFO, logger="notefile.access")
        await seeded_client.get("/notes/3")
        await seeded_client.get("/nowhere")

        records = [r for r in caplog.records if r.name == "notefile.access"]
        assert [r.levelno for r in records] == [logging.WARNING, logging.WARNING]
        assert records[0].route == "/notes/{note_id}"
        assert records[1].route == "<unmatched>"

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, seeded_client, caplog):
        caplog.set_level(logging.INFO, logger="notefile.access")
        await seeded_client.get("/health")
        assert not [r for r in caplog.records if r.name == "notefile.access"]

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (400, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        from notefile.middleware.logging import level_for_status

        assert level_for_status(status) == level
