"""
Comment endpoint tests — creation with generated ids, listing a post's
thread, editing, and deletion (including the orphaned-reply behaviour).
"""
import uuid

import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _post_comment(
    client: AsyncClient,
    post_id: uuid.UUID,
    content: str,
    user_id: int = 1,
    parent_id: str | None = None,
) -> str:
    payload = {"user_id": user_id, "content": content}
    if parent_id is not None:
        payload["parent_id"] = parent_id
    resp = await client.post(f"/api/v1/posts/{post_id}/comments", json=payload)
    assert resp.status_code == 201
    return resp.json()["id"]


async def _thread(client: AsyncClient, post_id: uuid.UUID) -> list[dict]:
    resp = await client.get(f"/api/v1/posts/{post_id}/comments")
    assert resp.status_code == 200
    return resp.json()


# ---------------------------------------------------------------------------
# Create + list
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_comment_returns_uuid(async_client: AsyncClient):
    post_id = uuid.uuid4()
    comment_id = await _post_comment(async_client, post_id, "First!")
    assert uuid.UUID(comment_id).version == 4


@pytest.mark.asyncio
async def test_created_comment_appears_in_thread(async_client: AsyncClient):
    post_id = uuid.uuid4()
    root_id = await _post_comment(async_client, post_id, "root", user_id=3)
    reply_id = await _post_comment(async_client, post_id, "reply", user_id=4, parent_id=root_id)

    thread = await _thread(async_client, post_id)
    by_id = {c["id"]: c for c in thread}

    assert by_id[root_id]["content"] == "root"
    assert by_id[root_id]["user_id"] == 3
    assert by_id[root_id]["parent_id"] is None
    assert by_id[root_id]["post_id"] == str(post_id)

    assert by_id[reply_id]["content"] == "reply"
    assert by_id[reply_id]["user_id"] == 4
    assert by_id[reply_id]["parent_id"] == root_id


@pytest.mark.asyncio
async def test_thread_is_in_creation_order(async_client: AsyncClient):
    post_id = uuid.uuid4()
    ids = [await _post_comment(async_client, post_id, f"Comment {i}") for i in range(3)]

    thread = await _thread(async_client, post_id)
    assert [c["id"] for c in thread] == ids


@pytest.mark.asyncio
async def test_thread_only_contains_its_post(async_client: AsyncClient):
    post_a, post_b = uuid.uuid4(), uuid.uuid4()
    await _post_comment(async_client, post_a, "on a")
    await _post_comment(async_client, post_b, "on b")

    thread = await _thread(async_client, post_a)
    assert [c["content"] for c in thread] == ["on a"]


@pytest.mark.asyncio
async def test_empty_thread(async_client: AsyncClient):
    assert await _thread(async_client, uuid.uuid4()) == []


@pytest.mark.asyncio
async def test_parent_is_not_validated(async_client: AsyncClient):
    """A parent_id pointing nowhere is stored as given."""
    post_id = uuid.uuid4()
    ghost_parent = str(uuid.uuid4())
    comment_id = await _post_comment(async_client, post_id, "reply to nothing", parent_id=ghost_parent)

    thread = await _thread(async_client, post_id)
    assert thread[0]["id"] == comment_id
    assert thread[0]["parent_id"] == ghost_parent


@pytest.mark.asyncio
async def test_comment_missing_content(async_client: AsyncClient):
    resp = await async_client.post(
        f"/api/v1/posts/{uuid.uuid4()}/comments", json={"user_id": 1}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_comment_on_malformed_post_id(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/v1/posts/not-a-uuid/comments", json={"user_id": 1, "content": "x"}
    )
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_comment_keeps_id_and_timestamp(async_client: AsyncClient):
    post_id = uuid.uuid4()
    comment_id = await _post_comment(async_client, post_id, "old")
    before = (await _thread(async_client, post_id))[0]

    resp = await async_client.patch(f"/api/v1/comments/{comment_id}", json={"content": "new"})
    assert resp.status_code == 200
    assert resp.json()["id"] == comment_id

    after = (await _thread(async_client, post_id))[0]
    assert after["content"] == "new"
    assert after["id"] == before["id"]
    assert after["timestamp"] == before["timestamp"]


@pytest.mark.asyncio
async def test_update_unknown_comment(async_client: AsyncClient):
    resp = await async_client.patch(f"/api/v1/comments/{uuid.uuid4()}", json={"content": "x"})
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_comment(async_client: AsyncClient):
    post_id = uuid.uuid4()
    comment_id = await _post_comment(async_client, post_id, "doomed")

    resp = await async_client.delete(f"/api/v1/comments/{comment_id}")
    assert resp.status_code == 204
    assert await _thread(async_client, post_id) == []


@pytest.mark.asyncio
async def test_delete_parent_orphans_replies(async_client: AsyncClient):
    post_id = uuid.uuid4()
    parent_id = await _post_comment(async_client, post_id, "parent")
    child_id = await _post_comment(async_client, post_id, "child", parent_id=parent_id)

    resp = await async_client.delete(f"/api/v1/comments/{parent_id}")
    assert resp.status_code == 204

    thread = await _thread(async_client, post_id)
    assert [c["id"] for c in thread] == [child_id]
    assert thread[0]["parent_id"] == parent_id


@pytest.mark.asyncio
async def test_delete_unknown_comment(async_client: AsyncClient):
    resp = await async_client.delete(f"/api/v1/comments/{uuid.uuid4()}")
    assert resp.status_code == 404
