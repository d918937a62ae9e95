"""
tests.test_reviews_api

End-to-end behavior of the /reviews endpoints over an in-process ASGI client.
"""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from rebook_reviews.api.routers.reviews import MAX_PAGE_INDEX
from rebook_reviews.api.schemas import CONTENT_MAX_LENGTH
from tests.conftest import bearer, mint_token


async def _create(
    client: httpx.AsyncClient,
    headers: dict[str, str],
    *,
    book_id: str = "book-42",
    content: str = "Great read",
    rating: int = 5,
) -> dict:
    r = await client.post(
        f"/reviews/{book_id}", json={"content": content, "rating": rating}, headers=headers
    )
    assert r.status_code == 200, r.text
    return r.json()


async def _list(client: httpx.AsyncClient, book_id: str = "book-42", **params) -> dict:
    r = await client.get(f"/reviews/book/{book_id}", params=params)
    assert r.status_code == 200, r.text
    return r.json()


@pytest.mark.asyncio
async def test_create_review(client: httpx.AsyncClient, auth_for) -> None:
    body = await _create(client, auth_for("u1"))

    assert body["success"] is True
    assert body["statusCode"] == 200
    assert body["message"] == "Review created"
    assert body["reviewId"]
    assert body["nickname"] == "Alice"
    assert body["content"] == "Great read"
    assert body["rating"] == 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Token abc"}, {"Authorization": "bearer abc"}],
)
async def test_mutations_reject_malformed_auth_header(
    client: httpx.AsyncClient, auth_for, headers: dict[str, str]
) -> None:
    review_id = (await _create(client, auth_for("u1")))["reviewId"]

    responses = [
        await client.post("/reviews/book-42", json={"content": "x", "rating": 3}, headers=headers),
        await client.put(f"/reviews/{review_id}", json={"content": "x"}, headers=headers),
        await client.delete(f"/reviews/{review_id}", headers=headers),
    ]

    for r in responses:
        assert r.status_code == 400
        body = r.json()
        assert body["success"] is False
        assert body["statusCode"] == 400
        assert body["error"]["kind"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_expired_token_is_401_with_expiry_message(client, settings) -> None:
    token = mint_token(settings, "u1", ttl=timedelta(minutes=-1))

    r = await client.post(
        "/reviews/book-42", json={"content": "late", "rating": 2}, headers=bearer(token)
    )

    assert r.status_code == 401
    assert r.json()["message"] == "Token has expired"
    assert r.json()["error"]["kind"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_unsupported_token_is_401_with_format_message(client, settings) -> None:
    token = mint_token(settings, "u1", alg="HS512")

    r = await client.delete("/reviews/whatever", headers=bearer(token))

    assert r.status_code == 401
    assert r.json()["message"] == "Unsupported token format"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
async def test_invalid_token_is_401_with_generic_message(client, token: str) -> None:
    r = await client.put("/reviews/whatever", json={"content": "x"}, headers=bearer(token))

    assert r.status_code == 401
    assert r.json()["message"] == "Token is invalid or expired"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"content": "ok", "rating": 6},
        {"content": "ok", "rating": 0},
        {"content": "   ", "rating": 3},
        {"content": "x" * (CONTENT_MAX_LENGTH + 1), "rating": 3},
        {"rating": 3},
    ],
)
async def test_create_validation_failure_is_400(client, auth_for, payload: dict) -> None:
    r = await client.post("/reviews/book-42", json=payload, headers=auth_for("u1"))

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["kind"] == "BAD_REQUEST"
    assert body["message"] == "Invalid request"


@pytest.mark.asyncio
async def test_create_for_unknown_member_is_internal_error(client, auth_for) -> None:
    r = await client.post(
        "/reviews/book-42", json={"content": "hi", "rating": 4}, headers=auth_for("ghost")
    )

    assert r.status_code == 500
    body = r.json()
    assert body["message"] == "Failed to create review"
    assert body["error"]["kind"] == "INTERNAL"
    assert "ghost" in body["error"]["message"]


@pytest.mark.asyncio
async def test_owner_can_update(client, auth_for) -> None:
    review_id = (await _create(client, auth_for("u1")))["reviewId"]

    r = await client.put(
        f"/reviews/{review_id}", json={"content": "Even better on reread"}, headers=auth_for("u1")
    )

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Review updated"
    assert body["reviewId"] == review_id
    assert body["content"] == "Even better on reread"
    assert body["rating"] == 5
    assert body["nickname"] == "Alice"

    listed = await _list(client)
    assert listed["reviews"][0]["content"] == "Even better on reread"


@pytest.mark.asyncio
async def test_non_owner_update_is_forbidden_and_leaves_review(client, auth_for) -> None:
    review_id = (await _create(client, auth_for("u1")))["reviewId"]

    r = await client.put(
        f"/reviews/{review_id}", json={"content": "hijacked"}, headers=auth_for("u2")
    )

    assert r.status_code == 403
    body = r.json()
    assert body["success"] is False
    assert body["error"]["kind"] == "FORBIDDEN"
    assert body["message"] == "Only the author of a review can edit it"

    listed = await _list(client)
    assert listed["reviews"][0]["content"] == "Great read"


@pytest.mark.asyncio
async def test_update_missing_review_is_internal_error(client, auth_for) -> None:
    r = await client.put("/reviews/nope", json={"content": "x"}, headers=auth_for("u1"))

    assert r.status_code == 500
    assert r.json()["message"] == "Failed to update review"


@pytest.mark.asyncio
async def test_owner_can_delete(client, auth_for) -> None:
    review_id = (await _create(client, auth_for("u1")))["reviewId"]

    r = await client.delete(f"/reviews/{review_id}", headers=auth_for("u1"))

    assert r.status_code == 200
    assert r.json() == {
        "statusCode": 200,
        "success": True,
        "message": "Review deleted",
        "reviewId": review_id,
    }
    assert (await _list(client))["totalItems"] == 0

    r = await client.delete(f"/reviews/{review_id}", headers=auth_for("u1"))
    assert r.status_code == 500


@pytest.mark.asyncio
async def test_non_owner_delete_is_forbidden(client, auth_for) -> None:
    review_id = (await _create(client, auth_for("u1")))["reviewId"]

    r = await client.delete(f"/reviews/{review_id}", headers=auth_for("u2"))

    assert r.status_code == 403
    assert r.json()["message"] == "Only the author of a review can delete it"
    assert (await _list(client))["totalItems"] == 1


@pytest.mark.asyncio
async def test_list_pages_through_reviews(client, auth_for) -> None:
    for i in range(15):
        member = "u1" if i % 2 else "u2"
        await _create(client, auth_for(member), content=f"review {i}", rating=1 + i % 5)
    await _create(client, auth_for("u1"), book_id="book-7")

    first = await _list(client, page=0, size=10)
    assert first["success"] is True
    assert first["totalItems"] == 15
    assert first["totalPages"] == 2
    assert first["currentPage"] == 0
    assert len(first["reviews"]) == 10

    second = await _list(client, page=1, size=10)
    assert second["currentPage"] == 1
    assert len(second["reviews"]) == 5

    ids = {r["reviewId"] for r in first["reviews"]} | {r["reviewId"] for r in second["reviews"]}
    assert len(ids) == 15

    summary = first["reviews"][0]
    assert set(summary) == {"reviewId", "nickname", "content", "rating", "createdAt"}


@pytest.mark.asyncio
async def test_list_defaults_to_page_size_ten(client, auth_for) -> None:
    for i in range(12):
        await _create(client, auth_for("u1"), content=f"r{i}")

    body = await _list(client)

    assert body["currentPage"] == 0
    assert len(body["reviews"]) == 10
    assert body["totalPages"] == 2


@pytest.mark.asyncio
async def test_list_is_public_and_idempotent(client, auth_for) -> None:
    for i in range(3):
        await _create(client, auth_for("u2"), content=f"r{i}")

    a = await client.get("/reviews/book/book-42", params={"page": 0, "size": 2})
    b = await client.get(
        "/reviews/book/book-42",
        params={"page": 0, "size": 2},
        headers={"Authorization": "definitely not a bearer header"},
    )

    assert a.status_code == b.status_code == 200
    assert a.json() == b.json()
    assert [r["nickname"] for r in a.json()["reviews"]] == ["Bob", "Bob"]


@pytest.mark.asyncio
async def test_list_for_unknown_book_is_empty(client) -> None:
    body = await _list(client, "no-such-book")

    assert body["reviews"] == []
    assert body["totalItems"] == 0
    assert body["totalPages"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"page": -1},
        {"page": 10**17, "size": 100},
        {"page": MAX_PAGE_INDEX + 1},
        {"size": 0},
        {"size": 101},
        {"page": "x"},
    ],
)
async def test_list_rejects_bad_paging(client, params: dict) -> None:
    r = await client.get("/reviews/book/book-42", params=params)

    assert r.status_code == 400
    assert r.json()["error"]["kind"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_last_allowed_page_is_empty_not_an_error(client) -> None:
    body = await _list(client, page=MAX_PAGE_INDEX, size=100)

    assert body["reviews"] == []
    assert body["currentPage"] == MAX_PAGE_INDEX


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"content": "   "}, {"content": "x" * (CONTENT_MAX_LENGTH + 1)}, {}],
)
async def test_update_validation_failure_is_400_and_leaves_review(
    client, auth_for, payload: dict
) -> None:
    review_id = (await _create(client, auth_for("u1")))["reviewId"]

    r = await client.put(f"/reviews/{review_id}", json=payload, headers=auth_for("u1"))

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["kind"] == "BAD_REQUEST"
    assert body["message"] == "Invalid request"
    assert (await _list(client))["reviews"][0]["content"] == "Great read"


@pytest.mark.asyncio
async def test_content_at_max_length_is_accepted(client, auth_for) -> None:
    content = "x" * CONTENT_MAX_LENGTH

    body = await _create(client, auth_for("u1"), content=content)

    assert body["content"] == content
