"""Integration tests for posts, analytics and profile endpoints."""

import pytest
from httpx import AsyncClient

from infrastructure.database.models import AccountModel

pytestmark = pytest.mark.asyncio


async def _generate(async_client: AsyncClient, headers: dict, message: str, mode: str = "chat") -> str:
    response = await async_client.post(
        "/api/generate-text",
        json={"message": message, "mode": mode},
        headers=headers,
    )
    assert response.status_code == 200
    return response.json()["postId"]


class TestPosts:
    async def test_list_newest_first(self, async_client: AsyncClient, subscribed_headers: dict):
        first = await _generate(async_client, subscribed_headers, "first post")
        second = await _generate(async_client, subscribed_headers, "second post", "social")

        response = await async_client.get("/api/posts", headers=subscribed_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [post["id"] for post in data["posts"]] == [second, first]
        assert data["posts"][0]["platform"] == "Instagram"
        assert data["posts"][0]["metadata"]["prompt"] == "second post"

    async def test_pagination(self, async_client: AsyncClient, subscribed_headers: dict):
        for i in range(3):
            await _generate(async_client, subscribed_headers, f"post {i}")

        response = await async_client.get("/api/posts?skip=1&limit=1", headers=subscribed_headers)

        data = response.json()
        assert len(data["posts"]) == 1
        assert data["total"] == 3
        assert data["skip"] == 1

    async def test_get_post(self, async_client: AsyncClient, auth_headers: dict):
        post_id = await _generate(async_client, auth_headers, "best productivity tips")

        response = await async_client.get(f"/api/posts/{post_id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == post_id
        assert "PRODUCTIVITY HACK" in data["content"]
        assert data["type"] == "text"
        assert data["status"] == "draft"

    async def test_get_missing_post(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.get("/api/posts/missing", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found"

    async def test_posts_are_private(self, async_client: AsyncClient, auth_headers: dict, other_auth_headers: dict):
        post_id = await _generate(async_client, auth_headers, "mine")

        assert (await async_client.get(f"/api/posts/{post_id}", headers=other_auth_headers)).status_code == 404
        assert (await async_client.delete(f"/api/posts/{post_id}", headers=other_auth_headers)).status_code == 404

    async def test_delete_post_keeps_usage(self, async_client: AsyncClient, auth_headers: dict):
        post_id = await _generate(async_client, auth_headers, "short lived")

        response = await async_client.delete(f"/api/posts/{post_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert (await async_client.get(f"/api/posts/{post_id}", headers=auth_headers)).status_code == 404
        me = (await async_client.get("/api/auth/me", headers=auth_headers)).json()
        assert me["usage"]["generationsUsed"] == 1


class TestAnalytics:
    async def test_counts(self, async_client: AsyncClient, auth_headers: dict):
        await _generate(async_client, auth_headers, "one", "chat")
        await _generate(async_client, auth_headers, "two", "clip")

        response = await async_client.get("/api/analytics", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totalPosts"] == 2
        assert data["postsByPlatform"] == {"General": 1, "TikTok": 1}
        assert data["postsByType"] == {"text": 1, "script": 1}
        assert data["usage"]["generationsUsed"] == 2
        assert data["remainingFree"] == 0
        assert data["plan"] == "free"
        assert data["subscriptionStatus"] == "none"

    async def test_empty(self, async_client: AsyncClient, subscribed_headers: dict):
        data = (await async_client.get("/api/analytics", headers=subscribed_headers)).json()

        assert data["totalPosts"] == 0
        assert data["postsByPlatform"] == {}
        assert data["remainingFree"] is None


class TestProfile:
    async def test_get_profile(self, async_client: AsyncClient, auth_headers: dict, test_account: AccountModel):
        response = await async_client.get("/api/user/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == test_account.id

    async def test_update_profile(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.put(
            "/api/user/profile",
            json={"firstName": "Renamed", "company": "Studio"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["firstName"] == "Renamed"
        assert data["lastName"] == "Creator"
        assert data["company"] == "Studio"

    async def test_plan_not_editable(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.put(
            "/api/user/profile",
            json={"plan": "enterprise"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["plan"] == "free"

    async def test_blank_name_rejected(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.put("/api/user/profile", json={"lastName": " "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Name cannot be empty"

    @pytest.mark.parametrize("field", ["firstName", "lastName"])
    async def test_null_name_rejected(self, async_client: AsyncClient, auth_headers: dict, field: str):
        response = await async_client.put("/api/user/profile", json={field: None}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Name cannot be empty"

    async def test_company_can_be_cleared(self, async_client: AsyncClient, auth_headers: dict):
        await async_client.put("/api/user/profile", json={"company": "Studio"}, headers=auth_headers)

        response = await async_client.put("/api/user/profile", json={"company": None}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["company"] is None

    async def test_profile_edit_keeps_subscription(self, async_client: AsyncClient, subscribed_headers: dict):
        response = await async_client.put(
            "/api/user/profile",
            json={"firstName": "Paying"},
            headers=subscribed_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["firstName"] == "Paying"
        assert data["plan"] == "professional"
        assert data["subscriptionStatus"] == "active"
