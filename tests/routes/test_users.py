# tests/routes/test_users.py
"""Tests for the /users routes."""

from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

import pytest
from fastapi import status
from httpx import AsyncClient
from pytest_mock.plugin import MockerFixture
from sqlalchemy.exc import OperationalError

from app.repositories import CommentRepository

if TYPE_CHECKING:
    from conftest import Seeder


def ids(items: list[dict[str, Any]]) -> list[UUID]:
    return [UUID(item["id"]) for item in items]


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_user(self, client: AsyncClient) -> None:
        response = await client.post(
            "/users",
            json={
                "username": "johndoe",
                "email": "John.Doe@Example.com",
                "firstName": "John",
                "lastName": "Doe",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "johndoe"
        assert data["email"] == "john.doe@example.com"
        assert data["firstName"] == "John"
        assert data["lastName"] == "Doe"
        assert {"id", "createdAt", "updatedAt"} <= data.keys()

    @pytest.mark.asyncio
    async def test_duplicate_username_is_rejected(self, client: AsyncClient) -> None:
        first = await client.post("/users", json={"username": "johndoe", "email": "a@example.com"})
        assert first.status_code == status.HTTP_201_CREATED

        response = await client.post(
            "/users",
            json={"username": "johndoe", "email": "b@example.com"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Username or email already exists"}

        listing = await client.get("/users", params={"username": "johndoe"})
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_ignores_case(self, client: AsyncClient) -> None:
        await client.post("/users", json={"username": "first", "email": "same@example.com"})

        response = await client.post(
            "/users",
            json={"username": "second", "email": "SAME@example.com"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Username or email already exists"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({"username": "jo", "email": "jo@example.com"}, "username"),
            ({"username": "x" * 21, "email": "long@example.com"}, "username"),
            ({"username": "johndoe", "email": "not-an-email"}, "email"),
            ({"email": "nobody@example.com"}, "username"),
            ({"username": "johndoe", "email": "j@example.com", "firstName": "x" * 51}, "firstName"),
        ],
    )
    async def test_invalid_payload_is_400(
        self,
        client: AsyncClient,
        payload: dict[str, str],
        field: str,
    ) -> None:
        response = await client.post("/users", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith(f"{field}:")


class TestGetUser:
    @pytest.mark.asyncio
    async def test_get_user(self, client: AsyncClient, seed: "Seeder") -> None:
        user = await seed.user("johndoe", "John", "Doe")

        response = await client.get(f"/users/{user.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "johndoe"

    @pytest.mark.asyncio
    async def test_invalid_id_is_400(self, client: AsyncClient) -> None:
        response = await client.get("/users/12345")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid ID format"}

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, client: AsyncClient) -> None:
        response = await client.get(f"/users/{uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "User not found"}


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_partial_update(self, client: AsyncClient, seed: "Seeder") -> None:
        user = await seed.user("johndoe", "John", "Doe")

        response = await client.put(f"/users/{user.id}", json={"firstName": "Johnny"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["firstName"] == "Johnny"
        assert data["lastName"] == "Doe"
        assert data["username"] == "johndoe"

    @pytest.mark.asyncio
    async def test_keeping_own_username_is_allowed(
        self,
        client: AsyncClient,
        seed: "Seeder",
    ) -> None:
        user = await seed.user("johndoe")

        response = await client.put(f"/users/{user.id}", json={"username": "johndoe"})

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.asyncio
    async def test_taking_another_username_is_rejected(
        self,
        client: AsyncClient,
        seed: "Seeder",
    ) -> None:
        await seed.user("johndoe")
        other = await seed.user("janedoe")

        response = await client.put(f"/users/{other.id}", json={"username": "johndoe"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Username or email already exists"}

    @pytest.mark.asyncio
    async def test_update_unknown_user_is_404(self, client: AsyncClient) -> None:
        response = await client.put(f"/users/{uuid4()}", json={"firstName": "Ghost"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete_cascades_to_blogs_and_comments(
        self,
        client: AsyncClient,
        seed: "Seeder",
    ) -> None:
        doomed = await seed.user("doomed")
        other = await seed.user("other")
        own_blog = await seed.blog(doomed, "Doomed user's post")
        other_blog = await seed.blog(other, "Other user's post")
        on_own_blog = await seed.comment(own_blog, other, "comment on doomed blog")
        by_doomed = await seed.comment(other_blog, doomed, "comment by doomed user")
        survivor = await seed.comment(other_blog, other, "comment that stays")

        response = await client.delete(f"/users/{doomed.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "User deleted successfully"
        assert data["user"]["id"] == str(doomed.id)

        assert (await client.get(f"/users/{doomed.id}")).status_code == status.HTTP_404_NOT_FOUND
        assert (await client.get(f"/blogs/{own_blog.id}")).status_code == status.HTTP_404_NOT_FOUND

        kept = await client.get(f"/blogs/{other_blog.id}")
        assert kept.status_code == status.HTTP_200_OK
        assert ids(kept.json()["comments"]) == [survivor.id]

        other_comments = ids((await client.get(f"/users/{other.id}/comments")).json())
        assert on_own_blog.id not in other_comments
        assert by_doomed.id not in other_comments
        assert other_comments == [survivor.id]

    @pytest.mark.asyncio
    async def test_failed_cascade_leaves_everything_in_place(
        self,
        client: AsyncClient,
        seed: "Seeder",
        mocker: MockerFixture,
    ) -> None:
        doomed = await seed.user("doomed")
        other = await seed.user("other")
        own_blog = await seed.blog(doomed, "Doomed user's post")
        other_blog = await seed.blog(other, "Other user's post")
        on_own_blog = await seed.comment(own_blog, other, "comment on doomed blog")
        by_doomed = await seed.comment(other_blog, doomed, "comment by doomed user")
        mocker.patch.object(
            CommentRepository,
            "delete_by_user",
            side_effect=OperationalError("DELETE FROM comments", {}, Exception("disk I/O error")),
        )

        response = await client.delete(f"/users/{doomed.id}")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "disk I/O error" in response.json()["error"]

        assert (await client.get(f"/users/{doomed.id}")).status_code == status.HTTP_200_OK
        assert ids((await client.get(f"/users/{doomed.id}/blogs")).json()) == [own_blog.id]
        own_detail = await client.get(f"/blogs/{own_blog.id}")
        assert ids(own_detail.json()["comments"]) == [on_own_blog.id]
        assert ids((await client.get(f"/users/{doomed.id}/comments")).json()) == [by_doomed.id]

    @pytest.mark.asyncio
    async def test_delete_unknown_user_is_404(self, client: AsyncClient) -> None:
        response = await client.delete(f"/users/{uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_invalid_id_is_400(self, client: AsyncClient) -> None:
        response = await client.delete("/users/abc")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUserListings:
    @pytest.mark.asyncio
    async def test_user_blogs(self, client: AsyncClient, seed: "Seeder") -> None:
        author = await seed.user("writer", "Will", "Writer")
        other = await seed.user("other")
        first = await seed.blog(author, "First post here")
        await seed.blog(other, "Not mine at all")
        second = await seed.blog(author, "Second post here")

        response = await client.get(f"/users/{author.id}/blogs")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert ids(data) == [first.id, second.id]
        assert all(blog["author"]["username"] == "writer" for blog in data)

    @pytest.mark.asyncio
    async def test_user_comments(self, client: AsyncClient, seed: "Seeder") -> None:
        author = await seed.user("writer")
        reader = await seed.user("reader")
        blog = await seed.blog(author, "First post here")
        mine = await seed.comment(blog, reader, "mine")
        await seed.comment(blog, author, "not mine")

        response = await client.get(f"/users/{reader.id}/comments")

        assert ids(response.json()) == [mine.id]
        assert response.json()[0]["user"]["username"] == "reader"

    @pytest.mark.asyncio
    async def test_listings_of_unknown_user_are_404(self, client: AsyncClient) -> None:
        unknown = uuid4()

        assert (await client.get(f"/users/{unknown}/blogs")).status_code == 404
        assert (await client.get(f"/users/{unknown}/comments")).status_code == 404


class TestListUsers:
    @pytest.mark.asyncio
    async def test_exact_match_filters(self, client: AsyncClient, seed: "Seeder") -> None:
        john = await seed.user("johndoe", "John", "Doe")
        await seed.user("johnny", "Johnny", "Doe")
        await seed.user("jane", "Jane", "Roe")

        by_username = await client.get("/users", params={"username": "johndoe"})
        by_first_name = await client.get("/users", params={"firstName": "John"})
        by_last_name = await client.get("/users", params={"lastName": "Doe"})
        by_email = await client.get("/users", params={"email": "JOHNDOE@example.com"})

        assert ids(by_username.json()) == [john.id]
        assert ids(by_first_name.json()) == [john.id]
        assert len(by_last_name.json()) == 2
        assert ids(by_email.json()) == [john.id]

    @pytest.mark.asyncio
    async def test_sort_by_username(self, client: AsyncClient, seed: "Seeder") -> None:
        await seed.user("mike")
        await seed.user("alice")
        await seed.user("zoe")

        asc = await client.get("/users", params={"sort": "username_asc"})
        desc = await client.get("/users", params={"sort": "username_desc"})

        assert [u["username"] for u in asc.json()] == ["alice", "mike", "zoe"]
        assert [u["username"] for u in desc.json()] == ["zoe", "mike", "alice"]

    @pytest.mark.asyncio
    async def test_sort_by_comments_count(self, client: AsyncClient, seed: "Seeder") -> None:
        quiet = await seed.user("quiet")
        chatty = await seed.user("chatty")
        some = await seed.user("some")
        blog = await seed.blog(quiet, "A post to discuss")
        for _ in range(3):
            await seed.comment(blog, chatty)
        await seed.comment(blog, some)

        asc = await client.get("/users", params={"sort": "commentsCount_asc"})
        desc = await client.get("/users", params={"sort": "commentsCount_desc"})

        assert ids(asc.json()) == [quiet.id, some.id, chatty.id]
        assert ids(desc.json()) == [chatty.id, some.id, quiet.id]

    @pytest.mark.asyncio
    async def test_blog_sort_field_is_rejected_for_users(self, client: AsyncClient) -> None:
        response = await client.get("/users", params={"sort": "avgNote_desc"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_unknown_key_is_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/users", params={"nickname": "jo"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "nickname: Extra inputs are not permitted"}
