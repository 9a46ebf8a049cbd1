"""
Integration Tests for Author Collection Endpoints
"""

from uuid import uuid4

import pytest


@pytest.fixture()
def authors_payload():
    return [
        {"firstName": "Jane", "lastName": "Austen", "dateOfBirth": "1775-12-16",
         "dateOfDeath": "1817-07-18", "genre": "Romance"},
        {"firstName": "Mary", "lastName": "Shelley", "dateOfBirth": "1797-08-30",
         "dateOfDeath": "1851-02-01", "genre": "Gothic"},
    ]


class TestAuthorCollections:
    """Test suite for author collections"""

    @pytest.mark.asyncio()
    async def test_create_and_read_back(self, client, authors_payload):
        """Test the Location of a created collection returns the same authors"""
        response = await client.post("/api/authorcollections", json=authors_payload)

        assert response.status_code == 201
        created = response.json()
        assert [author["name"] for author in created] == ["Jane Austen", "Mary Shelley"]

        location = response.headers["Location"]
        assert "/api/authorcollections/(" in location

        fetched = await client.get(location)
        assert fetched.status_code == 200
        assert {author["id"] for author in fetched.json()} == {author["id"] for author in created}

    @pytest.mark.asyncio()
    async def test_empty_collection_rejected(self, client):
        response = await client.post("/api/authorcollections", json=[])

        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_invalid_author_rejects_whole_collection(self, client, authors_payload):
        authors_payload[1]["dateOfBirth"] = "not-a-date"

        response = await client.post("/api/authorcollections", json=authors_payload)

        assert response.status_code == 422
        assert (await client.get("/api/authors")).json() == []

    @pytest.mark.asyncio()
    async def test_malformed_ids(self, client):
        response = await client.get("/api/authorcollections/(abc,def)")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_IDENTIFIERS"

    @pytest.mark.asyncio()
    async def test_missing_author(self, client, sample_author):
        """Test one unknown id makes the whole collection not found"""
        response = await client.get(f"/api/authorcollections/({sample_author['id']},{uuid4()})")

        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_duplicate_ids(self, client, sample_author):
        author_id = sample_author["id"]

        response = await client.get(f"/api/authorcollections/({author_id},{author_id})")

        assert response.status_code == 200
        assert len(response.json()) == 1
