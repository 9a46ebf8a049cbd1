"""
Integration Tests for Book Endpoints

Books are nested under their author; the list is sortable and shapeable
but not paged.
"""

from uuid import uuid4

import pytest

HATEOAS = "application/vnd.marvin.hateoas+json"


def books_url(author_id, book_id=None) -> str:
    url = f"/api/authors/{author_id}/books"
    return f"{url}/{book_id}" if book_id else url


class TestListBooks:
    """Test suite for an author's book list"""

    @pytest.mark.asyncio()
    async def test_list_books_sorted_by_title(self, client, sample_author):
        response = await client.get(books_url(sample_author["id"]))

        assert response.status_code == 200
        titles = [book["title"] for book in response.json()]
        assert titles == ["A Wizard of Earthsea", "The Left Hand of Darkness"]
        assert "X-Pagination" not in response.headers

    @pytest.mark.asyncio()
    async def test_list_books_order_by_title_desc(self, client, sample_author):
        response = await client.get(books_url(sample_author["id"]), params={"orderBy": "title desc"})

        assert response.json()[0]["title"] == "The Left Hand of Darkness"

    @pytest.mark.asyncio()
    async def test_list_books_shaped(self, client, sample_author):
        response = await client.get(books_url(sample_author["id"]), params={"fields": "title,authorId"})

        for book in response.json():
            assert list(book) == ["title", "authorId"]
            assert book["authorId"] == sample_author["id"]

    @pytest.mark.asyncio()
    async def test_author_sort_field_is_invalid_for_books(self, client, sample_author):
        """Test sort fields are validated against the book mapping"""
        response = await client.get(books_url(sample_author["id"]), params={"orderBy": "Name"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ORDER_BY"

    @pytest.mark.asyncio()
    async def test_invalid_fields(self, client, sample_author):
        response = await client.get(books_url(sample_author["id"]), params={"fields": "genre"})

        assert response.status_code == 400

    @pytest.mark.asyncio()
    async def test_unknown_author(self, client):
        response = await client.get(books_url(uuid4()))

        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_hateoas_book_list(self, client, sample_author):
        """Test the unpaged list gets a self link only"""
        response = await client.get(books_url(sample_author["id"]), headers={"Accept": HATEOAS})

        assert response.status_code == 200
        data = response.json()
        assert [link["rel"] for link in data["links"]] == ["self"]
        assert f"/api/authors/{sample_author['id']}/books" in data["links"][0]["href"]
        for book in data["value"]:
            assert [link["rel"] for link in book["links"]] == ["self", "delete_book", "update_book"]
            assert book["id"] in book["links"][0]["href"]


class TestBookResource:
    """Test suite for a single book"""

    @pytest.mark.asyncio()
    async def test_create_and_get_book(self, client, sample_author):
        response = await client.post(
            books_url(sample_author["id"]),
            json={"title": "Tehanu", "description": "The fourth Earthsea book"}
        )

        assert response.status_code == 201
        book = response.json()
        assert book["authorId"] == sample_author["id"]
        assert response.headers["Location"].endswith(books_url(sample_author["id"], book["id"]))

        fetched = await client.get(response.headers["Location"])
        assert fetched.json() == book

    @pytest.mark.asyncio()
    async def test_create_book_description_equals_title(self, client, sample_author):
        response = await client.post(
            books_url(sample_author["id"]),
            json={"title": "Same", "description": "Same"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_create_book_for_unknown_author(self, client):
        response = await client.post(books_url(uuid4()), json={"title": "Orphan"})

        assert response.status_code == 404

    @pytest.mark.asyncio()
    async def test_get_book_with_links_and_fields(self, client, sample_author):
        books = (await client.get(books_url(sample_author["id"]))).json()

        response = await client.get(
            books_url(sample_author["id"], books[0]["id"]),
            params={"fields": "title"},
            headers={"Accept": HATEOAS}
        )

        data = response.json()
        assert list(data) == ["title", "links"]
        assert "fields=title" in data["links"][0]["href"]

    @pytest.mark.asyncio()
    async def test_book_of_another_author_not_found(self, client, sample_author, sample_author_payload):
        other = (await client.post("/api/authors", json=sample_author_payload)).json()
        books = (await client.get(books_url(sample_author["id"]))).json()

        response = await client.get(books_url(other["id"], books[0]["id"]))

        assert response.status_code == 404


class TestUpdateBook:
    """Test suite for PUT (full update or create)"""

    @pytest.mark.asyncio()
    async def test_update_existing_book(self, client, sample_author):
        books = (await client.get(books_url(sample_author["id"]))).json()
        url = books_url(sample_author["id"], books[0]["id"])

        response = await client.put(url, json={"title": "Earthsea", "description": "Updated"})

        assert response.status_code == 204
        assert (await client.get(url)).json()["title"] == "Earthsea"

    @pytest.mark.asyncio()
    async def test_put_unknown_book_creates_it(self, client, sample_author):
        """Test PUT to an unused book id creates the book under that id"""
        book_id = str(uuid4())

        response = await client.put(
            books_url(sample_author["id"], book_id),
            json={"title": "Tales from Earthsea", "description": "Short stories"}
        )

        assert response.status_code == 201
        assert response.json()["id"] == book_id
        assert response.headers["Location"].endswith(books_url(sample_author["id"], book_id))

    @pytest.mark.asyncio()
    async def test_put_requires_description(self, client, sample_author):
        response = await client.put(books_url(sample_author["id"], uuid4()), json={"title": "No description"})

        assert response.status_code == 422

    @pytest.mark.asyncio()
    async def test_put_book_id_of_another_author(self, client, sample_author, sample_author_payload):
        other = (await client.post("/api/authors", json=sample_author_payload)).json()
        books = (await client.get(books_url(sample_author["id"]))).json()

        response = await client.put(
            books_url(other["id"], books[0]["id"]),
            json={"title": "Stolen", "description": "Not yours"}
        )

        assert response.status_code == 409


class TestDeleteBook:

    @pytest.mark.asyncio()
    async def test_delete_book(self, client, sample_author):
        books = (await client.get(books_url(sample_author["id"]))).json()
        url = books_url(sample_author["id"], books[0]["id"])

        response = await client.delete(url)

        assert response.status_code == 204
        assert (await client.get(url)).status_code == 404
        assert len((await client.get(books_url(sample_author["id"]))).json()) == 1

    @pytest.mark.asyncio()
    async def test_delete_unknown_book(self, client, sample_author):
        response = await client.delete(books_url(sample_author["id"], uuid4()))

        assert response.status_code == 404
