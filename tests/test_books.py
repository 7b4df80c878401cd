"""
Tests for Books API Endpoints

This module tests all CRUD operations for the /api/books endpoints.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_success, test_get_book_not_found

TESTING BEST PRACTICES:
1. Arrange: Set up test data and conditions
2. Act: Perform the action being tested
3. Assert: Verify the expected outcome
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi import status

from app.dependencies import get_book_service
from app.errors import InternalError, InvalidAuthorIdError
from app.main import app
from app.services import BookService
from tests.conftest import API


def book_payload(author_id, title="Animal Farm"):
    return {
        "title": title,
        "description": "An allegorical novella about a farm revolt.",
        "author_id": str(author_id),
    }


class TestCreateBook:
    """Tests for POST /api/books endpoint."""

    async def test_create_book_success(self, client, sample_author):
        """Test creating a book returns it with the resolved author."""
        response = await client.post(f"{API}/books", json=book_payload(sample_author.id))

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "success"
        assert data["message"] == "Book created successfully"
        assert data["book"]["title"] == "Animal Farm"
        assert data["book"]["author"] == {
            "id": str(sample_author.id),
            "name": sample_author.name,
        }
        uuid.UUID(data["book"]["id"])

    async def test_create_book_omits_description(self, client, sample_author):
        """Test that the response projection has no description field."""
        response = await client.post(f"{API}/books", json=book_payload(sample_author.id))

        assert set(response.json()["book"]) == {"id", "title", "author"}

    async def test_create_book_author_not_found(self, client):
        """Test that a well-formed but unknown author id returns 404."""
        response = await client.post(f"{API}/books", json=book_payload(uuid.uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Author not found"}

    async def test_create_book_invalid_author_id(self, client):
        """Test that a malformed author id returns 400 invalid author ID."""
        response = await client.post(f"{API}/books", json=book_payload("not-a-uuid"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"status": "error", "message": "invalid author ID"}

    async def test_create_book_duplicate_title(self, client, sample_book, sample_author):
        """Test that a title already in use is rejected with 409."""
        response = await client.post(
            f"{API}/books",
            json=book_payload(sample_author.id, title=sample_book.title),
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {
            "status": "error",
            "message": "Book with this name already exists",
        }

    async def test_create_book_missing_fields(self, client):
        """Test that every missing field is reported, in declaration order."""
        response = await client.post(f"{API}/books", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "status": "error",
            "message": "Validation failed",
            "errors": [
                {"field": "Title", "message": "Title is required"},
                {"field": "Description", "message": "Description is required"},
                {"field": "AuthorID", "message": "AuthorID is required"},
            ],
        }

    async def test_create_book_empty_title(self, client, sample_author):
        """Test that an empty title fails validation."""
        payload = book_payload(sample_author.id, title="")
        response = await client.post(f"{API}/books", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"] == [{"field": "Title", "message": "Title is required"}]

    async def test_create_book_malformed_json(self, client):
        """Test that a body that is not JSON gets the short error."""
        response = await client.post(
            f"{API}/books",
            content=b"title=1984",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"status": "error", "message": "Invalid request body"}

    async def test_create_book_author_id_wrong_type(self, client):
        """Test that a numeric author_id cannot be decoded into the request."""
        payload = {"title": "1984", "description": "Dystopia.", "author_id": 42}
        response = await client.post(f"{API}/books", json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"status": "error", "message": "Invalid request body"}


class TestListBooks:
    """Tests for GET /api/books endpoint."""

    async def test_list_books_empty(self, client):
        """Test that an empty catalogue is reported as not found."""
        response = await client.get(f"{API}/books")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Book not found"}

    async def test_list_books_with_data(self, client, sample_book, sample_author):
        """Test listing books returns expected data."""
        response = await client.get(f"{API}/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Books retrieved successfully"
        assert data["books"] == [
            {
                "id": str(sample_book.id),
                "title": "1984",
                "author": {"id": str(sample_author.id), "name": "George Orwell"},
            }
        ]

    async def test_list_books_includes_books_without_author(
        self, client, sample_book, orphan_book, sample_author
    ):
        """Test that a book with no author is listed with author null."""
        third = (await client.post(f"{API}/books", json=book_payload(sample_author.id))).json()

        response = await client.get(f"{API}/books")

        assert response.status_code == status.HTTP_200_OK
        books = {book["id"]: book for book in response.json()["books"]}
        assert set(books) == {str(sample_book.id), str(orphan_book.id), third["book"]["id"]}
        assert books[str(orphan_book.id)]["author"] is None
        assert books[str(sample_book.id)]["author"]["name"] == "George Orwell"
        assert books[third["book"]["id"]]["author"]["id"] == str(sample_author.id)

    async def test_list_books_is_idempotent(self, client, sample_book, orphan_book):
        """Test that repeated reads return identical bodies."""
        first = await client.get(f"{API}/books")
        second = await client.get(f"{API}/books")

        assert first.content == second.content


class TestGetBook:
    """Tests for GET /api/books/{book_id} endpoint."""

    async def test_get_book_success(self, client, sample_book, sample_author):
        """Test getting an existing book by ID."""
        response = await client.get(f"{API}/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "status": "success",
            "message": "Book retrieved successfully",
            "book": {
                "id": str(sample_book.id),
                "title": "1984",
                "author": {"id": str(sample_author.id), "name": "George Orwell"},
            },
        }

    async def test_get_book_without_author(self, client, orphan_book):
        """Test that author is serialized as null, not omitted."""
        response = await client.get(f"{API}/books/{orphan_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["book"]["author"] is None

    async def test_get_book_after_create(self, client, sample_author):
        """Test that a created book reads back exactly as it was returned."""
        created = (await client.post(f"{API}/books", json=book_payload(sample_author.id))).json()

        response = await client.get(f"{API}/books/{created['book']['id']}")

        assert response.json()["book"] == created["book"]

    async def test_get_book_not_found(self, client):
        """Test getting a non-existent book returns 404."""
        response = await client.get(f"{API}/books/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Book not found"}

    async def test_get_book_invalid_uuid(self, client):
        """Test that a malformed id is rejected with 400."""
        response = await client.get(f"{API}/books/12345")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"status": "error", "message": "Invalid uuid"}

    async def test_get_book_after_author_deleted(self, client, db_session, sample_book, sample_author):
        """Test that deleting the author leaves the book with author null."""
        await db_session.delete(sample_author)
        await db_session.commit()

        response = await client.get(f"{API}/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["book"]["author"] is None

    async def test_get_book_trailing_slash(self, client, sample_book):
        """Test that a trailing slash is served directly, without a redirect."""
        response = await client.get(f"{API}/books/{sample_book.id}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["book"]["id"] == str(sample_book.id)


class TestUpdateBook:
    """Tests for PUT /api/books/{book_id} endpoint."""

    async def test_update_book_description(self, client, db_session, sample_book):
        """Test that the description is replaced and the title kept."""
        response = await client.put(
            f"{API}/books/{sample_book.id}",
            json={"description": "Big Brother is watching you."},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Book updated successfully"
        assert data["book"]["id"] == str(sample_book.id)
        assert data["book"]["title"] == "1984"

        await db_session.refresh(sample_book)
        assert sample_book.description == "Big Brother is watching you."
        assert sample_book.title == "1984"

    async def test_update_book_keeps_author(self, client, sample_book, sample_author):
        """Test that updating does not detach the author."""
        response = await client.put(
            f"{API}/books/{sample_book.id}",
            json={"description": "Revised."},
        )

        assert response.json()["book"]["author"]["id"] == str(sample_author.id)

    async def test_update_book_not_found(self, client):
        """Test updating a non-existent book returns 404."""
        response = await client.put(
            f"{API}/books/{uuid.uuid4()}",
            json={"description": "Nothing to update."},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Book not found"}

    async def test_update_book_invalid_uuid(self, client):
        """Test that a malformed id is rejected with 400."""
        response = await client.put(f"{API}/books/abc", json={"description": "x"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid uuid"

    async def test_update_book_empty_description(self, client, sample_book):
        """Test that an empty description fails validation."""
        response = await client.put(f"{API}/books/{sample_book.id}", json={"description": ""})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"] == [
            {"field": "Description", "message": "Description is required"}
        ]


class TestDeleteBook:
    """Tests for DELETE /api/books/{book_id} endpoint."""

    async def test_delete_book_success(self, client, sample_book):
        """Test deleting a book, then that it is gone."""
        response = await client.delete(f"{API}/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "success", "message": "Book deleted successfully"}

        response = await client.get(f"{API}/books/{sample_book.id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_delete_book_keeps_author(self, client, sample_book, sample_author):
        """Test that deleting a book leaves its author alone."""
        await client.delete(f"{API}/books/{sample_book.id}")

        response = await client.get(f"{API}/authors/{sample_author.id}")
        assert response.status_code == status.HTTP_200_OK

    async def test_delete_book_not_found(self, client):
        """Test deleting a non-existent book returns 404."""
        response = await client.delete(f"{API}/books/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"status": "error", "message": "Book not found"}

    async def test_delete_book_invalid_uuid(self, client):
        """Test that a malformed id is rejected with 400."""
        response = await client.delete(f"{API}/books/nope")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Invalid uuid"


class TestSecureRoute:
    """Tests for GET /api/books/secure endpoint."""

    @pytest.mark.parametrize("headers", [{}, {"Authorization": "anything"}])
    async def test_secure_route_answers_ok(self, client, headers):
        """Test that the route answers ok with or without a key."""
        response = await client.get(f"{API}/books/secure", headers=headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "success", "message": "ok"}


class TestUnexpectedErrors:
    """Failures without a mapping must leave as a generic 500."""

    @pytest.fixture
    def failing_service(self, client):
        service = AsyncMock(spec=BookService)
        app.dependency_overrides[get_book_service] = lambda: service
        return service

    async def test_unhandled_exception_returns_500(self, client, failing_service):
        """Test that an arbitrary exception is hidden behind the generic message."""
        failing_service.get_all_books.side_effect = RuntimeError("connection reset by peer")

        response = await client.get(f"{API}/books")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"status": "error", "message": "Internal server error"}

    async def test_internal_error_returns_500(self, client, failing_service):
        """Test that an InternalError never leaks its detail."""
        failing_service.get_book_by_id.side_effect = InternalError("book", "failed retrieving book")

        response = await client.get(f"{API}/books/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"status": "error", "message": "Internal server error"}

    async def test_unmapped_domain_error_returns_500(self, client, failing_service):
        """Test that a known kind on the wrong entity still maps to 500."""
        error = InvalidAuthorIdError()
        error.entity = "author"
        failing_service.create_book.side_effect = error

        response = await client.post(f"{API}/books", json=book_payload(uuid.uuid4()))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Internal server error"
