"""
Unit Tests for URI and Link Building
"""

from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

import pytest
from starlette.requests import Request

from library_api.core.exceptions import ConfigurationError, RouteResolutionError
from library_api.domain.library_resources import AUTHOR_LINKS, BOOK_LINKS
from library_api.main import app
from library_api.shaping import (
    AuthorsResourceParameters,
    BooksResourceParameters,
    LinkBuilder,
    LinkIntent,
    LinkTableRegistry,
    LinkTemplate,
    ResourceUriBuilder,
    StarletteRouteResolver,
)


def query_of(uri: str) -> dict:
    return {name: values[0] for name, values in parse_qs(urlsplit(uri).query).items()}


@pytest.fixture()
def link_tables():
    tables = LinkTableRegistry()
    tables.register("author", AUTHOR_LINKS)
    tables.register("book", BOOK_LINKS)
    tables.freeze()
    return tables


@pytest.fixture()
def params():
    return AuthorsResourceParameters(
        page_number=2,
        page_size=5,
        fields="id,name",
        order_by="Name desc",
        search_query="king",
        genre="Horror"
    )


class TestResourceUriBuilder:
    """Test suite for ResourceUriBuilder"""

    def test_current_page_keeps_every_parameter(self, resolver, params):
        uri = ResourceUriBuilder(resolver).build("GetAuthors", params)

        assert query_of(uri) == {
            "fields": "id,name",
            "orderBy": "Name desc",
            "searchQuery": "king",
            "genre": "Horror",
            "pageNumber": "2",
            "pageSize": "5",
        }

    def test_next_and_previous_shift_the_page_only(self, resolver, params):
        """Test navigating keeps filters, sort and fields"""
        uris = ResourceUriBuilder(resolver)

        next_query = query_of(uris.build("GetAuthors", params, LinkIntent.NEXT))
        previous_query = query_of(uris.build("GetAuthors", params, LinkIntent.PREVIOUS))

        assert next_query["pageNumber"] == "3"
        assert previous_query["pageNumber"] == "1"
        for query in (next_query, previous_query):
            assert query["searchQuery"] == "king"
            assert query["orderBy"] == "Name desc"
            assert query["pageSize"] == "5"

    def test_next_then_previous_round_trips(self, resolver, params):
        """Test building Next from the Previous page returns the current URI"""
        uris = ResourceUriBuilder(resolver)
        current = uris.build("GetAuthors", params)
        previous_params = params.with_page(params.page_number - 1)

        assert uris.build("GetAuthors", previous_params, LinkIntent.NEXT) == current

    def test_params_are_not_mutated(self, resolver, params):
        ResourceUriBuilder(resolver).build("GetAuthors", params, LinkIntent.NEXT)

        assert params.page_number == 2

    def test_unset_filters_are_omitted(self, resolver):
        uri = ResourceUriBuilder(resolver).build("GetAuthors", AuthorsResourceParameters())

        assert query_of(uri) == {"orderBy": "Name", "pageNumber": "1", "pageSize": "10"}

    def test_route_values_are_passed_through(self, resolver):
        author_id = uuid4()
        ResourceUriBuilder(resolver).build(
            "GetBooksForAuthor", BooksResourceParameters(), route_values={"author_id": author_id}
        )

        route_name, path_params, query_params = resolver.calls[-1]
        assert route_name == "GetBooksForAuthor"
        assert path_params == {"author_id": author_id}
        assert query_params["orderBy"] == "Title"
        assert "author_id" not in query_params

    def test_unpaged_params_cannot_navigate(self, resolver):
        with pytest.raises(ValueError):
            ResourceUriBuilder(resolver).build("GetBooksForAuthor", BooksResourceParameters(), LinkIntent.NEXT)


class TestLinkBuilder:
    """Test suite for LinkBuilder"""

    def test_author_links(self, link_tables, resolver):
        """Test an author gets self, delete, create-book and books links"""
        author_id = uuid4()
        links = LinkBuilder(link_tables, resolver).links_for_resource("author", {"author_id": author_id})

        assert [(link.rel, link.method) for link in links] == [
            ("self", "GET"),
            ("delete_author", "DELETE"),
            ("create_book_for_author", "POST"),
            ("books", "GET"),
        ]
        assert all(f"author_id={author_id}" in link.href for link in links)

    def test_self_link_carries_fields(self, link_tables, resolver):
        links = LinkBuilder(link_tables, resolver).links_for_resource(
            "author", {"author_id": uuid4()}, fields="id,name"
        )

        assert query_of(links[0].href)["fields"] == "id,name"
        assert "fields" not in query_of(links[1].href)

    def test_book_links_need_both_identifiers(self, link_tables, resolver):
        builder = LinkBuilder(link_tables, resolver)

        links = builder.links_for_resource("book", {"author_id": uuid4(), "book_id": uuid4()})
        assert [link.rel for link in links] == ["self", "delete_book", "update_book"]

        with pytest.raises(RouteResolutionError):
            builder.links_for_resource("book", {"author_id": uuid4()})

    def test_unknown_kind_raises(self, link_tables, resolver):
        with pytest.raises(ConfigurationError):
            LinkBuilder(link_tables, resolver).links_for_resource("publisher", {})

    def test_collection_links_follow_flags(self, link_tables, resolver, params):
        builder = LinkBuilder(link_tables, resolver)

        assert [link.rel for link in builder.links_for_collection("GetAuthors", params)] == ["self"]
        assert [
            link.rel
            for link in builder.links_for_collection("GetAuthors", params, has_next=True, has_previous=True)
        ] == ["self", "next_page", "previous_page"]

    def test_link_serialization(self, link_tables, resolver):
        link = LinkBuilder(link_tables, resolver).links_for_resource("author", {"author_id": 1})[0]

        assert set(link.to_dict()) == {"href", "rel", "method"}


class TestLinkTableRegistry:

    def test_duplicate_and_late_registration_rejected(self):
        tables = LinkTableRegistry()
        tables.register("author", AUTHOR_LINKS)

        with pytest.raises(ConfigurationError):
            tables.register("author", AUTHOR_LINKS)

        tables.freeze()
        with pytest.raises(ConfigurationError):
            tables.register("book", [LinkTemplate("self", "GET", "GetBookForAuthor")])


@pytest.fixture()
def app_resolver():
    """Resolver bound to the real application routes"""
    request = Request({
        "type": "http",
        "app": app,
        "router": app.router,
        "scheme": "http",
        "server": ("test", 80),
        "path": "/",
        "root_path": "",
        "query_string": b"",
        "headers": [],
    })
    return StarletteRouteResolver(request)


class TestStarletteRouteResolver:
    """Test suite for resolving links against the application routes"""

    def test_collection_route_with_query(self, app_resolver):
        uri = app_resolver.resolve("GetAuthors", {}, {"pageNumber": 2, "genre": "Horror"})

        assert urlsplit(uri).path == "/api/authors"
        assert query_of(uri) == {"pageNumber": "2", "genre": "Horror"}

    def test_nested_route_with_path_params(self, app_resolver):
        author_id, book_id = uuid4(), uuid4()

        uri = app_resolver.resolve("GetBookForAuthor", {"author_id": author_id, "book_id": book_id})

        assert uri == f"http://test/api/authors/{author_id}/books/{book_id}"

    def test_none_query_values_are_dropped(self, app_resolver):
        uri = app_resolver.resolve("GetAuthor", {"author_id": uuid4()}, {"fields": None})

        assert urlsplit(uri).query == ""

    def test_unknown_route_raises(self, app_resolver):
        with pytest.raises(RouteResolutionError):
            app_resolver.resolve("GetPublishers", {})

    def test_missing_path_param_raises(self, app_resolver):
        with pytest.raises(RouteResolutionError):
            app_resolver.resolve("GetBookForAuthor", {"author_id": uuid4()})

    def test_author_links_against_app(self, link_tables, app_resolver):
        author_id = uuid4()

        links = LinkBuilder(link_tables, app_resolver).links_for_resource(
            "author", {"author_id": author_id}, fields="id,name"
        )

        assert [urlsplit(link.href).path for link in links] == [
            f"/api/authors/{author_id}",
            f"/api/authors/{author_id}",
            f"/api/authors/{author_id}/books",
            f"/api/authors/{author_id}/books",
        ]
        assert query_of(links[0].href) == {"fields": "id,name"}

    def test_paged_collection_links_against_app(self, link_tables, app_resolver, params):
        links = LinkBuilder(link_tables, app_resolver).links_for_collection(
            "GetAuthors", params, has_next=True, has_previous=True
        )

        assert [query_of(link.href)["pageNumber"] for link in links] == ["2", "3", "1"]
        assert all(query_of(link.href)["genre"] == "Horror" for link in links)
