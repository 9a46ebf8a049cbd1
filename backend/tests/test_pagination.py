"""
Unit Tests for Pagination Metadata
"""

import pytest

from library_api.shaping import PagedResult, page_offset, paginate


class TestPaginate:
    """Test suite for paginate"""

    def test_middle_of_three_pages(self):
        """Test 25 items, 10 per page, page 2"""
        metadata = paginate(25, 10, 2)

        assert metadata.total_pages == 3
        assert metadata.has_next
        assert metadata.has_previous

    def test_last_page(self):
        metadata = paginate(25, 10, 3)

        assert metadata.total_pages == 3
        assert not metadata.has_next
        assert metadata.has_previous

    def test_first_page(self):
        metadata = paginate(25, 10, 1)

        assert metadata.has_next
        assert not metadata.has_previous

    def test_empty_collection(self):
        """Test no items means no pages and no navigation"""
        metadata = paginate(0, 10, 1)

        assert metadata.total_pages == 0
        assert not metadata.has_next
        assert not metadata.has_previous

    def test_page_past_the_end_is_not_an_error(self):
        metadata = paginate(25, 10, 7)

        assert metadata.total_pages == 3
        assert not metadata.has_next
        assert metadata.has_previous

    @pytest.mark.parametrize("total_count,page_size,expected", [
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (20, 20, 1),
        (21, 20, 2),
    ])
    def test_total_pages_rounds_up(self, total_count, page_size, expected):
        assert paginate(total_count, page_size, 1).total_pages == expected

    def test_counts_use_wire_names(self):
        assert paginate(25, 10, 3).counts() == {
            "totalCount": 25,
            "pageSize": 10,
            "currentPage": 3,
            "totalPages": 3,
        }

    def test_page_offset(self):
        assert page_offset(10, 1) == 0
        assert page_offset(10, 3) == 20


class TestPagedResult:

    def test_create(self):
        result = PagedResult.create(["a", "b"], total_count=12, page_size=2, page_number=6)

        assert result.items == ["a", "b"]
        assert result.total_count == 12
        assert result.total_pages == 6
        assert not result.has_next
        assert result.has_previous
