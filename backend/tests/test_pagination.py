from buildings_api.core.errors import ValidationError
from buildings_api.query.pagination import build_pagination_meta, clamp_pagination, normalize_pagination, page_size
import pytest


class TestNormalizePagination:

    def test_defaults(self):
        assert normalize_pagination(None, None) == (20, 0)

    @pytest.mark.parametrize('limit', [1, 50, 100])
    def test_limits_in_range(self, limit):
        assert normalize_pagination(limit, 7) == (limit, 7)

    @pytest.mark.parametrize('limit', [0, -1, 101, 1000])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValidationError) as exc_info:
            normalize_pagination(limit, 0)

        assert exc_info.value.field == 'limit'

    def test_negative_offset(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_pagination(10, -1)

        assert exc_info.value.field == 'offset'

    @pytest.mark.parametrize('value', ['10', 2.5, True])
    def test_non_integer(self, value):
        with pytest.raises(ValidationError, match='must be an integer'):
            normalize_pagination(value, 0)


class TestClampPagination:

    def test_clamps_into_bounds(self):
        assert clamp_pagination(500, -3) == (100, 0)
        assert clamp_pagination(0, 5) == (1, 5)
        assert clamp_pagination(None, None) == (20, 0)


class TestPaginationMeta:

    def test_single_short_page(self):
        meta = build_pagination_meta(total=5, limit=20, offset=0)

        assert (meta.total, meta.has_next, meta.has_previous) == (5, False, False)

    def test_offset_beyond_total(self):
        meta = build_pagination_meta(total=10, limit=20, offset=100)

        assert meta.has_next is False
        assert meta.has_previous is True

    def test_exact_boundary_has_no_next(self):
        assert build_pagination_meta(total=40, limit=20, offset=20).has_next is False
        assert build_pagination_meta(total=41, limit=20, offset=20).has_next is True

    @pytest.mark.parametrize('total, limit, offset', [
        (0, 20, 0), (1, 1, 0), (25, 10, 10), (25, 10, 20), (3, 100, 2), (10, 5, 100),
    ])
    def test_flags_follow_total(self, total, limit, offset):
        meta = build_pagination_meta(total, limit, offset)

        assert meta.has_next == (offset + limit < total)
        assert meta.has_previous == (offset > 0)
        assert (meta.limit, meta.offset) == (limit, offset)

    def test_serialized_with_camel_case_flags(self):
        dumped = build_pagination_meta(30, 10, 10).model_dump(by_alias=True)

        assert dumped == {'total': 30, 'limit': 10, 'offset': 10, 'hasNext': True, 'hasPrevious': True}


@pytest.mark.parametrize('total, limit, offset, expected', [
    (5, 20, 0, 5), (10, 20, 100, 0), (25, 10, 20, 5), (25, 10, 0, 10), (0, 1, 0, 0),
])
def test_page_size(total, limit, offset, expected):
    assert page_size(total, limit, offset) == expected
