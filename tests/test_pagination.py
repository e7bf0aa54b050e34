from __future__ import annotations

import pytest

from services.recipe.utils.pagination import (
    PageBounds,
    build_paginated_response,
    normalize_pagination,
    total_pages,
)


def test_defaults_when_absent():
    assert normalize_pagination() == PageBounds(page=1, limit=10, skip=0)


@pytest.mark.parametrize("page", [0, -3, "0", "-1", "abc", "", None, True, float("nan"), [2]])
def test_invalid_page_behaves_as_first_page(page):
    assert normalize_pagination(page, 10).page == 1


@pytest.mark.parametrize(
    "limit,expected",
    [
        (0, 1),
        (-5, 1),
        (101, 100),
        ("1000", 100),
        ("25", 25),
        (None, 10),
        ("ten", 10),
        (float("inf"), 10),
    ],
)
def test_limit_is_clamped(limit, expected):
    assert normalize_pagination(1, limit).limit == expected


def test_skip_uses_normalized_values():
    assert normalize_pagination("3", "20") == PageBounds(page=3, limit=20, skip=40)
    assert normalize_pagination(2.9, 5) == PageBounds(page=2, limit=5, skip=5)


@pytest.mark.parametrize(
    "total,limit,expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (250, 100, 3)],
)
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_envelope():
    bounds = normalize_pagination(2, 2)
    body = build_paginated_response(["c", "d"], bounds, 5)
    assert body == {"data": ["c", "d"], "total": 5, "page": 2, "limit": 2, "total_pages": 3}


def test_empty_envelope_has_zero_pages():
    body = build_paginated_response([], normalize_pagination(), 0)
    assert body["total"] == 0
    assert body["total_pages"] == 0
