from __future__ import annotations

from recipe_catalog.services.pagination import MAX_PAGE, page_request, parse_int, total_pages


def test_defaults():
    req = page_request()
    assert (req.page, req.limit, req.skip) == (1, 10, 0)


def test_clamping():
    assert page_request(0, 0).page == 1
    assert page_request(0, 0).limit == 1
    assert page_request(-3, 500).limit == 50
    assert page_request(10**30, 10).page == MAX_PAGE


def test_lenient_parsing():
    assert parse_int("3", 1) == 3
    assert parse_int(" 7abc", 1) == 7
    assert parse_int("abc", 1) == 1
    assert parse_int(None, 10) == 10
    req = page_request("2", "abc")
    assert (req.page, req.limit, req.skip) == (2, 10, 10)


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(1, 10) == 1
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2


def test_oversized_numbers_are_clamped():
    huge = "9" * 5000
    req = page_request(huge, huge)
    assert (req.page, req.limit) == (MAX_PAGE, 50)
    req = page_request("-" + huge, "-" + huge)
    assert (req.page, req.limit) == (1, 1)
    assert parse_int("0" * 5000 + "5", 1) == 5
