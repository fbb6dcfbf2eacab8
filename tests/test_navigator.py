"""Tests for navigation to the latest dated header."""

from datetime import datetime

from timelog.navigator import find_latest_dated_header, iter_dated_headers

FORMAT = "YYYY-MM-DD"


def test_latest_header_is_chronological_not_positional():
    lines = [
        "## [[2024-05-10]]",
        "- a",
        "## [[2024-05-12]]",
        "- b",
        "## [[2024-05-11]]",
        "- c",
    ]
    assert find_latest_dated_header(lines, FORMAT) == 2


def test_ties_keep_first_header():
    lines = ["## 2024-05-11", "- a", "## [[2024-05-11|Again]]"]
    assert find_latest_dated_header(lines, FORMAT) == 0


def test_no_dated_headers():
    assert find_latest_dated_header(["# Notes", "- a"], FORMAT) is None
    assert find_latest_dated_header([], FORMAT) is None


def test_generic_headers_are_ignored():
    lines = ["# 2025 plans", "## [[2024-05-11]]", "# Zettel"]
    assert find_latest_dated_header(lines, FORMAT) == 1


def test_iter_dated_headers():
    headers = list(iter_dated_headers(["# Notes", "## [[2024-05-11]]", "## 2024-05-12"], FORMAT))
    assert [h.line_index for h in headers] == [1, 2]
    assert headers[1].date == datetime(2024, 5, 12)
