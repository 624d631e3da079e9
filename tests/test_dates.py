"""Tests for date helpers."""

from datetime import date

import pytest

from wikifeeds.errors import FeedError
from wikifeeds.util.dates import (
    add_days,
    date_string,
    iso8601_date,
    pageviews_timestamp,
    parse_pageviews_timestamp,
    requested_date,
)


def test_requested_date():
    assert requested_date("2017", "01", "10") == date(2017, 1, 10)


@pytest.mark.parametrize("parts", [("2017", "02", "30"), ("2017", "13", "01"), ("abcd", "01", "01")])
def test_requested_date_invalid(parts):
    with pytest.raises(FeedError) as excinfo:
        requested_date(*parts)
    assert excinfo.value.status == 400


def test_requested_date_before_earliest():
    with pytest.raises(FeedError):
        requested_date(2015, 6, 30, earliest=date(2015, 7, 1))
    assert requested_date(2015, 7, 1, earliest=date(2015, 7, 1)) == date(2015, 7, 1)


def test_requested_date_in_future():
    with pytest.raises(FeedError):
        requested_date(2020, 1, 2, today=date(2020, 1, 1))


def test_add_days_across_year():
    assert add_days(date(2017, 1, 1), -1) == date(2016, 12, 31)
    assert add_days(date(2016, 2, 28), 1) == date(2016, 2, 29)


def test_formats():
    d = date(2017, 1, 9)
    assert iso8601_date(d) == "2017-01-09Z"
    assert date_string(d) == "20170109"
    assert pageviews_timestamp(d) == "2017010900"
    assert parse_pageviews_timestamp("2017010900") == "2017-01-09Z"
