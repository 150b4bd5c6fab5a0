import datetime as dt

import pytest

from receipt_report import calendar_date, normalize_date, same_day


def test_day_month_year_order():
    # 05/03/2024 is the 5th of March, not May 3rd.
    assert normalize_date("05/03/2024") == dt.date(2024, 3, 5)


def test_slash_parts_tolerate_padding_and_trailing_text():
    assert normalize_date(" 7 / 11 / 2023 ") == dt.date(2023, 11, 7)
    assert normalize_date("15/03/2024 10:30") == dt.date(2024, 3, 15)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("32/01/2024", dt.date(2024, 2, 1)),
        ("31/02/2023", dt.date(2023, 3, 3)),
        ("01/13/2024", dt.date(2025, 1, 1)),
        ("00/03/2024", dt.date(2024, 2, 29)),
    ],
)
def test_out_of_range_components_roll_over(text, expected):
    assert normalize_date(text) == expected


def test_iso_and_free_form_fall_back_to_general_parse():
    assert normalize_date("2024-03-15") == dt.date(2024, 3, 15)
    assert normalize_date("2024-03-15T18:45:00") == dt.date(2024, 3, 15)
    assert normalize_date("March 15, 2024") == dt.date(2024, 3, 15)


@pytest.mark.parametrize("text", [None, "", "   ", "not-a-date", "aa/bb/cc", "05/xx/2024"])
def test_unparseable_values(text):
    assert normalize_date(text) is None


def test_calendar_date_outside_supported_range():
    assert calendar_date(0, 1, 1) is None
    assert calendar_date(10000, 1, 1) is None


def test_same_day_ignores_nothing_but_the_date():
    assert same_day(dt.date(2024, 3, 5), dt.date(2024, 3, 5))
    assert not same_day(dt.date(2024, 3, 5), dt.date(2023, 3, 5))
    assert not same_day(dt.date(2024, 3, 5), dt.date(2024, 4, 5))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("05/03/24", dt.date(1924, 3, 5)),
        ("05/03/0", dt.date(1900, 3, 5)),
        ("05/03/99", dt.date(1999, 3, 5)),
        ("05/03/100", dt.date(100, 3, 5)),
    ],
)
def test_short_years_map_to_the_1900s(text, expected):
    assert normalize_date(text) == expected
