"""Tests for weekday lexing and recurrence expansion (deterministic)."""

from datetime import date, datetime

from datepoll.models.recurrence import ALL_DAYS, WEEKDAYS, WEEKENDS, day_abbreviation, normalize_selector, weekday_index
from datepoll.recurrence.expander import generate_date_range, parse_day_of_week


class TestParseDayOfWeek:
    """Test parse_day_of_week() weekday lexing."""

    def test_two_full_names(self):
        assert parse_day_of_week("friday and saturday") == [5, 6]

    def test_abbreviations_and_case(self):
        assert parse_day_of_week("Mon, WED, fri") == [1, 3, 5]

    def test_plural_names(self):
        assert parse_day_of_week("Fridays and Saturdays") == [5, 6]

    def test_duplicates_collapse(self):
        """'friday' and its abbreviation 'fri' are the same weekday."""
        assert parse_day_of_week("friday fri FRIDAY") == [5]

    def test_result_is_ascending(self):
        assert parse_day_of_week("saturday sunday monday") == [0, 1, 6]

    def test_no_weekday(self):
        assert parse_day_of_week("next week") == []

    def test_empty_input(self):
        assert parse_day_of_week("") == []


class TestGenerateDateRange:
    """Test generate_date_range() enumeration."""

    def test_fridays_in_january_2025(self):
        dates = generate_date_range(date(2025, 1, 1), date(2025, 1, 31), [5])
        assert dates == [
            date(2025, 1, 3),
            date(2025, 1, 10),
            date(2025, 1, 17),
            date(2025, 1, 24),
            date(2025, 1, 31),
        ]

    def test_weekends_in_march_2025(self):
        dates = generate_date_range(date(2025, 3, 1), date(2025, 3, 31), WEEKENDS)
        assert len(dates) == 10
        assert all(weekday_index(d) in (0, 6) for d in dates)

    def test_leap_year_february(self):
        assert len(generate_date_range(date(2024, 2, 1), date(2024, 2, 29), ALL_DAYS)) == 29

    def test_non_leap_year_february(self):
        assert len(generate_date_range(date(2025, 2, 1), date(2025, 2, 28), ALL_DAYS)) == 28

    def test_spans_year_boundary(self):
        dates = generate_date_range(date(2024, 12, 28), date(2025, 1, 4), WEEKENDS)
        assert dates == [date(2024, 12, 28), date(2024, 12, 29), date(2025, 1, 4)]

    def test_single_day_range_inclusive(self):
        assert generate_date_range(date(2025, 1, 17), date(2025, 1, 17), [5]) == [date(2025, 1, 17)]

    def test_single_day_range_wrong_weekday(self):
        assert generate_date_range(date(2025, 1, 17), date(2025, 1, 17), [6]) == []

    def test_empty_selector(self):
        assert generate_date_range(date(2025, 1, 1), date(2025, 12, 31), []) == []

    def test_start_after_end(self):
        assert generate_date_range(date(2025, 2, 1), date(2025, 1, 1), ALL_DAYS) == []

    def test_accepts_datetimes(self):
        dates = generate_date_range(datetime(2025, 1, 1, 23, 30), datetime(2025, 1, 7, 0, 5), WEEKDAYS)
        assert dates == [
            date(2025, 1, 1),
            date(2025, 1, 2),
            date(2025, 1, 3),
            date(2025, 1, 6),
            date(2025, 1, 7),
        ]

    def test_is_deterministic(self):
        """Same inputs produce same outputs."""
        first = generate_date_range(date(2025, 1, 1), date(2025, 6, 30), [2, 4])
        second = generate_date_range(date(2025, 1, 1), date(2025, 6, 30), [2, 4])
        assert first == second

    def test_result_strictly_ascending(self):
        dates = generate_date_range(date(2025, 1, 1), date(2025, 3, 31), [6, 0, 5])
        assert all(a < b for a, b in zip(dates, dates[1:]))


class TestWeekdayHelpers:
    """Test the Sunday-based weekday helpers."""

    def test_weekday_index_is_sunday_based(self):
        assert weekday_index(date(2025, 1, 12)) == 0  # Sunday
        assert weekday_index(date(2025, 1, 15)) == 3  # Wednesday
        assert weekday_index(date(2025, 1, 18)) == 6  # Saturday

    def test_day_abbreviation(self):
        assert day_abbreviation(0) == "Sun"
        assert day_abbreviation(5) == "Fri"

    def test_day_abbreviation_out_of_range(self):
        assert day_abbreviation(7) == ""
        assert day_abbreviation(-1) == ""

    def test_normalize_selector(self):
        assert normalize_selector([6, 0, 6, 3]) == [0, 3, 6]
