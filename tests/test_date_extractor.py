"""Tests for the parsedatetime wrapper and occurrence helpers."""

from datetime import date, datetime

from datepoll.integrations.date_extractor import (
    DateOccurrence,
    collect_times,
    extract_dates_and_times,
    format_time,
)


def _occurrence(text, value, *, has_date=True, has_time=False, start=0):
    return DateOccurrence(
        text=text,
        start=start,
        end=start + len(text),
        value=value,
        has_date=has_date,
        has_time=has_time,
    )


class TestFormatTime:
    """Test format_time() 12-hour display."""

    def test_evening(self):
        assert format_time(datetime(2025, 1, 17, 19, 0)) == "7:00 PM"

    def test_minutes_padded(self):
        assert format_time(datetime(2025, 1, 17, 19, 5)) == "7:05 PM"

    def test_midnight_and_noon(self):
        assert format_time(datetime(2025, 1, 17, 0, 30)) == "12:30 AM"
        assert format_time(datetime(2025, 1, 17, 12, 0)) == "12:00 PM"


class TestDateOccurrence:
    """Test vague time-of-day detection."""

    def test_bare_time_word_is_vague(self):
        assert _occurrence("night", datetime(2025, 1, 15, 21, 0), has_date=False, has_time=True).is_vague

    def test_meal_word_is_vague(self):
        assert _occurrence("Dinner", datetime(2025, 1, 15, 19, 0), has_date=False, has_time=True).is_vague

    def test_time_word_with_date_is_not_vague(self):
        assert not _occurrence("night", datetime(2025, 1, 17, 21, 0), has_date=True, has_time=True).is_vague

    def test_regular_phrase_is_not_vague(self):
        assert not _occurrence("next friday", datetime(2025, 1, 17, 9, 0)).is_vague


class TestExtractDatesAndTimes:
    """Test extract_dates_and_times() aggregation."""

    def test_skips_vague_and_dedupes(self):
        occurrences = [
            _occurrence("night", datetime(2025, 1, 15, 21, 0), has_date=False, has_time=True),
            _occurrence("jan 20 at 7pm", datetime(2025, 1, 20, 19, 0), has_time=True),
            _occurrence("jan 20", datetime(2025, 1, 20, 9, 0)),
            _occurrence("jan 17", datetime(2025, 1, 17, 9, 0)),
        ]
        dates, times = extract_dates_and_times(occurrences)

        assert dates == [date(2025, 1, 17), date(2025, 1, 20)]
        assert times == ["7:00 PM"]

    def test_times_keep_first_seen_order(self):
        occurrences = [
            _occurrence("jan 20 at 8pm", datetime(2025, 1, 20, 20, 0), has_time=True),
            _occurrence("jan 21 at 6pm", datetime(2025, 1, 21, 18, 0), has_time=True),
            _occurrence("jan 22 at 8pm", datetime(2025, 1, 22, 20, 0), has_time=True),
        ]
        _, times = extract_dates_and_times(occurrences)

        assert times == ["8:00 PM", "6:00 PM"]

    def test_collect_times_ignores_date_only(self):
        occurrences = [
            _occurrence("jan 20", datetime(2025, 1, 20, 9, 0)),
            _occurrence("at 7pm", datetime(2025, 1, 15, 19, 0), has_date=False, has_time=True),
        ]
        assert collect_times(occurrences) == ["7:00 PM"]

    def test_empty(self):
        assert extract_dates_and_times([]) == ([], [])


class TestDateExtractor:
    """Test DateExtractor against parsedatetime."""

    def test_blank_text(self, extractor, now):
        assert extractor.extract("", now) == []
        assert extractor.extract("   ", now) == []

    def test_tomorrow(self, extractor, now):
        occurrences = extractor.extract("Lunch tomorrow", now)

        assert any(o.value.date() == date(2025, 1, 16) for o in occurrences)

    def test_offsets_point_into_text(self, extractor, now):
        text = "Brunch with the team next Friday"
        occurrences = extractor.extract(text, now)

        assert occurrences
        assert occurrences[0].start >= len("Brunch with the team")

    def test_resolve_month_name(self, extractor, now):
        resolved = extractor.resolve("march", now)

        assert resolved is not None
        assert resolved.month == 3

    def test_resolve_nonsense(self, extractor, now):
        assert extractor.resolve("", now) is None

    def test_implied_hour_is_not_a_time(self, extractor, now):
        occurrences = extractor.extract("Brunch Saturday morning", now)

        assert occurrences
        assert not any(o.has_time for o in occurrences)
        assert collect_times(occurrences) == []

    def test_stated_hour_is_a_time(self, extractor, now):
        occurrences = extractor.extract("Meeting tomorrow at 3pm", now)

        assert any(o.has_time for o in occurrences)
        assert "3:00 PM" in collect_times(occurrences)
