"""Tests for the year session event routing."""

from datetime import datetime, timezone

import pytest

from yeardots.core.calendar import CalendarDay, DayState, date_for_day_of_year, days_in_year
from yeardots.core.journal import JournalEntry
from yeardots.journal import JournalController
from yeardots.markers import InlineWriter, MarkerStoreTable
from yeardots.session import YearSession


@pytest.fixture
def session(blob_cache, record_store, clock, timer):
    markers = MarkerStoreTable(blob_cache, clock, writer_factory=lambda year: InlineWriter())
    journal = JournalController(record_store, clock, timer)
    return YearSession(markers=markers, journal=journal, store=record_store, clock=clock)


def toggle_at(session, clock, day):
    clock.advance(seconds=1)
    return session.toggle_marker(day)


class TestToday:
    def test_reads_clock(self, session):
        assert session.today == CalendarDay(2024, 115)

    def test_today_advanced_follows_clock(self, session, clock):
        clock.advance(days=1)
        assert session.today_advanced() == CalendarDay(2024, 116)
        assert session.today == CalendarDay(2024, 116)


class TestMarkers:
    def test_leap_year_walkthrough(self, session, clock):
        assert days_in_year(2024) == 366
        assert date_for_day_of_year(2024, 60).isoformat() == "2024-02-29"

        session.today_advanced(99)
        for day in (100, 105, 110):
            toggle_at(session, clock, day)
        assert session.markers.for_year(2024).marked_days() == [100, 105, 110]

        toggle_at(session, clock, 120)
        assert session.markers.for_year(2024).marked_days() == [105, 110, 120]

        session.today_advanced(115)
        assert session.markers.for_year(2024).marked_days() == [120]
        assert session.is_marked(120)
        assert not session.is_marked(110)

    def test_cannot_mark_today_or_past(self, session, blob_cache):
        assert session.toggle_marker(115) == ()
        assert session.toggle_marker(10) == ()
        assert blob_cache.writes == []

    def test_today_advanced_without_change_writes_nothing(self, session, clock, blob_cache):
        toggle_at(session, clock, 200)
        writes = len(blob_cache.writes)
        session.today_advanced(116)
        assert len(blob_cache.writes) == writes


class TestEditing:
    def test_edit_flow(self, session, record_store, timer):
        state = session.begin_editing(2024, 115)
        assert state.has_existing_entry is False

        session.text_changed("a good day")
        timer.fire_all()
        assert record_store.entries[(2024, 115)].text == "a good day"

        session.text_changed("a good day, mostly")
        session.end_editing()
        assert record_store.entries[(2024, 115)].text == "a good day, mostly"

    def test_future_day_is_not_yet(self, session, record_store):
        state = session.begin_editing(2024, 116)
        assert state.read_only is True
        session.text_changed("spoilers")
        session.end_editing()
        assert record_store.entries == {}

    def test_past_year_is_writable(self, session):
        assert session.begin_editing(2023, 365).read_only is False


class TestOverview:
    def test_current_year(self, session, clock, record_store):
        toggle_at(session, clock, 200)
        record_store.entries[(2024, 3)] = JournalEntry(2024, 3, "hi", datetime(2024, 1, 3, tzinfo=timezone.utc))

        overview = session.overview()

        assert overview.year == 2024
        assert overview.total_days == 366
        assert len(overview.days) == 366
        assert overview.header == "115 / 366"
        assert overview.days[113].state == DayState.PAST
        assert overview.days[114].state == DayState.TODAY
        assert overview.days[115].state == DayState.FUTURE
        assert overview.days[199].marked is True
        assert overview.days[2].has_entry is True
        assert sum(d.marked for d in overview.days) == 1

    def test_past_year_all_past(self, session):
        overview = session.overview(2023)
        assert len(overview.days) == 365
        assert {d.state for d in overview.days} == {DayState.PAST}
        assert overview.header == "365 / 365"

    def test_future_year_all_future(self, session):
        overview = session.overview(2025)
        assert {d.state for d in overview.days} == {DayState.FUTURE}
        assert overview.header == "0 / 365"

    def test_entry_listing_failure(self, session, record_store, monkeypatch):
        from yeardots.errors import StorageError

        def boom(year):
            raise StorageError("nope")

        monkeypatch.setattr(record_store, "days_with_entries", boom)
        overview = session.overview()
        assert not any(d.has_entry for d in overview.days)


class TestYearRollover:
    def test_last_years_markers_are_not_shown_as_marked(self, blob_cache, record_store, clock, timer, session):
        toggle_at(session, clock, 300)
        session.close()

        clock.set(datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc))
        markers = MarkerStoreTable(blob_cache, clock, writer_factory=lambda year: InlineWriter())
        journal = JournalController(record_store, clock, timer)
        later = YearSession(markers=markers, journal=journal, store=record_store, clock=clock)
        later.today_advanced()

        dot = later.overview(2024).days[299]
        assert dot.state == DayState.PAST
        assert dot.marked is False
        assert later.is_marked(300, year=2024) is False


class TestClose:
    def test_close_commits_open_edit(self, session, record_store):
        session.begin_editing(2024, 100)
        session.text_changed("saved on close")
        session.close()
        assert record_store.entries[(2024, 100)].text == "saved on close"
