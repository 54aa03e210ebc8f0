import os
import sys
from datetime import datetime, timezone

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "api")))

from lib import stoppage_analysis as sa
from lib.config import load_config
from lib.rapidapi import RapidApiError


NOW = datetime(2018, 12, 13, 22, 0, 0, tzinfo=timezone.utc)


class FakeClient:
    def __init__(self, plays=None, scoreboard=None, error=None):
        self.plays = plays
        self.scoreboard = scoreboard
        self.error = error
        self.calls = []

    def fetch_plays(self, game_id):
        self.calls.append(("plays", game_id))
        if self.error:
            raise self.error
        return self.plays

    def fetch_scoreboard_day(self, day):
        self.calls.append(("scoreboard", day))
        if self.error:
            raise self.error
        return self.scoreboard


def test_analyze_game_status_uses_configured_threshold():
    plays = {"items": [{"sequenceNumber": "1", "wallclock": "2018-12-13T21:58:30Z", "type": {"text": "Rush"}}]}
    client = FakeClient(plays=plays)

    strict = sa.analyze_game_status("401030900", config=load_config({}), client=client, now=NOW)
    relaxed = sa.analyze_game_status(
        "401030900",
        config=load_config({"STOPPAGE_THRESHOLD_SECONDS": "120"}),
        client=client,
        now=NOW,
    )

    assert client.calls == [("plays", "401030900"), ("plays", "401030900")]
    assert strict["isStoppage"] is True
    assert strict["stoppageDurationSeconds"] == 90
    assert relaxed["isStoppage"] is False


def test_analyze_game_status_propagates_fetch_errors():
    client = FakeClient(error=RapidApiError("RapidAPI failed 500"))
    with pytest.raises(RapidApiError):
        sa.analyze_game_status("1", config=load_config({}), client=client, now=NOW)


def test_get_calendar_falls_back_to_default_day():
    client = FakeClient(scoreboard={"leagues": [{"calendar": [{"label": "Week 15"}]}]})
    result = sa.get_calendar(day="bogus", config=load_config({"DEFAULT_DAY": "20181220"}), client=client)
    assert result == {"calendar": [{"label": "Week 15"}]}
    assert client.calls == [("scoreboard", "20181220")]


def test_get_games_returns_raw_scoreboard_by_default():
    scoreboard = {"events": [], "leagues": []}
    assert sa.get_games(day="20181213", config=load_config({}), client=FakeClient(scoreboard=scoreboard)) is scoreboard


def test_get_games_live_filter():
    scoreboard = {"events": [
        {"id": "1", "shortName": "LAC @ KC", "date": "2018-12-14T01:20Z", "status": {"type": {"state": "pre"}}},
        {"id": "2", "shortName": "NYJ @ HOU", "date": "2018-12-13T18:00Z", "status": {"type": {"state": "post"}}},
    ]}
    result = sa.get_games(
        day="20181213",
        live=True,
        config=load_config({}),
        client=FakeClient(scoreboard=scoreboard),
        now=NOW,
    )
    assert [g["id"] for g in result["games"]] == ["1"]


def test_get_games_live_tolerates_missing_events():
    result = sa.get_games(live=True, config=load_config({}), client=FakeClient(scoreboard={}), now=NOW)
    assert result == {"games": []}


@pytest.mark.parametrize("value,expected", [
    ("1", True), ("true", True), ("YES", True), ("0", False), ("", False), (None, False),
])
def test_parse_flag(value, expected):
    assert sa.parse_flag(value) is expected


def test_get_games_live_with_infinite_horizon_setting_uses_default():
    scoreboard = {"events": [
        {"id": "1", "date": "2018-12-14T01:20Z", "status": {"type": {"state": "pre"}}},
        {"id": "2", "date": "2018-12-15T01:20Z", "status": {"type": {"state": "pre"}}},
    ]}
    result = sa.get_games(
        live=True,
        config=load_config({"SOON_HORIZON_HOURS": "inf"}),
        client=FakeClient(scoreboard=scoreboard),
        now=NOW,
    )
    assert [g["id"] for g in result["games"]] == ["1"]
