"""
Stoppage analysis module for serverless API use.
Wires the RapidAPI fetch layer to the pure inference/schedule helpers and
provides the entry points the handlers call.
"""

from .config import load_config, resolve_day
from .rapidapi import RapidApiClient
from .schedule import extract_calendar, filter_live_and_soon
from .stoppage_core import to_unified_response


def _client_for(config, client):
    return client if client is not None else RapidApiClient(config.rapidapi)


def analyze_game_status(game_id, config=None, client=None, now=None):
    """
    Main function to fetch a game's plays and return the gameStatus payload.
    Fetch failures propagate as RapidApiError; the inference itself never fails.
    """
    config = config or load_config()
    raw_data = _client_for(config, client).fetch_plays(game_id)
    return to_unified_response(
        game_id,
        raw_data,
        now=now,
        threshold_seconds=config.stoppage_threshold_seconds,
    )


def get_calendar(day=None, config=None, client=None):
    config = config or load_config()
    data = _client_for(config, client).fetch_scoreboard_day(resolve_day(day, config))
    return {"calendar": extract_calendar(data)}


def get_games(day=None, live=False, config=None, client=None, now=None):
    """Raw scoreboard for the day, or only live/soon games when `live` is set."""
    config = config or load_config()
    data = _client_for(config, client).fetch_scoreboard_day(resolve_day(day, config))
    if not live:
        return data

    events = data.get('events') if isinstance(data, dict) else None
    return {
        "games": filter_live_and_soon(
            events if isinstance(events, list) else [],
            hours_ahead=config.soon_horizon_hours,
            now=now,
        )
    }


def parse_flag(value):
    return str(value or '').strip().lower() in ('1', 'true', 'yes', 'on')
