"""
Calendar and game-listing helpers for the RapidAPI scoreboard payload.
Pure data transformation - fetching lives in rapidapi.py.
"""

from datetime import datetime, timedelta, timezone

from .stoppage_core import parse_wallclock


SOON_HORIZON_HOURS = 6


def extract_calendar(scoreboard):
    """Return leagues[0].calendar, or [] when the payload doesn't have one."""
    if not isinstance(scoreboard, dict):
        return []
    leagues = scoreboard.get('leagues')
    if not isinstance(leagues, list) or not leagues or not isinstance(leagues[0], dict):
        return []
    calendar = leagues[0].get('calendar')
    return calendar if isinstance(calendar, list) else []


def _event_start(event):
    start = parse_wallclock(event.get('date'))
    if start is not None:
        return start
    competitions = event.get('competitions')
    if isinstance(competitions, list) and competitions and isinstance(competitions[0], dict):
        return parse_wallclock(competitions[0].get('date'))
    return None


def _event_state(event):
    status = event.get('status') or {}
    status_type = status.get('type') if isinstance(status, dict) else None
    if not isinstance(status_type, dict):
        return None
    return status_type.get('state')  # 'pre' | 'in' | 'post'


def filter_live_and_soon(events, hours_ahead=SOON_HORIZON_HOURS, now=None):
    """
    Keep games that are in progress, or pregame and kicking off within
    `hours_ahead` hours of `now`. Sorted by start time.
    """
    now = now or datetime.now(timezone.utc)
    horizon = now + timedelta(hours=hours_ahead)

    games = []
    for event in events or []:
        if not isinstance(event, dict):
            continue
        game = {
            "id": event.get('id'),
            "shortName": event.get('shortName'),  # e.g. MIA @ LAC
            "state": _event_state(event),
            "start": _event_start(event),
        }
        if not game["id"] or game["start"] is None:
            continue
        if game["state"] == "in" or (game["state"] == "pre" and game["start"] <= horizon):
            games.append(game)

    games.sort(key=lambda g: g["start"])
    for game in games:
        game["start"] = game["start"].isoformat().replace('+00:00', 'Z')
    return games
