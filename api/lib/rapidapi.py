"""
RapidAPI (nfl-api-data) fetch layer.

Host and key are passed in through RapidApiConfig; this module never reads
process configuration itself.
"""

import gzip
import json
import urllib.error
import urllib.request
from urllib.parse import quote


class RapidApiError(Exception):
    """Upstream fetch failed (HTTP status, network error or bad JSON)."""


def _decompress_response(data):
    """Decompress gzip data if needed, return raw data otherwise."""
    if data[:2] == b'\x1f\x8b':  # gzip magic bytes
        return gzip.decompress(data)
    return data


class RapidApiClient:
    def __init__(self, config, timeout=15):
        self.config = config
        self.timeout = timeout

    def _headers(self):
        return {
            'x-rapidapi-key': self.config.api_key,
            'x-rapidapi-host': self.config.host,
            'Accept': 'application/json',
        }

    def _get_json(self, path):
        if not self.config.api_key:
            raise RapidApiError("RAPID_API_KEY is not configured")

        url = f"https://{self.config.host}/{path}"
        req = urllib.request.Request(url, headers=self._headers(), method='GET')
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                raw_data = _decompress_response(response.read())
                return json.loads(raw_data.decode())
        except urllib.error.HTTPError as e:
            raise RapidApiError(f"RapidAPI failed {e.code}") from e
        except urllib.error.URLError as e:
            raise RapidApiError(f"RapidAPI unreachable: {e.reason}") from e
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise RapidApiError(f"RapidAPI returned an unreadable response: {e}") from e

    def fetch_plays(self, game_id):
        """Raw nfl-plays payload for a game (plays under `items` or `plays`)."""
        return self._get_json(f"nfl-plays?id={quote(str(game_id), safe='')}")

    def fetch_scoreboard_day(self, day):
        """Raw nfl-scoreboard-day payload (events, leagues[0].calendar)."""
        return self._get_json(f"nfl-scoreboard-day?day={quote(str(day), safe='')}")
