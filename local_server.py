#!/usr/bin/env python3
"""
Local development server for testing the Python APIs.
Run with: python local_server.py
APIs will be available at http://localhost:<PORT> (default 3001)
"""

from dotenv import load_dotenv
load_dotenv('.env.local')

from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs
import json
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from api.lib.config import load_config
from api.lib.stoppage_analysis import analyze_game_status, get_calendar, get_games, parse_flag


def _parse_listing_params(query):
    """Pull (day, live) out of a parsed query string."""
    day = (query.get('day', [None])[0] or '').strip() or None
    live = parse_flag(query.get('live', [None])[0])
    return day, live


def _parse_game_id(query):
    game_id = (query.get('gameId', [''])[0] or '').strip()
    return game_id or None


class LocalAPIHandler(BaseHTTPRequestHandler):
    config = None

    def _send_json(self, data, status=200):
        self.send_response(status)
        self.send_header('Content-type', 'application/json')
        self.send_header('Access-Control-Allow-Origin', '*')
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_OPTIONS(self):
        self.send_response(200)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.end_headers()

    def do_GET(self):
        parsed = urlparse(self.path)
        path = parsed.path
        query = parse_qs(parsed.query)
        config = self.config or load_config()

        # Health check
        if path == '/api/health':
            self._send_json({"status": "ok", "server": "local"})
            return

        if path == '/api/calendar':
            day, _ = _parse_listing_params(query)
            try:
                self._send_json(get_calendar(day=day, config=config))
            except Exception as e:
                print(f"calendar fetch failed for day={day}: {e}", file=sys.stderr)
                self._send_json({"error": str(e)}, 500)
            return

        if path == '/api/games':
            day, live = _parse_listing_params(query)
            try:
                self._send_json(get_games(day=day, live=live, config=config))
            except Exception as e:
                print(f"games fetch failed for day={day}: {e}", file=sys.stderr)
                self._send_json({"error": str(e)}, 500)
            return

        if path in ('/api/gameStatus', '/gameStatus'):
            game_id = _parse_game_id(query)
            if not game_id:
                self._send_json({"error": "Missing gameId"}, 400)
                return
            try:
                self._send_json(analyze_game_status(game_id, config=config))
            except Exception as e:
                print(f"gameStatus fetch failed for {game_id}: {e}", file=sys.stderr)
                self._send_json({"error": str(e), "gameId": game_id}, 500)
            return

        # 404
        self._send_json({"error": "Not found"}, 404)


def run(port=None):
    config = load_config()
    port = port or config.port
    LocalAPIHandler.config = config

    server = ThreadingHTTPServer(('localhost', port), LocalAPIHandler)
    print(f"✅ Local API server running at http://localhost:{port}")
    print("Available endpoints:")
    print("  GET /api/health")
    print("  GET /api/calendar?day=YYYYMMDD")
    print("  GET /api/games?day=YYYYMMDD[&live=1]")
    print("  GET /api/gameStatus?gameId=<id>")
    if not config.rapidapi.api_key:
        print("⚠️  RAPID_API_KEY is not set; upstream calls will fail")
    print("\nPress Ctrl+C to stop")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        server.shutdown()


if __name__ == '__main__':
    run()
