from http.server import BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs
import json
import sys
import os

# Add the api directory to the path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from lib.stoppage_analysis import analyze_game_status


class handler(BaseHTTPRequestHandler):
    def _send_json(self, data, status=200):
        self.send_response(status)
        self.send_header('Content-type', 'application/json')
        self.send_header('Access-Control-Allow-Origin', '*')
        # Stoppage state is only meaningful right now
        self.send_header('Cache-Control', 'no-store')
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_GET(self):
        # Path will be like /api/gameStatus?gameId=401772896
        query = parse_qs(urlparse(self.path).query)
        game_id = (query.get('gameId', [''])[0] or '').strip()

        if not game_id:
            self._send_json({"error": "Missing gameId"}, 400)
            return

        try:
            payload = analyze_game_status(game_id)
        except Exception as e:
            print(f"gameStatus fetch failed for {game_id}: {e}", file=sys.stderr)
            self._send_json({"error": str(e), "gameId": game_id}, 500)
            return

        self._send_json(payload)

    def do_OPTIONS(self):
        self.send_response(200)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.end_headers()
