"""
GitHub Trophy Badge (Flask)

What it does:
- Accepts a GitHub username
- Fetches the public profile, one page of repositories and recent events via the GitHub REST API
- Derives ten "trophy" stats (followers, stars, engagement score, star collector level, ...)
- Renders them as an SVG card for embedding in README files
- Caches rendered badges in memory for a short TTL to bound upstream calls

Setup:
  pip install -e .

Run:
  python app.py
  open http://localhost:5000/api/trophy?username=octocat

Endpoints:
  GET  /                  -> short usage page
  GET  /api/trophy        -> SVG badge
         ?username=       required
         &columns=3       cards per row (1-5)
         &hide=Stars,Repos  comma-separated trophy titles to leave out
         &theme=uplink    uplink | dark | light
         &debug=true      raw GitHub payloads as JSON, bypasses the cache
  GET  /healthz           -> liveness + cache info
"""

from __future__ import annotations

import json
import logging
import os
from typing import Callable, Optional

from flask import Flask, Response, jsonify, request

from trophy_badge import config
from trophy_badge.cache import TTLCache
from trophy_badge.config import InvalidRequest, is_truthy, parse_options
from trophy_badge.github import GitHubAPIError, GitHubData, GitHubNotFoundError, fetch_github
from trophy_badge.render import render_badge
from trophy_badge.trophies import build_trophies, filter_trophies

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], GitHubData]

USAGE_PAGE = """
<!doctype html>
<html>
<head><meta charset="utf-8"><title>GitHub Trophy</title></head>
<body style="font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; padding: 24px;">
  <h2>GitHub Trophy badge is running</h2>
  <p>Try: <code>/api/trophy?username=octocat</code></p>
  <p>Embed: <code>&lt;img src="/api/trophy?username=octocat&amp;theme=dark" /&gt;</code></p>
</body>
</html>
"""


def _display_name(data: GitHubData, username: str) -> str:
    login = data.user.get("login") if isinstance(data.user, dict) else None
    return login if isinstance(login, str) and login else username


def _svg_response(svg: str, ttl: float) -> Response:
    resp = Response(svg, status=200, mimetype="image/svg+xml")
    resp.headers["Cache-Control"] = f"public, max-age={int(ttl)}"
    return resp


def _debug_response(data: GitHubData) -> Response:
    body = json.dumps(data.as_dict(), indent=2, ensure_ascii=False)
    return Response(body, status=200, mimetype="application/json")


# -----------------------------
# Flask app
# -----------------------------
def create_app(cache: Optional[TTLCache] = None, fetcher: Fetcher = fetch_github) -> Flask:
    """
    Build the Flask app. The badge cache is owned by the app: pass one in to
    share it or to control its clock, otherwise an empty one is created.
    """
    app = Flask(__name__)
    badge_cache = cache if cache is not None else TTLCache(config.CACHE_TTL_SECONDS)

    @app.route("/", methods=["GET"])
    def home():
        return USAGE_PAGE, 200, {"Content-Type": "text/html; charset=utf-8"}

    @app.route("/api/trophy", methods=["GET"])
    def api_trophy():
        username = (request.args.get("username") or "").strip()
        if not username:
            return jsonify({"error": "Missing ?username="}), 400

        try:
            options = parse_options(request.args)
        except InvalidRequest as e:
            logger.info(f"Rejected badge request for {username}: {e}")
            return jsonify({"error": str(e)}), 400

        debug = is_truthy(request.args.get("debug"))
        key = options.cache_key(username)

        if not debug:
            cached = badge_cache.get(key)
            if cached is not None:
                logger.debug(f"Cache HIT: {key}")
                return _svg_response(cached, badge_cache.ttl_seconds)
            logger.debug(f"Cache MISS: {key}")

        try:
            data = fetcher(username)
            if debug:
                return _debug_response(data)
            trophies = filter_trophies(build_trophies(data), options.hide)
            svg = render_badge(_display_name(data, username), trophies, options)
        except GitHubNotFoundError:
            logger.info(f"GitHub user not found: {username}")
            return jsonify({"error": f"User '{username}' not found."}), 404
        except GitHubAPIError as e:
            logger.warning(f"GitHub fetch failed for {username}: {e}")
            return jsonify({"error": f"GitHub API error: {e.message}"}), 500
        except Exception as e:
            logger.exception(f"Unexpected error rendering badge for {username}")
            return jsonify({"error": f"Unexpected server error: {e}"}), 500

        badge_cache.put(key, svg)
        return _svg_response(svg, badge_cache.ttl_seconds)

    @app.route("/healthz", methods=["GET"])
    def healthz():
        return jsonify(
            {
                "ok": True,
                "cache_ttl_seconds": badge_cache.ttl_seconds,
                "cache_entries": len(badge_cache),
            }
        )

    return app


app = create_app()


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=is_truthy(os.getenv("FLASK_DEBUG")))


if __name__ == "__main__":
    main()
