"""
RAWG catalog import.

Fetches recent or popular games from the RAWG API, maps them onto the Game
shape and inserts the ones whose title is not in the catalog yet.
"""

import logging
import re
from datetime import date, timedelta

import httpx
from sqlalchemy.orm import Session

from app.db.models.enums import GameModeEnum
from app.db.models.game import Game
from app.services.game_service import title_exists

logger = logging.getLogger(__name__)

RAWG_BASE_URL = "https://api.rawg.io/api"
TAG_RE = re.compile(r"</?[^>]+(>|$)")


class RawgClient:
    def __init__(self, api_key, base_url=RAWG_BASE_URL, client: httpx.AsyncClient = None):
        if not api_key:
            raise ValueError("Missing RAWG_API_KEY")
        self.api_key = api_key
        self.base_url = base_url
        self._client = client

    async def _get(self, path, params=None):
        query = {"key": self.api_key, **(params or {})}
        if self._client is not None:
            return await self._client.get(f"{self.base_url}{path}", params=query)
        async with httpx.AsyncClient() as client:
            return await client.get(f"{self.base_url}{path}", params=query)

    async def get_most_popular_games(self, limit=100):
        try:
            response = await self._get("/games", {"ordering": "-rating", "page_size": limit})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch most popular games: %s", e)
            return []
        return response.json().get("results") or []

    async def fetch_new_games(self, max_fetch=50, days=10):
        today = date.today()
        start = today - timedelta(days=days)
        try:
            response = await self._get(
                "/games",
                {"dates": f"{start.isoformat()},{today.isoformat()}", "page_size": max_fetch},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch new games: %s", e)
            return []
        return (response.json().get("results") or [])[:max_fetch]

    async def get_game_by_id(self, rawg_id):
        try:
            response = await self._get(f"/games/{rawg_id}")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Failed to fetch game %s: %s", rawg_id, e)
            return None
        return response.json()


def strip_html_tags(text):
    if not text:
        return ""
    return TAG_RE.sub("", text)


def _names(items, key="name"):
    return [item.get(key) for item in (items or []) if isinstance(item, dict) and item.get(key)]


def _parse_release_date(value):
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def map_rawg_game(raw):
    """Translate one RAWG payload into Game column values, or None when unusable."""
    if not isinstance(raw, dict):
        return None
    title = raw.get("name")
    if not title:
        return None

    platforms = [
        p["platform"]["name"]
        for p in (raw.get("platforms") or [])
        if isinstance(p, dict) and isinstance(p.get("platform"), dict) and p["platform"].get("name")
    ]
    lowered = " ".join(platforms).lower()
    if "multiplayer" in lowered:
        game_mode = GameModeEnum.multiplayer
    elif "both" in lowered:
        game_mode = GameModeEnum.both
    else:
        game_mode = GameModeEnum.single_player

    developers = _names(raw.get("developers"))
    publishers = _names(raw.get("publishers"))
    genres = _names(raw.get("genres"))

    return {
        "title": title,
        "description": strip_html_tags(raw.get("description")),
        "genre": ", ".join(genres) or None,
        "tags": _names(raw.get("tags")),
        "platforms": platforms,
        "playtime_estimate": raw.get("playtime") or 0,
        "developer": developers[0] if developers else "Unknown",
        "publisher": publishers[0] if publishers else "Unknown",
        "game_mode": game_mode,
        "release_date": _parse_release_date(raw.get("released")),
        "review_rating": min(max(int((raw.get("rating") or 0) + 0.5), 1), 10),
        "cover_image": raw.get("background_image"),
    }


def add_new_games_to_database(db: Session, games) -> int:
    to_insert = []
    seen = set()
    for raw in games:
        values = map_rawg_game(raw)
        if values is None:
            logger.warning("Skipping unusable game payload: %r", raw)
            continue
        title = values["title"]
        if title in seen or title_exists(db, title):
            logger.info('Game "%s" already exists in the database.', title)
            continue
        seen.add(title)
        to_insert.append(Game(**values))

    if not to_insert:
        logger.info("No new games to add.")
        return 0

    db.add_all(to_insert)
    db.commit()
    logger.info("%d new games added to the database.", len(to_insert))
    return len(to_insert)


async def import_new_games(database, settings, max_fetch=50) -> int:
    client = RawgClient(settings.RAWG_API_KEY)
    games = await client.fetch_new_games(max_fetch)
    if not games:
        logger.info("No new games fetched.")
        return 0
    db = database.session()
    try:
        return add_new_games_to_database(db, games)
    finally:
        db.close()
