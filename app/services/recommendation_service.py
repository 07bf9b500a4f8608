"""
Recommendation proxy.

Reads a user's stored interests and genres, turns them into a prompt and
relays it to a completion service that answers through a forced tool call.
The tool-call arguments are handed back unmodified; there is no local
ranking or scoring.
"""

import json
import logging
from typing import List

from fastapi.concurrency import run_in_threadpool
from openai import AsyncOpenAI
from sqlalchemy.orm import Session

from app.db.models.user_data import UserData
from app.utils.error_handler import NotFound

logger = logging.getLogger(__name__)

RECOMMENDATION_TOOL = "get_recommendations"
MAX_RECOMMENDATIONS = 3

SYSTEM_PROMPT = "You are a helpful assistant that provides game recommendations."

RECOMMENDATION_TOOLS = [
    {
        "type": "function",
        "function": {
            "name": RECOMMENDATION_TOOL,
            "description": "Get a list of recommended games for the user",
            "parameters": {
                "type": "object",
                "properties": {
                    "recommendations": {
                        "type": "array",
                        "maxItems": MAX_RECOMMENDATIONS,
                        "items": {
                            "type": "object",
                            "properties": {
                                "game_id": {"type": "integer"},
                                "title": {"type": "string"},
                                "genre": {"type": "string"},
                                "review_rating": {"type": "number"},
                            },
                            "required": ["game_id", "title", "genre", "review_rating"],
                        },
                    }
                },
                "required": ["recommendations"],
            },
        },
    }
]


class RecommendationError(Exception):
    """The completion service did not answer with the expected tool call."""


class CompletionService:
    """Anything that can turn a prompt into a structured recommendation payload."""

    async def recommend(self, prompt_context: str) -> dict:
        raise NotImplementedError


class OpenAICompletionService(CompletionService):
    def __init__(self, api_key=None, model="gpt-4o-mini", max_tokens=500, client=None):
        self.model = model
        self.max_tokens = max_tokens
        self._api_key = api_key
        self._client = client

    @property
    def client(self):
        # Created on first use so the app starts without an API key
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def recommend(self, prompt_context: str) -> dict:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt_context},
            ],
            tools=RECOMMENDATION_TOOLS,
            tool_choice={"type": "function", "function": {"name": RECOMMENDATION_TOOL}},
            max_tokens=self.max_tokens,
        )
        return parse_tool_call(response)

    async def close(self):
        if self._client is not None:
            await self._client.close()


def parse_tool_call(response) -> dict:
    choices = getattr(response, "choices", None) or []
    message = choices[0].message if choices else None
    tool_calls = getattr(message, "tool_calls", None) or []
    if not tool_calls:
        logger.error("Failed to get tool call response: %s", response)
        raise RecommendationError("No valid recommendations returned from the completion service.")

    function = tool_calls[0].function
    if function.name != RECOMMENDATION_TOOL:
        raise RecommendationError(f"Unexpected function called: {function.name}")

    try:
        return json.loads(function.arguments)
    except (TypeError, ValueError) as e:
        raise RecommendationError("Completion service returned malformed arguments") from e


def parse_list_field(field) -> List[str]:
    if isinstance(field, list):
        return field
    if isinstance(field, str):
        try:
            parsed = json.loads(field)
        except ValueError:
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def build_prompt(interests: List[str], genres: List[str]) -> str:
    return (
        f'Based on the user\'s interests: "{", ".join(interests)}" '
        f'and preferred genres: "{", ".join(genres)}", '
        f"recommend up to {MAX_RECOMMENDATIONS} video games."
    )


def load_prompt(db: Session, user_data_id: int) -> str:
    user_data = db.get(UserData, user_data_id)
    if not user_data:
        raise NotFound("User data not found")

    prompt = build_prompt(parse_list_field(user_data.interests), parse_list_field(user_data.genres))
    # Give the connection back to the pool before the slow upstream call
    db.close()
    return prompt


async def get_recommendations(db: Session, user_data_id: int, completion: CompletionService) -> dict:
    prompt = await run_in_threadpool(load_prompt, db, user_data_id)
    logger.info("Requesting recommendations for user data %s", user_data_id)
    return await completion.recommend(prompt)
