import json
import re
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from festival.config import Settings

_FENCE = re.compile(r"```json\n?|\n?```")

_clients: Dict[tuple, AsyncOpenAI] = {}


def get_chat_client(settings: Settings) -> AsyncOpenAI:
    key = (settings.openai_api_key, settings.openai_base_url)
    if key not in _clients:
        _clients[key] = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )
    return _clients[key]


async def chat_text(client: Any, model: str, prompt: str) -> str:
    """Send a single user message and return the first choice's text."""
    resp = await client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
    )
    content: Optional[str] = resp.choices[0].message.content
    return content or ""


def strip_json_fences(text: str) -> str:
    return _FENCE.sub("", text).strip()


def parse_json_reply(text: str) -> Any:
    """
    Parse model output as JSON, tolerating ```json fences around it.
    Raises json.JSONDecodeError when the cleaned text is not JSON.
    """
    return json.loads(strip_json_fences(text))
