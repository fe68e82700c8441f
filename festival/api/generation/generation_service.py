from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from festival.api.generation.generation_dto import CoupletResult, FortuneCard
from festival.config import Settings
from festival.generate.prompts import build_couplet_prompt, build_fortune_prompt
from festival.run_utils.llm import chat_text, get_chat_client, parse_json_reply
from festival.utils.errors import MalformedUpstreamResponseError, MissingCredentialError

T = TypeVar("T", bound=BaseModel)


class GenerationService:
    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_chat_client(self.settings)
        return self._client

    def _require_credential(self) -> None:
        if not self.settings.openai_api_key:
            raise MissingCredentialError()

    async def _generate(self, prompt: str, model: Type[T], kind: str) -> T:
        self._require_credential()
        text = await chat_text(self.client, self.settings.ai_model, prompt)
        data = parse_json_reply(text)
        if not isinstance(data, dict):
            raise MalformedUpstreamResponseError(kind, "reply is not a JSON object")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedUpstreamResponseError(kind, str(e)) from e

    async def generate_couplet(self, theme: str, style: Optional[str] = None) -> CoupletResult:
        """
        Ask the model for a couplet about `theme`. Each call may produce a
        different couplet for the same theme.
        """
        return await self._generate(
            build_couplet_prompt(theme, style), CoupletResult, "couplet"
        )

    async def generate_fortune(self) -> FortuneCard:
        return await self._generate(build_fortune_prompt(), FortuneCard, "fortune")
