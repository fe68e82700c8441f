from typing import Any, Dict, Optional

import httpx

from festival.api.generation.generation_dto import CoupletResult, FortuneCard
from festival.utils.errors import ClientGenerationError

COUPLET_FAILED = "生成失败，请重试"
FORTUNE_FAILED = "求签失败，请心诚则灵(重试)"


class GenerationClient:
    """
    Thin async wrapper around the gateway's two endpoints.

    Every failure, whether transport or non-2xx, is collapsed into a
    ClientGenerationError with a fixed localized message. The original
    error is printed and dropped.
    """

    def __init__(self, base_url: str, http: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient()

    async def __aenter__(self) -> "GenerationClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def _post(self, path: str, payload: Optional[Dict[str, Any]]) -> Any:
        resp = await self.http.post(
            f"{self.base_url}{path}",
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        if resp.status_code < 200 or resp.status_code >= 300:
            raise RuntimeError(f"HTTP error! status: {resp.status_code}")
        return resp.json()

    async def generate_couplet(self, theme: str, style: Optional[str] = None) -> CoupletResult:
        body: Dict[str, Any] = {"theme": theme}
        if style is not None:
            body["style"] = style
        try:
            data = await self._post("/api/couplet", body)
            return CoupletResult.model_validate(data)
        except Exception as e:
            print(f"Couplet generation failed: {e!r}")
            raise ClientGenerationError(COUPLET_FAILED) from e

    async def generate_fortune(self) -> FortuneCard:
        try:
            data = await self._post("/api/fortune", None)
            return FortuneCard.model_validate(data)
        except Exception as e:
            print(f"Fortune generation failed: {e!r}")
            raise ClientGenerationError(FORTUNE_FAILED) from e
