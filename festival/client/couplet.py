from typing import Callable, Literal, Optional

from festival.api.generation.generation_dto import CoupletResult
from festival.client.ai import COUPLET_FAILED, GenerationClient
from festival.client.store import AppStore
from festival.utils.errors import ClientGenerationError

CoupletState = Literal["idle", "requesting", "result"]


class CoupletSession:
    """
    One visit to the couplet page.

    idle -> requesting -> result, or back to idle with `error` set when the
    request fails. A second submit while requesting is not blocked here; the
    page disables its button instead.
    """

    def __init__(self, client: GenerationClient, store: AppStore, style: Optional[str] = None):
        self.client = client
        self.store = store
        self.style = style
        self.state: CoupletState = "idle"
        self.theme = ""
        self.result: Optional[CoupletResult] = None
        self.error = ""

    def set_theme(self, theme: str) -> None:
        self.theme = theme

    @property
    def can_submit(self) -> bool:
        return self.state != "requesting" and bool(self.theme.strip())

    async def submit(self) -> None:
        if not self.theme.strip():
            return

        self.state = "requesting"
        self.error = ""
        self.result = None
        try:
            data = await self.client.generate_couplet(self.theme, self.style)
        except ClientGenerationError as e:
            self.error = e.message or COUPLET_FAILED
            self.state = "idle"
            return

        self.result = data
        self.store.add_couplet_history(data)
        self.state = "result"

    async def regenerate(self) -> None:
        if self.state != "result":
            return
        await self.submit()

    def copy_text(self) -> str:
        if self.result is None:
            return ""
        r = self.result
        return f"上联：{r.upper}\n下联：{r.lower}\n横批：{r.horizontal}"

    def copy(self, clipboard: Callable[[str], None]) -> None:
        if self.result is not None:
            clipboard(self.copy_text())
