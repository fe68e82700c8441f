from typing import Optional, Union

from festival.api.generation.generation_dto import Page
from festival.client.ai import GenerationClient
from festival.client.couplet import CoupletSession
from festival.client.fortune import FortuneSession
from festival.client.storage import JsonFileStorage
from festival.client.store import AppStore
from festival.config import Settings, get_settings
from festival.run_utils.timing import Sleep

Session = Union[CoupletSession, FortuneSession]


class FestivalApp:
    """Owns the store and client and hands out a fresh session per page visit."""

    def __init__(self, store: AppStore, client: GenerationClient, sleep: Optional[Sleep] = None):
        self.store = store
        self.client = client
        self.sleep = sleep
        self.session: Optional[Session] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FestivalApp":
        settings = settings or get_settings()
        store = AppStore(JsonFileStorage(settings.storage_path))
        return cls(store, GenerationClient(settings.api_url))

    def navigate(self, page: Page) -> Optional[Session]:
        self.store.set_page(page)
        if page == "couplet":
            self.session = CoupletSession(self.client, self.store)
        elif page == "fortune":
            self.session = FortuneSession(self.client, self.store, sleep=self.sleep)
        else:
            self.session = None
        return self.session

    async def aclose(self) -> None:
        await self.client.aclose()
