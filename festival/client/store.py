from typing import Callable, List, get_args

from pydantic import ValidationError

from festival.api.generation.generation_dto import (
    AppState,
    CoupletResult,
    FortuneCard,
    Page,
)
from festival.client.storage import Storage
from festival.config import STORAGE_KEY

Listener = Callable[[AppState], None]


class AppStore:
    """
    Process wide app state: page, result histories and preferences.

    The state is read from `storage` once at construction and the full
    snapshot is written back after every mutation. Persisted blobs carry no
    schema version: missing fields fall back to defaults, unknown fields are
    ignored, and a blob that cannot be read at all is discarded. A listener
    that raises is reported and skipped; the mutation still stands.
    """

    def __init__(self, storage: Storage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.state = self._rehydrate()
        self._listeners: List[Listener] = []

    def _rehydrate(self) -> AppState:
        try:
            blob = self.storage.get_item(self.key)
        except (OSError, ValueError) as e:
            print(f"Could not read persisted state: {e!r}")
            return AppState()
        if blob is None:
            return AppState()
        try:
            return AppState.model_validate_json(blob)
        except ValidationError as e:
            print(f"Discarding persisted state that does not match: {e}")
            return AppState()

    def _persist(self) -> None:
        try:
            self.storage.set_item(self.key, self.state.model_dump_json())
        except (OSError, TypeError, ValueError) as e:
            print(f"Could not persist state: {e!r}")

    def _set(self, **changes) -> None:
        self.state = self.state.model_copy(update=changes)
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception as e:
                print(f"Store listener failed: {e!r}")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_page(self, page: Page) -> None:
        if page not in get_args(Page):
            raise ValueError(f"Unknown page: {page}")
        self._set(currentPage=page)

    def add_couplet_history(self, couplet: CoupletResult) -> None:
        self._set(coupletHistory=[couplet.model_copy(), *self.state.coupletHistory])

    def add_fortune_history(self, fortune: FortuneCard) -> None:
        # ids come from the model and may repeat; no dedup
        self._set(fortuneHistory=[fortune.model_copy(), *self.state.fortuneHistory])

    def toggle_sound(self) -> None:
        s = self.state.settings
        self._set(settings=s.model_copy(update={"soundEnabled": not s.soundEnabled}))

    def toggle_animation(self) -> None:
        s = self.state.settings
        self._set(
            settings=s.model_copy(update={"animationEnabled": not s.animationEnabled})
        )
