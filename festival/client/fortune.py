import asyncio
from typing import Callable, Dict, Literal, Optional

from festival.api.generation.generation_dto import FortuneCard
from festival.client.ai import FORTUNE_FAILED, GenerationClient
from festival.client.store import AppStore
from festival.run_utils.timing import Sleep, wait_for_all
from festival.utils.errors import ClientGenerationError

CARD_COUNT = 8
MIN_DRAW_SECONDS = 1.5

TRIGRAM_SYMBOLS: Dict[str, str] = {
    "乾": "☰",
    "坤": "☷",
    "震": "☳",
    "巽": "☴",
    "坎": "☵",
    "离": "☲",
    "艮": "☶",
    "兑": "☱",
}

TYPE_ICONS: Dict[str, str] = {
    "love": "❤️",
    "wealth": "💰",
    "career": "💼",
    "health": "🍎",
}

SHARE_OK = "运势已复制到剪贴板，快去分享给好友吧！"
SHARE_FAILED = "复制失败，请截图分享"

FortuneState = Literal["selection", "drawing", "revealed", "interpretation"]


class FortuneSession:
    """
    One visit to the fortune page.

    selection -> drawing -> revealed <-> interpretation. The draw resolves
    only after both the request and a MIN_DRAW_SECONDS timer finish; a failed
    request goes back to selection with the chosen card cleared.
    """

    def __init__(
        self,
        client: GenerationClient,
        store: AppStore,
        sleep: Optional[Sleep] = None,
        min_draw_seconds: float = MIN_DRAW_SECONDS,
    ):
        self.client = client
        self.store = store
        self.sleep = sleep or asyncio.sleep
        self.min_draw_seconds = min_draw_seconds
        self.state: FortuneState = "selection"
        self.selected_index: Optional[int] = None
        self.fortune: Optional[FortuneCard] = None
        self.error = ""

    async def select_card(self, index: int) -> None:
        if self.state != "selection":
            return
        if not 0 <= index < CARD_COUNT:
            raise IndexError(f"card index out of range: {index}")

        self.selected_index = index
        self.state = "drawing"
        self.error = ""

        try:
            data, _ = await wait_for_all(
                self.client.generate_fortune(),
                self.sleep(self.min_draw_seconds),
            )
        except ClientGenerationError as e:
            self.error = e.message or FORTUNE_FAILED
            self.state = "selection"
            self.selected_index = None
            return

        self.fortune = data
        self.store.add_fortune_history(data)
        self.state = "revealed"

    def open_interpretation(self) -> None:
        if self.state == "revealed":
            self.state = "interpretation"

    def close_interpretation(self) -> None:
        if self.state == "interpretation":
            self.state = "revealed"

    def reset(self) -> None:
        if self.state == "drawing":
            return
        self.state = "selection"
        self.fortune = None
        self.selected_index = None
        self.error = ""

    def status_line(self) -> str:
        if self.state == "selection":
            return "请凭直觉选取一张灵签"
        if self.state == "drawing":
            return "正在诚心祈福..."
        return "丙午马年 · 运势详解"

    def trigram_symbols(self) -> tuple[str, str]:
        if self.fortune is None:
            return "", ""
        return (
            TRIGRAM_SYMBOLS.get(self.fortune.upper_trigram or "", ""),
            TRIGRAM_SYMBOLS.get(self.fortune.lower_trigram or "", ""),
        )

    def type_icon(self) -> str:
        if self.fortune is None:
            return ""
        return TYPE_ICONS.get(self.fortune.type, TYPE_ICONS["health"])

    def share_text(self) -> str:
        if self.fortune is None:
            return ""
        f = self.fortune
        rule = "----------------"
        return "\n".join(
            [
                "【天马测运】2026丙午马年",
                rule,
                f"卦象：上{f.upper_trigram or ''}下{f.lower_trigram or ''}",
                rule,
                f.title,
                rule,
                f.content,
                rule,
                f"解曰：{f.blessing}",
            ]
        ).strip()

    def share(self, clipboard: Callable[[str], None]) -> Optional[str]:
        if self.fortune is None:
            return None
        try:
            clipboard(self.share_text())
        except Exception as e:
            print(f"Clipboard write failed: {e!r}")
            return SHARE_FAILED
        return SHARE_OK
