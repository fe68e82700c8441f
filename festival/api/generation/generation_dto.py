from typing import List, Literal, Optional

from pydantic import BaseModel, Field

FortuneType = Literal["career", "love", "health", "wealth"]
Trigram = Literal["乾", "坤", "震", "巽", "坎", "离", "艮", "兑"]
Page = Literal["home", "couplet", "fortune", "firecrackers"]


class CoupletRequest(BaseModel):
    theme: str = Field("", description="Free text theme the couplet is written about.")
    style: Optional[str] = Field(
        None, description="Style tag, e.g. traditional, modern or humorous."
    )


class CoupletResult(BaseModel):
    upper: str = Field(..., description="First line (上联).")
    lower: str = Field(..., description="Second line (下联), same length as upper.")
    horizontal: str = Field(..., description="Horizontal scroll (横批), four characters.")
    explanation: str = Field("", description="Short explanation of the meaning.")


class FortuneCard(BaseModel):
    id: str = Field(..., description="Model generated id, not guaranteed unique.")
    title: str = Field(..., description="Fortune title such as 大吉 or 上上签.")
    content: str = Field(..., description="Four line verse.")
    blessing: str = Field(..., description="Detailed interpretation and blessing.")
    type: FortuneType = Field(..., description="Aspect of life the fortune is about.")
    upper_trigram: Optional[Trigram] = Field(None, description="Upper trigram.")
    lower_trigram: Optional[Trigram] = Field(None, description="Lower trigram.")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Generic failure message.")


class Preferences(BaseModel):
    soundEnabled: bool = Field(True, description="Play synthesized sound effects.")
    animationEnabled: bool = Field(True, description="Play decorative animations.")


class AppState(BaseModel):
    currentPage: Page = Field("home", description="Page currently displayed.")
    coupletHistory: List[CoupletResult] = Field(
        default_factory=list, description="Generated couplets, newest first."
    )
    fortuneHistory: List[FortuneCard] = Field(
        default_factory=list, description="Drawn fortunes, newest first."
    )
    settings: Preferences = Field(default_factory=Preferences)
