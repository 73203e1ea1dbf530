from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.components.collect import CollectRequest


# --- Collect ---
class CollectPayload(BaseModel):
    """Beacon sent by the tracking script. Unknown fields are ignored."""

    path: str | None = Field(None, description="Page path")
    referrer: str | None = Field(None, description="document.referrer")
    screen_size: str | None = Field(None, description="WIDTHxHEIGHT")
    user_agent: str | None = Field(None, description="navigator.userAgent")
    duration_sec: int | None = Field(None, description="0 on load, seconds on page when leaving")

    model_config = ConfigDict(extra="ignore")

    def to_request(self) -> CollectRequest:
        return CollectRequest(
            path=self.path or "",
            referrer=self.referrer or "",
            screen_size=self.screen_size or "",
            user_agent=self.user_agent or "",
            duration_sec=self.duration_sec or 0,
        )


class OkResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    ok: bool = False
    errors: list[dict[str, Any]]


# --- Dashboard ---
class CountItemModel(BaseModel):
    label: str
    count: int


class SummaryResponse(BaseModel):
    period: str
    unique_visitors: int
    page_views: int
    avg_duration_sec: float
    top_pages: list[CountItemModel]
    top_referrers: list[CountItemModel]
    browsers: list[CountItemModel]
    operating_systems: list[CountItemModel]
    devices: list[CountItemModel]
    screen_sizes: list[CountItemModel]


class BotStatsResponse(BaseModel):
    period: str
    total_hits: int
    top_bots: list[CountItemModel]
    top_paths: list[CountItemModel]
