from __future__ import annotations

from pydantic import BaseModel, Field


class ScoreDetailsResponse(BaseModel):
    info: float = 0
    pool: float = 0
    transactions: float = 0
    holders: float = 0
    creation: float = 0


class LockedLiquidityResponse(BaseModel):
    locked_percent: float
    next_unlock_timestamp: str | None
    final_unlock_timestamp: str | None
    source: str
    url: str


class SentimentVotesResponse(BaseModel):
    total: float = 0
    up_percentage: float = 0
    down_percentage: float = 0


class SecurityLinkResponse(BaseModel):
    name: str
    category: str
    url: str
    image_url: str


class SecurityResponse(BaseModel):
    gt_score: float
    gt_score_details: ScoreDetailsResponse
    locked_liquidity: LockedLiquidityResponse | None
    sentiment_votes: SentimentVotesResponse
    security_links: list[SecurityLinkResponse]


class SocialLinksResponse(BaseModel):
    websites: list[str]
    discord_url: str | None
    twitter_handle: str | None
    telegram_handle: str | None
    medium_handle: str | None
    github_repo_name: str | None
    subreddit_handle: str | None
    tiktok_handle: str | None
    youtube_handle: str | None
    facebook_handle: str | None
    instagram_handle: str | None
    description: str


class PumpPoolResponse(BaseModel):
    id: str
    base_token_id: str
    name: str
    symbol: str
    image_url: str
    pump_address: str = Field(..., description="Base token mint address.")
    pool_address: str
    price: str = Field(..., description="Price in USD, string-encoded as upstream sends it.")
    age: str = Field(..., description="Pool creation timestamp (ISO 8601).")
    volume: str
    liquidity: str
    market_cap_to_holder: float
    fdv: float
    changes: dict[str, str] = Field(
        ...,
        description="Percent change per period (5m, 15m, 30m, 1h, 6h, 24h), string-encoded.",
    )
    social_links: SocialLinksResponse
    security: SecurityResponse
    swap_count_24h: int


class ErrorResponse(BaseModel):
    error: str
    message: str
