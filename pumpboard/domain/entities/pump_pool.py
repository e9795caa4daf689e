from __future__ import annotations

from dataclasses import dataclass, field


PERIODS = ("5m", "15m", "30m", "1h", "6h", "24h")


@dataclass(frozen=True)
class PriceChanges:
    m5: str = "0"
    m15: str = "0"
    m30: str = "0"
    h1: str = "0"
    h6: str = "0"
    h24: str = "0"

    def for_period(self, period: str) -> str:
        return self.as_dict()[period]

    def as_dict(self) -> dict[str, str]:
        return {
            "5m": self.m5,
            "15m": self.m15,
            "30m": self.m30,
            "1h": self.h1,
            "6h": self.h6,
            "24h": self.h24,
        }


@dataclass(frozen=True)
class PoolSummary:
    id: str
    address: str
    base_token_id: str
    price_usd: str
    created_at: str
    volume_usd: str
    reserve_usd: str
    price_changes: PriceChanges
    swap_count_24h: int
    fdv_usd: float
    market_cap_to_holders_ratio: float


@dataclass(frozen=True)
class TokenMeta:
    id: str
    name: str
    symbol: str
    image_url: str
    address: str


@dataclass(frozen=True)
class PoolListing:
    pools: list[PoolSummary]
    tokens: dict[str, TokenMeta]


@dataclass(frozen=True)
class ScoreDetails:
    info: float = 0
    pool: float = 0
    transactions: float = 0
    holders: float = 0
    creation: float = 0


@dataclass(frozen=True)
class LockedLiquidity:
    locked_percent: float
    next_unlock_timestamp: str | None
    final_unlock_timestamp: str | None
    source: str
    url: str


@dataclass(frozen=True)
class SentimentVotes:
    total: float = 0
    up_percentage: float = 0
    down_percentage: float = 0


@dataclass(frozen=True)
class SecurityLink:
    name: str
    category: str
    url: str
    image_url: str


@dataclass(frozen=True)
class SocialLinks:
    websites: list[str] = field(default_factory=list)
    discord_url: str | None = None
    twitter_handle: str | None = None
    telegram_handle: str | None = None
    medium_handle: str | None = None
    github_repo_name: str | None = None
    subreddit_handle: str | None = None
    tiktok_handle: str | None = None
    youtube_handle: str | None = None
    facebook_handle: str | None = None
    instagram_handle: str | None = None
    description: str = ""


@dataclass(frozen=True)
class TokenProfile:
    address: str
    social_links: SocialLinks


@dataclass(frozen=True)
class PoolDetail:
    gt_score: float = 0
    score_details: ScoreDetails = field(default_factory=ScoreDetails)
    locked_liquidity: LockedLiquidity | None = None
    sentiment_votes: SentimentVotes = field(default_factory=SentimentVotes)
    security_links: list[SecurityLink] = field(default_factory=list)
    token_profiles: list[TokenProfile] = field(default_factory=list)


@dataclass(frozen=True)
class PoolSecurity:
    gt_score: float
    score_details: ScoreDetails
    locked_liquidity: LockedLiquidity | None
    sentiment_votes: SentimentVotes
    security_links: list[SecurityLink]


@dataclass(frozen=True)
class PoolView:
    id: str
    base_token_id: str
    name: str
    symbol: str
    image_url: str
    pump_address: str
    pool_address: str
    price: str
    age: str
    volume: str
    liquidity: str
    market_cap_to_holder: float
    fdv: float
    changes: PriceChanges
    social_links: SocialLinks
    security: PoolSecurity
    swap_count_24h: int
