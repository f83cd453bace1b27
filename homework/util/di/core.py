"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from homework.config import (
    AuthSettings,
    PaginationSettings,
    RankingSettings,
    RateLimitSettings,
    Settings,
)
from homework.util.di.base import ProviderBase
from homework.util.ratelimit import RateLimiter


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_ranking_settings(self, settings: Settings) -> RankingSettings:
        """Provide trending score settings."""
        return settings.ranking

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        """Provide pagination settings."""
        return settings.pagination

    @provide(scope=Scope.APP)
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        """Provide rate limit settings."""
        return settings.rate_limit

    @provide(scope=Scope.APP)
    def provide_rate_limiter(self, rate_limit: RateLimitSettings) -> RateLimiter:
        """Provide the process-wide rate limiter."""
        return RateLimiter(rate_limit)
