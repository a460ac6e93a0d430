"""Analytics package."""

from wallet.analytics.engine import AnalyticsEngine

__all__ = ["AnalyticsEngine"]
