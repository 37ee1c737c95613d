from tweetvid.scrapers.base import (
    BaseStrategy,
    MediaCandidate,
    ResolvedMedia,
    StrategyOutcome,
)
from tweetvid.scrapers.desktop import DesktopPageStrategy
from tweetvid.scrapers.mobile import MobilePageStrategy
from tweetvid.scrapers.fxtwitter import FxTwitterStrategy

# Priority order: richest but most fragile first, external mirror last.
STRATEGIES: list[type[BaseStrategy]] = [
    DesktopPageStrategy,
    MobilePageStrategy,
    FxTwitterStrategy,
]


def default_strategies() -> list[BaseStrategy]:
    return [strategy_cls() for strategy_cls in STRATEGIES]


__all__ = [
    "BaseStrategy",
    "MediaCandidate",
    "ResolvedMedia",
    "StrategyOutcome",
    "STRATEGIES",
    "DesktopPageStrategy",
    "MobilePageStrategy",
    "FxTwitterStrategy",
    "default_strategies",
]
