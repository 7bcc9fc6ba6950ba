"""Services package - business logic layer."""
from .diversity import DiversitySelector
from .feed import FeedService, validate_catalogue
from .ranking import RankingEngine
from .signals import (
    EngagementSignal,
    PersonalizationSignal,
    QualitySignal,
    RecencySignal,
    SignalStrategy,
    TrendingSignal,
)
from .similarity import SimilarityFinder

__all__ = [
    "DiversitySelector",
    "EngagementSignal",
    "FeedService",
    "PersonalizationSignal",
    "QualitySignal",
    "RankingEngine",
    "RecencySignal",
    "SignalStrategy",
    "SimilarityFinder",
    "TrendingSignal",
    "validate_catalogue",
]
