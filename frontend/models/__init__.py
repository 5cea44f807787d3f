"""
Typed Models for Frontend
Journal entries, analysis verdicts and dashboard views.
"""

from .journal import (
    Sentiment,
    Theme,
    User,
    Credentials,
    AnalysisResult,
    JournalEntry,
    EmotionCount,
    SentimentPoint,
    DashboardSummary,
)

__all__ = [
    "Sentiment",
    "Theme",
    "User",
    "Credentials",
    "AnalysisResult",
    "JournalEntry",
    "EmotionCount",
    "SentimentPoint",
    "DashboardSummary",
]
