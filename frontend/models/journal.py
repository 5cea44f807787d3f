"""
Typed Journal Models
Lightweight dataclasses for journal entries, analysis results and the
derived dashboard views.

The journal service speaks JSON; everything past the API client sees
these types only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List


# =============================================================================
# Enums
# =============================================================================

class Sentiment(Enum):
    """Overall sentiment verdict of an analyzed entry"""
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"

    @property
    def score(self) -> int:
        scores = {
            "Positive": 1,
            "Neutral": 0,
            "Negative": -1,
        }
        return scores[self.value]

    @property
    def label(self) -> str:
        labels = {
            "Positive": "🙂 Positive",
            "Neutral": "😐 Neutral",
            "Negative": "🙁 Negative",
        }
        return labels.get(self.value, self.value)

    @property
    def color(self) -> str:
        colors = {
            "Positive": "#10b981",
            "Neutral": "#f59e0b",
            "Negative": "#ef4444",
        }
        return colors.get(self.value, "#64748b")

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Sentiment"]:
        """Map a wire value to a Sentiment; None stays None"""
        if value is None:
            return None
        if isinstance(value, Sentiment):
            return value
        return cls(value)


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


# =============================================================================
# Data Models
# =============================================================================

@dataclass(frozen=True)
class User:
    """Account identity as known to this client"""
    id: int
    username: str
    email: str = ""


@dataclass(frozen=True)
class Credentials:
    """Access/refresh token pair issued by the journal service"""
    access: str
    refresh: str

    @classmethod
    def from_api_response(cls, data: dict) -> "Credentials":
        return cls(access=data["access"], refresh=data.get("refresh", ""))


@dataclass(frozen=True)
class AnalysisResult:
    """Verdict returned by the analysis service for one entry"""
    sentiment: Sentiment
    emotions: List[str] = field(default_factory=list)
    feedback: str = ""
    affirmation: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "AnalysisResult":
        return cls(
            sentiment=Sentiment(data["sentiment"]),
            emotions=list(data.get("emotions") or []),
            feedback=data.get("feedback", ""),
            affirmation=data.get("affirmation", ""),
        )


@dataclass(frozen=True)
class JournalEntry:
    """
    A persisted journal entry.

    ``sentiment`` and ``emotions`` are set together by the analysis phase;
    an entry has either both or neither.
    """
    id: int
    user: int
    content: str
    created_at: datetime
    sentiment: Optional[Sentiment] = None
    emotions: Optional[List[str]] = None

    def __post_init__(self):
        if (self.sentiment is None) != (self.emotions is None):
            raise ValueError(
                f"Entry {self.id}: sentiment and emotions must be set together"
            )

    @property
    def is_analyzed(self) -> bool:
        return self.sentiment is not None

    def with_analysis(self, result: AnalysisResult) -> "JournalEntry":
        """Return a copy carrying the analysis fields of ``result``"""
        return JournalEntry(
            id=self.id,
            user=self.user,
            content=self.content,
            created_at=self.created_at,
            sentiment=result.sentiment,
            emotions=list(result.emotions),
        )

    @classmethod
    def from_api_response(cls, data: dict) -> "JournalEntry":
        """Parse API response into typed model"""
        created_at = data["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))

        emotions = data.get("emotions")
        return cls(
            id=data["id"],
            user=data.get("user", 0),
            content=data.get("content", ""),
            created_at=created_at,
            sentiment=Sentiment.parse(data.get("sentiment")),
            emotions=list(emotions) if emotions is not None else None,
        )


# =============================================================================
# Dashboard Views
# =============================================================================

@dataclass(frozen=True)
class EmotionCount:
    label: str
    count: int


@dataclass(frozen=True)
class SentimentPoint:
    display_date: str
    score: int


@dataclass(frozen=True)
class DashboardSummary:
    """All dashboard views derived from one snapshot of entries"""
    emotion_frequency: List[EmotionCount]
    sentiment_timeline: List[SentimentPoint]
    recent_entries: List[JournalEntry]
    total_entries: int
    analyzed_entries: int

    @property
    def pending_entries(self) -> int:
        return self.total_entries - self.analyzed_entries

    @property
    def is_empty(self) -> bool:
        return self.total_entries == 0
