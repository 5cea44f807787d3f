"""
Aggregation Engine for the Mood Journal Dashboard
Derives emotion frequency, sentiment timeline and recent-entry preview
from the entry collection.

Input is assumed newest-first, as returned by the journal service. Every
method is pure: inputs are never mutated, so results can be cached on the
identity of the entry snapshot.
"""

from collections import Counter
from datetime import datetime
from typing import List, Sequence

import pandas as pd

from models import (
    DashboardSummary,
    EmotionCount,
    JournalEntry,
    SentimentPoint,
)
from .config import settings


class AggregationEngine:
    """Compute dashboard views on a snapshot of journal entries"""

    @staticmethod
    def emotion_frequency(entries: Sequence[JournalEntry]) -> List[EmotionCount]:
        """
        Count emotion labels across all analyzed entries.

        Sorted by count descending; equal counts keep the order in which
        the labels were first seen.
        """
        counts: Counter = Counter()
        for entry in entries:
            if entry.emotions is None:
                continue
            counts.update(entry.emotions)

        # Counter keeps first-insertion order and most_common() sorts stably
        return [EmotionCount(label, count) for label, count in counts.most_common()]

    @staticmethod
    def sentiment_timeline(entries: Sequence[JournalEntry]) -> List[SentimentPoint]:
        """Score analyzed entries (+1/0/-1), oldest first"""
        points = [
            SentimentPoint(
                display_date=AggregationEngine.display_date(entry.created_at),
                score=entry.sentiment.score,
            )
            for entry in entries
            if entry.sentiment is not None
        ]
        points.reverse()
        return points

    @staticmethod
    def recent_preview(
        entries: Sequence[JournalEntry],
        limit: int = 5,
    ) -> List[JournalEntry]:
        """The ``limit`` most recent entries, unfiltered"""
        return list(entries[:max(limit, 0)])

    @staticmethod
    def summarize(
        entries: Sequence[JournalEntry],
        preview_limit: int = None,
    ) -> DashboardSummary:
        """All dashboard views for one snapshot"""
        if preview_limit is None:
            preview_limit = settings.PREVIEW_LIMIT

        return DashboardSummary(
            emotion_frequency=AggregationEngine.emotion_frequency(entries),
            sentiment_timeline=AggregationEngine.sentiment_timeline(entries),
            recent_entries=AggregationEngine.recent_preview(entries, preview_limit),
            total_entries=len(entries),
            analyzed_entries=sum(1 for e in entries if e.is_analyzed),
        )

    # =========================================================================
    # Formatting
    # =========================================================================

    @staticmethod
    def display_date(ts: datetime) -> str:
        """Local calendar date as M/D/YYYY"""
        if ts.tzinfo is not None:
            ts = ts.astimezone()
        return f"{ts.month}/{ts.day}/{ts.year}"

    @staticmethod
    def frequency_frame(frequency: Sequence[EmotionCount]) -> pd.DataFrame:
        """Emotion counts as a DataFrame for charting"""
        return pd.DataFrame(
            {
                'emotion': [item.label for item in frequency],
                'count': [item.count for item in frequency],
            },
            columns=['emotion', 'count'],
        )

    @staticmethod
    def timeline_frame(timeline: Sequence[SentimentPoint]) -> pd.DataFrame:
        """Sentiment points as a DataFrame, row order = chart order"""
        return pd.DataFrame(
            {
                'date': [point.display_date for point in timeline],
                'score': [point.score for point in timeline],
            },
            columns=['date', 'score'],
        )
