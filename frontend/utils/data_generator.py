"""
Sample Data Generator for the Mood Journal
Generates plausible journal entries for demos and tests
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional

from models import JournalEntry, Sentiment


class DataGenerator:
    """Generate sample journal entries, newest first like the journal service"""

    EMOTIONS = {
        Sentiment.POSITIVE: ['joy', 'gratitude', 'calm', 'pride', 'excitement', 'love'],
        Sentiment.NEUTRAL: ['calm', 'curiosity', 'boredom', 'nostalgia'],
        Sentiment.NEGATIVE: ['sadness', 'anxiety', 'anger', 'frustration', 'loneliness'],
    }

    SNIPPETS = {
        Sentiment.POSITIVE: [
            "I had a wonderful day at the park with my family.",
            "Finally finished the project I've been working on for weeks.",
            "Dinner with old friends tonight made me laugh so much.",
        ],
        Sentiment.NEUTRAL: [
            "Ordinary workday, a few meetings and some emails to catch up on.",
            "Spent the afternoon reorganizing the bookshelf and thinking.",
        ],
        Sentiment.NEGATIVE: [
            "Couldn't sleep again and the whole day felt heavy and slow.",
            "Argued with my brother and I keep replaying the conversation.",
        ],
    }

    def __init__(self, seed: int = 42):
        self._rng = random.Random(seed)

    def generate_entries(
        self,
        n_entries: int = 20,
        analyzed_ratio: float = 0.85,
        user_id: int = 1,
        end_time: Optional[datetime] = None,
    ) -> List[JournalEntry]:
        """Entries roughly one per day, newest first; some left unanalyzed"""

        if end_time is None:
            end_time = datetime.now().replace(microsecond=0)

        entries = []
        ts = end_time
        for i in range(n_entries):
            sentiment = self._rng.choice(list(Sentiment))
            content = self._rng.choice(self.SNIPPETS[sentiment])

            if self._rng.random() < analyzed_ratio:
                k = self._rng.randint(1, 3)
                emotions = self._rng.sample(self.EMOTIONS[sentiment], k)
                entry_sentiment = sentiment
            else:
                emotions = None
                entry_sentiment = None

            entries.append(JournalEntry(
                id=n_entries - i,
                user=user_id,
                content=content,
                created_at=ts,
                sentiment=entry_sentiment,
                emotions=emotions,
            ))
            ts -= timedelta(hours=self._rng.randint(12, 36))

        return entries
