"""
Panel Components for the Mood Journal
Analysis result cards and entry overviews
"""

import html
from datetime import datetime
from typing import List

import streamlit as st

from models import AnalysisResult, DashboardSummary, JournalEntry, Sentiment


class PanelBuilder:
    """Build journal and dashboard panels"""

    PENDING_COLOR = "#64748b"

    @staticmethod
    def truncate(text: str, width: int = 120) -> str:
        """Single-line preview of an entry"""
        flat = " ".join(text.split())
        if len(flat) <= width:
            return flat
        return flat[:width - 1].rstrip() + "…"

    @staticmethod
    def signed(score: int) -> str:
        return f"{score:+d}" if score else "0"

    @staticmethod
    def format_timestamp(ts: datetime) -> str:
        if ts.tzinfo is not None:
            ts = ts.astimezone()
        return ts.strftime('%b %d, %Y %H:%M')

    @staticmethod
    def render_analysis_result(result: AnalysisResult) -> None:
        """Render the verdict of a freshly analyzed entry"""

        sentiment = result.sentiment
        emotions = "".join(
            f'<span class="emotion-chip">{html.escape(e)}</span>' for e in result.emotions
        )

        st.markdown("### ✨ Your Analysis")
        col1, col2 = st.columns(2)
        with col1:
            st.markdown(f"""
            <div class="analysis-card">
                <div class="card-label">Overall Sentiment</div>
                <div class="sentiment-value" style="color: {sentiment.color};">{sentiment.label}</div>
            </div>
            """, unsafe_allow_html=True)
        with col2:
            st.markdown(f"""
            <div class="analysis-card">
                <div class="card-label">Detected Emotions</div>
                <div class="emotion-list">{emotions or '—'}</div>
            </div>
            """, unsafe_allow_html=True)

        st.markdown(f"""
        <div class="analysis-card">
            <div class="card-label">Feedback</div>
            <div class="card-text">{html.escape(result.feedback)}</div>
        </div>
        <div class="analysis-card affirmation">
            <div class="card-label">Daily Affirmation</div>
            <div class="card-text"><em>"{html.escape(result.affirmation)}"</em></div>
        </div>
        """, unsafe_allow_html=True)

    @staticmethod
    def render_summary_metrics(summary: DashboardSummary) -> None:
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Entries", summary.total_entries)
        with col2:
            st.metric("Analyzed", summary.analyzed_entries)
        with col3:
            top = summary.emotion_frequency[0].label if summary.emotion_frequency else "—"
            st.metric("Top Emotion", top)

    @staticmethod
    def render_recent_entries(entries: List[JournalEntry]) -> None:
        """Render the recent-entries overview"""

        for entry in entries:
            if entry.sentiment is not None:
                sentiment_html = (
                    f'<span class="entry-sentiment" style="color: {entry.sentiment.color};">'
                    f'{entry.sentiment.value}</span>'
                )
            else:
                sentiment_html = (
                    f'<span class="entry-sentiment" style="color: {PanelBuilder.PENDING_COLOR};">'
                    f'Not analyzed</span>'
                )

            chips = "".join(
                f'<span class="emotion-chip small">{html.escape(e)}</span>'
                for e in (entry.emotions or [])[:2]
            )

            st.markdown(f"""
            <div class="entry-item">
                <div class="entry-content">{html.escape(PanelBuilder.truncate(entry.content))}</div>
                <div class="entry-meta">
                    <span class="entry-time">{PanelBuilder.format_timestamp(entry.created_at)}</span>
                    <span>{sentiment_html} {chips}</span>
                </div>
            </div>
            """, unsafe_allow_html=True)

    @staticmethod
    def render_empty_dashboard() -> None:
        st.markdown("""
        <div class="empty-state">
            <h2>Your Dashboard is Empty</h2>
            <p>Start by writing a journal entry to see your emotional insights here.</p>
        </div>
        """, unsafe_allow_html=True)

    @staticmethod
    def sentiment_legend() -> str:
        return " · ".join(
            f'<span style="color: {s.color};">{s.value} = {PanelBuilder.signed(s.score)}</span>'
            for s in Sentiment
        )
