from datetime import datetime

import plotly.graph_objects as go

from components import ChartBuilder, PanelBuilder
from models import EmotionCount, SentimentPoint, Theme
from utils.analytics import AggregationEngine


def test_emotion_chart_keeps_frequency_order():
    df = AggregationEngine.frequency_frame([
        EmotionCount("sadness", 3),
        EmotionCount("anger", 3),
        EmotionCount("calm", 1),
    ])

    fig = ChartBuilder.create_emotion_frequency_chart(df, Theme.DARK)

    assert isinstance(fig.data[0], go.Bar)
    assert list(fig.data[0].x) == ["sadness", "anger", "calm"]
    assert list(fig.layout.xaxis.categoryarray) == ["sadness", "anger", "calm"]
    assert fig.layout.paper_bgcolor == ChartBuilder.PALETTES[Theme.DARK]['paper']


def test_timeline_chart_plots_by_position():
    df = AggregationEngine.timeline_frame([
        SentimentPoint("5/2/2024", -1),
        SentimentPoint("5/2/2024", 0),
        SentimentPoint("5/3/2024", 1),
    ])

    fig = ChartBuilder.create_sentiment_timeline_chart(df)

    trace = fig.data[0]
    assert isinstance(trace, go.Scatter)
    assert list(trace.x) == [0, 1, 2]
    assert list(trace.y) == [-1, 0, 1]
    assert list(fig.layout.xaxis.ticktext) == ["5/2/2024", "5/2/2024", "5/3/2024"]
    assert list(fig.layout.yaxis.tickvals) == [1, 0, -1]


def test_truncate():
    assert PanelBuilder.truncate("short\n  entry") == "short entry"
    preview = PanelBuilder.truncate("word " * 50, width=20)
    assert len(preview) <= 20
    assert preview.endswith("…")


def test_format_timestamp_naive():
    assert PanelBuilder.format_timestamp(datetime(2024, 3, 9, 7, 5)) == "Mar 09, 2024 07:05"


def test_sentiment_legend_has_no_signed_zero():
    legend = PanelBuilder.sentiment_legend()

    assert "Positive = +1" in legend
    assert "Neutral = 0" in legend
    assert "Negative = -1" in legend
    assert "+0" not in legend
