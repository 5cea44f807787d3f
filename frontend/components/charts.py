"""
Chart Components for the Mood Journal Dashboard
Emotion frequency and sentiment-over-time charts using Plotly
"""

import plotly.graph_objects as go
import pandas as pd

from models import Theme


class ChartBuilder:
    """Build dashboard charts for either theme"""

    PALETTES = {
        Theme.LIGHT: {
            'bg': '#ffffff',
            'paper': '#ffffff',
            'grid': '#e2e8f0',
            'text': '#0f172a',
            'text_muted': '#64748b',
            'primary': '#6366f1',
        },
        Theme.DARK: {
            'bg': '#0f1419',
            'paper': '#0f1419',
            'grid': '#1e2530',
            'text': '#e6edf3',
            'text_muted': '#7d8590',
            'primary': '#818cf8',
        },
    }

    SENTIMENT_TICKS = {1: 'Positive', 0: 'Neutral', -1: 'Negative'}

    @staticmethod
    def get_layout_template(theme: Theme = Theme.LIGHT) -> dict:
        """Get consistent layout template for all charts"""
        colors = ChartBuilder.PALETTES[theme]
        return {
            'paper_bgcolor': colors['paper'],
            'plot_bgcolor': colors['bg'],
            'font': {
                'family': 'Inter, system-ui, sans-serif',
                'color': colors['text'],
                'size': 12
            },
            'margin': {'l': 60, 'r': 20, 't': 40, 'b': 40},
            'xaxis': {
                'gridcolor': colors['grid'],
                'zerolinecolor': colors['grid'],
                'tickfont': {'size': 11, 'color': colors['text_muted']},
                'showgrid': True,
                'gridwidth': 1,
                'griddash': 'dash'
            },
            'yaxis': {
                'gridcolor': colors['grid'],
                'zerolinecolor': colors['grid'],
                'tickfont': {'size': 11, 'color': colors['text_muted']},
                'showgrid': True,
                'gridwidth': 1,
                'griddash': 'dash'
            },
            'legend': {
                'orientation': 'h',
                'yanchor': 'bottom',
                'y': -0.25,
                'font': {'size': 11}
            },
            'hovermode': 'x unified',
        }

    @staticmethod
    def create_emotion_frequency_chart(
        df: pd.DataFrame,
        theme: Theme = Theme.LIGHT,
        title: str = "Emotion Frequency",
        height: int = 320
    ) -> go.Figure:
        """Bar chart of emotion counts, in the order given"""

        colors = ChartBuilder.PALETTES[theme]

        fig = go.Figure(
            go.Bar(
                x=df['emotion'],
                y=df['count'],
                marker_color=colors['primary'],
                name='count',
                showlegend=True
            )
        )

        layout = ChartBuilder.get_layout_template(theme)
        layout['height'] = height
        layout['title'] = {'text': title, 'x': 0.02, 'font': {'size': 14}}
        layout['yaxis']['rangemode'] = 'tozero'
        layout['yaxis']['dtick'] = 1
        # Keep the frequency order instead of Plotly's category sort
        layout['xaxis']['categoryorder'] = 'array'
        layout['xaxis']['categoryarray'] = list(df['emotion'])

        fig.update_layout(**layout)
        return fig

    @staticmethod
    def create_sentiment_timeline_chart(
        df: pd.DataFrame,
        theme: Theme = Theme.LIGHT,
        title: str = "Sentiment Over Time",
        height: int = 320
    ) -> go.Figure:
        """Line chart of sentiment scores, oldest entry on the left"""

        colors = ChartBuilder.PALETTES[theme]

        # Dates repeat when several entries share a day; plot by position
        positions = list(range(len(df)))

        fig = go.Figure(
            go.Scatter(
                x=positions,
                y=df['score'],
                mode='lines+markers',
                line={'color': colors['primary'], 'width': 2, 'shape': 'spline'},
                marker={'size': 7},
                customdata=df['date'],
                hovertemplate='%{customdata}: %{y}<extra></extra>',
                name='Sentiment',
                showlegend=True
            )
        )

        layout = ChartBuilder.get_layout_template(theme)
        layout['height'] = height
        layout['title'] = {'text': title, 'x': 0.02, 'font': {'size': 14}}
        layout['xaxis'].update({
            'tickmode': 'array',
            'tickvals': positions,
            'ticktext': list(df['date']),
        })
        layout['yaxis'].update({
            'range': [-1.2, 1.2],
            'tickmode': 'array',
            'tickvals': list(ChartBuilder.SENTIMENT_TICKS.keys()),
            'ticktext': list(ChartBuilder.SENTIMENT_TICKS.values()),
        })

        fig.update_layout(**layout)
        return fig
