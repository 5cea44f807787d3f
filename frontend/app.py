import logging
from dataclasses import dataclass
from typing import List, Optional

import streamlit as st

from components.charts import ChartBuilder
from components.panels import PanelBuilder
from core import (
    AnalysisError,
    EntryLoader,
    EntrySubmissionOrchestrator,
    JournalError,
)
from models import DashboardSummary, JournalEntry, Theme
from state import (
    ClientStorage,
    CredentialPersistence,
    PreferenceStore,
    RouteDecision,
    RouteGuard,
    SessionManager,
    SessionStore,
)
from utils.analytics import AggregationEngine
from utils.api_client import APIClient
from utils.config import settings
from utils.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=settings.APP_NAME,
    page_icon="🧠",
    layout="wide",
    initial_sidebar_state="expanded"
)

SIDEBAR_PAGES = ["Journal", "Dashboard"]


# =============================================================================
# Per-browser-session wiring
# =============================================================================

@dataclass
class JournalApp:
    """Everything one browser session needs, wired explicitly"""
    store: SessionStore
    client: APIClient
    manager: SessionManager
    guard: RouteGuard
    orchestrator: EntrySubmissionOrchestrator
    loader: EntryLoader
    preferences: PreferenceStore


def browser_client_id(storage: ClientStorage) -> str:
    """Id of this browser, kept in the URL so a reload finds the same file"""
    client_id = st.query_params.get("client")
    if not storage.is_valid_id(client_id):
        client_id = storage.new_client_id()
        st.query_params["client"] = client_id
    return client_id


def build_app() -> JournalApp:
    storage = ClientStorage(settings.STORAGE_DIR)
    kv_store = storage.store_for(browser_client_id(storage))
    store = SessionStore()
    client = APIClient(settings.BACKEND_URL, token_provider=lambda: store.access_token)
    manager = SessionManager(
        store,
        auth=client,
        persistence=CredentialPersistence(kv_store),
        verifier=client,
    )
    return JournalApp(
        store=store,
        client=client,
        manager=manager,
        guard=RouteGuard(store),
        orchestrator=EntrySubmissionOrchestrator(store, client),
        loader=EntryLoader(store, client),
        preferences=PreferenceStore(kv_store, Theme(settings.DEFAULT_THEME)),
    )


def init_session_state() -> JournalApp:
    defaults = {
        'current_page': 'Journal',
        'draft': '',
        'analysis': None,
        'journal_error': None,
        'entries': None,
        'entries_error': None,
        'summary': None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

    if 'journal_app' not in st.session_state:
        st.session_state.journal_app = build_app()
    return st.session_state.journal_app


def reset_user_state() -> None:
    """Drop everything that belonged to the previous user"""
    st.session_state.analysis = None
    st.session_state.journal_error = None
    st.session_state.entries = None
    st.session_state.entries_error = None
    st.session_state.summary = None
    st.session_state.draft = ''


# =============================================================================
# Styling
# =============================================================================

def load_css(theme: Theme) -> None:
    if theme == Theme.DARK:
        bg, card, text, muted, border = "#0b1120", "#111827", "#e5e7eb", "#94a3b8", "#1f2937"
    else:
        bg, card, text, muted, border = "#f8fafc", "#ffffff", "#0f172a", "#64748b", "#e2e8f0"

    st.markdown(f"""
    <style>
        .stApp {{ background: {bg}; color: {text}; }}
        .analysis-card, .entry-item {{
            background: {card}; border: 1px solid {border}; border-radius: 10px;
            padding: 14px 16px; margin-bottom: 12px;
        }}
        .analysis-card.affirmation {{ border-left: 4px solid #6366f1; }}
        .card-label {{ font-weight: 600; margin-bottom: 6px; }}
        .card-text, .entry-time {{ color: {muted}; }}
        .sentiment-value {{ font-size: 24px; font-weight: 700; }}
        .emotion-chip {{
            display: inline-block; padding: 2px 10px; margin: 2px;
            border-radius: 999px; background: {border}; font-size: 13px;
        }}
        .emotion-chip.small {{ font-size: 11px; padding: 1px 8px; }}
        .entry-content {{ color: {muted}; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }}
        .entry-meta {{ display: flex; justify-content: space-between; margin-top: 6px; font-size: 13px; }}
        .entry-sentiment {{ font-weight: 600; }}
        .empty-state {{ text-align: center; padding: 60px 0; }}
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# Auth Page
# =============================================================================

def render_auth_page(app: JournalApp) -> None:
    st.markdown(f"## 🧠 {settings.APP_NAME}")
    st.caption("Write it down. Get instant emotional insights.")

    login_tab, register_tab = st.tabs(["Log In", "Create Account"])

    with login_tab:
        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Log In", use_container_width=True)
        if submitted:
            try:
                app.manager.login(username, password)
            except JournalError as exc:
                st.error(str(exc))
            else:
                reset_user_state()
                st.rerun()

    with register_tab:
        with st.form("register_form"):
            username = st.text_input("Username", key="register_username")
            email = st.text_input("Email")
            password = st.text_input("Password", type="password", key="register_password")
            submitted = st.form_submit_button("Create Account", use_container_width=True)
        if submitted:
            try:
                app.manager.register(username, email, password)
            except JournalError as exc:
                st.error(str(exc))
            else:
                reset_user_state()
                st.rerun()


# =============================================================================
# Sidebar
# =============================================================================

def render_sidebar(app: JournalApp) -> None:
    with st.sidebar:
        st.markdown(f"### 🧠 {settings.APP_NAME}")

        st.session_state.current_page = st.radio(
            "Navigate",
            SIDEBAR_PAGES,
            index=SIDEBAR_PAGES.index(st.session_state.current_page),
            label_visibility="collapsed",
        )

        st.markdown("---")
        user = app.manager.user
        st.markdown(f"**Welcome, {user.username if user and user.username else 'User'}**")
        if user and user.email:
            st.caption(user.email)

        theme = app.preferences.theme
        toggle_label = "☀️ Light Mode" if theme == Theme.DARK else "🌙 Dark Mode"
        if st.button(toggle_label, use_container_width=True):
            app.preferences.toggle_theme()
            st.rerun()

        if st.button("Logout", use_container_width=True):
            app.manager.logout()
            reset_user_state()
            st.rerun()


# =============================================================================
# Journal Page
# =============================================================================

def handle_submit() -> None:
    """Button callback; runs before the page re-renders"""
    app: JournalApp = st.session_state.journal_app
    st.session_state.analysis = None
    st.session_state.journal_error = None

    def clear_draft(_result):
        st.session_state.draft = ''

    try:
        result = app.orchestrator.submit(st.session_state.draft, on_success=clear_draft)
    except AnalysisError as exc:
        st.session_state.journal_error = str(exc)
        # The saved entry shows up on the dashboard as not analyzed
        st.session_state.entries = None
    except JournalError as exc:
        st.session_state.journal_error = str(exc)
    else:
        st.session_state.analysis = result
        st.session_state.entries = None


def render_journal_page(app: JournalApp) -> None:
    st.markdown("## My Journal")
    st.caption("What's on your mind today? Write it down and get instant emotional insights.")

    st.text_area(
        "Entry",
        key="draft",
        height=260,
        placeholder="Start writing here...",
        label_visibility="collapsed",
    )

    if st.session_state.journal_error:
        st.error(st.session_state.journal_error)

    st.button(
        "✨ Save & Analyze Entry",
        on_click=handle_submit,
        disabled=app.orchestrator.is_busy() or not st.session_state.draft.strip(),
        type="primary",
    )

    if st.session_state.analysis is not None:
        PanelBuilder.render_analysis_result(st.session_state.analysis)


# =============================================================================
# Dashboard Page
# =============================================================================

def load_entries(app: JournalApp) -> Optional[List[JournalEntry]]:
    if st.session_state.entries is None:
        try:
            with st.spinner("Loading dashboard..."):
                st.session_state.entries = app.loader.fetch_entries()
            st.session_state.entries_error = None
        except JournalError as exc:
            st.session_state.entries_error = str(exc)
            return None
        st.session_state.summary = None
    return st.session_state.entries


def get_summary(entries: List[JournalEntry]) -> DashboardSummary:
    # Recomputed only when a new snapshot of entries was fetched
    if st.session_state.summary is None:
        st.session_state.summary = AggregationEngine.summarize(entries, settings.PREVIEW_LIMIT)
    return st.session_state.summary


def render_pending_entries(app: JournalApp, entries: List[JournalEntry]) -> None:
    pending = [e for e in entries if not e.is_analyzed]
    if not pending:
        return

    with st.expander(f"{len(pending)} entr{'y' if len(pending) == 1 else 'ies'} waiting for analysis"):
        for entry in pending:
            col1, col2 = st.columns([5, 1])
            with col1:
                st.caption(PanelBuilder.format_timestamp(entry.created_at))
                st.write(PanelBuilder.truncate(entry.content, 200))
            with col2:
                if st.button("Analyze", key=f"retry_{entry.id}"):
                    try:
                        app.orchestrator.retry_analysis(entry)
                    except JournalError as exc:
                        st.error(str(exc))
                    else:
                        st.session_state.entries = None
                        st.rerun()


def render_dashboard_page(app: JournalApp) -> None:
    header, refresh = st.columns([5, 1])
    with header:
        st.markdown("## Your Emotional Dashboard")
    with refresh:
        if st.button("Refresh", use_container_width=True):
            st.session_state.entries = None

    entries = load_entries(app)
    if entries is None:
        st.error(f"Error loading data: {st.session_state.entries_error}")
        return

    summary = get_summary(entries)
    if summary.is_empty:
        PanelBuilder.render_empty_dashboard()
        return

    PanelBuilder.render_summary_metrics(summary)

    theme = app.preferences.theme
    col1, col2 = st.columns(2)
    with col1:
        fig = ChartBuilder.create_emotion_frequency_chart(
            AggregationEngine.frequency_frame(summary.emotion_frequency), theme=theme
        )
        st.plotly_chart(fig, use_container_width=True)
    with col2:
        fig = ChartBuilder.create_sentiment_timeline_chart(
            AggregationEngine.timeline_frame(summary.sentiment_timeline), theme=theme
        )
        st.plotly_chart(fig, use_container_width=True)
        st.markdown(PanelBuilder.sentiment_legend(), unsafe_allow_html=True)

    st.markdown("### Recent Entries Overview")
    PanelBuilder.render_recent_entries(summary.recent_entries)

    render_pending_entries(app, entries)


# =============================================================================
# Main
# =============================================================================

def main():
    app = init_session_state()
    load_css(app.preferences.theme)

    # Decide nothing until the stored session has been looked at
    if not app.manager.is_resolved:
        with st.spinner("Loading..."):
            app.manager.resume()

    decision = app.guard.decide()
    if decision == RouteDecision.LOADING:
        st.info("Loading...")
        return
    if decision == RouteDecision.REDIRECT_TO_AUTH:
        render_auth_page(app)
        return

    render_sidebar(app)

    if st.session_state.current_page == "Dashboard":
        render_dashboard_page(app)
    else:
        render_journal_page(app)


if __name__ == "__main__":
    main()
