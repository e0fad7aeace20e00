"""Streamlit UI for the Nordic job alert feed."""
from __future__ import annotations

import html
import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from alert_agent.config import get_env, load_settings
from alert_agent.links import resolve_apply_url
from alert_agent.log import get_logger
from alert_agent.models import JobRecord
from alert_agent.presentation import SCORE_COLORS, age_tier, format_published, score_tier
from alert_agent.report import build_digest
from alert_agent.scanners import get_scanner
from alert_agent.scanners.llm import API_KEY_ENV
from alert_agent.session import AlertSession

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

_DARK_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: #020617;
    color: #e2e8f0;
}
[data-testid="stSidebar"] {
    background: #0f172a;
    border-right: 1px solid #1e293b;
}
[data-testid="stMetric"] {
    background: #0f172a;
    padding: 0.75rem 1rem;
    border-radius: 12px;
    border: 1px solid #1e293b;
}
h1, h2, h3 {
    color: #f8fafc;
}
/* system log */
.syslog {
    background: #020617;
    border: 1px solid #1e293b;
    border-radius: 12px;
    padding: 0.75rem;
    height: 16rem;
    overflow-y: auto;
    font-family: ui-monospace, monospace;
    font-size: 0.75rem;
    color: rgba(16,185,129,0.85);
}
.syslog .muted { color: #475569; }
/* job card bits */
.score-box {
    font-family: ui-monospace, monospace;
    font-size: 1.5rem;
    font-weight: 700;
    padding: 0.1rem 0.6rem;
    border-radius: 6px;
    border: 1px solid currentColor;
    display: inline-block;
}
.age-badge {
    font-size: 0.65rem;
    font-weight: 700;
    text-transform: uppercase;
    letter-spacing: 0.08em;
    padding: 0.1rem 0.5rem;
    border-radius: 4px;
}
.age-new { background: rgba(16,185,129,0.2); color: #6ee7b7; }
.age-recent { background: rgba(59,130,246,0.2); color: #93c5fd; }
.age-aged { background: #334155; color: #94a3b8; }
.skill {
    display: inline-block;
    font-size: 0.7rem;
    margin: 0 0.25rem 0.25rem 0;
    padding: 0.05rem 0.45rem;
    border-radius: 4px;
    background: #1e293b;
    color: #cbd5e1;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _session() -> AlertSession:
    if "alert_session" not in st.session_state:
        settings = load_settings()
        st.session_state["alert_session"] = AlertSession(get_scanner(settings), settings)
        log.info("New alert session started")
    return st.session_state["alert_session"]


def _check(label: str, ok: bool) -> str:
    icon = "✅" if ok else "⬜"
    return f"{icon}  {label}"


def _render_log(session: AlertSession) -> None:
    if session.logs:
        rows = "".join(
            f'<div><span class="muted">&gt;</span> {html.escape(line)}</div>'
            for line in session.logs
        )
    else:
        rows = '<span class="muted">Waiting for input...</span>'
    st.markdown(f'<div class="syslog">{rows}</div>', unsafe_allow_html=True)


def _render_card(job: JobRecord, region: str) -> None:
    tier = age_tier(job.age_hours)
    color = SCORE_COLORS[score_tier(job.match_score)]
    with st.container(border=True):
        left, right = st.columns([5, 1])
        with left:
            st.markdown(
                f'<span class="age-badge age-{tier.name}">{html.escape(tier.label)}</span>',
                unsafe_allow_html=True,
            )
            st.markdown(f"### {job.title}")
            st.markdown(f"**{job.company}**")
            st.caption(
                f"📍 {job.location or region} · {job.employment_type.value} · "
                f"{job.seniority.value} · {format_published(job)}"
            )
        with right:
            st.markdown(
                f'<span class="score-box" style="color:{color}">{job.match_score}</span>',
                unsafe_allow_html=True,
            )
            st.caption("Match score")

        if job.skills:
            chips = "".join(f'<span class="skill">{html.escape(s)}</span>' for s in job.skills)
            st.markdown(chips, unsafe_allow_html=True)
        if job.alert_message_en:
            st.markdown(f"> {job.alert_message_en}")
        if job.alert_message_sv:
            st.markdown(f"> _{job.alert_message_sv}_")

        foot_l, foot_r = st.columns([3, 1])
        foot_l.caption(f"Source: {job.source or 'Unknown'}")
        with foot_r:
            st.link_button("Apply", resolve_apply_url(job, region), use_container_width=True)


# ── Panels ───────────────────────────────────────────────────────────────


def panel_controls(session: AlertSession) -> None:
    st.subheader("Control Panel")
    tab_feed, tab_analyze = st.tabs(["Live Monitor", "Analyze Text"])

    with tab_feed:
        st.write("Simulate a real-time scan of major Swedish job boards for the **Current Month**.")
        label = "SCANNING..." if session.busy else "SCAN MARKET (Month)"
        if st.button(label, type="primary", disabled=session.busy, use_container_width=True):
            with st.spinner("Scanning job boards…"):
                session.simulate_scan()
            st.rerun()

    with tab_analyze:
        st.write("Paste a raw job description below to test the agent's scoring and recency logic.")
        if st.session_state.pop("_clear_analyze", False):
            st.session_state["analyze_text"] = ""
        text = st.text_area(
            "Job description",
            key="analyze_text",
            height=160,
            placeholder="Paste Job Description here...",
            label_visibility="collapsed",
        )
        label = "ANALYZING..." if session.busy else "PROCESS TEXT"
        if st.button(label, disabled=session.busy or not text.strip(), use_container_width=True):
            with st.spinner("Analyzing job description…"):
                results = session.analyze_text(text)
            if results:
                st.session_state["_clear_analyze"] = True
            st.rerun()


def panel_stats(session: AlertSession) -> None:
    c1, c2 = st.columns(2)
    c1.metric("Matches Found", len(session.jobs))
    c2.metric("Fresh (<24h)", session.fresh_count)


def panel_feed(session: AlertSession) -> None:
    head_l, head_r = st.columns([3, 1])
    head_l.subheader("Intelligence Feed")
    head_r.caption("🟢 Live | Recency First")

    if not session.jobs:
        st.info(
            "**No Jobs Detected** — initialize a market scan or analyze a specific "
            "job description to populate the feed."
        )
        return

    st.download_button(
        "Download digest",
        data=build_digest(
            session.jobs,
            notify_min_score=session.settings.notify_min_score,
            region=session.settings.region,
        ),
        file_name="job_alerts.md",
        mime="text/markdown",
    )
    for job in session.jobs:
        _render_card(job, session.settings.region)


# ── Main ─────────────────────────────────────────────────────────────────


def _sidebar_status(session: AlertSession) -> None:
    with st.sidebar:
        st.markdown("**Status**")
        uses_llm = session.settings.scanner.lower() != "sample"
        has_key = bool(get_env(API_KEY_ENV))
        st.markdown(_check("Groq API key", has_key or not uses_llm))
        st.markdown(_check(f"Scanner: {'LLM' if uses_llm else 'sample data'}", True))
        if uses_llm and not has_key:
            st.error(f"Please set your {API_KEY_ENV} in the environment variables.")
        if session.last_scan_time:
            st.caption(f"Last scan: {session.last_scan_time.strftime('%H:%M:%S')}")

        st.divider()
        if st.button("🗑️ Clear feed", use_container_width=True, disabled=session.busy):
            session.clear()
            st.rerun()


def main() -> None:
    st.set_page_config(page_title="Nordic Data Intel", page_icon="✅", layout="wide")
    st.markdown(_DARK_CSS, unsafe_allow_html=True)
    session = _session()
    _sidebar_status(session)

    st.title("Nordic Data Intel")
    st.caption(f"AUTONOMOUS AGENT // {session.settings.region.upper()}")

    left, right = st.columns([4, 8], gap="large")
    with left:
        panel_controls(session)
        st.markdown("**System Log**")
        _render_log(session)
        panel_stats(session)
    with right:
        panel_feed(session)


main()
