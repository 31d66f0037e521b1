from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import streamlit as st

from finplan.utils.answer_format import format_compact, format_currency


def _badge(text: str, kind: str = "info") -> None:
    """Small colored badge using HTML."""
    color = {
        "ok": "#0f9d58",
        "warn": "#f4b400",
        "bad": "#db4437",
        "info": "#4285f4",
    }.get(kind, "#4285f4")
    st.markdown(
        f"""
        <span style="display:inline-block;padding:2px 10px;border-radius:999px;font-size:12px;background:{color};color:white;">
          {text}
        </span>
        """,
        unsafe_allow_html=True,
    )


def _risk_kind(tier: str) -> str:
    return {"Low": "ok", "Medium": "warn", "High": "bad"}.get(tier, "info")


def year_series_frame(year_series: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(year_series, columns=["year", "accumulated_value"])
    df["label"] = df["accumulated_value"].map(format_compact)
    return df


def _render_projection_chart(year_series: List[Dict[str, Any]], goal_amount: float | None = None) -> None:
    if not year_series:
        st.caption("No projection to chart")
        return
    df = year_series_frame(year_series)
    fig = px.line(
        df,
        x="year",
        y="accumulated_value",
        markers=True,
        hover_data={"label": True},
        labels={"year": "Year", "accumulated_value": "Accumulated value"},
        title="Accumulated value by year",
    )
    if goal_amount:
        fig.add_hline(y=goal_amount, line_dash="dash", annotation_text=f"Goal {format_compact(goal_amount)}")
    st.plotly_chart(fig, use_container_width=True)


def _render_fund_cards(funds: List[Dict[str, Any]], symbol: str = "₹") -> None:
    if not funds:
        st.warning("No matching funds for the current filter.")
        return
    cols = st.columns(min(3, len(funds)))
    for i, f in enumerate(funds):
        with cols[i % len(cols)]:
            st.markdown(f"**{f['name']}**")
            st.caption(f["category"])
            _badge(f"{f['risk_tier']} Risk", _risk_kind(f["risk_tier"]))
            st.metric("5Y Returns", f"{f['five_year_return_pct']}%", delta=f"3Y {f['three_year_return_pct']}%")
            st.caption(
                f"AUM {symbol}{f['aum_crore'] / 1000:.1f}K Cr · Expense ratio {f['expense_ratio_pct']}%"
            )
            st.caption(f"Why this fund: {f['note']}")


def _render_milestones(milestones: List[Dict[str, Any]], symbol: str = "₹") -> None:
    if not milestones:
        return
    cols = st.columns(len(milestones))
    for col, m in zip(cols, milestones):
        with col:
            st.metric(f"{m['years']} Years", format_currency(m["projected_value"], symbol))
            st.caption(f"Total investment: {format_currency(m['total_invested'], symbol)}")
