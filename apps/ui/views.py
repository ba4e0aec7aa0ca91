from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from apps.ui.state import DashboardState
from apps.ui.transformers import format_change, format_price, quotes_to_frame

CARDS_PER_ROW = 4


def render_cards(df: pd.DataFrame) -> None:
    if df.empty:
        st.info("No index data yet.")
        return

    for start in range(0, len(df), CARDS_PER_ROW):
        columns = st.columns(CARDS_PER_ROW)
        for column, (_, row) in zip(columns, df.iloc[start : start + CARDS_PER_ROW].iterrows()):
            with column.container(border=True):
                st.metric(
                    label=row["name"],
                    value=f"{format_price(row['price'])} {row['currency']}",
                    delta=format_change(row["change"], row["change_percent"]),
                )
                st.caption(f"{row['symbol']} · {row['source']} · updated {row['last_update']:%H:%M:%S}")


def render_change_chart(df: pd.DataFrame) -> None:
    if df.empty:
        return
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X(field="name", type="nominal", sort=None, title=None),
            y=alt.Y(field="change_percent", type="quantitative", title="Change %"),
            color=alt.Color(
                field="direction",
                type="nominal",
                scale=alt.Scale(domain=["up", "down", "flat"], range=["#16a34a", "#dc2626", "#6b7280"]),
                legend=None,
            ),
            tooltip=[
                alt.Tooltip(field="symbol", type="nominal"),
                alt.Tooltip(field="price", type="quantitative", format=",.2f"),
                alt.Tooltip(field="change_percent", type="quantitative", format="+.2f"),
            ],
        )
    )
    st.altair_chart(chart, width="stretch")


def render_dashboard(state: DashboardState, poll_interval_seconds: int) -> None:
    if state.loading:
        st.info("Loading real-time market data...")
        return

    if state.last_update:
        st.caption(f"Last updated: {state.last_update.isoformat()}")
    if state.error:
        st.error(state.error)
    if state.note:
        st.caption(state.note)

    df = quotes_to_frame(state.quotes)
    render_cards(df)
    st.subheader("Daily change")
    render_change_chart(df)
    st.caption(f"Data refreshes every {poll_interval_seconds} seconds. Market data may be delayed.")
