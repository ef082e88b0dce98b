"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from gpdesk_app.analytics.aggregations.hours_detail import DetailRow, detail_rows_to_dataframe
from gpdesk_app.core.config import EMPTY_PERIOD_MESSAGE, SETTINGS, TOTAL_LABEL

from .column_metadata import apply_column_metadata


def render_table(df: pd.DataFrame, columns: list[str] | None = None, *, limit: int | None = None) -> None:
    """Dataframe with labelled columns; an info placard when there is nothing to show."""
    if df.empty:
        st.info(EMPTY_PERIOD_MESSAGE)
        return
    cols = [c for c in (columns or list(df.columns)) if c in df.columns]
    cfg = apply_column_metadata(cols)
    st.dataframe(df[cols].head(limit or SETTINGS.max_table_rows), hide_index=True, column_config=cfg)


def highlight_total(df: pd.DataFrame, label_col: str):
    """Bold the synthetic TOTAL row."""
    if df.empty or label_col not in df.columns:
        return df

    def _style(row):
        bold = row[label_col] == TOTAL_LABEL
        return ["font-weight: bold" if bold else "" for _ in row]

    return df.style.apply(_style, axis=1)


def render_detail_rows(rows: list[DetailRow]) -> None:
    if not rows:
        st.info(EMPTY_PERIOD_MESSAGE)
        return
    df = detail_rows_to_dataframe(rows)
    kinds = [r.kind for r in rows]

    def _style(row):
        kind = kinds[row.name]
        if kind == "total":
            return ["font-weight: bold; background-color: #2980b9; color: white" for _ in row]
        if kind == "subtotal":
            return ["font-weight: bold; background-color: #e2e8f0" for _ in row]
        return ["" for _ in row]

    st.dataframe(df.style.apply(_style, axis=1), hide_index=True)
