"""Progress banner shown while a month batch is being fetched."""

from __future__ import annotations

import streamlit as st


class ProgressReporter:
    """Banner + progress bar driven by ``ProjectService`` progress callbacks."""

    def __init__(self, title: str):
        self._root = st.empty()
        self._container = self._root.container()
        self._container.info(title)
        self._message = self._container.empty()
        self._bar = self._container.progress(0.0)
        self._total: int | None = None
        self._done = 0
        self._finalized = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._finalized:
            return
        if total:
            self._total = total
        if current is not None:
            self._done = max(0, current)
        self._message.write(message)
        ratio = min(self._done / self._total, 1.0) if self._total else 0.0
        self._bar.progress(ratio)

    def complete(self, message: str) -> None:
        if self._finalized:
            return
        self._bar.progress(1.0)
        self._container.success(message)
        self._finalized = True

    def error(self, message: str) -> None:
        if self._finalized:
            return
        self._container.error(message)
        self._finalized = True

    def discard(self) -> None:
        """Drop the banner when the batch turned out to be stale."""
        self._root.empty()
        self._finalized = True
