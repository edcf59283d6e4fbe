from __future__ import annotations

from html import escape
from typing import Callable

import streamlit as st

ERROR_COLOR = "#ff0000"
ACCENT_COLOR = "#5755d9"
LABEL_COLOR = "#1a1a1a"


def field_row(label: str, unit: str, *, key: str) -> None:
    """Label | text input | unit, on one line."""
    cols = st.columns([3, 2, 1], vertical_alignment="center")
    with cols[0]:
        st.markdown(
            f'<div style="text-align:right;color:{LABEL_COLOR}">{escape(label)}</div>',
            unsafe_allow_html=True,
        )
    with cols[1]:
        st.text_input(label, key=key, label_visibility="collapsed")
    with cols[2]:
        st.markdown(f'<span style="color:{LABEL_COLOR}">{escape(unit)}</span>', unsafe_allow_html=True)


def error_region(message: str) -> None:
    """
    Red error line. A blank message still renders a line of height so the
    layout below does not jump when an error appears.
    """
    text = escape(message) if message.strip() else "&nbsp;"
    st.markdown(
        f"""
        <div style="
          color:{ERROR_COLOR};
          font-size:1.05rem;
          min-height:1.6rem;
        ">{text}</div>
        """,
        unsafe_allow_html=True,
    )


def result_row(
    label: str,
    value: str,
    *,
    copy_label: str,
    key: str,
    on_copy: Callable[..., None],
    args: tuple = (),
) -> None:
    """Read-only result with a small copy button in front of it."""
    st.markdown(f'<span style="color:{LABEL_COLOR}">{escape(label)}</span>', unsafe_allow_html=True)
    cols = st.columns([1, 5], vertical_alignment="center")
    with cols[0]:
        st.button(copy_label, key=key, on_click=on_copy, args=args)
    with cols[1]:
        st.markdown(
            f"""
            <span style="
              color:{ACCENT_COLOR};
              font-size:1.9rem;
              white-space:nowrap;
            ">{escape(value)}</span>
            """,
            unsafe_allow_html=True,
        )
