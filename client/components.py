# client/components.py
import streamlit as st
import pandas as pd

def format_number(val) -> str:
    """vi-VN grouping (1.234.567); text that isn't a number is shown as-is."""
    if val in (None, "", 0, "0"):
        return "0"
    try:
        num = float(val)
    except (TypeError, ValueError):
        return str(val)
    s = f"{num:,.2f}".rstrip("0").rstrip(".")
    return s.replace(",", "_").replace(".", ",").replace("_", ".")

def show_table(rows, caption: str | None = None):
    """Render a list[dict] as a dataframe; otherwise show JSON."""
    if caption:
        st.caption(caption)
    if isinstance(rows, list) and rows and isinstance(rows[0], dict):
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
    else:
        st.write(rows)

def stat_card(col, title: str, value: str, sub: str | None = None):
    with col:
        st.metric(title, value)
        if sub:
            st.caption(sub)

def require_login():
    """Stop the page unless someone is signed in; returns the user dict."""
    user = st.session_state.get("user")
    if not user:
        st.warning("Please sign in on the home page first.")
        st.stop()
    return user
