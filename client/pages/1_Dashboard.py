# client/pages/1_Dashboard.py
import os
import streamlit as st
import pandas as pd
import api as API
from components import format_number, require_login, stat_card

AUTO_REFRESH_SEC = int(os.getenv("AUTO_REFRESH_SEC", "120"))

user = require_login()
st.title("📊 Dashboard")

if "pending_delete" not in st.session_state:
    st.session_state.pending_delete = None

# ------------------------
# Stats + store list (polled)
# ------------------------
@st.fragment(run_every=AUTO_REFRESH_SEC)
def overview():
    try:
        metrics = API.stats()
        stores = API.stores()
    except Exception as e:
        st.error(f"Failed to load dashboard data: {e}")
        return

    c1, c2, c3, c4 = st.columns(4)
    stat_card(c1, "Total sales", f"{format_number(metrics['revenue'])} đ", "This month")
    stat_card(c2, "Net income", f"{format_number(metrics['netIncome'])} đ")
    stat_card(c3, "Stores", str(len(stores)), "Active")
    stat_card(c4, "Debt", f"{format_number(metrics['debt'])} đ", "Orders in delivery")

    st.subheader("Stores")
    st.caption(f"Store list from the Google Sheet. Refreshes every {AUTO_REFRESH_SEC // 60 or 1} min.")
    if not stores:
        st.info("No stores yet, or SHEET_API_URL is not configured on the server.")
        return

    df = pd.DataFrame(stores)
    df["live"] = df["status"].str.upper().isin(["LIVE", "ACTIVE"])
    df["listing"] = df["listing"].map(format_number)
    df["sale"] = df["sale"].map(format_number)
    st.dataframe(
        df[["id", "name", "region", "status", "live", "listing", "sale", "url"]],
        column_config={"url": st.column_config.LinkColumn("url")},
        use_container_width=True,
        hide_index=True,
    )

    # Only admins manage stores
    if user.get("role") == "admin":
        names = {s["id"]: s["name"] for s in stores}
        target = st.selectbox("Delete store", [""] + list(names), format_func=lambda i: names.get(i, "—"))
        if target and st.button("🗑️ Delete", key="btn_req_delete"):
            st.session_state.pending_delete = (target, names[target])
            st.rerun()

overview()

if st.button("🔄 Refresh now"):
    st.rerun()

# ------------------------
# Delete confirmation
# ------------------------
if st.session_state.pending_delete:
    sid, sname = st.session_state.pending_delete
    st.warning(f"Delete store **{sname}** ({sid})? This cannot be undone.")
    cA, cB = st.columns(2)
    if cA.button("Delete", key="btn_confirm_delete"):
        try:
            res = API.delete_store(sid)
            if res.get("success"):
                st.success("Store deleted.")
            else:
                st.error(res.get("error") or "Delete failed.")
        except Exception as e:
            st.error(f"Network or system error: {e}")
        st.session_state.pending_delete = None
    if cB.button("Cancel", key="btn_cancel_delete"):
        st.session_state.pending_delete = None
        st.rerun()

# ------------------------
# Add store (admin)
# ------------------------
if user.get("role") == "admin":
    with st.expander("➕ Add store"):
        with st.form("add_store", clear_on_submit=True):
            name = st.text_input("Store name *")
            url = st.text_input("URL")
            region = st.text_input("Region", placeholder="US")
            if st.form_submit_button("Save"):
                if not name:
                    st.error("Store name is required.")
                else:
                    try:
                        st.success(API.add_store(name, url, region))
                    except Exception as e:
                        st.error(e)

st.divider()

# ------------------------
# AI analysis
# ------------------------
st.subheader("🤖 AI analysis")
if st.button("Analyze business", key="btn_analysis"):
    with st.spinner("Analyzing..."):
        try:
            res = API.analysis()
            st.write(res["text"])
            if res.get("revenue"):
                st.line_chart(pd.DataFrame(res["revenue"]).set_index("date")["amount"])
        except Exception as e:
            st.error(e)
