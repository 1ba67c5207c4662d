# client/streamlit_app.py
import requests
import streamlit as st
import api as API

st.set_page_config(page_title="OMS", layout="wide")

if "user" not in st.session_state:
    st.session_state.user = None

# ------------------------
# Login
# ------------------------
if not st.session_state.user:
    st.title("🔐 Sign in")
    with st.form("login"):
        username = st.text_input("Username", placeholder="admin")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        if not username or not password:
            st.error("Please enter both username and password.")
        else:
            with st.spinner("Authenticating..."):
                try:
                    res = API.login(username, password)
                except requests.RequestException as e:
                    res = {"success": False, "error": f"Could not reach the server: {e}"}
            if res.get("success") and res.get("user"):
                st.session_state.user = res["user"]
                st.rerun()
            else:
                st.error(res.get("error") or "Login failed. Please check your credentials.")
    st.caption("Powered by Google Sheets")
    st.stop()

# ------------------------
# Signed in
# ------------------------
user = st.session_state.user
st.title("📦 Order Management")
st.markdown(f"""
Signed in as **{user.get('fullName') or user.get('username')}** (`{user.get('role')}`).

Use the **sidebar Pages** to open:
- **📊 Dashboard** — sales figures, the store list (auto-refreshes), AI analysis.
- **🧾 Orders** — search and add orders.
- **👤 Users** — create accounts.
""")

with st.sidebar:
    if st.button("Log out"):
        st.session_state.user = None
        st.rerun()
    if st.button("Health check"):
        try:
            st.success(API.healthz())
        except Exception as e:
            st.error(f"Health check failed: {e}")
