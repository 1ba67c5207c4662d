# client/pages/3_Users.py
import streamlit as st
import api as API
from components import require_login

require_login()
st.title("👤 Users")
st.caption("Create an account in the Users sheet.")

with st.form("new_user", clear_on_submit=True):
    c1, c2 = st.columns(2)
    with c1:
        username = st.text_input("Username *", placeholder="user123")
        password = st.text_input("Password *", type="password")
        role = st.selectbox("Role", ["support", "designer", "idea", "leader", "admin"])
    with c2:
        full_name = st.text_input("Full name *", placeholder="Nguyễn Văn A")
        email = st.text_input("Email", placeholder="example@gmail.com")
        phone = st.text_input("Phone", placeholder="0912...")
    submitted = st.form_submit_button("Create account")

if submitted:
    if not username or not password or not full_name:
        st.error("Please fill in the required fields (*).")
    else:
        try:
            res = API.create_user(
                username=username, password=password, fullName=full_name,
                role=role, email=email or None, phone=phone or None,
            )
            if res.get("success"):
                st.success("Account created.")
            else:
                st.error(res.get("error") or "Something went wrong.")
        except Exception as e:
            st.error(f"System connection error: {e}")
