# client/pages/2_Orders.py
import streamlit as st
import api as API
from components import format_number, require_login, show_table
from gen_data import gen_demo_order

require_login()
st.title("🧾 Orders")

c1, c2 = st.columns([3, 1])
with c1:
    q = st.text_input("Search", placeholder="Customer name or order id", key="ord_q")
with c2:
    if st.button("➕ Add order", key="btn_add_order"):
        try:
            st.success(API.add_order(gen_demo_order()))
        except Exception as e:
            st.error(e)

try:
    rows = API.orders(q or None)
except Exception as e:
    st.error(e)
    rows = []

if rows:
    for r in rows:
        r["totalAmount"] = f"{format_number(r['totalAmount'])} đ"
    show_table(rows, caption=f"{len(rows)} order(s), newest first")
else:
    st.info("No orders found.")
