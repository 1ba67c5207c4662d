import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:8000")
S = requests.Session(); S.headers.update({"Content-Type":"application/json"})

def healthz():   r=S.get(f"{API}/healthz",timeout=10); r.raise_for_status(); return r.json()
def stores():    r=S.get(f"{API}/stores",timeout=60); r.raise_for_status(); return r.json()
def orders(q=None):
    params = {"q": q} if q else {}
    r = S.get(f"{API}/orders", params=params, timeout=60); r.raise_for_status(); return r.json()
def stats():     r=S.get(f"{API}/dashboard/stats",timeout=60); r.raise_for_status(); return r.json()
def revenue():   r=S.get(f"{API}/dashboard/revenue",timeout=60); r.raise_for_status(); return r.json()
def analysis():  r=S.post(f"{API}/dashboard/analysis",timeout=180); r.raise_for_status(); return r.json()

def login(username: str, password: str):
    r = S.post(f"{API}/login", json={"username": username, "password": password}, timeout=60)
    r.raise_for_status()
    return r.json()

def create_user(**user):
    r = S.post(f"{API}/users", json=user, timeout=60)
    r.raise_for_status()
    return r.json()

def add_store(name: str, url: str = "", region: str = ""):
    r = S.post(f"{API}/stores", json={"name": name, "url": url, "region": region}, timeout=60)
    r.raise_for_status()
    return r.json()

def delete_store(store_id: str):
    r = S.delete(f"{API}/stores/{store_id}", timeout=60); r.raise_for_status(); return r.json()

def add_order(order: dict):
    r = S.post(f"{API}/orders", json=order, timeout=60); r.raise_for_status(); return r.json()
