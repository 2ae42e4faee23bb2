import html
import os

import pandas as pd
import requests
import streamlit as st

# Page configuration
st.set_page_config(
    page_title="Reel Places",
    page_icon="🍽️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        color: #E64A19;
        text-align: center;
        padding: 1rem 0;
        font-weight: bold;
    }
    .place-card {
        padding: 1rem;
        border-radius: 0.5rem;
        margin: 0.5rem 0;
        border-left: 4px solid #E64A19;
        background-color: #2b2b2b;
    }
    .success-box {
        padding: 1rem;
        background-color: #207a27;
        border-radius: 0.5rem;
        border-left: 4px solid #43A047;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

if "candidate" not in st.session_state:
    st.session_state.candidate = None

if "coordinate" not in st.session_state:
    st.session_state.coordinate = None

def call_backend(method: str, path: str, payload: dict = None, timeout: int = 45) -> dict:
    """Call the backend; failures come back in the same {success, error} shape."""
    try:
        response = requests.request(method, f"{BACKEND_URL}{path}", json=payload, timeout=timeout)
        return response.json()
    except requests.exceptions.ConnectionError:
        return {"success": False, "error": "Cannot connect to backend. Make sure the backend is running on port 8000."}
    except requests.exceptions.Timeout:
        return {"success": False, "error": "Request timed out. Please try again."}
    except ValueError:
        return {"success": False, "error": "Backend returned a non-JSON response."}

def check_backend_health() -> bool:
    try:
        response = requests.get(f"{BACKEND_URL}/health", timeout=2)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False

def display_place(place: dict):
    coords = ""
    if place.get("latitude") is not None and place.get("longitude") is not None:
        coords = f"<br><small>📍 {place['latitude']:.5f}, {place['longitude']:.5f}</small>"
    # Saved fields are user text; escape them before they go into raw HTML
    memo = f"<br><i>{html.escape(place['memo'])}</i>" if place.get("memo") else ""
    st.markdown(
        f"""<div class="place-card"><b>{html.escape(place['name'])}</b> · {html.escape(place.get('category') or '-')}<br>
        {html.escape(place['address'])}{coords}{memo}</div>""",
        unsafe_allow_html=True
    )

# Header
st.markdown('<div class="main-header">🍽️ Reel Places</div>', unsafe_allow_html=True)
st.markdown("<p style='text-align: center; color: #666;'>Paste a reel caption, get the restaurant on your map</p>", unsafe_allow_html=True)

backend_status = check_backend_health()

with st.sidebar:
    st.header("⚙️ Backend")
    if backend_status:
        st.markdown('<div class="success-box">✅ Backend Connected</div>', unsafe_allow_html=True)
    else:
        st.warning("⚠️ Backend Disconnected")
        st.code("cd backend && python run.py", language="bash")

    st.divider()
    st.subheader("💡 Example caption")
    st.code("홍대 맛집 🍕 도미노피자 서울 마포구 양화로 160", language=None)

if not backend_status:
    st.warning("⚠️ Backend is not running. Please start the backend server first.")
    st.stop()

parse_tab, saved_tab = st.tabs(["➕ Add from caption", "📚 Saved places"])

with parse_tab:
    caption = st.text_area("Caption", height=160, placeholder="Paste the reel caption here...")

    if st.button("🔍 Extract place"):
        with st.spinner("Reading the caption..."):
            result = call_backend("POST", "/api/parse-reel", {"caption": caption})
        if result.get("success"):
            st.session_state.candidate = result["data"]
            st.session_state.coordinate = None
        else:
            st.error(f"❌ {result.get('error')}")

    candidate = st.session_state.candidate
    if candidate:
        name = st.text_input("Name", value=candidate.get("name", ""))
        address = st.text_input("Address", value=candidate.get("address", ""))
        category = st.text_input("Category", value=candidate.get("category", ""))
        instagram_url = st.text_input("Instagram URL")
        shared_from = st.text_input("Shared from")
        memo = st.text_area("Memo", height=80)

        if st.button("📍 Find on map"):
            result = call_backend("POST", "/api/geocode", {"address": address})
            if result.get("success"):
                st.session_state.coordinate = {"lat": result["lat"], "lng": result["lng"]}
            else:
                st.session_state.coordinate = None
                st.warning(f"Couldn't locate this address ({result.get('error')}). You can still save it.")

        coordinate = st.session_state.coordinate
        if coordinate:
            st.map(pd.DataFrame([{"lat": coordinate["lat"], "lon": coordinate["lng"]}]))

        if st.button("💾 Save place"):
            payload = {
                "name": name,
                "address": address,
                "category": category,
                "instagram_url": instagram_url,
                "shared_from": shared_from,
                "memo": memo,
                "latitude": coordinate["lat"] if coordinate else None,
                "longitude": coordinate["lng"] if coordinate else None,
                "resolve_coordinates": coordinate is None,
            }
            result = call_backend("POST", "/api/save-place", payload)
            if result.get("success"):
                st.success(f"✅ Saved {result['data']['name']}")
                st.session_state.candidate = None
                st.session_state.coordinate = None
            else:
                st.error(f"❌ {result.get('error')}")

with saved_tab:
    result = call_backend("GET", "/api/places")
    if not result.get("success"):
        st.error(f"❌ {result.get('error')}")
    else:
        places = result["data"]
        st.write(f"**{result['count']}** saved places")

        located = [
            {"lat": p["latitude"], "lon": p["longitude"]}
            for p in places
            if p.get("latitude") is not None and p.get("longitude") is not None
        ]
        if located:
            st.map(pd.DataFrame(located))

        for place in places:
            col_place, col_delete = st.columns([6, 1])
            with col_place:
                display_place(place)
            with col_delete:
                if st.button("🗑️", key=f"delete_{place['id']}"):
                    deleted = call_backend("DELETE", f"/api/places/{place['id']}")
                    if deleted.get("success"):
                        st.rerun()
                    else:
                        st.error(f"❌ {deleted.get('error')}")
