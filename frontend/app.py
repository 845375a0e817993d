# frontend/app.py
import os
import requests
import pandas as pd
import streamlit as st

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:3000")

st.set_page_config(page_title="Eco Rating", page_icon="🌱", layout="centered")
st.title("🌱 Eco-friendliness Checker")
st.caption("Describe a product (or paste an image link); the model rates it and we pull out the structured fields.")


def _post(path: str, payload: dict):
    try:
        r = requests.post(f"{BACKEND_URL}{path}", json=payload, timeout=60)
    except requests.RequestException as e:
        st.error(f"Backend error: {e}")
        return None
    if r.status_code != 200:
        try:
            detail = r.json().get("detail")
        except ValueError:
            detail = r.text
        st.error(f"Backend error ({r.status_code}): {detail}")
        return None
    return r.json()


rate_tab, identify_tab = st.tabs(["Rate a product", "Identify from image"])

# ---- Rating form
with rate_tab:
    with st.form(key="rate_form"):
        title = st.text_input("Title", placeholder="e.g., Trail running shoe")
        brand = st.text_input("Brand", placeholder="e.g., Patagonia")
        features = st.text_input("Features", placeholder="e.g., lightweight, waterproof")
        material = st.text_input("Material", placeholder="e.g., recycled polyester")
        submitted = st.form_submit_button("Rate")

    if submitted:
        payload = {"title": title, "brand": brand, "features": features, "material": material}
        with st.spinner("Asking the model..."):
            data = _post("/rate", payload)
        if data:
            rating = data.get("rating")
            st.metric("Eco rating", f"{rating}/5" if rating is not None else "—")
            st.write("**Category:**", data.get("category") or "—")
            st.write(data.get("description") or "")
            with st.expander("Raw model response"):
                st.text(data.get("response", ""))

# ---- Image identification
with identify_tab:
    with st.form(key="identify_form"):
        image_url = st.text_input("Image URL", placeholder="https://...")
        do_search = st.checkbox("Search the web for this product", value=True)
        submitted = st.form_submit_button("Identify")

    if submitted and image_url.strip():
        with st.spinner("Identifying product..."):
            data = _post("/identify", {"image_url": image_url.strip(), "search": do_search})
        if data:
            st.image(image_url.strip(), width=240)
            st.write({k: data.get(k) for k in ["brand", "product", "details"]})
            results = data.get("results") or []
            if results:
                df = pd.DataFrame(results)
                cols = [c for c in ["title", "link", "thumbnail"] if c in df.columns]
                st.dataframe(df[cols], use_container_width=True)
            elif do_search:
                st.info("No search results. The product may not have been recognised.")
    elif submitted:
        st.write("Paste an image link above and press **Identify**.")
