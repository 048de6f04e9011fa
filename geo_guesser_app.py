# geo_guesser_app.py
import logging
import os
from typing import Tuple

import plotly.graph_objects as go
import streamlit as st
import streamlit.components.v1 as components

from eurocountries import TargetCountry, load_catalog
from quiz_session import RenderSnapshot, SessionEngine
from stopwatch import Stopwatch

# ---------- Config ----------
PAGE_TITLE = "European Geo Guesser"
LOG_LEVEL = os.environ.get("EURO_GEO_LOG_LEVEL", "INFO").upper()

# Map viewport, fixed over the European continent
MAP_CENTER = {"lat": 54.0, "lon": 15.0}
MAP_LAT_RANGE = [34.0, 71.0]
MAP_LON_RANGE = [-25.0, 50.0]
MAP_HEIGHT = 480

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@st.cache_data
def get_catalog() -> Tuple[TargetCountry, ...]:
    # Loaded once per process; the catalog is read-only
    return load_catalog()


def get_engine() -> SessionEngine:
    if "engine" not in st.session_state:
        st.session_state["engine"] = SessionEngine(get_catalog(), Stopwatch())
        logger.info("New browser session with %d countries", len(get_catalog()))
    return st.session_state["engine"]


# ---------- Map ----------
def build_europe_map(view: RenderSnapshot) -> go.Figure:
    """Europe map; when hints are on, one pin per country still to be found."""
    pins = view.remaining if view.show_hints else ()
    markers = go.Scattergeo(
        lat=[c.latitude for c in pins],
        lon=[c.longitude for c in pins],
        mode="markers",
        marker=dict(size=10, color="#DC2626", line=dict(width=1, color="#FFFFFF")),
        # Hover would give the answer away
        hoverinfo="skip",
    )
    fig = go.Figure(data=[markers])
    fig.update_layout(
        template="plotly_white",
        showlegend=False,
        dragmode=False,
        geo=dict(
            scope="europe",
            resolution=50,
            showframe=False,
            showcountries=True,
            countrycolor="#94A3B8",
            showcoastlines=True,
            coastlinecolor="#CBD5E1",
            coastlinewidth=0.5,
            showland=True,
            landcolor="#F8FAFC",
            showocean=True,
            oceancolor="#F1F5F9",
            lakecolor="#F1F5F9",
            projection_type="mercator",
            center=MAP_CENTER,
            lataxis=dict(range=MAP_LAT_RANGE),
            lonaxis=dict(range=MAP_LON_RANGE),
        ),
        paper_bgcolor="#FFFFFF",
        margin=dict(l=0, r=0, t=0, b=0),
        height=MAP_HEIGHT,
    )
    return fig


# ---------- Timer ----------
def render_elapsed(view: RenderSnapshot) -> None:
    """Show elapsed time. Ticks in the browser while running, frozen otherwise."""
    base_seconds = view.minutes * 60 + view.seconds
    timer_html = """
    <div style='font-size:18px;color:#0f172a;'>
      Time Elapsed: <span id='elapsed' style='font-weight:700;'>__TEXT__</span>
    </div>
    <script>
      const __base = __BASE__;
      const __running = __RUNNING__;
      const __loaded = Date.now();
      function __fmt(total){
        const m = Math.floor(total/60);
        const s = total % 60;
        return String(m).padStart(2,'0') + ':' + String(s).padStart(2,'0');
      }
      function __tick(){
        const el = document.getElementById('elapsed');
        if(!el) return;
        el.textContent = __fmt(__base + Math.floor((Date.now() - __loaded)/1000));
      }
      if(__running){ setInterval(__tick, 1000); }
    </script>
    """
    components.html(
        timer_html
        .replace("__TEXT__", view.elapsed_text)
        .replace("__BASE__", str(base_seconds))
        .replace("__RUNNING__", "true" if view.timer_running else "false"),
        height=40,
        scrolling=False,
    )


# ---------- App UI ----------
st.set_page_config(page_title=PAGE_TITLE, layout="centered")

engine = get_engine()
if "input_counter" not in st.session_state:
    st.session_state["input_counter"] = 0
if "feedback" not in st.session_state:
    st.session_state["feedback"] = ""

st.title(PAGE_TITLE)
st.markdown("Name every country in Europe. Press **Start Game** to begin.")

view = engine.render()

# Guess input; Enter submits. Locked unless the game is running.
with st.form(key=f"guess_form_{st.session_state['input_counter']}"):
    user_input = st.text_input(
        "Guess a Country",
        key=f"guess_{st.session_state['input_counter']}",
        placeholder="Type a country and press Enter",
        disabled=not view.is_active,
    )
    submitted = st.form_submit_button("Guess", disabled=not view.is_active)

if submitted and engine.state.is_active:
    result = engine.check_guess(user_input or "")
    if result.matched:
        st.session_state["feedback"] = f"✅ {result.country.name}!"
        # New widget key clears the field
        st.session_state["input_counter"] += 1
    else:
        st.session_state["feedback"] = f"❌ {user_input!r} is not one of the remaining countries."
    st.rerun()

col_start, col_pause = st.columns(2)
with col_start:
    if st.button("Start Game", type="primary", use_container_width=True):
        engine.start()
        st.session_state["feedback"] = ""
        st.session_state["input_counter"] += 1
        st.rerun()
with col_pause:
    if st.button("Pause/Resume Game", disabled=view.phase == "not_started", use_container_width=True):
        engine.pause_resume()
        st.rerun()
if st.button("Show/Hide Missing Countries", use_container_width=True):
    engine.show_hide_unsolved()
    st.rerun()

if st.session_state["feedback"]:
    st.write(st.session_state["feedback"])

# Score and time
st.write("---")
st.subheader(view.progress_label)
st.progress(int(100 * view.score / view.catalog_size) if view.catalog_size else 0)
render_elapsed(view)

st.plotly_chart(
    build_europe_map(view),
    use_container_width=True,
    config={"scrollZoom": False, "displayModeBar": False},
)

# Guessed countries
st.header("Info on Guessed Countries")
if view.selected_info_text:
    # Markdown needs two trailing spaces for a line break
    st.info(view.selected_info_text.replace("\n", "  \n"))
if view.found:
    for index, country in enumerate(view.found):
        if st.button(country.name, key=f"found_{index}"):
            engine.select_found(index)
            st.rerun()
else:
    st.caption("Countries you find will be listed here. Click one to learn more about it.")
