"""
Regenerative Blueprint Engine - Streamlit Application

Enter a coordinate pair, get a regenerative development blueprint covering
water, food, shelter, energy and risk, with the full reasoning trace.
"""

import json

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# ═══════════════════════════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="Regenerative Blueprint Engine",
    page_icon="🌱",
    layout="wide",
    initial_sidebar_state="expanded"
)

# ═══════════════════════════════════════════════════════════════════════════
# IMPORTS
# ═══════════════════════════════════════════════════════════════════════════
from core.classifiers import GROWING_THRESHOLD_C, monthly_temperature_profile
from core.errors import BlueprintEngineError, DataUnavailableError, GuardrailRejection
from core.models import Coordinates
from core.service import BlueprintService

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

PRESETS = {
    "Nairobi, Kenya": (-1.2921, 36.8219),
    "Reykjavik, Iceland": (64.1466, -21.9426),
    "Phoenix, USA": (33.4484, -112.0740),
    "Dhaka, Bangladesh": (23.8103, 90.4125),
    "Custom": None,
}


@st.cache_resource
def get_service() -> BlueprintService:
    return BlueprintService()


def render_list(title: str, items):
    st.markdown(f"**{title}**")
    if not items:
        st.caption("None")
    for item in items:
        st.markdown(f"- {item}")


def render_trace(lines):
    with st.expander("Reasoning"):
        for line in lines:
            st.caption(line)


def temperature_chart(climate) -> go.Figure:
    temps = monthly_temperature_profile(
        climate.avg_temperature_c, climate.min_temperature_c, climate.max_temperature_c
    )
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=MONTHS, y=temps, mode="lines+markers", name="Modeled mean"))
    fig.add_hline(
        y=GROWING_THRESHOLD_C, line_dash="dash", line_color="green",
        annotation_text=f"Growing threshold ({GROWING_THRESHOLD_C:.0f}°C)",
    )
    fig.update_layout(yaxis_title="°C", height=320, margin=dict(l=10, r=10, t=30, b=10))
    return fig


# ═══════════════════════════════════════════════════════════════════════════
# SIDEBAR
# ═══════════════════════════════════════════════════════════════════════════
st.sidebar.title("🌱 Blueprint Engine")
st.sidebar.markdown("---")

service = get_service()
health = service.health()
st.sidebar.caption(f"Engine v{health['version']} · status {health['status']}")

preset = st.sidebar.selectbox("Location", list(PRESETS.keys()))
default_lat, default_lon = PRESETS[preset] or (0.0, 0.0)

with st.sidebar.form("coordinates"):
    lat = st.number_input("Latitude", value=default_lat, format="%.4f")
    lon = st.number_input("Longitude", value=default_lon, format="%.4f")
    sequential = st.checkbox("Fetch sources sequentially", value=False)
    submitted = st.form_submit_button("Generate Blueprint")

# ═══════════════════════════════════════════════════════════════════════════
# MAIN PAGE
# ═══════════════════════════════════════════════════════════════════════════
st.title("🌱 Regenerative Blueprint Engine")
st.markdown("Site-specific water, food, shelter and energy strategies from public environmental data.")

if not submitted:
    st.info("Choose a location in the sidebar and press **Generate Blueprint**.")
    st.stop()

try:
    with st.spinner("Fetching climate, terrain and location data..."):
        blueprint, fetch = service.run_detailed(
            Coordinates(latitude=lat, longitude=lon), parallel=not sequential
        )
except GuardrailRejection as e:
    st.error(f"Request rejected: {e.rejection_reason}")
    render_list("Checks passed", e.checks_passed)
    st.stop()
except DataUnavailableError as e:
    st.error(str(e))
    st.stop()
except BlueprintEngineError as e:
    st.error(f"Blueprint generation failed: {e}")
    st.stop()

meta = blueprint.metadata
trace = blueprint.reasoning_trace

st.header(meta.location_name)
col1, col2, col3 = st.columns(3)
col1.metric("Confidence", trace.confidence_level.value.title())
col2.metric("Climate Zone", blueprint.food_strategy.climate_zone.title())
col3.metric("Hazards", blueprint.risks.hazard_count)
st.warning(meta.disclaimer)

for warning in fetch.warnings:
    st.warning(warning)

tab_water, tab_food, tab_shelter, tab_energy, tab_risks, tab_trace = st.tabs(
    ["💧 Water", "🌾 Food", "🏠 Shelter", "⚡ Energy", "⚠️ Risks", "🔍 Reasoning"]
)

with tab_water:
    water = blueprint.water_strategy
    st.subheader(water.primary_method)
    st.metric("Annual Rainfall", f"{water.estimated_annual_rainfall_mm:,.0f} mm")
    render_list("Techniques", water.techniques)
    st.markdown(f"**Storage:** {water.storage_recommendation}")
    render_trace(water.reasoning_trace)

with tab_food:
    food = blueprint.food_strategy
    st.subheader(food.growing_seasons)
    render_list("Recommended crops", food.recommended_crops)
    render_list("Techniques", food.techniques)
    st.plotly_chart(temperature_chart(fetch.snapshot.climate), use_container_width=True)
    render_trace(food.reasoning_trace)

with tab_shelter:
    shelter = blueprint.shelter_strategy
    render_list("Materials", shelter.recommended_materials)
    render_list("Construction techniques", shelter.construction_techniques)
    render_list("Climate considerations", shelter.climate_considerations)
    render_trace(shelter.reasoning_trace)

with tab_energy:
    energy = blueprint.energy_strategy
    st.subheader(energy.primary_source)
    st.metric("Solar Hours (daily)", f"{energy.estimated_solar_hours_daily:.1f}")
    render_list("Secondary sources", energy.secondary_sources)
    render_list("Techniques", energy.techniques)
    render_trace(energy.reasoning_trace)

with tab_risks:
    risks = blueprint.risks
    c1, c2, c3 = st.columns(3)
    with c1:
        render_list("Natural hazards", risks.natural_hazards)
    with c2:
        render_list("Climate risks", risks.climate_risks)
    with c3:
        render_list("Terrain risks", risks.terrain_risks)
    render_list("Mitigation", risks.mitigation_strategies)
    render_trace(risks.reasoning_trace)

with tab_trace:
    st.markdown("**Data sources**")
    sources = pd.DataFrame([s.to_dict() for s in trace.data_sources_used])
    if sources.empty:
        st.caption("No data sources responded.")
    else:
        st.dataframe(sources, use_container_width=True)
    render_list("Rules applied", trace.rules_applied)
    render_list("Limitations", trace.limitations)
    render_list("Ethical checks passed", trace.ethical_checks_passed)

st.download_button(
    "Download Blueprint (JSON)",
    json.dumps(blueprint.to_dict(), indent=2),
    file_name=f"blueprint_{lat:.4f}_{lon:.4f}.json",
    mime="application/json"
)
