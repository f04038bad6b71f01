import os
import time

import altair as alt
import pandas as pd
import streamlit as st

from olsdemo.simulation import Simulation
from olsdemo.utils.config import MAX_SAMPLE_SIZE, MAX_SPEED_MS, SAMPLING_MODES, load_params
from olsdemo.utils.glossary import CONSISTENCY_URL, METRIC_TOOLTIPS, SAMPLING_MODE_HELP
from olsdemo.utils.points import X_RANGE, points_frame

APP_TITLE = "OLS Consistency Demo"
CFG_PATH = os.environ.get("OLSDEMO_CONFIG", "config/config.yaml")
# Scatter plots with more points than this get thinned for drawing only.
MAX_PLOTTED_POINTS = 5000

st.set_page_config(page_title=APP_TITLE, layout="wide")

if "sim" not in st.session_state:
    try:
        st.session_state.sim = Simulation(load_params(CFG_PATH))
    except ValueError as exc:
        st.error(f"Invalid settings in `{CFG_PATH}`: {exc}")
        st.stop()

sim: Simulation = st.session_state.sim
p = sim.params

# ---- Sidebar controls ----
with st.sidebar:
    st.markdown(f"### {APP_TITLE}")
    st.caption("Visualizing asymptotic properties of OLS")

    st.caption("Model config")
    true_slope = st.number_input("True slope (β₁)", value=float(p.true_slope), step=0.1)
    true_intercept = st.number_input("True intercept (β₀)", value=float(p.true_intercept), step=0.1)
    noise_level = st.number_input("Noise level (σ)", value=float(p.noise_level), min_value=0.0, step=0.1)

    st.caption("Sampling")
    sampling_mode = st.radio(
        "Sampling mode", SAMPLING_MODES, index=SAMPLING_MODES.index(p.sampling_mode), help=SAMPLING_MODE_HELP
    )
    min_n = st.number_input("Start n", value=int(p.min_sample_size), min_value=0, step=10)
    max_n = st.number_input("Max n", value=int(p.max_sample_size), min_value=1, max_value=MAX_SAMPLE_SIZE, step=100)
    batch_size = st.number_input("Points per tick", value=int(p.batch_size), min_value=1, step=1)
    speed_ms = st.slider("Tick interval (ms)", 0, MAX_SPEED_MS, int(p.speed_ms), step=10)
    seed = st.number_input("Random seed", value=int(p.seed), step=1)

    try:
        sim.update_params(
            true_slope=true_slope,
            true_intercept=true_intercept,
            noise_level=noise_level,
            sampling_mode=sampling_mode,
            min_sample_size=int(min_n),
            max_sample_size=int(max_n),
            batch_size=int(batch_size),
            speed_ms=int(speed_ms),
            seed=int(seed),
        )
    except ValueError as exc:
        st.error(str(exc))
        st.stop()

    c1, c2, c3 = st.columns(3)
    if c1.button("Start", disabled=sim.running or sim.finished):
        sim.start()
    if c2.button("Pause", disabled=not sim.running):
        sim.stop()
    if c3.button("Reset"):
        sim.reset()

    st.progress(min(sim.n / sim.params.max_sample_size, 1.0), text=f"n = {sim.n:,} / {sim.params.max_sample_size:,}")

p = sim.params
ols = sim.ols

st.title(APP_TITLE)
st.caption(f"[What is consistency?]({CONSISTENCY_URL})")

# ---- KPIs ----
cols = st.columns(5)
def tile(col, label, value, fmt="{:,.3f}", delta=None):
    with col:
        st.metric(label=label, value=fmt.format(value), delta=delta, help=METRIC_TOOLTIPS.get(label))

tile(cols[0], "n", sim.n, "{:,.0f}")
tile(cols[1], "Slope", ols.slope, delta=f"{ols.slope - p.true_slope:+.3f} vs true")
tile(cols[2], "Intercept", ols.intercept, delta=f"{ols.intercept - p.true_intercept:+.3f} vs true")
tile(cols[3], "R²", ols.r_squared)
tile(cols[4], "SE", ols.slope_std_err, "{:,.4f}")

# ---- Scatter with fitted and true lines ----
df = points_frame(sim.data)
if len(df) > MAX_PLOTTED_POINTS:
    df = df.sample(MAX_PLOTTED_POINTS, random_state=0)

lines = pd.DataFrame({
    "x": [0.0, X_RANGE, 0.0, X_RANGE],
    "y": [
        ols.intercept, ols.intercept + ols.slope * X_RANGE,
        p.true_intercept, p.true_intercept + p.true_slope * X_RANGE,
    ],
    "line": ["OLS fit", "OLS fit", "True model", "True model"],
})

base = alt.Chart(df).mark_circle(opacity=0.35, size=20).encode(
    x=alt.X("x:Q", title="x", scale=alt.Scale(domain=[0, X_RANGE])),
    y=alt.Y("y:Q", title="y"),
    tooltip=["id:Q", alt.Tooltip("x:Q", format=".3f"), alt.Tooltip("y:Q", format=".3f")],
)
fit = alt.Chart(lines).mark_line(strokeWidth=2).encode(
    x="x:Q",
    y="y:Q",
    color=alt.Color("line:N", scale=alt.Scale(range=["#4f46e5", "#10b981"]), title=None),
    strokeDash=alt.StrokeDash("line:N", legend=None),
)

st.subheader("Sample with fitted trend")
st.altair_chart((base + fit).interactive(), use_container_width=True)

# ---- Convergence ----
hist = sim.history_frame()

def convergence_chart(column: str, title: str, true_value: float, color: str) -> alt.Chart:
    line = alt.Chart(hist).mark_line(color=color).encode(
        x=alt.X("n:Q", title="n"),
        y=alt.Y(f"{column}:Q", title=title, scale=alt.Scale(zero=False)),
        tooltip=["n:Q", alt.Tooltip(f"{column}:Q", format=".4f")],
    )
    rule = alt.Chart(pd.DataFrame({"y": [true_value]})).mark_rule(strokeDash=[4, 4], color="#64748b").encode(y="y:Q")
    return (line + rule).properties(title=title, height=220)

left, mid, right = st.columns(3)
with left:
    st.altair_chart(
        convergence_chart("estimated_intercept", "Conv. (β₀)", p.true_intercept, "#ec4899"), use_container_width=True
    )
with mid:
    st.altair_chart(
        convergence_chart("estimated_slope", "Conv. (β₁)", p.true_slope, "#4f46e5"), use_container_width=True
    )
with right:
    st.altair_chart(
        convergence_chart("slope_std_err", "Slope Std. Error (SE)", 0.0, "#f59e0b"), use_container_width=True
    )

st.download_button(
    "Download estimate history as CSV",
    data=hist.to_csv(index=False).encode("utf-8"),
    file_name=f"ols-history-seed{p.seed}.csv",
    mime="text/csv",
)

with st.expander("Glossary", expanded=False):
    st.markdown("\n".join(f"- **{k}**: {v}" for k, v in METRIC_TOOLTIPS.items()))

# ---- Tick loop ----
if sim.running:
    time.sleep(p.speed_ms / 1000.0)
    sim.step()
    st.rerun()
