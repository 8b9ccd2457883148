from __future__ import annotations

import plotly.graph_objects as go
import streamlit as st
from bubble_3d_component import render_bubble_hero, render_bubble_pair

from bubblelab.content.article import ArticleText, Language, article_text
from bubblelab.geometry.steiner import Mode, compute_layout, junction_angles, length_saving
from bubblelab.lab.simulator import (
    RADIUS_SLIDER_RANGE,
    RADIUS_SLIDER_STEP,
    MechanicsSession,
    build_visual_frame,
)
from bubblelab.mechanics.model import FlowDirection
from bubblelab.optics.thin_film import (
    THICKNESS_RANGE_NM,
    band_table,
    css_color,
    film_caption,
    film_sample,
    is_black_film,
)

st.set_page_config(page_title="Bubble Science", layout="wide")

st.markdown(
    """
<style>
.stApp {
    background-color: #F9F8F4;
    color: #292524;
}
[data-testid="stSidebar"] {
    background-color: #F5F5F4;
    border-right: 1px solid #e7e5e4;
}
[data-testid="stMetric"] {
    background-color: #ffffff;
    border: 1px solid #e7e5e4;
    border-radius: 12px;
    padding: 10px 12px;
}
h1, h2, h3 {
    font-family: Georgia, "Noto Serif TC", serif;
    color: #1c1917;
}
.bubble-kicker {
    display: inline-block;
    padding: 2px 14px;
    border: 1px solid #d6d3d1;
    border-radius: 999px;
    font-size: 0.75rem;
    letter-spacing: 0.2em;
    text-transform: uppercase;
    color: #78716c;
}
.bubble-topic {
    border-left: 2px solid #bfdbfe;
    padding-left: 1.25rem;
    margin-bottom: 1.25rem;
}
.bubble-card {
    background: #fafaf9;
    border: 1px solid #e7e5e4;
    border-radius: 12px;
    padding: 1.5rem 1rem;
    text-align: center;
}
</style>
""",
    unsafe_allow_html=True,
)

PLOT_TEMPLATE = "plotly_white"
ACCENT_BLUE = "#3b82f6"
ACCENT_SLATE = "#94a3b8"
ACCENT_PURPLE = "#a855f7"
INK = "#1c1917"

REFRESH_INTERVAL_S = 0.1
DEFAULT_TICKS_PER_REFRESH = 6
DEFAULT_THICKNESS_NM = 400

_LANGUAGE_LABELS = {Language.ZH: "中文", Language.EN: "English"}


def _session() -> MechanicsSession:
    if "mechanics_session" not in st.session_state:
        st.session_state["mechanics_session"] = MechanicsSession()
    return st.session_state["mechanics_session"]


def _on_radius_change(which: str) -> None:
    _session().set_radius(which, float(st.session_state[f"radius_{which}_slider"]))


def _on_open_valve() -> None:
    _session().open_valve()


def _on_reset() -> None:
    _session().reset()


def _history_figure(session: MechanicsSession) -> go.Figure:
    history = session.history_frame()
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=history["tick"],
            y=history["radius_a"],
            mode="lines",
            name="r (A)",
            line=dict(color=ACCENT_BLUE, width=2.2),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=history["tick"],
            y=history["radius_b"],
            mode="lines",
            name="r (B)",
            line=dict(color=ACCENT_PURPLE, width=2.2),
        )
    )
    fig.add_trace(
        go.Scatter(
            x=history["tick"],
            y=history["pressure_diff"],
            mode="lines",
            name="P(A) - P(B)",
            line=dict(color=ACCENT_SLATE, width=1.8, dash="dot"),
            yaxis="y2",
        )
    )
    fig.update_layout(
        template=PLOT_TEMPLATE,
        height=260,
        margin=dict(l=10, r=10, t=40, b=10),
        title="Radius and pressure differential",
        xaxis_title="Tick",
        yaxis=dict(title="Radius"),
        yaxis2=dict(title="Pressure difference", overlaying="y", side="right"),
    )
    return fig


def _mechanics_live(text: ArticleText, ticks_per_refresh: int) -> None:
    session = _session()
    if session.valve_open:
        session.advance(ticks_per_refresh)
        if not session.valve_open:
            # Collapse shut the valve; a full rerun drops the refresh timer.
            st.rerun()

    frame = build_visual_frame(session)
    frame["label_a"] = "Bubble A"
    frame["label_b"] = "Bubble B"
    render_bubble_pair(frame, height=400)

    pressure_a, pressure_b = session.pressures
    metric_cols = st.columns(3)
    metric_cols[0].metric(
        "P (A)", f"{pressure_a:.1f}", f"r = {session.radius_a:.2f}", delta_color="off"
    )
    metric_cols[1].metric(
        "P (B)", f"{pressure_b:.1f}", f"r = {session.radius_b:.2f}", delta_color="off"
    )
    direction_label = {
        FlowDirection.A_TO_B: "A → B",
        FlowDirection.B_TO_A: "B → A",
        FlowDirection.NONE: "—",
    }[session.direction]
    metric_cols[2].metric(text.airflow_label, direction_label)

    if session.history:
        st.plotly_chart(_history_figure(session), width="stretch")


def _render_mechanics(text: ArticleText, ticks_per_refresh: int) -> None:
    session = _session()
    if not session.valve_open:
        # Sliders follow the evolved radii once a run stops.
        slider_a, slider_b = session.slider_values()
        st.session_state["radius_a_slider"] = slider_a
        st.session_state["radius_b_slider"] = slider_b

    scene_col, control_col = st.columns([2, 1])
    with scene_col:
        live = st.fragment(run_every=REFRESH_INTERVAL_S if session.valve_open else None)(
            _mechanics_live
        )
        live(text, ticks_per_refresh)

    with control_col:
        st.subheader(text.mechanics_title)
        st.slider(
            "Bubble A Radius",
            min_value=RADIUS_SLIDER_RANGE[0],
            max_value=RADIUS_SLIDER_RANGE[1],
            step=RADIUS_SLIDER_STEP,
            key="radius_a_slider",
            on_change=_on_radius_change,
            args=("a",),
            disabled=session.valve_open,
        )
        st.slider(
            "Bubble B Radius",
            min_value=RADIUS_SLIDER_RANGE[0],
            max_value=RADIUS_SLIDER_RANGE[1],
            step=RADIUS_SLIDER_STEP,
            key="radius_b_slider",
            on_change=_on_radius_change,
            args=("b",),
            disabled=session.valve_open,
        )
        st.button(
            "Simulating..." if session.valve_open else "▶ Open Valve",
            type="primary",
            disabled=session.valve_open or session.terminated,
            on_click=_on_open_valve,
            width="stretch",
        )
        st.button("↺ Reset", on_click=_on_reset, width="stretch")

        if session.terminated:
            st.warning(text.collapse_notice)


def _steiner_figure(mode: Mode) -> go.Figure:
    layout = compute_layout(mode)
    soap = mode is Mode.SOAP_FILM
    fig = go.Figure()
    for start, end in layout.segments:
        fig.add_trace(
            go.Scatter(
                x=[start[0], end[0]],
                y=[start[1], end[1]],
                mode="lines",
                line=dict(color=ACCENT_BLUE if soap else ACCENT_SLATE, width=6 if soap else 4),
                hoverinfo="skip",
                showlegend=False,
            )
        )
    fig.add_trace(
        go.Scatter(
            x=[point[0] for point in layout.corners],
            y=[point[1] for point in layout.corners],
            mode="markers",
            marker=dict(color=INK, size=16),
            hoverinfo="skip",
            showlegend=False,
        )
    )
    if soap:
        fig.add_trace(
            go.Scatter(
                x=[point[0] for point in layout.junctions],
                y=[point[1] for point in layout.junctions],
                mode="markers",
                marker=dict(color=ACCENT_BLUE, size=12, line=dict(color="white", width=2)),
                hovertemplate="(%{x:.3f}, %{y:.3f})<extra></extra>",
                showlegend=False,
            )
        )
        first = layout.junctions[0]
        fig.add_annotation(
            x=first[0] + 0.05,
            y=first[1],
            text="120°",
            showarrow=False,
            xanchor="left",
            font=dict(color=ACCENT_BLUE, size=12),
        )
    else:
        center = layout.side / 2.0
        fig.add_shape(
            type="circle",
            x0=center - 0.1,
            y0=center - 0.1,
            x1=center + 0.1,
            y1=center + 0.1,
            line=dict(color="#64748b", width=1, dash="dash"),
        )
    fig.update_xaxes(range=[-0.25, 1.25], showgrid=True, gridcolor="#e7e5e4", zeroline=False)
    fig.update_yaxes(
        range=[1.25, -0.25],
        showgrid=True,
        gridcolor="#e7e5e4",
        zeroline=False,
        scaleanchor="x",
        scaleratio=1,
    )
    fig.update_layout(
        template=PLOT_TEMPLATE,
        height=400,
        margin=dict(l=10, r=10, t=10, b=10),
        plot_bgcolor="#F9F8F4",
    )
    return fig


def _render_geometry(text: ArticleText) -> None:
    diagram_col, control_col = st.columns([2, 1])
    with control_col:
        st.subheader(text.geometry_title)
        st.caption(text.geometry_blurb)
        mode = st.radio(
            "Network",
            options=[Mode.DIRECT, Mode.SOAP_FILM],
            index=1,
            format_func=lambda value: "Direct (X)" if value is Mode.DIRECT else "Soap Film",
            horizontal=True,
            key="steiner_mode",
        )
        layout = compute_layout(mode)
        st.metric("Total Path Length", f"{layout.total_length:.3f} units")
        if mode is Mode.SOAP_FILM:
            angles = junction_angles(layout)[0]
            st.success("✓ Minimal Surface (Energy Efficient)")
            st.caption(
                f"Junction angles: {' / '.join(f'{angle:.0f}°' for angle in angles)} · "
                f"saving {length_saving():.1%} vs. diagonals"
            )
        else:
            st.caption("Standard geometric center")

    with diagram_col:
        st.plotly_chart(_steiner_figure(mode), width="stretch")


def _cross_section_figure(thickness_nm: float) -> go.Figure:
    film_height = max(2.0, thickness_nm / 5.0)
    top = film_height / 2.0
    bottom = -top
    fig = go.Figure()
    fig.add_shape(
        type="rect",
        x0=-60,
        x1=60,
        y0=bottom,
        y1=top,
        fillcolor="rgba(96,165,250,0.2)",
        line=dict(color="rgba(147,197,253,0.6)", width=1),
    )
    rays = (
        ((-45, top + 50), (-15, top), 1.0, "solid"),
        ((-15, top), (15, top + 50), 0.8, "dash"),
        ((-15, top), (-5, bottom), 0.5, "solid"),
        ((-5, bottom), (25, top + 50), 0.6, "solid"),
    )
    for start, end, opacity, dash in rays:
        fig.add_trace(
            go.Scatter(
                x=[start[0], end[0]],
                y=[start[1], end[1]],
                mode="lines",
                line=dict(color="yellow", width=2, dash=dash),
                opacity=opacity,
                hoverinfo="skip",
                showlegend=False,
            )
        )
    fig.add_annotation(
        x=-80, y=0, text=f"{thickness_nm:.0f} nm", showarrow=False, font=dict(color="#d6d3d1")
    )
    fig.update_xaxes(visible=False, range=[-100, 100])
    fig.update_yaxes(visible=False, range=[-160, 160])
    fig.update_layout(
        template="plotly_dark",
        height=360,
        title="Film Cross-Section",
        margin=dict(l=10, r=10, t=40, b=10),
        paper_bgcolor="#1c1917",
        plot_bgcolor="#1c1917",
    )
    return fig


def _spectrum_figure(thickness_nm: float) -> go.Figure:
    bands = band_table()
    upper_limit = THICKNESS_RANGE_NM[1]
    fig = go.Figure()
    for _, band in bands.iterrows():
        lower = float(band["lower_nm"])
        upper = min(float(band["upper_nm"]), upper_limit)
        fig.add_trace(
            go.Bar(
                x=[upper - lower],
                y=["film"],
                base=[lower],
                orientation="h",
                marker=dict(color=band["css"]),
                name=str(band["band"]),
                hovertemplate=f"{band['band']}: {lower:.0f}-{upper:.0f} nm<extra></extra>",
                showlegend=False,
            )
        )
    fig.add_vline(x=thickness_nm, line=dict(color=INK, width=2))
    fig.update_yaxes(visible=False)
    fig.update_xaxes(range=[0, upper_limit], title="Thickness (nm)")
    fig.update_layout(
        template=PLOT_TEMPLATE,
        barmode="overlay",
        height=120,
        margin=dict(l=10, r=10, t=10, b=30),
    )
    return fig


def _render_optics(text: ArticleText, language: Language) -> None:
    view_col, control_col = st.columns([2, 1])
    with control_col:
        st.subheader(text.optics_title)
        st.caption(text.optics_blurb)
        thickness = st.slider(
            "Film Thickness (d, nm)",
            min_value=int(THICKNESS_RANGE_NM[0]),
            max_value=int(THICKNESS_RANGE_NM[1]),
            value=DEFAULT_THICKNESS_NM,
            step=10,
            key="film_thickness",
        )
        st.plotly_chart(_spectrum_figure(float(thickness)), width="stretch")
        st.info(film_caption(float(thickness), language.value))

    sample = film_sample(float(thickness))
    color = css_color(sample.color_rgb)
    with view_col:
        section_col, swatch_col = st.columns(2)
        section_col.plotly_chart(_cross_section_figure(float(thickness)), width="stretch")
        with swatch_col:
            st.markdown(
                f"""
<div style="background:#1c1917;border-radius:12px;height:360px;display:flex;flex-direction:column;align-items:center;justify-content:center;">
  <div style="color:#a8a29e;font-size:0.7rem;letter-spacing:0.2em;text-transform:uppercase;margin-bottom:2rem;">Observed Color</div>
  <div style="width:12rem;height:12rem;border-radius:50%;background-color:{color};box-shadow:0 0 30px {color};position:relative;">
    <div style="position:absolute;top:2rem;left:2rem;width:4rem;height:2rem;background:rgba(255,255,255,0.4);border-radius:50%;filter:blur(6px);transform:rotate(-45deg);"></div>
  </div>
</div>
""",
                unsafe_allow_html=True,
            )
            if is_black_film(float(thickness)):
                st.error("Black Film (Fragile!)")
            st.caption(f"{sample.band.value} · {color}")


with st.sidebar:
    st.header("Bubble Science")
    language = st.radio(
        "Language / 語言",
        options=[Language.ZH, Language.EN],
        format_func=lambda value: _LANGUAGE_LABELS[value],
        horizontal=True,
    )
    with st.expander("Simulation"):
        ticks_per_refresh = st.slider(
            "Ticks per refresh",
            min_value=1,
            max_value=20,
            value=DEFAULT_TICKS_PER_REFRESH,
            step=1,
        )

text = article_text(language)

st.caption(f"{text.nav_intro} · {text.nav_lab} · {text.nav_conclusion} | {text.journal_badge}")
render_bubble_hero(height=520)
st.markdown(
    f"""
<div style="text-align:center;margin-top:-1rem;">
  <span class="bubble-kicker">{text.hero_kicker}</span>
  <h1 style="font-size:4.5rem;margin:0.5rem 0 0;">{text.hero_title}</h1>
  <p style="font-family:Georgia,serif;font-style:italic;font-size:1.6rem;color:#57534e;">{text.hero_subtitle}</p>
  <p style="letter-spacing:0.15em;color:#78716c;font-size:0.85rem;">{text.byline}</p>
</div>
""",
    unsafe_allow_html=True,
)

st.divider()
intro_left, intro_right = st.columns([4, 8])
with intro_left:
    st.header(text.intro_heading)
    st.markdown(f"*{text.quote}*")
    st.caption(f"— {text.quote_author}")
with intro_right:
    st.write(text.lede)
    for topic in text.intro_topics:
        st.markdown(
            f'<div class="bubble-topic"><h3>{topic.title}</h3><p>{topic.body}</p></div>',
            unsafe_allow_html=True,
        )

st.divider()
st.markdown(
    f'<div style="text-align:center;"><span class="bubble-kicker">{text.lab_kicker}</span></div>',
    unsafe_allow_html=True,
)
st.header(text.lab_heading)
st.write(text.lab_blurb)

tab_mechanics, tab_geometry, tab_optics = st.tabs(
    [text.tab_mechanics, text.tab_geometry, text.tab_optics]
)
with tab_mechanics:
    _render_mechanics(text, int(ticks_per_refresh))
with tab_geometry:
    _render_geometry(text)
with tab_optics:
    _render_optics(text, language)

st.divider()
st.header(text.conclusion_heading)
st.write(text.conclusion_body)
card_cols = st.columns(3)
for column, topic in zip(card_cols, text.more_topics):
    column.markdown(
        f'<div class="bubble-card"><strong>{topic.title}</strong><br/>'
        f'<span style="color:#a8a29e;font-size:0.8rem;">{topic.body}</span></div>',
        unsafe_allow_html=True,
    )

st.divider()
st.markdown(f"**{text.footer_title}**")
st.caption(text.footer_credit)
