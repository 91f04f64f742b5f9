import streamlit as st
import pandas as pd
import plotly.graph_objects as go

import calc
import catalog
import config

# Per-model colors, cycled by catalog position so a model keeps its color in both charts
MODEL_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#FFA07A", "#98D8C8",
    "#F7DC6F", "#BB8FCE", "#85C1E2", "#F8B739", "#52B788"
]
OVERHEAD_COLOR = "#666666"
AVAILABLE_COLOR = "#2a2a2a"

# Widget key prefixes for the per-model table; cleared on reset
MODEL_WIDGET_PREFIXES = ("enabled_", "weight_bytes_", "kv_bytes_", "kv_budget_", "avg_tokens_", "target_tps_")


def format_bytes(num_bytes):
    """Format a byte count with 1024 steps; 0 is shown as N/A."""
    if num_bytes == 0:
        return "N/A"
    if num_bytes < 1024:
        return f"{num_bytes:.0f} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def format_gb(gb):
    if gb == 0:
        return "N/A"
    return f"{gb:.2f} GB"


def format_concurrency(requests):
    if requests == 0:
        return "N/A"
    return f"{requests:.2f}"


def format_precision(bytes_per_value):
    return f"{bytes_per_value:g} ({catalog.precision_label(bytes_per_value)})"


def model_color(index):
    return MODEL_COLORS[index % len(MODEL_COLORS)]


def create_sidebar_inputs():
    """Create sidebar inputs and return the planner configuration as a dictionary."""
    st.sidebar.header("Hardware")

    hardware_ids = [hw.id for hw in catalog.HARDWARE]
    default_id = catalog.get_default_hardware().id
    hardware_id = st.sidebar.selectbox(
        "GPU Configuration",
        options=hardware_ids,
        index=hardware_ids.index(default_id),
        format_func=lambda hw_id: _hardware_option_label(catalog.get_hardware_by_id(hw_id)),
        key="hardware_id"
    )
    hardware = catalog.get_hardware_by_id(hardware_id)

    if hardware.notes:
        st.sidebar.caption(hardware.notes)

    st.sidebar.markdown("---")
    st.sidebar.subheader("Planning Policy")
    overhead_ratio = st.sidebar.slider(
        "Runtime Overhead (ratio)",
        min_value=0.0,
        max_value=max(0.5, float(config.OVERHEAD_RATIO)),
        value=float(config.OVERHEAD_RATIO),
        step=0.005,
        format="%.3f",
        key="overhead_ratio",
        help="Safety margin on top of weights and KV budgets (0.2 = 20%)"
    )

    reset = st.sidebar.button("Reset Models to Defaults")

    return {
        "hardware": hardware,
        "overhead_ratio": overhead_ratio,
        "reset": reset
    }


def _hardware_option_label(hardware):
    return f"{hardware.name} ({hardware.vram_gb:g}GB, {hardware.bandwidth_gbs:g} GB/s)"


def clear_model_widgets():
    """Drop per-model widget state so widgets pick up the catalog defaults again."""
    for key in list(st.session_state.keys()):
        if key.startswith(MODEL_WIDGET_PREFIXES):
            del st.session_state[key]


def display_model_table(models):
    """Render one editable row per model; widgets write straight into the model fields."""
    st.subheader("Models")

    widths = [0.6, 2.2, 1.4, 1.6, 1.1, 1.6, 1.1, 1.2, 1.3, 1.1, 1.2]
    headers = ["On", "Model", "Type", "Weights", "Size", "KV Precision", "KV/Token",
               "KV Budget (GB)", "Avg Tokens/Req", "Max Concurrent", "Target tok/s"]
    header_cols = st.columns(widths)
    for col, header in zip(header_cols, headers):
        col.markdown(f"**{header}**")

    for idx, model in enumerate(models):
        cols = st.columns(widths)

        model.enabled = cols[0].checkbox(
            f"Enable {model.name}",
            value=model.enabled,
            key=f"enabled_{idx}",
            label_visibility="collapsed"
        )
        cols[1].markdown(model.name)
        cols[2].markdown(model.type)

        model.weight_bytes_per_param = cols[3].selectbox(
            f"Weight precision for {model.name}",
            options=model.weight_bytes_options,
            index=model.weight_bytes_options.index(model.weight_bytes_per_param),
            format_func=format_precision,
            key=f"weight_bytes_{idx}",
            label_visibility="collapsed"
        )
        cols[4].markdown(format_gb(calc.weights_footprint_gb(model)))

        if model.kv_bytes_options:
            model.kv_bytes_per_element = cols[5].selectbox(
                f"KV precision for {model.name}",
                options=model.kv_bytes_options,
                index=model.kv_bytes_options.index(model.kv_bytes_per_element),
                format_func=format_precision,
                key=f"kv_bytes_{idx}",
                label_visibility="collapsed"
            )
        else:
            cols[5].markdown("N/A")
        cols[6].markdown(format_bytes(calc.kv_bytes_per_token(model)))

        model.kv_budget_gb = cols[7].number_input(
            f"KV budget for {model.name}",
            min_value=0.0,
            value=float(model.kv_budget_gb),
            step=0.1,
            key=f"kv_budget_{idx}",
            label_visibility="collapsed"
        )
        model.avg_tokens_per_request = cols[8].number_input(
            f"Average tokens per request for {model.name}",
            min_value=0,
            value=int(model.avg_tokens_per_request),
            step=1024,
            key=f"avg_tokens_{idx}",
            label_visibility="collapsed"
        )
        cols[9].markdown(format_concurrency(calc.max_concurrent_requests(model)))
        model.target_tokens_per_sec = cols[10].number_input(
            f"Target tokens per second for {model.name}",
            min_value=0,
            value=int(model.target_tokens_per_sec),
            step=5,
            key=f"target_tps_{idx}",
            label_visibility="collapsed"
        )


def build_summary_frame(models, hardware):
    """Tabulate the derived metrics for every enabled model."""
    rows = []
    for model in calc.enabled_models(models):
        rows.append({
            "Model": model.name,
            "Weights": format_gb(calc.weights_footprint_gb(model)),
            "KV Budget": format_gb(model.kv_budget_gb),
            "KV/Token": format_bytes(calc.kv_bytes_per_token(model)),
            "Max Concurrent": format_concurrency(calc.max_concurrent_requests(model)),
            "Bandwidth (GB/s)": f"{calc.bandwidth_demand_gbs(model):.0f}",
            "Bandwidth Utilization": f"{calc.bandwidth_utilization_percent(model, hardware):.1f}%"
        })
    return pd.DataFrame(rows, columns=["Model", "Weights", "KV Budget", "KV/Token", "Max Concurrent",
                                       "Bandwidth (GB/s)", "Bandwidth Utilization"])


def display_capacity(models, hardware, capacity):
    """Show the capacity error, or the summary table and charts when everything fits."""
    if not capacity.fits:
        st.error(
            f"**Insufficient VRAM.** The enabled models need {capacity.total_with_overhead:.2f} GB "
            f"including {capacity.overhead_ratio * 100:g}% overhead, but the hardware has "
            f"{hardware.vram_gb:g} GB. Short by {capacity.deficit:.2f} GB. "
            "Disable models, lower precisions or shrink KV budgets."
        )
        return

    st.subheader("Derived Metrics")
    st.dataframe(build_summary_frame(models, hardware), width="stretch", hide_index=True)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"#### VRAM Utilization ({capacity.utilization_percent:.1f}%)")
        st.plotly_chart(vram_chart(models, hardware, capacity.overhead_ratio), width="stretch")
    with col2:
        bandwidth_pct = calc.aggregate_bandwidth_utilization_percent(models, hardware)
        st.markdown(f"#### Bandwidth Utilization ({bandwidth_pct:.1f}%)")
        st.plotly_chart(bandwidth_chart(models, hardware), width="stretch")


def _slice_colors(models, slices):
    index_by_name = {model.name: idx for idx, model in enumerate(models)}
    colors = []
    for slice_ in slices:
        if slice_["model"] is not None:
            colors.append(model_color(index_by_name[slice_["model"]]))
        elif slice_["kind"] == "overhead":
            colors.append(OVERHEAD_COLOR)
        else:
            colors.append(AVAILABLE_COLOR)
    return colors


def vram_chart(models, hardware, overhead_ratio):
    slices = calc.vram_breakdown(models, hardware, overhead_ratio)

    # KV cache slices are striped in their model's color
    shapes = ["/" if slice_["kind"] == "kv_cache" else "" for slice_ in slices]

    fig = go.Figure(go.Pie(
        labels=[slice_["label"] for slice_ in slices],
        values=[slice_["value_gb"] for slice_ in slices],
        customdata=[slice_["percent"] for slice_ in slices],
        marker=dict(
            colors=_slice_colors(models, slices),
            pattern=dict(shape=shapes, fgcolor="rgba(0, 0, 0, 0.3)"),
            line=dict(color="#1a1a1a", width=2)
        ),
        hovertemplate="%{label}: %{value:.2f} GB (%{customdata:.1f}%)<extra></extra>",
        textinfo="none",
        sort=False,
        hole=0.4
    ))
    fig.update_layout(showlegend=False, margin=dict(t=10, b=10, l=10, r=10))
    return fig


def bandwidth_chart(models, hardware):
    slices = calc.bandwidth_breakdown(models, hardware)

    fig = go.Figure(go.Pie(
        labels=[slice_["label"] for slice_ in slices],
        values=[slice_["value_gbs"] for slice_ in slices],
        customdata=[slice_["percent"] for slice_ in slices],
        marker=dict(
            colors=_slice_colors(models, slices),
            line=dict(color="#1a1a1a", width=2)
        ),
        hovertemplate="%{label}: %{value:.0f} GB/s (%{customdata:.1f}%)<extra></extra>",
        textinfo="none",
        sort=False,
        hole=0.4
    ))
    fig.update_layout(showlegend=False, margin=dict(t=10, b=10, l=10, r=10))
    return fig


def build_benchmark_frame(models):
    """Benchmark scores for the enabled models at their selected weight precision."""
    rows = []
    for model in calc.enabled_models(models):
        row = {"Model": model.name, "Weights": catalog.precision_label(model.weight_bytes_per_param)}
        baseline = model.benchmarks.get(2, {})
        for key in baseline:
            row[catalog.benchmark_name(key)] = catalog.estimate_benchmark(model, key)
        rows.append(row)
    return pd.DataFrame(rows)


def display_benchmarks(models):
    with st.expander("Benchmarks"):
        st.markdown(
            "Scores at each model's selected weight precision. Where no quantized "
            "measurement exists the FP16 score is scaled by a degradation factor."
        )
        st.dataframe(build_benchmark_frame(models), width="stretch", hide_index=True)

        st.markdown("#### Compare Two Models (FP16)")
        names = [model.name for model in models]
        col1, col2 = st.columns(2)
        first = col1.selectbox("Model A", options=names, index=0, key="compare_a")
        second = col2.selectbox("Model B", options=names, index=min(1, len(names) - 1), key="compare_b")

        if first == second:
            st.info("Pick two different models to compare.")
            return

        by_name = {model.name: model for model in models}
        comparison = catalog.compare_benchmarks(by_name[first], by_name[second])
        if not comparison:
            st.info("No benchmarks with scores for both models.")
            return

        comparison_df = pd.DataFrame([
            {
                "Benchmark": catalog.benchmark_name(key),
                first: scores["model1"],
                second: scores["model2"],
                "Difference": scores["difference"],
                "Difference %": f"{scores['percent_diff']:+.1f}%"
            }
            for key, scores in comparison.items()
        ])
        st.dataframe(comparison_df, width="stretch", hide_index=True)
