"""Unit tests for the display helpers in ui (no Streamlit rendering)."""

import pytest

import catalog
import ui


def hardware():
    return catalog.get_hardware_by_id("rtx-pro-6000-blackwell")


class TestFormatting:
    """Tests for sentinel-aware formatting."""

    @pytest.mark.parametrize("value,expected", [
        (0, "N/A"),
        (512, "512 B"),
        (73728, "72.0 KB"),
        (147456, "144.0 KB"),
        (3 * 1024 * 1024, "3.0 MB"),
    ])
    def test_format_bytes(self, value, expected):
        assert ui.format_bytes(value) == expected

    def test_format_gb(self):
        assert ui.format_gb(0) == "N/A"
        assert ui.format_gb(16) == "16.00 GB"

    def test_format_concurrency(self):
        assert ui.format_concurrency(0) == "N/A"
        assert ui.format_concurrency(9.0422) == "9.04"

    def test_format_precision(self):
        assert ui.format_precision(0.5) == "0.5 (INT4)"
        assert ui.format_precision(2) == "2 (FP16/BF16)"

    def test_model_color_cycles(self):
        assert ui.model_color(0) == ui.model_color(len(ui.MODEL_COLORS))


class TestFrames:
    """Tests for the tables built from the engine."""

    def test_summary_only_enabled(self):
        models = catalog.load_models()
        frame = ui.build_summary_frame(models, hardware())
        assert list(frame["Model"]) == [m.name for m in models if m.enabled]

    def test_summary_row(self):
        models = [m for m in catalog.load_models() if m.name == "Qwen3-8B"]
        row = ui.build_summary_frame(models, hardware()).iloc[0]
        assert row["Weights"] == "16.00 GB"
        assert row["KV/Token"] == "144.0 KB"
        assert row["Max Concurrent"] == "9.04"
        assert row["Bandwidth (GB/s)"] == "640"
        assert row["Bandwidth Utilization"] == "35.6%"

    def test_summary_empty(self):
        frame = ui.build_summary_frame([], hardware())
        assert frame.empty
        assert "Model" in frame.columns

    def test_benchmark_frame_uses_selected_precision(self):
        models = [m for m in catalog.load_models() if m.name == "Llama-3.1-8B"]
        models[0].weight_bytes_per_param = 1
        frame = ui.build_benchmark_frame(models)
        assert frame.iloc[0]["Weights"] == "INT8/FP8"
        assert frame.iloc[0]["GPQA Diamond"] == pytest.approx(32.8 * 0.99)


class TestCharts:
    """Tests for chart figure construction."""

    def test_vram_chart_slices(self):
        models = [m for m in catalog.load_models() if m.name == "Qwen3-8B"]
        fig = ui.vram_chart(models, hardware(), 0.2)
        pie = fig.data[0]
        assert list(pie.labels) == ["Qwen3-8B (Weights)", "Qwen3-8B (KV Cache)", "Overhead (20%)", "Available"]
        assert list(pie.marker.pattern.shape) == ["", "/", "", ""]

    def test_bandwidth_chart_colors_follow_catalog_position(self):
        models = catalog.load_models()
        fig = ui.bandwidth_chart(models, hardware())
        pie = fig.data[0]
        assert pie.labels[0] == models[0].name
        assert pie.marker.colors[0] == ui.model_color(0)
