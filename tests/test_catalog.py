"""Unit tests for the reference catalog."""

import logging

import pytest

import calc
import catalog


class TestHardware:
    """Tests for hardware lookups."""

    def test_lookup_by_id(self):
        hardware = catalog.get_hardware_by_id("rtx-pro-6000-blackwell")
        assert hardware.vram_gb == 96
        assert hardware.bandwidth_gbs == 1800

    def test_unknown_id_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="catalog"):
            hardware = catalog.get_hardware_by_id("does-not-exist")
        assert hardware is catalog.HARDWARE[0]
        assert "does-not-exist" in caplog.text

    def test_default_hardware(self, monkeypatch):
        monkeypatch.setattr(catalog.config, "DEFAULT_HARDWARE_ID", "rtx-pro-6000-blackwell")
        assert catalog.get_default_hardware().id == "rtx-pro-6000-blackwell"


class TestModels:
    """Tests for the model catalog."""

    def test_load_models_is_independent_copy(self):
        models = catalog.load_models()
        models[0].enabled = False
        models[0].kv_budget_gb = 99
        assert catalog.MODEL_SPECS[0].enabled is True
        assert catalog.MODEL_SPECS[0].kv_budget_gb == 8

    def test_selected_precisions_are_offered(self):
        for model in catalog.MODEL_SPECS:
            assert model.weight_bytes_per_param in model.weight_bytes_options
            if model.kv_bytes_options:
                assert model.kv_bytes_per_element in model.kv_bytes_options

    def test_cacheless_models(self):
        by_name = {model.name: model for model in catalog.MODEL_SPECS}
        for name in ("Qwen3-Embedding-8B", "Qwen3-Reranker-8B"):
            assert calc.kv_bytes_per_token(by_name[name]) == 0
            assert calc.max_concurrent_requests(by_name[name]) == 0

    def test_moe_flag(self):
        by_name = {model.name: model for model in catalog.MODEL_SPECS}
        assert by_name["DeepSeek-V3"].is_moe
        assert not by_name["Llama-3.1-8B"].is_moe

    def test_default_selection_exceeds_single_card(self):
        capacity = calc.check_capacity(catalog.load_models(), catalog.get_hardware_by_id("rtx-pro-6000-blackwell"))
        # DeepSeek-V3 alone is 671 GB at INT8, far beyond one 96 GB card
        assert not capacity.fits


class TestPrecisionLabels:
    """Tests for precision labels."""

    @pytest.mark.parametrize("bytes_per_value,label", [
        (0.5, "INT4"), (1, "INT8/FP8"), (2, "FP16/BF16"), (4, "FP32"), (2.0, "FP16/BF16"),
    ])
    def test_known(self, bytes_per_value, label):
        assert catalog.precision_label(bytes_per_value) == label

    def test_unknown(self):
        assert catalog.precision_label(3) == "3B"


class TestBenchmarks:
    """Tests for benchmark comparison and estimation."""

    def get(self, name):
        return next(model for model in catalog.load_models() if model.name == name)

    def test_compare_common_non_null(self):
        comparison = catalog.compare_benchmarks(self.get("Llama-3.3-70B"), self.get("Qwen3-8B"))
        # humaneval is missing for Qwen3-8B
        assert set(comparison) == {"gpqa", "mmlu_pro", "math", "ifeval"}
        gpqa = comparison["gpqa"]
        assert gpqa["model1"] == 50.5
        assert gpqa["model2"] == 41.5
        assert gpqa["difference"] == pytest.approx(9.0)
        assert gpqa["percent_diff"] == pytest.approx(9.0 / 41.5 * 100)

    def test_compare_missing_precision(self):
        assert catalog.compare_benchmarks(self.get("DistilBERT-base"), self.get("Qwen3-8B"), precision=4) is None

    def test_compare_no_overlap(self):
        assert catalog.compare_benchmarks(self.get("Qwen3-VL-8B"), self.get("Qwen3-8B")) == {}

    def test_estimate_at_fp16(self):
        model = self.get("Llama-3.1-8B")
        assert catalog.estimate_benchmark(model, "gpqa") == 32.8

    def test_estimate_degrades_quantized(self):
        model = self.get("Llama-3.1-8B")
        model.weight_bytes_per_param = 0.5
        assert catalog.estimate_benchmark(model, "gpqa") == pytest.approx(32.8 * 0.97)
        assert catalog.estimate_benchmark(model, "gpqa", precision=1) == pytest.approx(32.8 * 0.99)

    def test_estimate_prefers_measurement(self):
        model = self.get("Llama-3.1-8B")
        model.benchmarks[1]["gpqa"] = 30.0
        assert catalog.estimate_benchmark(model, "gpqa", precision=1) == 30.0

    def test_estimate_without_baseline(self):
        assert catalog.estimate_benchmark(self.get("Qwen3-8B"), "humaneval") is None
        assert catalog.estimate_benchmark(self.get("Qwen3-8B"), "unknown_key") is None

    def test_benchmark_name(self):
        assert catalog.benchmark_name("swebench") == "SWE-bench Verified"
        assert catalog.benchmark_name("mmmu") == "mmmu"
