"""Reference data for the planner: hardware profiles, model specs and benchmarks.

Architecture numbers come from the published model cards. Precisions, KV budgets
and traffic targets are the operator's choices and are only defaults here.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HardwareProfile:
    id: str
    name: str
    vram_gb: float
    bandwidth_gbs: float
    tflops: dict = field(default_factory=dict)
    gpu_count: int = 1
    interconnect_gbs: float | None = None
    notes: str = ""


@dataclass
class ModelConfig:
    """One deployable model. Fields are mutated in place by the planner UI."""
    name: str
    type: str
    base_params: float
    layers: int
    kv_heads: int
    head_dim: int
    weight_bytes_per_param: float
    kv_bytes_per_element: float
    kv_budget_gb: float
    avg_tokens_per_request: int
    target_tokens_per_sec: float
    enabled: bool = True
    hidden_dim: int = 0
    num_heads: int = 0
    vocab_size: int = 0
    max_context: int = 0
    active_params: float | None = None
    weight_bytes_options: list = field(default_factory=list)
    kv_bytes_options: list = field(default_factory=list)
    benchmarks: dict = field(default_factory=dict)

    @property
    def is_moe(self):
        return self.active_params is not None


HARDWARE = [
    HardwareProfile(
        id="rtx-pro-6000-blackwell",
        name="RTX PRO 6000 Blackwell Max-Q",
        vram_gb=96,
        bandwidth_gbs=1800,         # verify with nvidia-smi
        tflops={"fp32": 75, "fp16": 150, "fp8": 300},  # estimates
        gpu_count=1,
        interconnect_gbs=None,
        notes="Blackwell architecture workstation GPU",
    ),
]


def get_hardware_by_id(hardware_id):
    """Return the profile with the given id, or the first profile if unknown."""
    for hardware in HARDWARE:
        if hardware.id == hardware_id:
            return hardware
    logger.warning("Unknown hardware id %r, falling back to %s", hardware_id, HARDWARE[0].id)
    return HARDWARE[0]


def get_default_hardware():
    return get_hardware_by_id(config.DEFAULT_HARDWARE_ID)


def _empty_scores(*keys):
    return {key: None for key in keys}


MODEL_SPECS = [
    # Dense models
    ModelConfig(
        name="Llama-3.1-8B", type="Text",
        layers=32, hidden_dim=4096, num_heads=32, kv_heads=8, head_dim=128,
        vocab_size=128256, max_context=131072, base_params=8e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=2, kv_bytes_per_element=2,
        kv_budget_gb=8, avg_tokens_per_request=6000, target_tokens_per_sec=50,
        benchmarks={
            2: {"gpqa": 32.8, "mmlu_pro": 48.3, "math": 51.9, "ifeval": 80.4, "humaneval": 72.6},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval"),
        },
    ),
    ModelConfig(
        name="Llama-3.3-70B", type="Text",
        layers=80, hidden_dim=8192, num_heads=64, kv_heads=8, head_dim=128,
        vocab_size=128256, max_context=131072, base_params=70e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=1, kv_bytes_per_element=2,  # INT8 for the larger model
        kv_budget_gb=16, avg_tokens_per_request=8000, target_tokens_per_sec=25,
        benchmarks={
            2: {"gpqa": 50.5, "mmlu_pro": 68.9, "math": 77.0, "ifeval": 92.1, "humaneval": 88.4},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval"),
        },
    ),
    ModelConfig(
        name="Qwen3-8B", type="Text",
        layers=36, hidden_dim=4096, num_heads=32, kv_heads=8, head_dim=128,
        vocab_size=152064, max_context=32768, base_params=8e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=2, kv_bytes_per_element=2,
        kv_budget_gb=8, avg_tokens_per_request=6000, target_tokens_per_sec=40,
        benchmarks={
            2: {"gpqa": 41.5, "mmlu_pro": 61.4, "math": 43.5, "ifeval": 69.5, "humaneval": None},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval"),
        },
    ),

    # Mixture of Experts models: base_params is the total, all experts stay resident
    ModelConfig(
        name="DeepSeek-V3", type="Text MoE",
        layers=61, hidden_dim=7168, num_heads=128, kv_heads=128, head_dim=128,
        vocab_size=102400, max_context=131072, base_params=671e9, active_params=37e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=1, kv_bytes_per_element=1,
        kv_budget_gb=8, avg_tokens_per_request=12000, target_tokens_per_sec=20,
        benchmarks={
            2: {"gpqa": 59.1, "mmlu_pro": 75.9, "math": 90.2, "ifeval": 86.1, "humaneval": 82.6, "swebench": 42.0},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "swebench"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "swebench"),
        },
    ),
    ModelConfig(
        name="Llama-4-Scout", type="Multimodal MoE",
        layers=80, hidden_dim=8192, num_heads=64, kv_heads=8, head_dim=128,  # layers/hidden estimated
        vocab_size=128256, max_context=10000000, base_params=109e9, active_params=17e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=0.5, kv_bytes_per_element=1,  # INT4 for long context
        kv_budget_gb=20, avg_tokens_per_request=50000, target_tokens_per_sec=15,
        benchmarks={
            2: {"gpqa": 57.2, "mmlu_pro": 74.3, "math": None, "ifeval": None, "humaneval": None, "livecode": 32.8},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "livecode"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "livecode"),
        },
    ),
    ModelConfig(
        name="Llama-4-Maverick", type="Multimodal MoE",
        layers=80, hidden_dim=8192, num_heads=64, kv_heads=8, head_dim=128,
        vocab_size=128256, max_context=1000000, base_params=400e9, active_params=17e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=1, kv_bytes_per_element=1,
        kv_budget_gb=10, avg_tokens_per_request=20000, target_tokens_per_sec=18,
        benchmarks={
            2: {"gpqa": 69.8, "mmlu_pro": 80.5, "math": None, "ifeval": None, "humaneval": None, "livecode": None},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "livecode"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "livecode"),
        },
    ),
    ModelConfig(
        name="Mistral-Large-3", type="Text MoE",
        layers=88, hidden_dim=8192, num_heads=64, kv_heads=8, head_dim=128,
        vocab_size=131072, max_context=262144, base_params=675e9, active_params=41e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=1, kv_bytes_per_element=1,
        kv_budget_gb=10, avg_tokens_per_request=15000, target_tokens_per_sec=22,
        benchmarks={
            2: {"gpqa": 43.9, "mmlu_pro": None, "math": None, "ifeval": None, "humaneval": 92.0, "mmlu": 85.5},
            1: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "mmlu"),
            0.5: _empty_scores("gpqa", "mmlu_pro", "math", "ifeval", "humaneval", "mmlu"),
        },
    ),

    # Vision
    ModelConfig(
        name="Qwen3-VL-8B", type="Vision",
        layers=36, hidden_dim=4096, num_heads=32, kv_heads=8, head_dim=128,
        vocab_size=152064, max_context=32768, base_params=8e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=2, kv_bytes_per_element=2,
        kv_budget_gb=3, avg_tokens_per_request=4000, target_tokens_per_sec=30,
        benchmarks={precision: _empty_scores("mmmu", "vqa") for precision in (2, 1, 0.5)},
    ),

    # Code
    ModelConfig(
        name="Qwen3-Coder-30B-A3B", type="Code MoE",
        layers=48, hidden_dim=4096, num_heads=32, kv_heads=4, head_dim=128,
        vocab_size=152064, max_context=131072, base_params=30e9, active_params=3e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[1, 2],
        weight_bytes_per_param=1, kv_bytes_per_element=1,
        kv_budget_gb=3, avg_tokens_per_request=100000, target_tokens_per_sec=20,
        benchmarks={precision: _empty_scores("humaneval", "mbpp", "livecode") for precision in (2, 1, 0.5)},
    ),

    # Embedding and reranking: no KV cache
    ModelConfig(
        name="Qwen3-Embedding-8B", type="Embed",
        layers=36, hidden_dim=4096, num_heads=32, kv_heads=0, head_dim=0,
        vocab_size=152064, max_context=8192, base_params=8e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[],
        weight_bytes_per_param=1, kv_bytes_per_element=0,
        kv_budget_gb=0, avg_tokens_per_request=0, target_tokens_per_sec=0,
        enabled=False,
        benchmarks={precision: _empty_scores("mteb_avg") for precision in (2, 1, 0.5)},
    ),
    ModelConfig(
        name="Qwen3-Reranker-8B", type="Rerank",
        layers=36, hidden_dim=4096, num_heads=32, kv_heads=0, head_dim=0,
        vocab_size=152064, max_context=8192, base_params=8e9,
        weight_bytes_options=[0.5, 1, 2], kv_bytes_options=[],
        weight_bytes_per_param=1, kv_bytes_per_element=0,
        kv_budget_gb=0, avg_tokens_per_request=0, target_tokens_per_sec=0,
        enabled=False,
        benchmarks={precision: _empty_scores("mteb_rerank") for precision in (2, 1, 0.5)},
    ),
    ModelConfig(
        name="DistilBERT-base", type="Classifier",
        layers=6, hidden_dim=768, num_heads=12, kv_heads=12, head_dim=64,
        vocab_size=30522, max_context=512, base_params=0.066e9,
        weight_bytes_options=[1, 2, 4], kv_bytes_options=[2, 4],
        weight_bytes_per_param=4, kv_bytes_per_element=4,
        kv_budget_gb=0, avg_tokens_per_request=256, target_tokens_per_sec=0,
        enabled=False,
        benchmarks={precision: _empty_scores("glue_avg") for precision in (4, 2, 1)},
    ),
]


def load_models():
    """Return an independent copy of the model catalog for a caller to own and edit."""
    return copy.deepcopy(MODEL_SPECS)


PRECISION_LABELS = {
    0.5: "INT4",
    1: "INT8/FP8",
    2: "FP16/BF16",
    4: "FP32"
}


def precision_label(bytes_per_value):
    label = PRECISION_LABELS.get(bytes_per_value)
    if label is not None:
        return label
    return f"{bytes_per_value:g}B"


BENCHMARK_INFO = {
    "gpqa": {"name": "GPQA Diamond", "description": "Graduate-level reasoning questions", "higher_is_better": True, "scale": 100},
    "mmlu_pro": {"name": "MMLU-PRO", "description": "10-choice multitask language understanding", "higher_is_better": True, "scale": 100},
    "mmlu": {"name": "MMLU", "description": "Massive multitask language understanding", "higher_is_better": True, "scale": 100},
    "math": {"name": "MATH", "description": "Competition-level math problems", "higher_is_better": True, "scale": 100},
    "ifeval": {"name": "IFEval", "description": "Instruction following evaluation", "higher_is_better": True, "scale": 100},
    "humaneval": {"name": "HumanEval", "description": "Code generation benchmark", "higher_is_better": True, "scale": 100},
    "swebench": {"name": "SWE-bench Verified", "description": "Real GitHub issue resolution", "higher_is_better": True, "scale": 100},
    "livecode": {"name": "LiveCodeBench", "description": "Recent coding problems", "higher_is_better": True, "scale": 100},
}


def benchmark_name(key):
    info = BENCHMARK_INFO.get(key)
    return info["name"] if info else key


def compare_benchmarks(model1, model2, precision=2):
    """
    Compare the scores two models share at one weight precision.

    Returns:
        Dictionary keyed by benchmark with both scores, their difference and the
        percent difference relative to model2, or None when either model has no
        scores at that precision.
    """
    bench1 = model1.benchmarks.get(precision)
    bench2 = model2.benchmarks.get(precision)
    if not bench1 or not bench2:
        return None

    comparison = {}
    for key in bench1:
        if key not in bench2:
            continue
        score1, score2 = bench1[key], bench2[key]
        # A zero reference score has no meaningful percent difference
        if score1 is None or score2 is None or score2 == 0:
            continue
        comparison[key] = {
            "model1": score1,
            "model2": score2,
            "difference": score1 - score2,
            "percent_diff": (score1 - score2) / score2 * 100
        }
    return comparison


def estimate_benchmark(model, key, precision=None):
    """
    Score for a benchmark at the given (default: currently selected) weight precision.

    A measured score is returned as-is. Otherwise the FP16 baseline is scaled by
    the quantization degradation factor; None when there is no baseline either.
    """
    if precision is None:
        precision = model.weight_bytes_per_param

    measured = model.benchmarks.get(precision, {}).get(key)
    if measured is not None:
        return measured

    baseline = model.benchmarks.get(2, {}).get(key)
    factor = config.QUANT_DEGRADATION.get(precision)
    if baseline is None or factor is None:
        return None
    return baseline * factor
