from dataclasses import dataclass

import config


def weights_footprint_gb(model):
    """Calculate the VRAM needed to hold all model weights resident."""
    # MoE models keep every expert in memory, so this uses total params, not active
    bytes_needed = model.base_params * model.weight_bytes_per_param

    # Convert to GB
    return bytes_needed / 1e9


def kv_bytes_per_token(model):
    """
    Calculate KV cache bytes stored per token.

    KV per token = layers * kv_heads * head_dim * 2 (K and V) * kv_bytes
    """
    # Encoder-only classifiers, embedders and rerankers keep no KV cache
    if model.kv_heads == 0:
        return 0
    return model.layers * model.kv_heads * model.head_dim * 2 * model.kv_bytes_per_element


def has_kv_cache(model):
    return kv_bytes_per_token(model) > 0


def max_concurrent_requests(model):
    """
    Estimate how many request contexts fit in the model's KV cache budget.

    Returns 0 when not applicable (no KV cache or no average context length).
    The result is continuous; rounding is left to the display.
    """
    kv_per_token = kv_bytes_per_token(model)
    if kv_per_token == 0 or model.avg_tokens_per_request == 0:
        return 0
    return (model.kv_budget_gb * 1e9) / (kv_per_token * model.avg_tokens_per_request)


def bandwidth_demand_gbs(model):
    """Calculate sustained memory bandwidth (GB/s) needed to hit the decode target."""
    # Decode reads all resident weights once per generated token
    return weights_footprint_gb(model) * model.target_tokens_per_sec


def bandwidth_utilization_percent(model, hardware):
    """Share of the hardware's memory bandwidth this model consumes, in percent."""
    # Zero bandwidth means the hardware capacity is unknown
    if hardware.bandwidth_gbs == 0:
        return 0
    return bandwidth_demand_gbs(model) / hardware.bandwidth_gbs * 100


def enabled_models(models):
    return [model for model in models if model.enabled]


def total_bandwidth_demand_gbs(models):
    return sum(bandwidth_demand_gbs(model) for model in enabled_models(models))


def aggregate_bandwidth_utilization_percent(models, hardware):
    if hardware.bandwidth_gbs == 0:
        return 0
    return total_bandwidth_demand_gbs(models) / hardware.bandwidth_gbs * 100


@dataclass(frozen=True)
class CapacityCheck:
    """VRAM accounting for the enabled models against one hardware profile."""
    vram_gb: float
    total_static: float
    total_dynamic: float
    overhead_ratio: float
    overhead: float

    @property
    def total_used(self):
        return self.total_static + self.total_dynamic

    @property
    def total_with_overhead(self):
        return self.total_used + self.overhead

    @property
    def remaining(self):
        return self.vram_gb - self.total_with_overhead

    @property
    def fits(self):
        return self.remaining >= 0

    @property
    def deficit(self):
        return max(0, -self.remaining)

    @property
    def utilization_percent(self):
        if self.vram_gb == 0:
            return 0
        return self.total_with_overhead / self.vram_gb * 100


def check_capacity(models, hardware, overhead_ratio=None):
    """
    Check whether the enabled models fit in the hardware's VRAM.

    Args:
        models: Caller-owned sequence of ModelConfig records
        hardware: HardwareProfile to plan against
        overhead_ratio: Safety margin on top of weights + KV budgets
            (defaults to config.OVERHEAD_RATIO)

    Returns:
        CapacityCheck with every intermediate total
    """
    if overhead_ratio is None:
        overhead_ratio = config.OVERHEAD_RATIO

    # Weights are static; KV budgets are reserved for dynamic cache growth
    active = enabled_models(models)
    total_static = sum(weights_footprint_gb(model) for model in active)
    total_dynamic = sum(model.kv_budget_gb for model in active)

    overhead = (total_static + total_dynamic) * overhead_ratio

    return CapacityCheck(
        vram_gb=hardware.vram_gb,
        total_static=total_static,
        total_dynamic=total_dynamic,
        overhead_ratio=overhead_ratio,
        overhead=overhead
    )


def _percent_of(value, capacity):
    return value / capacity * 100 if capacity > 0 else 0


def vram_breakdown(models, hardware, overhead_ratio=None):
    """
    Build the proportional VRAM slices for the enabled models.

    Each enabled model contributes a weights slice and a KV cache slice (when
    non-zero), followed by the overhead slice and, if any VRAM is left, an
    "Available" slice.
    """
    capacity = check_capacity(models, hardware, overhead_ratio)
    slices = []

    for model in enabled_models(models):
        weights = weights_footprint_gb(model)
        if weights > 0:
            slices.append({
                "label": f"{model.name} (Weights)",
                "model": model.name,
                "kind": "weights",
                "value_gb": weights,
                "percent": _percent_of(weights, hardware.vram_gb)
            })

        if model.kv_budget_gb > 0:
            slices.append({
                "label": f"{model.name} (KV Cache)",
                "model": model.name,
                "kind": "kv_cache",
                "value_gb": model.kv_budget_gb,
                "percent": _percent_of(model.kv_budget_gb, hardware.vram_gb)
            })

    slices.append({
        "label": f"Overhead ({capacity.overhead_ratio * 100:g}%)",
        "model": None,
        "kind": "overhead",
        "value_gb": capacity.overhead,
        "percent": _percent_of(capacity.overhead, hardware.vram_gb)
    })

    if capacity.remaining > 0:
        slices.append({
            "label": "Available",
            "model": None,
            "kind": "available",
            "value_gb": capacity.remaining,
            "percent": _percent_of(capacity.remaining, hardware.vram_gb)
        })

    return slices


def bandwidth_breakdown(models, hardware):
    """Build the proportional bandwidth slices for the enabled models."""
    slices = []
    total_used = 0

    for model in enabled_models(models):
        demand = bandwidth_demand_gbs(model)
        if demand > 0:
            slices.append({
                "label": model.name,
                "model": model.name,
                "kind": "bandwidth",
                "value_gbs": demand,
                "percent": _percent_of(demand, hardware.bandwidth_gbs)
            })
            total_used += demand

    remaining = max(0, hardware.bandwidth_gbs - total_used)
    if remaining > 0:
        slices.append({
            "label": "Available",
            "model": None,
            "kind": "available",
            "value_gbs": remaining,
            "percent": _percent_of(remaining, hardware.bandwidth_gbs)
        })

    return slices
