import os

# Safety margin on top of weights + KV budgets for runtime memory that is not
# tracked per model
DEFAULT_OVERHEAD_RATIO = 0.2

# Quality multipliers applied to FP16 benchmark scores when no measurement
# exists for the selected weight precision (keyed by bytes per param)
QUANT_DEGRADATION = {
    4: 1.0,      # FP32
    2: 1.0,      # FP16/BF16, benchmark reference point
    1: 0.99,     # INT8/FP8
    0.5: 0.97    # INT4
}


def _read_ratio(name, default):
    """Read a non-negative float override from the environment."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


OVERHEAD_RATIO = _read_ratio("PLANNER_OVERHEAD_RATIO", DEFAULT_OVERHEAD_RATIO)
DEFAULT_HARDWARE_ID = os.environ.get("PLANNER_DEFAULT_HARDWARE", "rtx-pro-6000-blackwell")
LOG_LEVEL = os.environ.get("PLANNER_LOG_LEVEL", "INFO").upper()
