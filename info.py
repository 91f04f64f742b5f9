def get_reference_information(overhead_ratio):
    """Return reference information as a markdown string."""
    overhead_pct = f"{overhead_ratio * 100:g}%"
    return f"""
### How the Numbers Are Calculated:
- **Weights**: `params × bytes per param`. Mixture-of-experts models count *all* experts, since every expert must stay resident in VRAM even though only a few are active per token
- **KV per Token**: `layers × kv_heads × head_dim × 2 × kv_bytes` (the 2 covers keys and values)
- **Max Concurrent Requests**: `KV budget ÷ (KV per token × avg tokens per request)`, a continuous estimate of how many request contexts the budget holds
- **Bandwidth**: `weights × target tokens/sec`. Autoregressive decode reads every resident weight once per generated token
- **Overhead**: a fixed {overhead_pct} on top of weights and KV budgets (adjustable in the sidebar)

### Reading N/A:
- **KV/Token N/A**: the model keeps no KV cache (embedding, reranking and other encoder-only models)
- **Max Concurrent N/A**: no KV cache, or the average tokens per request is 0
- **Size N/A**: zero parameters or zero bytes per parameter

### Precision Labels:
- **INT4**: 0.5 bytes per value
- **INT8/FP8**: 1 byte per value
- **FP16/BF16**: 2 bytes per value, the reference point for benchmark scores
- **FP32**: 4 bytes per value, rarely used for inference

### Capacity Check:
- Only enabled models count toward VRAM and bandwidth
- When weights + KV budgets + overhead exceed the GPU's VRAM the charts are replaced by the shortfall in GB
- Bandwidth above 100% means the target tokens/sec cannot be sustained on this hardware

### References:
- These calculations are approximations and actual requirements may vary
- Some architecture numbers for the newest models are estimates from their model cards
- Hardware bandwidth and TFLOPS figures should be checked against `nvidia-smi` and vendor specs
"""
