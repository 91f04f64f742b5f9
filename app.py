import logging

import streamlit as st

# Import our custom modules
import ui
import calc
import catalog
import config
import info

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("planner")

# Set page config
st.set_page_config(page_title="AI Hardware Planner", layout="wide")

# Add title and description
st.title("AI Hardware Planner")
st.markdown("""
Plan which models fit on your inference hardware. Pick weight and KV cache precisions,
KV budgets and traffic targets per model to see VRAM and memory bandwidth utilization.
""")

# Generate the sidebar and get the planner settings
planner_config = ui.create_sidebar_inputs()
hardware = planner_config["hardware"]

# The model list is owned by this session and edited in place by the table widgets
if planner_config["reset"] or "models" not in st.session_state:
    ui.clear_model_widgets()
    st.session_state["models"] = catalog.load_models()
models = st.session_state["models"]

if st.session_state.get("last_hardware_id") != hardware.id:
    logger.info("Planning against %s (%s GB, %s GB/s)", hardware.name, hardware.vram_gb, hardware.bandwidth_gbs)
    st.session_state["last_hardware_id"] = hardware.id

ui.display_model_table(models)

capacity = calc.check_capacity(models, hardware, planner_config["overhead_ratio"])
if not capacity.fits:
    logger.debug("VRAM deficit of %.2f GB on %s", capacity.deficit, hardware.id)

# Capacity headline
col1, col2, col3 = st.columns(3)
col1.metric("VRAM Capacity", f"{hardware.vram_gb:g} GB")
col2.metric("Planned (with overhead)", f"{capacity.total_with_overhead:.2f} GB")
col3.metric(
    "Remaining" if capacity.fits else "Deficit",
    f"{abs(capacity.remaining):.2f} GB"
)

ui.display_capacity(models, hardware, capacity)
ui.display_benchmarks(models)

# Display reference information
st.markdown("---")
st.markdown(info.get_reference_information(capacity.overhead_ratio))
