"""
Streamlit page showing monthly COVID-19 cases and deaths.

Usage:
    streamlit run app.py
"""
import logging

import streamlit as st

from src.dashboard.charts import monthly_bar_chart
from src.dashboard.state import DashboardController, Error, Idle, Ready

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('dashboard.log')
    ]
)

logger = logging.getLogger(__name__)

SUMMARY = (
    "The bar chart provides a visual representation of the COVID-19 impact, "
    "illustrating both the number of **confirmed cases** and the number of **deaths**. "
    "It highlights the significant disparity between the two metrics, showcasing the "
    "**widespread** prevalence of the virus while also emphasizing the severe outcomes "
    "in terms of mortality. This comparison underscores the **critical** importance of "
    "public health measures and vaccinations in mitigating the pandemic's effects."
)
SOURCE_URL = "https://disease.sh/"


def get_controller() -> DashboardController:
    """One controller per browser session, so reruns don't refetch."""
    if "controller" not in st.session_state:
        st.session_state["controller"] = DashboardController()
    return st.session_state["controller"]


def render(controller: DashboardController):
    st.title("Covid 19")
    st.markdown(SUMMARY)
    st.markdown(f"Source: [{SOURCE_URL}]({SOURCE_URL})")

    state = controller.state
    if isinstance(state, Error):
        st.error(state.message)
    elif isinstance(state, Ready):
        st.plotly_chart(monthly_bar_chart(state.data), width="stretch")


def main():
    st.set_page_config(page_title="Covid 19", layout="wide")

    controller = get_controller()
    if isinstance(controller.state, Idle):
        with st.spinner("Loading Data..."):
            controller.load()

    render(controller)


main()
