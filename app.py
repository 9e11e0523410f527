"""
Tangent Portfolio Analysis - Streamlit Application.

This is the main entry point for the tangent portfolio analysis page.
It provides a user-friendly interface for:
    - Selecting assets and date ranges, or uploading a CSV of prices
    - Normalizing prices and computing returns
    - Sampling the efficient frontier
    - Selecting the maximum Sharpe Ratio portfolio

Run with: streamlit run app.py
"""

from datetime import datetime, timedelta
from typing import Dict

import streamlit as st

from config import (
    DEFAULT_TICKERS,
    RISK_FREE_RATE,
    NUM_FRONTIER_POINTS,
)
from tangency.data_loader import FinancialDataLoader
from tangency.exceptions import FrontierError
from tangency.optimizer import FrontierBuilder
from tangency.selector import TangentPortfolio, select_tangent_portfolio

st.set_page_config(
    page_title="Tangent Portfolio",
    layout="wide",
    initial_sidebar_state="expanded"
)


def initialize_session_state() -> None:
    """Initialize session state variables."""
    if "analysis_run" not in st.session_state:
        st.session_state.analysis_run = False


def render_sidebar() -> Dict:
    """
    Render the sidebar with input controls.

    Returns:
        Dictionary of user inputs.
    """
    st.sidebar.markdown("## Configuration")

    st.sidebar.markdown("### Price Data")
    uploaded_csv = st.sidebar.file_uploader(
        "Upload prices (CSV)",
        type=["csv"],
        help="A Date column plus one price column per ticker. "
             "Leave empty to download from Yahoo Finance."
    )

    tickers = st.sidebar.multiselect(
        "Select Tickers",
        options=sorted(DEFAULT_TICKERS),
        default=DEFAULT_TICKERS,
        help="Ignored when a CSV is uploaded"
    )

    end_date = st.sidebar.date_input(
        "End Date",
        value=datetime.now(),
        max_value=datetime.now()
    )
    start_date = st.sidebar.date_input(
        "Start Date",
        value=datetime.now() - timedelta(days=5 * 365),
        max_value=end_date
    )

    st.sidebar.markdown("### Frontier")

    use_market_rate = st.sidebar.checkbox(
        "Derive risk-free rate from T-bill yield",
        value=False
    )
    risk_free_rate = st.sidebar.number_input(
        "Daily Risk-Free Rate",
        min_value=0.0,
        max_value=0.01,
        value=RISK_FREE_RATE,
        step=0.00001,
        format="%.5f",
        disabled=use_market_rate
    )
    n_points = st.sidebar.slider(
        "Frontier Points",
        min_value=5,
        max_value=100,
        value=NUM_FRONTIER_POINTS,
        step=1
    )

    st.sidebar.markdown("---")
    run_analysis = st.sidebar.button(
        "Run Analysis",
        type="primary",
        use_container_width=True
    )

    return {
        "csv": uploaded_csv,
        "tickers": tickers,
        "start_date": datetime.combine(start_date, datetime.min.time()),
        "end_date": datetime.combine(end_date, datetime.min.time()),
        "use_market_rate": use_market_rate,
        "risk_free_rate": risk_free_rate,
        "n_points": n_points,
        "run_analysis": run_analysis
    }


def render_tangent_portfolio(tangent: TangentPortfolio) -> None:
    """Render the selected portfolio's metrics and weights."""
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Sharpe Ratio", f"{tangent.sharpe_ratio:.4f}")
    with col2:
        st.metric("Mean Return", f"{tangent.mean_return*100:.4f}%")
    with col3:
        st.metric("Std Dev", f"{tangent.std_dev*100:.4f}%")
    with col4:
        st.metric("Risk-Free Rate", f"{tangent.risk_free_rate*100:.4f}%")

    st.markdown("### Tangent Portfolio Weights")
    weights_df = tangent.weights_frame()
    weights_df["Weight"] = weights_df["Weight"].apply(lambda x: f"{x*100:.2f}%")
    st.dataframe(weights_df, hide_index=True, use_container_width=True)


def main() -> None:
    """Main application function."""
    initialize_session_state()

    st.title("Tangent Portfolio Analysis")
    st.caption("Efficient Frontier | Maximum Sharpe Ratio Selection")

    inputs = render_sidebar()

    if inputs["run_analysis"]:
        with st.spinner("Loading prices and sampling the efficient frontier..."):
            try:
                loader = FinancialDataLoader(
                    tickers=inputs["tickers"],
                    start_date=inputs["start_date"],
                    end_date=inputs["end_date"]
                )
                if inputs["csv"] is not None:
                    loader.load_csv(inputs["csv"])
                else:
                    if len(inputs["tickers"]) < 2:
                        st.warning("Please select at least 2 tickers.")
                        return
                    loader.download_data()

                risk_free_rate = (
                    loader.download_risk_free_rate()
                    if inputs["use_market_rate"]
                    else inputs["risk_free_rate"]
                )

                builder = FrontierBuilder(loader.returns)
                frontier = builder.build_frontier(inputs["n_points"])
                tangent = select_tangent_portfolio(frontier, risk_free_rate)

                st.session_state.loader = loader
                st.session_state.frontier = frontier
                st.session_state.tangent = tangent
                st.session_state.analysis_run = True

                if loader.failed_tickers:
                    st.warning(f"Some tickers failed to load: {loader.failed_tickers}")

            except FrontierError as e:
                st.error(f"Could not select a tangent portfolio: {str(e)}")
                return
            except Exception as e:
                st.error(f"Error during analysis: {str(e)}")
                return

    if st.session_state.analysis_run:
        loader = st.session_state.loader
        tangent = st.session_state.tangent

        render_tangent_portfolio(tangent)
        st.markdown("---")

        tab1, tab2, tab3 = st.tabs(["Frontier", "Prices", "Assets"])

        with tab1:
            st.markdown("### Efficient Frontier")
            frontier_df = st.session_state.frontier.to_frame()
            frontier_df.insert(0, "Tangent", frontier_df.index == tangent.index)
            st.dataframe(frontier_df, use_container_width=True)

        with tab2:
            st.markdown("### Normalized Prices")
            st.dataframe(loader.normalized_prices, use_container_width=True)

            st.markdown("### Returns")
            st.dataframe(loader.returns, use_container_width=True)

        with tab3:
            st.markdown("### Individual Asset Statistics")
            stats = loader.get_summary_statistics(tangent.risk_free_rate)
            st.dataframe(
                stats.sort_values(by="Sharpe Ratio", ascending=False),
                use_container_width=True
            )

    else:
        st.info(
            "Configure the analysis in the sidebar and click "
            "'Run Analysis' to begin."
        )


if __name__ == "__main__":
    main()
