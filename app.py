import os
from pathlib import Path

import pandas as pd
import streamlit as st

from network_auditor.auditor import FilterCriteria, OrderBy
from network_auditor.config import DEFAULT_CONFIG_PATH, load_config
from network_auditor.errors import NetworkAuditorError
from network_auditor.logging import configure_logging
from network_auditor.network import Network
from network_auditor.report import ReportKind, generate_report

# --- CONFIGURATION ---

config_path = Path(os.getenv("NETWORK_AUDITOR_CONFIG", DEFAULT_CONFIG_PATH))
cfg = load_config(config_path)
configure_logging(cfg.log_level)


def get_network():
    if "network" not in st.session_state:
        st.session_state.network = Network(cfg.sites_path, timeout=cfg.request_timeout)
    return st.session_state.network


@st.cache_data(ttl=600)
def run_report(kind_value, order_by, min_sites, max_sites, site_id):
    # Keyed on the filter values only.
    criteria = FilterCriteria.from_options(order_by, min_sites, max_sites, site_id)
    report = generate_report(get_network(), ReportKind(kind_value), criteria)
    return report.columns, report.records(), report.empty_message


st.set_page_config(page_title="Network Auditor", layout="wide")
network = get_network()

st.sidebar.header("Add network site")
with st.sidebar.form("add-site", clear_on_submit=True):
    url = st.text_input("Site URL", placeholder="https://example.com")
    username = st.text_input("Username")
    password = st.text_input("Application password", type="password")
    if st.form_submit_button("Add"):
        if url and username and password:
            site = network.add_site(url, username, ''.join(password.split()))
            st.cache_data.clear()
            st.sidebar.success(f"Added site {site.id}: {site.url}")
        else:
            st.sidebar.error("All fields required")

if network.clients:
    st.sidebar.subheader("Registered sites")
    st.sidebar.dataframe(
        pd.DataFrame([{"ID": s.id, "URL": s.url} for s in network.list_sites()]),
        hide_index=True,
    )

st.title("Network Auditor")
kind = st.radio("Report", options=[k.value for k in ReportKind], horizontal=True)

with st.form("filters"):
    c1, c2, c3, c4 = st.columns(4)
    order_by = c1.selectbox("Order by", options=[o.value for o in OrderBy])
    # Blank or non-numeric input leaves the filter unset.
    min_sites = c2.text_input("Min active sites")
    max_sites = c3.text_input("Max active sites")
    site_id = c4.text_input("Site ID")
    submitted = st.form_submit_button("Run report")

if st.button("Refresh"):
    st.cache_data.clear()

if submitted:
    try:
        with st.spinner(f"Auditing {len(network.clients)} sites..."):
            columns, records, empty_message = run_report(kind, order_by, min_sites, max_sites, site_id)
    except NetworkAuditorError as e:
        st.error(str(e))
    else:
        if records:
            st.dataframe(pd.DataFrame(records, columns=columns), use_container_width=True, hide_index=True)
        else:
            st.info(empty_message)
