"""Streamlit user interface for the RPG Campaign Manager.

Launch with ``streamlit run src/campaign_manager/ui/app.py``.
"""
