"""RPG Campaign Manager - Streamlit entry point.

Run with::

    streamlit run src/campaign_manager/ui/app.py

The page owns one CombatSession in ``st.session_state``; it lives as long
as the browser session and is never persisted.
"""

from __future__ import annotations

import streamlit as st

from campaign_manager.core.config import get_settings
from campaign_manager.core.logging import bind_context, configure_logging, get_logger
from campaign_manager.engine.combat_session import CombatSession
from campaign_manager.engine.randomizer import RandomTableService
from campaign_manager.storage.database import get_database
from campaign_manager.storage.seed import seed_characters
from campaign_manager.ui.components import (
    CharacterManagerPanel,
    CombatTracker,
    D20RollerPanel,
    RandomTablePanel,
    ResourceCatalogPanel,
)


settings = get_settings()
configure_logging(level=settings.log_level, json_format=settings.json_logs)
logger = get_logger(__name__)

st.set_page_config(
    page_title=settings.ui.page_title,
    page_icon="⚔️",
    layout=settings.ui.layout,
    initial_sidebar_state="expanded",
)


def get_combat_session() -> CombatSession:
    """Get the browser session's combat session, creating it on first use."""
    if "combat_session" not in st.session_state:
        st.session_state.combat_session = CombatSession()
    session = st.session_state.combat_session
    bind_context(combat_session=str(session.id))
    return session


def main() -> None:
    """Render the application."""
    db = get_database()
    session = get_combat_session()

    with st.sidebar:
        st.title(settings.app_name)
        character_count = db.get_character_count()
        st.metric("Characters", character_count)
        if character_count == 0:
            if st.button("Seed demo characters", use_container_width=True):
                seed_characters(db)
                st.rerun()
        elif st.button("Reset to demo characters", use_container_width=True):
            seed_characters(db, replace=True)
            st.rerun()

    tab_combat, tab_characters, tab_resources, tab_tables, tab_dice = st.tabs(
        ["Combat", "Characters", "Resources", "Random Tables", "D20"]
    )

    with tab_combat:
        CombatTracker(session, db.get_all_characters()).render()

    with tab_characters:
        CharacterManagerPanel(db).render()

    with tab_resources:
        ResourceCatalogPanel(db).render()

    with tab_tables:
        service = RandomTableService.from_settings(db, settings.randomizer)
        RandomTablePanel(service, db).render()

    with tab_dice:
        D20RollerPanel().render()


main()
