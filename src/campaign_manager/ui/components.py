"""Reusable UI components for the Streamlit interface.

Each component renders one panel and forwards operator actions to the
engine objects it was given. Engine rejections are shown with
``st.error`` and never escape the panel; anything else is wrapped in
ComponentRenderError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import streamlit as st

from campaign_manager.core.constants import MAX_INITIATIVE_INPUT
from campaign_manager.core.exceptions import (
    CampaignManagerError,
    ComponentRenderError,
)
from campaign_manager.core.logging import get_logger
from campaign_manager.engine.dice import DiceRoller, RollType
from campaign_manager.engine.randomizer import decode_csv_upload
from campaign_manager.models.enums import CharacterCategory, CombatPhase, SkillType
from campaign_manager.ui.forms import (
    ATTRIBUTE_FIELDS,
    STATUS_FIELDS,
    character_form_defaults,
    character_from_form,
    quality_from_form,
    skill_from_form,
)


if TYPE_CHECKING:
    from campaign_manager.engine.combat_session import CombatSession
    from campaign_manager.engine.randomizer import RandomTableService
    from campaign_manager.models.character import Character
    from campaign_manager.storage.database import Database

logger = get_logger(__name__)


CATEGORY_BADGES: dict[CharacterCategory, str] = {
    CharacterCategory.PLAYER: "🔵",
    CharacterCategory.NPC: "🟢",
    CharacterCategory.ALLY: "🟣",
    CharacterCategory.MONSTER: "🔴",
    CharacterCategory.ZOMBIE: "🔴",
}


def _badge(category: CharacterCategory) -> str:
    return CATEGORY_BADGES.get(category, "⚪")


class BaseComponent(ABC):
    """Abstract base class for UI components."""

    name: str = "component"

    def render(self) -> None:
        """Render the component.

        Raises:
            ComponentRenderError: If rendering fails.
        """
        try:
            self._render()
        except CampaignManagerError as exc:
            logger.warning("Action rejected", component=self.name, error=exc.message)
            st.error(exc.message)
        except Exception as exc:
            raise ComponentRenderError(f"Failed to render {self.name}: {exc}") from exc

    @abstractmethod
    def _render(self) -> None:
        raise NotImplementedError("Subclasses must implement _render")


class CombatSetupPanel(BaseComponent):
    """Pick characters for the roster."""

    name = "combat setup"

    def __init__(self, session: CombatSession, characters: list[Character]) -> None:
        self.session = session
        self.characters = characters

    def _render(self) -> None:
        st.subheader("⚔️ Combat Setup")
        st.caption("Add characters to combat (the same character can be added several times)")

        col_available, col_roster = st.columns([1, 2])

        with col_available:
            st.markdown("**Available Characters**")
            if not self.characters:
                st.info("No characters yet. Seed the demo roster from the sidebar.")
            for character in self.characters:
                label = f"{_badge(character.category)} {character.name} ({character.life} HP)"
                if st.button(label, key=f"add_{character.id}", use_container_width=True):
                    self.session.add_combatant(character)
                    st.rerun()

        with col_roster:
            roster = self.session.roster
            st.markdown(f"**Combat Roster ({len(roster)})**")
            for combatant in roster:
                col_name, col_remove = st.columns([4, 1])
                with col_name:
                    st.write(f"{_badge(combatant.character.category)} {combatant.name}")
                with col_remove:
                    if st.button("✖", key=f"remove_{combatant.instance_id}"):
                        self.session.remove_combatant(combatant.instance_id)
                        st.rerun()

            if roster:
                if st.button(
                    f"Set Initiative ({len(roster)} combatants)",
                    type="primary",
                    use_container_width=True,
                    disabled=len(roster) < 2,
                ):
                    self.session.proceed_to_initiative()
                    st.rerun()
                if len(roster) < 2:
                    st.caption("Add at least 2 combatants to continue")


class InitiativePanel(BaseComponent):
    """Enter one initiative value per combatant."""

    name = "initiative"

    def __init__(self, session: CombatSession) -> None:
        self.session = session

    def _render(self) -> None:
        st.subheader("🎲 Set Initiative")
        st.caption("Enter the initiative value for each combatant. Higher values go first.")

        for combatant in self.session.roster:
            col_name, col_value = st.columns([3, 1])
            with col_name:
                st.write(f"{_badge(combatant.character.category)} **{combatant.name}**")
            with col_value:
                value = st.number_input(
                    f"Initiative for {combatant.name}",
                    min_value=0,
                    max_value=MAX_INITIATIVE_INPUT,
                    value=combatant.initiative,
                    step=1,
                    label_visibility="collapsed",
                    key=f"init_{combatant.instance_id}",
                )
                if value is not None and value != combatant.initiative:
                    self.session.set_initiative(combatant.instance_id, int(value))

        col_back, col_continue = st.columns(2)
        with col_back:
            if st.button("← Back to Roster", use_container_width=True):
                self.session.back_to_setup()
                st.rerun()
        with col_continue:
            ready = self.session.all_initiative_set()
            if st.button(
                "Continue to Combat →",
                type="primary",
                use_container_width=True,
                disabled=not ready,
            ):
                self.session.start_combat()
                st.rerun()
            if not ready:
                st.caption("Set initiative for all combatants to continue")


class CombatArenaPanel(BaseComponent):
    """Turn order, HP tracking and turn controls."""

    name = "combat arena"

    def __init__(self, session: CombatSession) -> None:
        self.session = session

    def _render(self) -> None:
        snapshot = self.session.snapshot()

        col_title, col_reset = st.columns([4, 1])
        with col_title:
            st.subheader(f"🛡️ Combat Arena, Round {snapshot.round_number}")
        with col_reset:
            if st.button("Reset Combat", use_container_width=True):
                self.session.reset()
                st.rerun()

        for position, view in enumerate(snapshot.ordered_roster, start=1):
            is_current = view.instance_id == snapshot.current_instance_id
            col_marker, col_name, col_hp, col_amount, col_actions = st.columns([1, 4, 3, 2, 2])

            with col_marker:
                st.markdown("**▶️**" if is_current else f"{position}.")
            with col_name:
                name = f"**{view.name}**" if is_current else view.name
                suffix = " 💀" if view.is_down else ""
                st.markdown(f"{_badge(view.category)} {name} (Init {view.initiative}){suffix}")
            with col_hp:
                if view.max_hp > 0:
                    st.progress(min(view.current_hp / view.max_hp, 1.0))
                st.caption(f"{view.current_hp}/{view.max_hp} HP")
            with col_amount:
                amount = st.number_input(
                    f"Amount for {view.name}",
                    min_value=0,
                    value=0,
                    step=1,
                    label_visibility="collapsed",
                    key=f"amount_{view.instance_id}",
                )
            with col_actions:
                if st.button("Damage", key=f"damage_{view.instance_id}"):
                    self.session.apply_damage(view.instance_id, int(amount))
                    st.rerun()
                if st.button("Heal", key=f"heal_{view.instance_id}"):
                    self.session.apply_heal(view.instance_id, int(amount))
                    st.rerun()

        st.divider()
        if st.button("⏭️ Next Turn", type="primary", use_container_width=True):
            self.session.advance()
            st.rerun()


class CombatTracker(BaseComponent):
    """Render whichever combat panel matches the session phase."""

    name = "combat tracker"

    def __init__(self, session: CombatSession, characters: list[Character]) -> None:
        self.session = session
        self.characters = characters

    def _render(self) -> None:
        if self.session.phase == CombatPhase.SETUP:
            CombatSetupPanel(self.session, self.characters).render()
        elif self.session.phase == CombatPhase.INITIATIVE:
            InitiativePanel(self.session).render()
        else:
            CombatArenaPanel(self.session).render()


class RandomTablePanel(BaseComponent):
    """CSV import, rolling and roll history."""

    name = "random tables"

    def __init__(self, service: RandomTableService, database: Database) -> None:
        self.service = service
        self.database = database

    def _render(self) -> None:
        st.subheader("📜 Random Tables")

        with st.expander("Import categories from CSV"):
            st.code("Treasure,Trap,Encounter\nGold Ring,Spikes,Goblin\nHealing Potion,Pit,Orc")
            upload = st.file_uploader("CSV file", type=["csv"])
            if upload is not None and st.button("Import"):
                result = self.service.import_csv(decode_csv_upload(upload.getvalue()))
                st.success(result.message)
                for error in result.errors:
                    st.warning(error)

        categories = self.database.get_all_categories()
        if not categories:
            st.info("No categories yet. Import a CSV to get started.")
            return

        by_name = {c.name: c for c in categories}
        chosen = st.selectbox("Category", options=list(by_name))
        category = by_name[chosen]

        if st.button("🎲 Roll", type="primary"):
            record = self.service.roll(category.id)
            st.markdown(f"### {record.item_name}")
            if record.item_description:
                st.caption(record.item_description)

        history = self.service.history(category.id)
        if history:
            st.divider()
            st.caption("Recent Rolls")
            for entry in history:
                st.text(f"{entry.rolled_at:%H:%M:%S}  {entry.item_name}")
            if st.button("Clear history"):
                self.service.clear_history(category.id)
                st.rerun()


class D20RollerPanel(BaseComponent):
    """Roll a d20 with a modifier."""

    name = "d20 roller"

    def __init__(self, *, history_limit: int = 10) -> None:
        self.history_limit = history_limit

    def _render(self) -> None:
        st.subheader("🎲 D20 Roller")

        col_mod, col_type = st.columns(2)
        with col_mod:
            modifier = st.number_input("Modifier", value=0, step=1)
        with col_type:
            roll_type = st.selectbox("Roll Type", options=[t.value for t in RollType])

        if st.button("Roll d20", type="primary", use_container_width=True):
            result = DiceRoller().roll_d20(int(modifier), roll_type=RollType(roll_type))
            st.markdown(f"### Result: **{result.total}**")
            st.caption(f"Dice: {result.dice} | Modifier: {result.modifier:+d}")
            if result.is_critical:
                st.success("Natural 20!")
            elif result.is_fumble:
                st.error("Natural 1!")

            history = st.session_state.setdefault("d20_history", [])
            history.insert(0, result.total)
            del history[self.history_limit:]

        if st.session_state.get("d20_history"):
            st.caption("Recent: " + ", ".join(str(t) for t in st.session_state.d20_history))


class CharacterManagerPanel(BaseComponent):
    """List, create, edit and delete stored characters."""

    name = "character manager"

    def __init__(self, database: Database) -> None:
        self.database = database

    def _render(self) -> None:
        st.subheader("🧙 Characters")

        characters = self.database.get_all_characters()
        editing_id = st.session_state.get("editing_character_id")
        editing = next((c for c in characters if str(c.id) == editing_id), None)

        col_list, col_form = st.columns([1, 2])

        with col_list:
            if st.button("➕ New Character", use_container_width=True):
                st.session_state.editing_character_id = None
                st.rerun()
            if not characters:
                st.info("No characters yet.")
            for character in characters:
                col_name, col_edit, col_delete = st.columns([4, 1, 1])
                with col_name:
                    st.write(f"{_badge(character.category)} {character.name}")
                    st.caption(f"{character.category.value} · {character.life} HP")
                with col_edit:
                    if st.button("✏️", key=f"edit_{character.id}"):
                        st.session_state.editing_character_id = str(character.id)
                        st.rerun()
                with col_delete:
                    if st.button("🗑️", key=f"delete_{character.id}"):
                        self.database.delete_character(character.id)
                        if editing_id == str(character.id):
                            st.session_state.editing_character_id = None
                        st.rerun()

        with col_form:
            self._render_form(editing)

    def _render_form(self, editing: Character | None) -> None:
        defaults = character_form_defaults(editing)
        title = f"Edit {editing.name}" if editing else "Create New Character"
        form_key = f"character_form_{editing.id if editing else 'new'}"

        with st.form(form_key):
            st.markdown(f"**{title}**")
            values: dict = {}
            values["name"] = st.text_input("Name *", value=defaults["name"])
            categories = list(CharacterCategory)
            values["category"] = st.selectbox(
                "Category *",
                options=categories,
                index=categories.index(defaults["category"]) if defaults["category"] else 0,
                format_func=lambda c: c.value.title(),
            )

            col_age, col_weight, col_height = st.columns(3)
            values["age"] = col_age.number_input("Age", min_value=0, value=defaults["age"])
            values["weight"] = col_weight.number_input(
                "Weight (kg)", min_value=0, value=defaults["weight"]
            )
            values["height"] = col_height.number_input(
                "Height (cm)", min_value=0, value=defaults["height"]
            )

            st.markdown("**Attributes**")
            columns = st.columns(3)
            for i, field in enumerate(ATTRIBUTE_FIELDS):
                values[field] = columns[i % 3].number_input(
                    field.replace("_", " ").title(),
                    min_value=0,
                    value=defaults.get(field, 0),
                )

            st.markdown("**Status**")
            columns = st.columns(4)
            for i, field in enumerate(STATUS_FIELDS):
                values[field] = columns[i].number_input(
                    field.replace("_", " ").title(),
                    min_value=0,
                    value=defaults.get(field, 0),
                )

            submitted = st.form_submit_button(
                "Update Character" if editing else "Create Character",
                type="primary",
            )

        if submitted:
            character = self.database.save_character(
                character_from_form(values, existing=editing)
            )
            st.session_state.editing_character_id = None
            logger.info("Character saved", character_id=str(character.id))
            st.rerun()


class ResourceCatalogPanel(BaseComponent):
    """Catalog of rulebook skills and qualities/drawbacks."""

    name = "resource catalog"

    def __init__(self, database: Database) -> None:
        self.database = database

    def _render(self) -> None:
        st.subheader("📚 Resources")
        tab_skills, tab_qualities = st.tabs(["Skills", "Qualities & Drawbacks"])
        with tab_skills:
            self._render_skills()
        with tab_qualities:
            self._render_qualities()

    def _render_skills(self) -> None:
        with st.form("resource_skill_form", clear_on_submit=True):
            values: dict = {}
            values["name"] = st.text_input("Name *")
            values["description"] = st.text_area("Description")
            col_type, col_page = st.columns(2)
            values["type"] = col_type.selectbox("Type", options=[t.value for t in SkillType])
            values["page"] = col_page.number_input("Page", min_value=0, value=0)
            if st.form_submit_button("Add Skill"):
                skill = self.database.save_resource_skill(skill_from_form(values))
                st.success(f"Added {skill.name}")

        for skill in self.database.get_all_resource_skills():
            col_info, col_delete = st.columns([6, 1])
            with col_info:
                page = f" · p. {skill.page}" if skill.page else ""
                st.markdown(f"**{skill.name}** `{skill.type.value}`{page}")
                if skill.description:
                    st.caption(skill.description)
            with col_delete:
                if st.button("🗑️", key=f"delete_skill_{skill.id}"):
                    self.database.delete_resource_skill(skill.id)
                    st.rerun()

    def _render_qualities(self) -> None:
        with st.form("resource_quality_form", clear_on_submit=True):
            values: dict = {}
            values["name"] = st.text_input("Name *")
            values["description"] = st.text_area("Description")
            col_cost, col_page = st.columns(2)
            values["cost"] = col_cost.number_input("Cost *", value=None, step=1)
            values["page"] = col_page.number_input("Page", min_value=0, value=0)
            st.caption("Negative cost for drawbacks")
            if st.form_submit_button("Add Quality/Drawback"):
                entry = self.database.save_resource_quality(quality_from_form(values))
                st.success(f"Added {entry.name}")

        for entry in self.database.get_all_resource_qualities():
            col_info, col_delete = st.columns([6, 1])
            with col_info:
                kind = "Drawback" if entry.is_drawback else "Quality"
                page = f" · p. {entry.page}" if entry.page else ""
                st.markdown(f"**{entry.name}** {kind} ({entry.cost:+d}){page}")
                if entry.description:
                    st.caption(entry.description)
            with col_delete:
                if st.button("🗑️", key=f"delete_quality_{entry.id}"):
                    self.database.delete_resource_quality(entry.id)
                    st.rerun()


__all__ = [
    "BaseComponent",
    "CombatSetupPanel",
    "InitiativePanel",
    "CombatArenaPanel",
    "CombatTracker",
    "RandomTablePanel",
    "D20RollerPanel",
    "CharacterManagerPanel",
    "ResourceCatalogPanel",
]
