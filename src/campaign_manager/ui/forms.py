"""Form value conversion for the Streamlit editors.

Widgets hand back plain values; these helpers turn them into validated
models and report failures as ValidationError so panels can show them
with ``st.error``. Kept free of Streamlit so they can be tested directly.
"""

from __future__ import annotations

from typing import Any

import pydantic

from campaign_manager.core.exceptions import ValidationError
from campaign_manager.models.character import (
    Character,
    CharacterAttributes,
    CharacterStatus,
)
from campaign_manager.models.resources import ResourceQualityDrawback, ResourceSkill


ATTRIBUTE_FIELDS = (
    "strength",
    "intelligence",
    "dexterity",
    "perception",
    "constitution",
    "will_power",
)

STATUS_FIELDS = ("life", "endurance", "speed", "max_load")


def _optional_int(value: Any) -> int | None:
    # number_input returns None for a cleared field; 0 means "not recorded"
    if value in (None, 0, ""):
        return None
    return int(value)


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _first_error(exc: pydantic.ValidationError) -> tuple[str, str]:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "form"
    return field, error["msg"]


def _build(model: type[pydantic.BaseModel], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        field, message = _first_error(exc)
        raise ValidationError(f"{field}: {message}", field_name=field) from exc


def character_from_form(
    values: dict[str, Any],
    *,
    existing: Character | None = None,
) -> Character:
    """Build a character from editor values.

    Args:
        values: Widget values keyed by field name (``name``, ``category``,
            ``age``/``weight``/``height``, attribute and status fields).
        existing: The character being edited. Its id, creation time,
            skills and traits are kept.

    Returns:
        The validated character.

    Raises:
        ValidationError: If a value is missing or out of range.
    """
    data: dict[str, Any] = {
        "name": (values.get("name") or "").strip(),
        "category": values.get("category"),
        "age": _optional_int(values.get("age")),
        "weight": _optional_int(values.get("weight")),
        "height": _optional_int(values.get("height")),
        "attributes": {f: int(values.get(f) or 0) for f in ATTRIBUTE_FIELDS},
        "status": {f: int(values.get(f) or 0) for f in STATUS_FIELDS},
    }
    if existing is not None:
        data.update(
            id=existing.id,
            created_at=existing.created_at,
            skills=existing.skills,
            traits=existing.traits,
        )
    return _build(Character, data)


def character_form_defaults(character: Character | None) -> dict[str, Any]:
    """Initial editor values, blank for a new character."""
    if character is None:
        return {"name": "", "category": None, "age": 0, "weight": 0, "height": 0}
    attributes = character.attributes or CharacterAttributes()
    status = character.status or CharacterStatus()
    return {
        "name": character.name,
        "category": character.category,
        "age": character.age or 0,
        "weight": character.weight or 0,
        "height": character.height or 0,
        **attributes.model_dump(),
        **status.model_dump(),
    }


def skill_from_form(values: dict[str, Any]) -> ResourceSkill:
    """Build a catalog skill from editor values.

    Raises:
        ValidationError: If the name is blank or the page is invalid.
    """
    return _build(
        ResourceSkill,
        {
            "name": (values.get("name") or "").strip(),
            "description": _optional_text(values.get("description")),
            "type": values.get("type") or "REGULAR",
            "page": _optional_int(values.get("page")),
        },
    )


def quality_from_form(values: dict[str, Any]) -> ResourceQualityDrawback:
    """Build a catalog quality or drawback from editor values.

    Raises:
        ValidationError: If the name or cost is missing or the page is invalid.
    """
    if values.get("cost") is None:
        raise ValidationError("cost: Field required", field_name="cost")
    return _build(
        ResourceQualityDrawback,
        {
            "name": (values.get("name") or "").strip(),
            "description": _optional_text(values.get("description")),
            "cost": values["cost"],
            "page": _optional_int(values.get("page")),
        },
    )


__all__ = [
    "ATTRIBUTE_FIELDS",
    "STATUS_FIELDS",
    "character_from_form",
    "character_form_defaults",
    "skill_from_form",
    "quality_from_form",
]
