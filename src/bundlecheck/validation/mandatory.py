"""Generic mandatory-field walker over the document models.

The walker knows nothing about concrete fields. It reads the per-field
requirement metadata declared on each model class and inspects the runtime
shape of each value (record, text, sequence, mapping, optional reference).
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import BaseModel


@dataclass(frozen=True)
class FieldRequirement:
    """Requirement metadata of a single model field."""
    name: str
    json_name: str
    optional: bool

    @property
    def required(self) -> bool:
        return not self.optional


@lru_cache(maxsize=None)
def describe_fields(model_cls: type[BaseModel]) -> tuple[FieldRequirement, ...]:
    """Build the requirement table of a model class, in declaration order.

    A field is optional when its ``json_schema_extra`` carries ``optional: True``;
    everything else is required.
    """
    requirements = []
    for name, info in model_cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        requirements.append(FieldRequirement(
            name=name,
            json_name=info.alias or name,
            optional=bool(extra.get("optional", False)),
        ))
    return tuple(requirements)


def check_mandatory(obj: Any) -> list[str]:
    """Report every required field that is missing, at any depth.

    Nested records are walked instead of presence-checked, and errors are named
    after the record that owns the field. Non-model values yield no errors.
    """
    if not isinstance(obj, BaseModel):
        return []

    errors: list[str] = []
    owner = type(obj).__name__

    for requirement in describe_fields(type(obj)):
        value = getattr(obj, requirement.name)
        if isinstance(value, BaseModel):
            errors.extend(check_mandatory(value))
        else:
            errors.extend(_check_unit(value, requirement, owner))

    return errors


def _check_unit(value: Any, requirement: FieldRequirement, owner: str) -> list[str]:
    missing = f"'{owner}.{requirement.json_name}' should not be empty."

    if value is None:
        return [missing] if requirement.required else []

    if isinstance(value, str):
        return [missing] if requirement.required and not value else []

    if isinstance(value, (list, tuple)):
        if requirement.required and not value:
            return [missing]
        errors = []
        for item in value:
            errors.extend(check_mandatory(item))
        return errors

    if isinstance(value, dict):
        if requirement.required and not value:
            return [missing]
        errors = []
        for item in value.values():
            errors.extend(check_mandatory(item))
        return errors

    # Numbers and booleans are never considered missing
    return []
