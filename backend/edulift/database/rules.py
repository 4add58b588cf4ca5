"""
Declarative collection rules: $jsonSchema validators and index specs.

Rules are plain data. edulift.database.provisioner applies them to a
database; nothing here talks to MongoDB.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

# index_information() keys that same_options understands
_COMPARED_INDEX_FIELDS = {"key", "v", "ns", "unique", "sparse"}


class FieldRule(BaseModel):
    """
    One node of a $jsonSchema document.

    additional_properties is the open/closed-world switch for object nodes.
    When True (the default) unlisted fields are accepted and no
    additionalProperties keyword is emitted.
    """
    bson_type: str
    title: Optional[str] = None
    description: Optional[str] = None
    enum: Optional[list[str]] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None
    items: Optional["FieldRule"] = None
    required: list[str] = Field(default_factory=list)
    properties: dict[str, "FieldRule"] = Field(default_factory=dict)
    additional_properties: bool = True

    def to_json_schema(self) -> dict[str, Any]:
        """Render this node as a MongoDB $jsonSchema fragment."""
        schema: dict[str, Any] = {"bsonType": self.bson_type}
        if self.title is not None:
            schema["title"] = self.title
        if self.description is not None:
            schema["description"] = self.description
        if self.required:
            schema["required"] = list(self.required)
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.min_length is not None:
            schema["minLength"] = self.min_length
        if self.max_length is not None:
            schema["maxLength"] = self.max_length
        if self.min_items is not None:
            schema["minItems"] = self.min_items
        if self.unique_items is not None:
            schema["uniqueItems"] = self.unique_items
        if self.items is not None:
            schema["items"] = self.items.to_json_schema()
        if self.properties:
            schema["properties"] = {
                name: rule.to_json_schema() for name, rule in self.properties.items()
            }
        if self.bson_type == "object" and not self.additional_properties:
            schema["additionalProperties"] = False
        return schema


class ValidationRule(BaseModel):
    """A collection-level validator plus how strictly MongoDB applies it."""
    json_schema: FieldRule
    validation_level: Literal["off", "strict", "moderate"] = "strict"
    validation_action: Literal["error", "warn"] = "error"

    @property
    def required_fields(self) -> list[str]:
        return list(self.json_schema.required)

    def validator(self) -> dict[str, Any]:
        return {"$jsonSchema": self.json_schema.to_json_schema()}

    def collection_options(self) -> dict[str, Any]:
        """Keyword options for create_collection and collMod."""
        return {
            "validator": self.validator(),
            "validationLevel": self.validation_level,
            "validationAction": self.validation_action,
        }


class IndexSpec(BaseModel):
    """A named index over an ordered list of (field, direction) keys."""
    name: str
    keys: list[tuple[str, int]] = Field(..., min_length=1)
    unique: bool = False
    sparse: bool = False

    @field_validator("keys")
    @classmethod
    def directions_must_be_ascending_or_descending(cls, keys):
        for field, direction in keys:
            if direction not in (1, -1):
                raise ValueError(f"Invalid direction {direction!r} for {field!r}")
        return keys

    @property
    def fields(self) -> list[str]:
        return [field for field, _ in self.keys]

    def create_kwargs(self) -> dict[str, Any]:
        """Options passed to create_index alongside the keys."""
        kwargs: dict[str, Any] = {"name": self.name}
        if self.unique:
            kwargs["unique"] = True
        if self.sparse:
            kwargs["sparse"] = True
        return kwargs

    def same_keys(self, existing_keys) -> bool:
        """Compare against a key list as returned by index_information()."""
        try:
            normalized = [(field, int(direction)) for field, direction in existing_keys]
        except (TypeError, ValueError):
            # text, hashed and geo indexes
            return False
        return normalized == list(self.keys)

    def same_options(self, existing: dict[str, Any]) -> bool:
        """
        Compare against one index_information() entry.

        Any option besides unique and sparse (partialFilterExpression,
        collation, expireAfterSeconds, ...) counts as a difference.
        """
        if set(existing) - _COMPARED_INDEX_FIELDS:
            return False
        return (
            bool(existing.get("unique", False)) == self.unique
            and bool(existing.get("sparse", False)) == self.sparse
        )
