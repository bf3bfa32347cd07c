"""Incoming post operations.

The Micropub parsing layer hands the engine one of four actions, already
in MF2-JSON shape. Each is a frozen pydantic model; :data:`Operation` is the
discriminated union over ``action`` and :func:`parse_operation` validates a
raw mapping into it.

Property values are wrapped into lists at this boundary, so everything
downstream can rely on the always-a-list shape.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from micropress.domain.properties import PropertySet, as_property_set

DeleteSpec = list[str] | dict[str, list[Any] | None]


def _wrap_property_set(value: Any) -> Any:
    if isinstance(value, dict):
        return as_property_set(value)
    return value


def _wrap_delete_spec(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    if isinstance(value, dict):
        return {k: (v if v is None or isinstance(v, list) else [v]) for k, v in value.items()}
    return value


class UpdateRequest(BaseModel):
    """The three independent edits of a Micropub update.

    ``delete`` is either a list of property names, or a mapping of name to
    the values to remove. A name mapped to ``None`` or ``[]`` removes the
    whole property.
    """

    model_config = {"frozen": True}

    replace: PropertySet = Field(default_factory=dict)
    add: PropertySet = Field(default_factory=dict)
    delete: DeleteSpec = Field(default_factory=list)

    @field_validator("replace", "add", mode="before")
    @classmethod
    def _wrap_values(cls, value: Any) -> Any:
        return _wrap_property_set(value)

    @field_validator("delete", mode="before")
    @classmethod
    def _wrap_delete(cls, value: Any) -> Any:
        return _wrap_delete_spec(value)

    def is_empty(self) -> bool:
        return not (self.replace or self.add or self.delete)


class CreateOperation(BaseModel):
    """A new post: MF2 type, properties, ``mp-*`` commands, uploaded photos."""

    model_config = {"frozen": True}

    action: Literal["create"] = "create"
    type: list[str] = Field(default_factory=lambda: ["h-entry"])
    properties: PropertySet = Field(default_factory=dict)
    commands: PropertySet = Field(default_factory=dict)
    photos: list[str] = Field(default_factory=list)

    @field_validator("properties", "commands", mode="before")
    @classmethod
    def _wrap_values(cls, value: Any) -> Any:
        return _wrap_property_set(value)

    @field_validator("type", mode="before")
    @classmethod
    def _wrap_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @property
    def post_type(self) -> str:
        """Declared type less its ``h-`` prefix (``h-entry`` -> ``entry``)."""
        declared = self.type[0] if self.type else "h-entry"
        return declared.removeprefix("h-")

    @property
    def syndicate_to(self) -> list[str]:
        return [str(t) for t in self.commands.get("mp-syndicate-to", [])]

    @property
    def requested_slug(self) -> str | None:
        values = self.commands.get("mp-slug")
        return str(values[0]) if values else None


class UpdateOperation(BaseModel):
    model_config = {"frozen": True}

    action: Literal["update"] = "update"
    url: str
    replace: PropertySet = Field(default_factory=dict)
    add: PropertySet = Field(default_factory=dict)
    delete: DeleteSpec = Field(default_factory=list)

    @field_validator("replace", "add", mode="before")
    @classmethod
    def _wrap_values(cls, value: Any) -> Any:
        return _wrap_property_set(value)

    @field_validator("delete", mode="before")
    @classmethod
    def _wrap_delete(cls, value: Any) -> Any:
        return _wrap_delete_spec(value)

    @property
    def request(self) -> UpdateRequest:
        return UpdateRequest(replace=self.replace, add=self.add, delete=self.delete)


class DeleteOperation(BaseModel):
    model_config = {"frozen": True}

    action: Literal["delete"] = "delete"
    url: str


class UndeleteOperation(BaseModel):
    model_config = {"frozen": True}

    action: Literal["undelete"] = "undelete"
    url: str


Operation = Annotated[
    CreateOperation | UpdateOperation | DeleteOperation | UndeleteOperation,
    Field(discriminator="action"),
]

_OPERATION_ADAPTER: TypeAdapter[Operation] = TypeAdapter(Operation)


def _split_commands(payload: dict[str, Any]) -> dict[str, Any]:
    data = dict(payload)
    properties = dict(data.get("properties") or {})
    commands = dict(data.get("commands") or {})
    for source in (data, properties):
        for key in [k for k in source if k.startswith("mp-")]:
            commands[key] = source.pop(key)
    data["properties"] = properties
    data["commands"] = commands
    return data


def parse_create(payload: dict[str, Any]) -> CreateOperation:
    """Validate an MF2 payload as a create, moving ``mp-*`` keys into ``commands``.

    Raises:
        pydantic.ValidationError: The payload is not a valid create.
    """
    return CreateOperation.model_validate({**_split_commands(payload), "action": "create"})


def parse_operation(payload: dict[str, Any]) -> Operation:
    """Validate a raw Micropub JSON payload into an :data:`Operation`.

    Payloads without ``action`` are creates and go through
    :func:`parse_create`.

    Raises:
        pydantic.ValidationError: The payload does not match any action.
    """
    if payload.get("action", "create") == "create":
        return parse_create(payload)
    return _OPERATION_ADAPTER.validate_python(payload)
