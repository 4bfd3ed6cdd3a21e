"""Action schema registry shared by the session bridge and the dispatcher."""

from __future__ import annotations

import types
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal, Union, get_args, get_origin

from loguru import logger
from pydantic import ValidationError
from pydantic.fields import FieldInfo

from voicecart.actions.models import ActionInput
from voicecart.types import ToolCall

ParameterType = Literal["string", "boolean"]


@dataclass(frozen=True)
class ActionParameter:
    """One declared argument of an action."""

    name: str
    type: ParameterType
    description: str = ""
    enum: tuple[str, ...] | None = None
    required: bool = True

    def to_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.type.upper(), "description": self.description}
        if self.enum is not None:
            prop["enum"] = list(self.enum)
        return prop


@dataclass(frozen=True)
class ActionSchema:
    """Name, description and ordered parameters of one action."""

    name: str
    description: str
    parameters: tuple[ActionParameter, ...]

    @property
    def required(self) -> list[str]:
        return [param.name for param in self.parameters if param.required]

    def parameter(self, name: str) -> ActionParameter | None:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def to_declaration(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "OBJECT",
                "properties": {param.name: param.to_property() for param in self.parameters},
                "required": self.required,
            },
        }


@dataclass(frozen=True)
class ActionSpec:
    """Catalog entry binding an action name to its argument model."""

    name: str
    description: str
    input_model: type[ActionInput]

    def schema(self) -> ActionSchema:
        params = tuple(
            _parameter_from_field(name, info) for name, info in self.input_model.model_fields.items()
        )
        return ActionSchema(name=self.name, description=self.description, parameters=params)


@dataclass(frozen=True)
class Declaration:
    """Everything the live model is told at configuration time."""

    schemas: tuple[ActionSchema, ...]
    system_instruction: str

    def function_declarations(self) -> list[dict[str, Any]]:
        return [schema.to_declaration() for schema in self.schemas]

    def tools(self) -> list[dict[str, Any]]:
        return [{"function_declarations": self.function_declarations()}]


class ActionRegistry:
    """Registry of callable actions, kept in declaration order."""

    def __init__(self, specs: Iterable[ActionSpec] | None = None, *, system_instruction: str = "") -> None:
        self.system_instruction = system_instruction
        self._specs: dict[str, ActionSpec] = {}
        self._schemas: dict[str, ActionSchema] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: ActionSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Duplicate action name: {spec.name}")
        self._specs[spec.name] = spec
        self._schemas[spec.name] = spec.schema()

    def has(self, name: str) -> bool:
        return name in self._specs

    def get(self, name: str) -> ActionSpec | None:
        return self._specs.get(name)

    def schema(self, name: str) -> ActionSchema | None:
        return self._schemas.get(name)

    def names(self) -> list[str]:
        return list(self._specs)

    def declare(self) -> Declaration:
        return Declaration(schemas=tuple(self._schemas.values()), system_instruction=self.system_instruction)

    def parse(self, call: ToolCall) -> ActionInput | None:
        """Validate one call; unknown names and out-of-schema arguments yield None."""
        spec = self._specs.get(call.name)
        if spec is None:
            logger.debug("action.parse.unknown name={}", call.name)
            return None
        try:
            return spec.input_model.model_validate(dict(call.arguments or {}))
        except ValidationError as exc:
            logger.debug("action.parse.rejected name={} errors={}", call.name, exc.error_count())
            return None


def _parameter_from_field(name: str, info: FieldInfo) -> ActionParameter:
    annotation = info.annotation
    required = info.is_required()
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            raise TypeError(f"Unsupported union for action parameter {name!r}: {annotation!r}")
        annotation = members[0]
        origin = get_origin(annotation)

    wire_name = info.alias or name
    description = info.description or ""
    if origin is Literal:
        values = get_args(annotation)
        return ActionParameter(
            name=wire_name,
            type="string",
            description=description,
            enum=tuple(str(value) for value in values),
            required=required,
        )
    if annotation is bool:
        return ActionParameter(name=wire_name, type="boolean", description=description, required=required)
    if annotation is str:
        return ActionParameter(name=wire_name, type="string", description=description, required=required)
    raise TypeError(f"Unsupported type for action parameter {name!r}: {annotation!r}")
