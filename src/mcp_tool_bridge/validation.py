"""Argument schemas and validation for tool calls."""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from .errors import ValidationError

STRING = "string"
NUMBER = "number"
INTEGER = "integer"
BOOLEAN = "boolean"

KINDS = (STRING, NUMBER, INTEGER, BOOLEAN)


@dataclass(frozen=True)
class ArgumentSpec:
    """One named argument of a tool."""

    name: str
    kind: str = STRING
    required: bool = True
    description: str = ""

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unsupported argument kind: {self.kind}")

    def matches(self, value: Any) -> bool:
        """Check whether a raw JSON value has this argument's primitive kind."""
        if self.kind == STRING:
            return isinstance(value, str)
        if self.kind == BOOLEAN:
            return isinstance(value, bool)
        # bool is a subclass of int, but JSON true is not a number
        if isinstance(value, bool):
            return False
        if self.kind == INTEGER:
            return isinstance(value, int)
        return isinstance(value, (int, float))


@dataclass(frozen=True)
class ArgumentSchema:
    """Declarative description of a tool's arguments."""

    arguments: Tuple[ArgumentSpec, ...] = ()
    closed: bool = False

    @classmethod
    def of(cls, *arguments: ArgumentSpec, closed: bool = False) -> "ArgumentSchema":
        return cls(arguments=tuple(arguments), closed=closed)

    def to_json_schema(self) -> Dict[str, Any]:
        """
        Render the schema as a JSON Schema object for tool listings.

        Returns:
            JSON Schema dict in the shape MCP clients expect as inputSchema
        """
        properties = {}
        for spec in self.arguments:
            prop = {"type": spec.kind}
            if spec.description:
                prop["description"] = spec.description
            properties[spec.name] = prop

        schema = {
            "type": "object",
            "properties": properties,
            "required": [spec.name for spec in self.arguments if spec.required],
        }
        if self.closed:
            schema["additionalProperties"] = False
        return schema


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def validate(schema: ArgumentSchema, raw_arguments: Any) -> Dict[str, Any]:
    """
    Check raw call arguments against a schema.

    Every argument is checked before reporting, so a single ValidationError
    lists all offending fields. Unknown keys are dropped unless the schema is
    closed.

    Args:
        schema: The tool's argument schema
        raw_arguments: Arguments exactly as received from the caller

    Returns:
        Mapping of declared argument names to their validated values

    Raises:
        ValidationError if any argument is missing, mistyped or unexpected
    """
    if not isinstance(raw_arguments, Mapping):
        raise ValidationError(
            ["arguments"], f"Expected object, received {_type_name(raw_arguments)}"
        )

    fields: List[str] = []
    problems: List[str] = []
    validated: Dict[str, Any] = {}

    for spec in schema.arguments:
        if spec.name not in raw_arguments:
            if spec.required:
                fields.append(spec.name)
                problems.append(f"{spec.name}: Required")
            continue

        value = raw_arguments[spec.name]
        if not spec.matches(value):
            fields.append(spec.name)
            problems.append(
                f"{spec.name}: Expected {spec.kind}, received {_type_name(value)}"
            )
            continue
        validated[spec.name] = value

    if schema.closed:
        declared = {spec.name for spec in schema.arguments}
        for key in raw_arguments:
            if key not in declared:
                fields.append(str(key))
                problems.append(f"{key}: Unrecognized key")

    if problems:
        raise ValidationError(fields, "; ".join(problems))

    return validated
