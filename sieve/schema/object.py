"""Object schema with field definitions and cross-field rules.

Fields are validated in declaration order, so errors for `z, a, m` surface
as `z, a, m`. Undeclared keys follow the additional-properties policy.
Cross-field rules see the *validated* fields (after transforms and
defaults) and, by default, only run when every field passed.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Union

from sieve.errors import ErrorCode
from sieve.path import JsonPath
from sieve.validation import Failure, Success, Validation, ValidationContext, ValidationError, ValidationErrors, fail
from sieve.validation.builders import constraint_error, invalid_type, required_field, unknown_field
from sieve.validation.values import canonical, is_number

from .base import SchemaLike

CrossFieldValidator = Callable[["ValidatedObject", JsonPath], Validation[Any]]

_NO_DEFAULT = object()


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    schema: SchemaLike
    required: bool = True
    default: Any = _NO_DEFAULT

    @property
    def has_default(self) -> bool: return self.default is not _NO_DEFAULT


class AdditionalProperties(Enum):
    ALLOW = "allow"
    DENY = "deny"


AdditionalPolicy = Union[AdditionalProperties, SchemaLike]


class ValidatedObject:
    """Read-only view over validated fields handed to cross-field rules."""

    __slots__ = ("_fields",)

    def __init__(self, fields: dict[str, Any]):
        self._fields = fields

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def has(self, name: str) -> bool:
        """True when the field exists and is not null."""
        return self._fields.get(name) is not None

    def keys(self) -> Iterator[str]: return iter(self._fields)

    def to_dict(self) -> dict[str, Any]: return dict(self._fields)

    def __contains__(self, name: object) -> bool: return name in self._fields

    def __repr__(self) -> str: return f"ValidatedObject({self._fields!r})"


# ============================================================================
# Built-in cross-field rules
# ============================================================================

def _ordered(a: Any, b: Any) -> tuple[Any, Any] | None:
    """Comparable pair, or None when the values are not both numbers or both strings."""
    if is_number(a) and is_number(b): return a, b
    if isinstance(a, str) and isinstance(b, str): return a, b
    return None


def _require_if(condition_field: str, predicate: Callable[[Any], bool], required: str) -> CrossFieldValidator:
    """`required` must be present when the condition holds; an explicit null counts as present."""
    def rule(obj: ValidatedObject, path: JsonPath) -> Validation[None]:
        if condition_field in obj and predicate(obj.get(condition_field)) and required not in obj:
            return fail(constraint_error(path.push_field(required), ErrorCode.CONDITIONAL_REQUIRED,
                f"'{required}' is required when '{condition_field}' matches condition"))
        return Success(None)
    return rule


def _mutually_exclusive(first: str, second: str) -> CrossFieldValidator:
    def rule(obj: ValidatedObject, path: JsonPath) -> Validation[None]:
        if obj.has(first) and obj.has(second):
            return fail(constraint_error(path, ErrorCode.MUTUALLY_EXCLUSIVE,
                f"'{first}' and '{second}' are mutually exclusive"))
        return Success(None)
    return rule


def _at_least_one_of(fields: tuple[str, ...]) -> CrossFieldValidator:
    def rule(obj: ValidatedObject, path: JsonPath) -> Validation[None]:
        if any(obj.has(f) for f in fields): return Success(None)
        return fail(constraint_error(path, ErrorCode.AT_LEAST_ONE_REQUIRED,
            f"at least one of [{', '.join(fields)}] is required"))
    return rule


def _equal_fields(first: str, second: str) -> CrossFieldValidator:
    def rule(obj: ValidatedObject, path: JsonPath) -> Validation[None]:
        if first in obj and second in obj and canonical(obj.get(first)) != canonical(obj.get(second)):
            return fail(constraint_error(path.push_field(second), ErrorCode.FIELDS_NOT_EQUAL,
                f"'{second}' must match '{first}'"))
        return Success(None)
    return rule


def _field_compare(first: str, second: str, *, strict: bool) -> CrossFieldValidator:
    code = ErrorCode.FIELD_NOT_LESS_THAN if strict else ErrorCode.FIELD_NOT_LESS_OR_EQUAL
    relation = "less than" if strict else "less than or equal to"

    def rule(obj: ValidatedObject, path: JsonPath) -> Validation[None]:
        if (pair := _ordered(obj.get(first), obj.get(second))) is None:
            return Success(None)
        a, b = pair
        if (a < b) if strict else (a <= b):
            return Success(None)
        return fail(constraint_error(path.push_field(first), code, f"'{first}' must be {relation} '{second}'"))
    return rule


# ============================================================================
# Schema
# ============================================================================

class ObjectSchema(SchemaLike):
    """Validates JSON objects field by field.

    Example:
        Schema.object()
            .field("email", Schema.string().email())
            .optional("nickname", Schema.string())
            .default("role", Schema.string(), "member")
            .additional_properties(False)
    """

    def __init__(self) -> None:
        self._fields: dict[str, FieldDefinition] = {}
        self._additional: AdditionalPolicy = AdditionalProperties.ALLOW
        self._type_message: str | None = None
        self._cross_field: tuple[CrossFieldValidator, ...] = ()
        self._skip_cross_field_on_errors = True

    @property
    def fields(self) -> dict[str, FieldDefinition]: return dict(self._fields)

    @property
    def additional(self) -> AdditionalPolicy: return self._additional

    def _with_field(self, name: str, definition: FieldDefinition) -> ObjectSchema:
        clone = self._copy()
        clone._fields = {**self._fields, name: definition}
        return clone

    def field(self, name: str, schema: SchemaLike) -> ObjectSchema:
        return self._with_field(name, FieldDefinition(schema, required=True))

    def optional(self, name: str, schema: SchemaLike) -> ObjectSchema:
        return self._with_field(name, FieldDefinition(schema, required=False))

    def default(self, name: str, schema: SchemaLike, value: Any) -> ObjectSchema:
        """Optional field that takes `value` when absent."""
        return self._with_field(name, FieldDefinition(schema, required=False, default=value))

    def additional_properties(self, policy: bool | SchemaLike) -> ObjectSchema:
        """True allows undeclared keys, False rejects them, a schema validates them."""
        clone = self._copy()
        if isinstance(policy, SchemaLike):
            clone._additional = policy
        else:
            clone._additional = AdditionalProperties.ALLOW if policy else AdditionalProperties.DENY
        return clone

    def error(self, message: str) -> ObjectSchema:
        clone = self._copy()
        clone._type_message = message
        return clone

    def custom(self, validator: CrossFieldValidator) -> ObjectSchema:
        """Attach `validator(obj, path) -> Validation` over the validated fields."""
        clone = self._copy()
        clone._cross_field = (*self._cross_field, validator)
        return clone

    def skip_cross_field_on_errors(self, skip: bool = True) -> ObjectSchema:
        clone = self._copy()
        clone._skip_cross_field_on_errors = skip
        return clone

    def require_if(self, condition_field: str, predicate: Callable[[Any], bool], required_field: str) -> ObjectSchema:
        return self.custom(_require_if(condition_field, predicate, required_field))

    def mutually_exclusive(self, first: str, second: str) -> ObjectSchema:
        return self.custom(_mutually_exclusive(first, second))

    def at_least_one_of(self, fields: Iterable[str]) -> ObjectSchema:
        return self.custom(_at_least_one_of(tuple(fields)))

    def equal_fields(self, first: str, second: str) -> ObjectSchema:
        return self.custom(_equal_fields(first, second))

    def field_less_than(self, first: str, second: str) -> ObjectSchema:
        return self.custom(_field_compare(first, second, strict=True))

    def field_less_or_equal(self, first: str, second: str) -> ObjectSchema:
        return self.custom(_field_compare(first, second, strict=False))

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[dict[str, Any]]:
        return self.validate_with_context(value, path, None)

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[dict[str, Any]]:
        path = path if path is not None else JsonPath.root()
        if not isinstance(value, dict):
            return invalid_type(path, "object", value, self._type_message)

        errors: list[ValidationError] = []
        validated: dict[str, Any] = {}

        for name, definition in self._fields.items():
            if name in value:
                match definition.schema.validate_with_context(value[name], path.push_field(name), context):
                    case Success(v):
                        validated[name] = v
                    case Failure(errs):
                        errors.extend(errs)
            elif definition.required:
                errors.append(required_field(path, name))
            elif definition.has_default:
                validated[name] = copy.deepcopy(definition.default)

        for key, item in value.items():
            if key in self._fields:
                continue
            match self._additional:
                case AdditionalProperties.ALLOW:
                    validated[key] = item
                case AdditionalProperties.DENY:
                    errors.append(unknown_field(path, key))
                case schema:
                    match schema.validate_with_context(item, path.push_field(key), context):
                        case Success(v):
                            validated[key] = v
                        case Failure(errs):
                            errors.extend(errs)

        if not self._skip_cross_field_on_errors or not errors:
            view = ValidatedObject(validated)
            for validator in self._cross_field:
                if isinstance(result := validator(view, path), Failure):
                    errors.extend(result.errors)

        return Failure(ValidationErrors(errors)) if errors else Success(validated)

    def collect_refs(self, refs: list[str]) -> None:
        for definition in self._fields.values():
            definition.schema.collect_refs(refs)
        if isinstance(self._additional, SchemaLike):
            self._additional.collect_refs(refs)
