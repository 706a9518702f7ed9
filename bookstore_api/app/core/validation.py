"""
JSON Schema validation of request payloads.

Payloads are checked with a Draft 4 ``jsonschema`` validator whose
``required``, ``type``, ``minimum`` and ``maximum`` keywords are
replaced so that messages read ``instance requires property "isbn"``,
``instance.pages is not of a type(s) integer`` and
``instance.year must be less than or equal to 9223372036854775807``.
Every violation across every field is collected before returning.

Ordering is stable and does not depend on the input: presence
violations come first, in ``required`` order, followed by the remaining
violations in property declaration order.

A value that is not an object is treated as an object with no
properties by ``required``, so a bare string submitted for creation
reports every required field as missing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from jsonschema import Draft4Validator, validators
from jsonschema.exceptions import ValidationError

from bookstore_api.app.core.exceptions import BookValidationError
from bookstore_api.app.schemas.book import (
    BOOK_CREATE_SCHEMA,
    BOOK_FIELDS,
    BOOK_UPDATE_SCHEMA,
    BookCreate,
    BookUpdate,
)


def _required(validator, required, instance, schema):
    present = instance if validator.is_type(instance, "object") else {}
    for prop in required:
        if prop not in present:
            yield ValidationError(f'requires property "{prop}"')


def _type(validator, types, instance, schema):
    if isinstance(types, str):
        types = [types]
    if not any(validator.is_type(instance, type_) for type_ in types):
        yield ValidationError(f"is not of a type(s) {','.join(types)}")


def _minimum(validator, minimum, instance, schema):
    if validator.is_type(instance, "number") and instance < minimum:
        yield ValidationError(f"must be greater than or equal to {minimum}")


def _maximum(validator, maximum, instance, schema):
    if validator.is_type(instance, "number") and instance > maximum:
        yield ValidationError(f"must be less than or equal to {maximum}")


# Draft 4 keeps integers strict: booleans and floats such as 2023.0 fail.
BookSchemaValidator = validators.extend(
    Draft4Validator,
    {"required": _required, "type": _type, "minimum": _minimum, "maximum": _maximum},
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a value: valid, or an ordered list of messages."""

    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def _instance_path(error: ValidationError) -> str:
    path = "instance"
    for part in error.absolute_path:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def validate(schema: Dict[str, Any], value: Any) -> ValidationResult:
    """Validate ``value`` against ``schema``.

    ``value`` is any decoded JSON value, or ``None`` when the request
    carried no usable body.
    """
    errors = sorted(
        BookSchemaValidator(schema).iter_errors(value),
        key=lambda error: error.validator != "required",
    )
    return ValidationResult(
        errors=[f"{_instance_path(error)} {error.message}" for error in errors]
    )


def _known_fields(value: Dict[str, Any]) -> Dict[str, Any]:
    return {name: value[name] for name in BOOK_FIELDS if name in value}


def validate_book_create(value: Any) -> BookCreate:
    """Narrow a create payload into ``BookCreate`` or raise ``BookValidationError``."""
    result = validate(BOOK_CREATE_SCHEMA, value)
    if not result.valid:
        raise BookValidationError(result.errors)
    return BookCreate(**_known_fields(value))


def validate_book_update(value: Any) -> BookUpdate:
    """Narrow an update payload into ``BookUpdate`` or raise ``BookValidationError``.

    No field is required; only fields present in ``value`` are set on
    the returned model.
    """
    result = validate(BOOK_UPDATE_SCHEMA, value)
    if not result.valid:
        raise BookValidationError(result.errors)
    return BookUpdate(**_known_fields(value))
