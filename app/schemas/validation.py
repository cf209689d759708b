"""
Validation outcomes as values

validate_payload never raises for bad input: callers inspect the
returned ValidationResult and decide what to do with the field errors.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Either a parsed value or a non-empty list of field errors"""
    value: Optional[ModelT] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors

    def error_details(self) -> List[Dict[str, str]]:
        return [error.as_dict() for error in self.errors]


def _field_errors(exc: PydanticValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "body"
        errors.append(FieldError(field=location, message=error["msg"]))
    return errors


def validate_payload(model: Type[ModelT], data: Any) -> ValidationResult[ModelT]:
    """Parse data into model, collecting every field error at once"""
    try:
        return ValidationResult(value=model.model_validate(data))
    except PydanticValidationError as e:
        return ValidationResult(errors=_field_errors(e))
