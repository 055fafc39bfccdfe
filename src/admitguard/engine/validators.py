"""
AdmitGuard Field Validators

One validator class per value kind. Every validator implements
``validate(value, record) -> RuleOutcome`` and is pure: the same value and
record snapshot always produce the same outcome. Values arriving from JSON
as strings are coerced to the validator's value type first; a value that
cannot be coerced fails the rule with the rule's own message.

The admission pack selects a validator by ``kind`` and passes ``params``
straight to its constructor (see build_validator).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

from ..models import RuleOutcome, ValidatorKind


Clock = Callable[[], date]


# =============================================================================
# Value Coercion
# =============================================================================

def to_text(value: Any) -> Optional[str]:
    """Coerce to str. Numbers become their decimal text; bools are rejected."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return None


def to_number(value: Any) -> Optional[float]:
    """Coerce to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def to_int(value: Any) -> Optional[int]:
    """Coerce to int. Accepts integral floats (2020.0) but not 2020.5."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = to_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


_ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_ISO_DATETIME = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T")


def to_date(value: Any) -> Optional[date]:
    """
    Coerce an ISO date string, date or datetime to a date.

    Strings must be a whole ``YYYY-MM-DD`` date or a full ISO datetime;
    anything trailing a date that isn't a time fails.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            if _ISO_DATE.match(text):
                return date.fromisoformat(text)
            if _ISO_DATETIME.match(text):
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def age_on(birth_date: date, today: date) -> int:
    """Completed years, one less if this year's birthday hasn't come yet."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


# =============================================================================
# Validators
# =============================================================================

@dataclass(frozen=True)
class PersonNameValidator:
    """At least two capitalized words, no digits."""
    min_length: int = 2
    min_words: int = 2

    kind = ValidatorKind.PERSON_NAME

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        text = to_text(value) or ""
        if len(text.strip()) < self.min_length:
            return RuleOutcome.fail(f"Min {self.min_length} characters required.")
        if re.search(r"\d", text):
            return RuleOutcome.fail("Numbers are not allowed.")

        words = text.split()
        if len(words) < self.min_words:
            return RuleOutcome.fail("Please enter both First and Last name.")
        if not all(word[0].isupper() for word in words):
            return RuleOutcome.fail(
                "First letter of each name must be capitalized (e.g. John Doe)."
            )
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "min_length": self.min_length, "min_words": self.min_words}


@dataclass(frozen=True)
class PatternValidator:
    """Whole-value regular expression match."""
    pattern: str
    message: str

    kind = ValidatorKind.PATTERN

    def __post_init__(self) -> None:
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern {self.pattern!r}: {e}") from e

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        text = to_text(value)
        if text is None or re.fullmatch(self.pattern, text) is None:
            return RuleOutcome.fail(self.message)
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "pattern": self.pattern}


@dataclass(frozen=True)
class AgeRangeValidator:
    """Date of birth whose age today falls within [min_age, max_age]."""
    min_age: int
    max_age: int
    clock: Clock = field(default=date.today, compare=False)

    kind = ValidatorKind.AGE_RANGE

    def __post_init__(self) -> None:
        if self.min_age > self.max_age:
            raise ValueError(f"min_age {self.min_age} exceeds max_age {self.max_age}")

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        if value is None or value == "":
            return RuleOutcome.fail("DOB is required.")
        birth_date = to_date(value)
        if birth_date is None:
            return RuleOutcome.fail("DOB must be a valid date (YYYY-MM-DD).")

        age = age_on(birth_date, self.clock())
        if age < self.min_age or age > self.max_age:
            return RuleOutcome.fail(
                f"Age is {age}, must be {self.min_age}-{self.max_age}."
            )
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "min_age": self.min_age, "max_age": self.max_age}


@dataclass(frozen=True)
class ChoiceValidator:
    """Value must be one of a fixed list."""
    choices: tuple[str, ...]
    message: str

    kind = ValidatorKind.CHOICE

    def __post_init__(self) -> None:
        if not self.choices:
            raise ValueError("choices must not be empty")
        object.__setattr__(self, "choices", tuple(self.choices))

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        if value not in self.choices:
            return RuleOutcome.fail(self.message)
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "choices": list(self.choices)}


@dataclass(frozen=True)
class IntegerRangeValidator:
    """
    Integer within optional inclusive bounds.

    The message may use {minimum} and {maximum} placeholders.
    """
    message: str
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    kind = ValidatorKind.INTEGER_RANGE

    def __post_init__(self) -> None:
        if self.minimum is None and self.maximum is None:
            raise ValueError("integer_range needs minimum and/or maximum")
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise ValueError(f"minimum {self.minimum} exceeds maximum {self.maximum}")

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        number = to_int(value)
        if (
            number is None
            or (self.minimum is not None and number < self.minimum)
            or (self.maximum is not None and number > self.maximum)
        ):
            return RuleOutcome.fail(
                self.message.format(minimum=self.minimum, maximum=self.maximum)
            )
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "minimum": self.minimum, "maximum": self.maximum}


@dataclass(frozen=True)
class AcademicScoreValidator:
    """
    Percentage or CGPA, told apart by magnitude.

    Scores above ``cgpa_ceiling`` are read as percentages.
    """
    min_percentage: float = 60.0
    min_cgpa: float = 6.0
    cgpa_ceiling: float = 10.0

    kind = ValidatorKind.ACADEMIC_SCORE

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        score = to_number(value)
        if score is None:
            return RuleOutcome.fail("Score must be a number.")
        if score > self.cgpa_ceiling:
            if score < self.min_percentage:
                return RuleOutcome.fail(f"Percentage must be ≥ {self.min_percentage:g}%.")
        elif score < self.min_cgpa:
            return RuleOutcome.fail(f"CGPA must be ≥ {self.min_cgpa:.1f}.")
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "min_percentage": self.min_percentage,
            "min_cgpa": self.min_cgpa,
            "cgpa_ceiling": self.cgpa_ceiling,
        }


@dataclass(frozen=True)
class StatusValidator:
    """Known status; some known statuses still never pass."""
    allowed: tuple[str, ...]
    blocked: tuple[str, ...] = ()
    message: str = "Invalid status."
    blocked_message: str = "Rejected candidates cannot be submitted."

    kind = ValidatorKind.STATUS

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed", tuple(self.allowed))
        object.__setattr__(self, "blocked", tuple(self.blocked))
        unknown = set(self.blocked) - set(self.allowed)
        if unknown:
            raise ValueError(f"blocked statuses not in allowed: {sorted(unknown)}")

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        if value not in self.allowed:
            return RuleOutcome.fail(self.message)
        if value in self.blocked:
            return RuleOutcome.fail(self.blocked_message)
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "allowed": list(self.allowed), "blocked": list(self.blocked)}


@dataclass(frozen=True)
class RequiresStatusValidator:
    """
    Cross-field rule: when this field equals ``when_value``, the record's
    ``status_field`` must be one of ``required``.
    """
    status_field: str
    required: tuple[str, ...]
    message: str
    when_value: str = "Yes"

    kind = ValidatorKind.REQUIRES_STATUS

    def __post_init__(self) -> None:
        object.__setattr__(self, "required", tuple(self.required))

    def validate(self, value: Any, record: Mapping[str, Any]) -> RuleOutcome:
        if value == self.when_value and record.get(self.status_field) not in self.required:
            return RuleOutcome.fail(self.message)
        return RuleOutcome.ok()

    def describe(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "when_value": self.when_value,
            "status_field": self.status_field,
            "required": list(self.required),
        }


# =============================================================================
# Factory
# =============================================================================

_VALIDATOR_CLASSES: dict[ValidatorKind, type] = {
    ValidatorKind.PERSON_NAME: PersonNameValidator,
    ValidatorKind.PATTERN: PatternValidator,
    ValidatorKind.AGE_RANGE: AgeRangeValidator,
    ValidatorKind.CHOICE: ChoiceValidator,
    ValidatorKind.INTEGER_RANGE: IntegerRangeValidator,
    ValidatorKind.ACADEMIC_SCORE: AcademicScoreValidator,
    ValidatorKind.STATUS: StatusValidator,
    ValidatorKind.REQUIRES_STATUS: RequiresStatusValidator,
}


def build_validator(
    kind: ValidatorKind | str,
    params: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None,
):
    """
    Instantiate the validator for ``kind`` from pack parameters.

    Args:
        kind: Validator kind (enum or its string value)
        params: Constructor arguments from the admission pack
        clock: Date source for age-based validators

    Raises:
        ValueError: Unknown kind, unknown parameter, or invalid parameter value
    """
    kind = ValidatorKind(kind)
    cls = _VALIDATOR_CLASSES[kind]
    kwargs = dict(params or {})
    if kind == ValidatorKind.AGE_RANGE and clock is not None:
        kwargs["clock"] = clock
    for key in ("choices", "allowed", "blocked", "required"):
        if key in kwargs and isinstance(kwargs[key], list):
            kwargs[key] = tuple(kwargs[key])
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ValueError(f"Bad parameters for {kind.value} validator: {e}") from e
