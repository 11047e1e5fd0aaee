"""Server-side validation rules.

Each rule is evaluated against the value list of one field. A check returns
True when the rule fails. Some checks coerce an empty value list into a single
`None` entry so that later rules of the same field see a value; rules are
therefore evaluated strictly in schema declaration order and never
short-circuit.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeAlias

from pydantic import EmailStr, TypeAdapter, ValidationError

from formbuilder.logging import get_logger
from formbuilder.typing.enums import RuleKind
from formbuilder.typing.models import FieldValue, Rule, Scalar, ScalarValue, scalar_text

if TYPE_CHECKING:
    from formbuilder.typing.models import SubmittedData

logger = get_logger(__name__)

DATE_FORMAT = "%m/%d/%Y"

RuleCheck: TypeAlias = Callable[[list[FieldValue], Any, "SubmittedData"], bool]

_DEFAULT_MESSAGES: dict[RuleKind, str] = {
    RuleKind.REQUIRED: "'{label}' is a required field.",
    RuleKind.LENGTH_MAX: "'{label}' should be a maximum of {parameter} characters.",
    RuleKind.LENGTH_MIN: "'{label}' should be a minimum of {parameter} characters.",
    RuleKind.DIGITS: "'{label}' is not a valid number.",
    RuleKind.EMAIL: "'{label}' is not a valid email address.",
    RuleKind.DATE: "'{label}' is not a valid date (mm/dd/yyyy).",
    RuleKind.EQUAL: "'{label}' does not match '{parameter}'.",
    RuleKind.EQUAL_TO: "'{label}' does not match '{parameter}'.",
}


def build_rules(raw_rules: Mapping[str, Any]) -> list[Rule]:
    """Convert a schema `rules` mapping into an ordered rule list.

    Unknown rule names are skipped.

    Args:
        raw_rules (Mapping[str, Any]): Rule name to parameter, in declaration order.

    Raises:
        ValidationError: If a known rule carries an invalid parameter.

    Returns:
        list[Rule]: Rules in declaration order.
    """
    rules: list[Rule] = []
    for name, parameter in raw_rules.items():
        try:
            kind = RuleKind.from_str(name)
        except ValueError:
            logger.warning("Skipping unknown validation rule", extra={"rule": name})
            continue
        rules.append(Rule(kind=kind, parameter=parameter))
    return rules


def is_number(text: str) -> bool:
    """Return whether `text` parses as a finite decimal number.

    Only ASCII digits are accepted; `Decimal` alone would also take digit
    group underscores (`1_000`) and other scripts' digits.
    """
    if not text.isascii() or "_" in text:
        return False
    try:
        number = Decimal(text.strip())
    except InvalidOperation:
        return False
    return number.is_finite()


@lru_cache(maxsize=1)
def _email_adapter() -> TypeAdapter[str]:
    return TypeAdapter(EmailStr)


def is_email(text: str) -> bool:
    """Return whether `text` is a bare, syntactically valid email address.

    The display-name form (`Jaime <jaime@example.com>`) accepted by `EmailStr`
    is rejected. Special-use domains such as `.local`, `.test` and a bare
    `localhost` fail as well.
    """
    if not text or "<" in text or any(char.isspace() for char in text):
        return False
    try:
        _email_adapter().validate_python(text)
    except ValidationError:
        return False
    return True


def is_date(text: str) -> bool:
    """Return whether `text` is a strict `mm/dd/yyyy` date.

    The parsed date must format back to the exact input, which rejects
    non-padded components such as `4/11/1984`.
    """
    try:
        parsed = datetime.strptime(text, DATE_FORMAT)  # noqa: DTZ007
    except ValueError:
        return False
    return parsed.strftime(DATE_FORMAT) == text


def _first(values: list[FieldValue]) -> Scalar:
    return values[0].value if values else None


def _fill_empty(values: list[FieldValue]) -> None:
    if not values:
        values.append(ScalarValue(value=None))


def _check_required(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:  # noqa: ARG001
    return not values


def _check_length_max(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:  # noqa: ARG001
    first = _first(values)
    if first is None:
        return False
    return len(scalar_text(first)) >= parameter


def _check_length_min(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:  # noqa: ARG001
    return len(scalar_text(_first(values))) <= parameter


def _check_digits(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:  # noqa: ARG001
    return not is_number(scalar_text(_first(values)))


def _check_email(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:  # noqa: ARG001
    # empty input is left to `required`
    if not values:
        _fill_empty(values)
        return False
    return not is_email(scalar_text(_first(values)))


def _check_date(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:  # noqa: ARG001
    _fill_empty(values)
    return not is_date(scalar_text(_first(values)))


def _check_equal(values: list[FieldValue], parameter: Any, submitted: SubmittedData) -> bool:
    _fill_empty(values)
    other = submitted.get(scalar_text(parameter))
    return scalar_text(_first(values)) != scalar_text(other)


_CHECKS: dict[RuleKind, RuleCheck] = {
    RuleKind.REQUIRED: _check_required,
    RuleKind.LENGTH_MAX: _check_length_max,
    RuleKind.LENGTH_MIN: _check_length_min,
    RuleKind.DIGITS: _check_digits,
    RuleKind.EMAIL: _check_email,
    RuleKind.DATE: _check_date,
    RuleKind.EQUAL: _check_equal,
    RuleKind.EQUAL_TO: _check_equal,
}


def error_message(rule: Rule, *, label: str | None, custom_errors: Mapping[str, str]) -> str:
    """Return the custom message for `rule`, or its default message.

    Args:
        rule (Rule): Failed rule.
        label (str | None): Field label used in default messages.
        custom_errors (Mapping[str, str]): Schema `errors` overrides keyed by rule name.

    Returns:
        str: User-facing message.
    """
    custom = custom_errors.get(rule.kind.value)
    if custom is not None:
        return custom
    return _DEFAULT_MESSAGES[rule.kind].format(label=label or "", parameter=scalar_text(rule.parameter))


def evaluate_rules(
    rules: list[Rule],
    values: list[FieldValue],
    *,
    submitted: SubmittedData,
    label: str | None = None,
    custom_errors: Mapping[str, str] | None = None,
) -> list[str]:
    """Run every active rule and collect the messages of those that fail.

    Args:
        rules (list[Rule]): Rules in declaration order.
        values (list[FieldValue]): Field values, possibly coerced in place.
        submitted (SubmittedData): Request snapshot, used by `equal`/`equalTo`.
        label (str | None): Field label for default messages.
        custom_errors (Mapping[str, str] | None): Per-rule message overrides.

    Returns:
        list[str]: Messages in rule order, empty when every rule passed.
    """
    overrides = custom_errors or {}
    messages: list[str] = []
    for rule in rules:
        if not rule.active:
            continue
        if _CHECKS[rule.kind](values, rule.parameter, submitted):
            messages.append(error_message(rule, label=label, custom_errors=overrides))
    return messages
