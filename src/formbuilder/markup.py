"""Trusted markup assembly.

Every helper here interpolates its arguments verbatim: nothing is escaped.
Schema text (labels, legends, `copy` fields holding rich text) and re-rendered
submitted values all flow through this path, so callers must only feed it
trusted content or pre-escape it themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from formbuilder.typing.enums import RuleKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from formbuilder.typing.models import Rule


def join_fragments(fragments: Iterable[str]) -> str:
    """Join non-empty fragments with single spaces."""
    return " ".join(fragment for fragment in fragments if fragment)


def attribute(name: str, value: object) -> str:
    """Return a `name="value"` pair, or "" when value is None."""
    if value is None:
        return ""
    return f'{name}="{value}"'


def flag(name: str, enabled: object) -> str:
    """Return a bare boolean attribute when enabled."""
    return name if enabled else ""


def open_tag(tag: str, *attributes: str) -> str:
    """Return an opening tag carrying the non-empty attribute fragments."""
    return f"<{join_fragments((tag, *attributes))}>"


def label(for_id: str, text: object, *, css_class: str | None = None) -> str:
    """Return a `<label>` bound to `for_id`."""
    return f"{open_tag('label', attribute('class', css_class), attribute('for', for_id))}{text}</label>"


def error_label(for_id: str, message: str) -> str:
    """Return the inline error line rendered next to a field."""
    return label(for_id, message, css_class="error")


def client_hints(
    rules: list[Rule],
    *,
    track: str | None = None,
    disabled: bool = False,
    autofocus: bool = False,
    placeholder: str | None = None,
) -> str:
    """Build the attribute blob read by the client-side validation library.

    Args:
        rules (list[Rule]): Field rules.
        track (str | None): Analytics tag.
        disabled (bool): Whether the control is disabled.
        autofocus (bool): Whether the control grabs focus.
        placeholder (str | None): Placeholder text.

    Returns:
        str: Space separated attributes, possibly empty.
    """
    active = {rule.kind: rule.parameter for rule in rules if rule.active}
    equal_to = active.get(RuleKind.EQUAL_TO, active.get(RuleKind.EQUAL))
    return join_fragments(
        (
            attribute("data-track", track or None),
            flag("required", RuleKind.REQUIRED in active),
            attribute("minlength", active.get(RuleKind.LENGTH_MIN)),
            attribute("maxlength", active.get(RuleKind.LENGTH_MAX)),
            attribute("equalTo", f"#{equal_to}" if equal_to is not None else None),
            flag("disabled", disabled),
            flag("autofocus", autofocus),
            attribute("placeholder", placeholder or None),
            flag("digits", RuleKind.DIGITS in active),
            flag("email", RuleKind.EMAIL in active),
            flag("date", RuleKind.DATE in active),
        ),
    )
