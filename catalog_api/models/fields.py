from typing import Any, Iterable


def is_missing(value: Any) -> bool:
    """A required field is missing when it is absent, null, empty or zero.

    Whitespace-only strings still count as present.
    """
    return not value


def missing_fields(values: dict[str, Any], required: Iterable[str]) -> list[str]:
    return [name for name in required if is_missing(values.get(name))]


def provided_fields(values: dict[str, Any], allowed: Iterable[str]) -> dict[str, Any]:
    """Keep only the allowed fields that were actually sent."""
    return {name: values[name] for name in allowed if values.get(name) is not None}
