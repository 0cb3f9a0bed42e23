from typing import Any, Dict, Iterable

_ESCAPES = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}


def escape(value: str) -> str:
    """Replace markup-significant characters with HTML entities."""
    return "".join(_ESCAPES.get(char, char) for char in value)


def clean(value: Any) -> Any:
    """Trim and escape strings; anything else is returned untouched."""
    if isinstance(value, str):
        return escape(value.strip())
    return value


def clean_fields(data: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Copy of ``data`` holding only ``fields`` that were supplied, each cleaned."""
    return {field: clean(data[field]) for field in fields if field in data}
