"""
Slug normalization for label names and option values
"""
from slugify import slugify as _transliterate

_SUBSTITUTIONS = [
    ["&", " and "],
    ["@", " at "],
]


def slugify(text: str, separator: str = "-") -> str:
    """
    Convert free text into a stable lower-case identifier

    Non-Latin scripts are transliterated rather than dropped.

    Args:
        text: Text to normalize
        separator: Character joining the alphanumeric runs

    Returns:
        Slug, e.g. "Light Blue!" -> "light-blue", "Приоритет" -> "prioritet"
    """
    return _transliterate(
        text,
        separator=separator,
        replacements=_SUBSTITUTIONS,
        lowercase=True,
    )


def label_name(text: str) -> str:
    """
    Normalize a custom field name into a Prometheus label name

    "Priority Level!" -> "priority_level"
    """
    name = slugify(text, separator="_")
    # Label names must not start with a digit
    if name[:1].isdigit():
        name = f"cf_{name}"
    return name
