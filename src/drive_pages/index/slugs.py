"""URL slugs for Drive file names."""

from unicodedata import normalize

from pymdownx.slugs import slugify as _md_slugify

_slugify_lower = _md_slugify(case="lower")


def slugify(name: str) -> str:
    """Convert a Drive file name to a lowercase ASCII path segment.

    Examples:
        >>> slugify("Style Guide: Headlines")
        'style-guide-headlines'
        >>> slugify("Café Reviews")
        'cafe-reviews'

    Returns an empty string when nothing sluggable remains; callers choose
    their own fallback.
    """
    if not name:
        return ""
    normalized = normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return _slugify_lower(normalized, sep="-").strip("-")
