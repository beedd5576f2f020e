"""HTML sanitization for free-text bookmark fields returned to clients."""
from bleach.sanitizer import Cleaner


_ALLOWED_TAGS = {
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "del",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "i",
    "img",
    "li",
    "ol",
    "p",
    "pre",
    "s",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
}

_ALLOWED_ATTRS = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

_ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

# strip=False escapes disallowed tags instead of dropping them, so the text
# of e.g. a <script> block stays visible but inert
_CLEANER = Cleaner(
    tags=_ALLOWED_TAGS,
    attributes=_ALLOWED_ATTRS,
    protocols=_ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize_text(value: str | None) -> str | None:
    """Neutralize scripts and event handlers while keeping benign markup."""
    if not value:
        return value
    return _CLEANER.clean(value)
