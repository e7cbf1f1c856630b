"""URL Rules — pure predicates on raw location strings.

Invariants:
    - Non-string input is never a URL
    - "localhost" is a URL even without scheme or dot
    - data:, view-source:, mailto:, about:, chrome-extension: and magnet: count
      as URLs only when they parse
"""

import re
from urllib.parse import urlsplit


_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)
_DOMAIN_WITH_SCHEME_RE = re.compile(r"^\w{2,5}://[^\s/$.?#].\S*$", re.IGNORECASE)
_QUOTED_RE = re.compile(r'^".*"$')
_NOT_URL_SHAPE_RE = re.compile(r"(^\?)|(\?.+\s)|(^\.)|(^[^.+]*[^/]*\.$)")
_URL_CHARS_RE = re.compile(r"[?./\s:]")
_SPECIAL_SCHEME_RE = re.compile(
    r"^(data|view-source|mailto|about|chrome-extension|magnet):.*", re.IGNORECASE,
)


def get_scheme(value: str) -> str | None:
    match = _SCHEME_RE.match(value)
    return match.group(0).lower() if match else None


def _can_parse(value: str) -> bool:
    try:
        return bool(urlsplit(value).scheme)
    except ValueError:
        return False


def is_not_url(value: object) -> bool:
    """Whether value looks like search text rather than a navigable URL."""
    if not isinstance(value, str):
        return True
    text = value.strip()
    if text.lower() == "localhost":
        return False
    if _QUOTED_RE.match(text):
        return True
    scheme = get_scheme(text)
    if (
        _NOT_URL_SHAPE_RE.search(text)
        or not _URL_CHARS_RE.search(text)
        or (scheme is None and re.search(r"\s", text))
    ):
        return True
    if _SPECIAL_SCHEME_RE.match(text):
        return not _can_parse(text)
    if scheme and scheme != "file://":
        return not _DOMAIN_WITH_SCHEME_RE.match(text)
    return False
