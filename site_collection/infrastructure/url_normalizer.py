"""URL Normalizer — default canonicalization used for favicon matching.

Invariants:
    - Output is stable: normalize_url(normalize_url(x)) == normalize_url(x)
    - Non-string, blank or unparsable input raises UrlNormalizationError
    - Scheme and host are lower-cased; www., default ports, fragments,
      utm_* parameters and trailing slashes are dropped; query is sorted

Design Decisions:
    - urllib.parse over a third-party normalizer: only equality of two
      normalized strings matters, not a full RFC 3986 implementation
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from site_collection.core.errors import UrlNormalizationError


_DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443, "ftp": 21}


def normalize_url(raw_url: str) -> str:
    """Canonical form of raw_url. Satisfies core.boundary_protocols.UrlNormalizer."""
    if not isinstance(raw_url, str):
        raise UrlNormalizationError(raw_url, "not a string")
    url = raw_url.strip()
    if not url:
        raise UrlNormalizationError(raw_url, "empty")
    if url.startswith("//"):
        url = "http:" + url
    elif "://" not in url and not url.startswith(("about:", "data:", "mailto:")):
        url = "http://" + url

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise UrlNormalizationError(raw_url, str(e)) from e

    scheme = parts.scheme.lower()
    if not parts.netloc:
        return urlunsplit((scheme, "", parts.path, parts.query, ""))

    host = (parts.hostname or "").lower()
    if not host:
        raise UrlNormalizationError(raw_url, "missing host")
    if host.startswith("www."):
        host = host[4:]
    if ":" in host:
        host = f"[{host}]"
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    if parts.username:
        auth = parts.username + (f":{parts.password}" if parts.password else "")
        host = f"{auth}@{host}"

    path = parts.path
    while "//" in path:
        path = path.replace("//", "/")
    path = path.rstrip("/")

    query = sorted(
        (k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if not k.lower().startswith("utm_")
    )
    return urlunsplit((scheme, host, path, urlencode(query), ""))
