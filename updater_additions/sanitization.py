"""Input sanitization for submitted addition fields.

Submitted fields come straight from an admin form or the command line, so
every value is cleaned before it is hashed or persisted:

- Text fields: markup, control characters, line breaks and percent-encoded
  octets are removed and whitespace is collapsed.
- Repository URIs: unsafe characters are stripped, scheme-less input is
  given ``http://``, disallowed protocols are dropped and trailing slashes
  are removed.
"""

import re
from typing import Optional
from urllib.parse import urlparse

from updater_additions.logging_config import logger

MAX_URL_LENGTH = 2048

# Protocols accepted by the URL cleaner; anything else empties the URL
ALLOWED_PROTOCOLS = frozenset(
    {
        "http",
        "https",
        "ftp",
        "ftps",
        "mailto",
        "news",
        "irc",
        "gopher",
        "nntp",
        "feed",
        "telnet",
        "mms",
        "rtsp",
        "sms",
        "svn",
        "tel",
        "fax",
        "xmpp",
        "webcal",
        "urn",
    }
)

# Protocols a hosted repository may actually use
REPOSITORY_URL_SCHEMES = frozenset({"http", "https"})

# Control characters to remove
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# <script>/<style> blocks are removed together with their content
_SCRIPT_STYLE_PATTERN = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)

_TAG_PATTERN = re.compile(r"<[^>]*>")

# A '<' that does not open a tag is kept as an entity
_LONE_LESS_THAN_PATTERN = re.compile(r"<(?![a-zA-Z/!?])")

_PERCENT_OCTET_PATTERN = re.compile(r"%[a-fA-F0-9]{2}")

_URL_UNSAFE_PATTERN = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\u0080-\U0010ffff]")

_PROTOCOL_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")

_PHP_FILE_PATTERN = re.compile(r"^[a-z0-9-]+?\.php", re.IGNORECASE)

# Pattern to detect HTML-like content in URLs (potential XSS vectors)
HTML_PATTERN = re.compile(r"<[a-zA-Z][^>]*>", re.IGNORECASE)


def sanitize_text_field(value: Optional[str]) -> str:
    """
    Sanitize a single-line plain text value.

    Args:
        value: Raw submitted value

    Returns:
        Cleaned text, or an empty string for None/empty input
    """
    if value is None:
        return ""

    if not isinstance(value, str):
        logger.debug(f"Coercing non-string text field value of type {type(value).__name__}")
        value = str(value)

    filtered = CONTROL_CHAR_PATTERN.sub("", value)

    if "<" in filtered:
        filtered = _LONE_LESS_THAN_PATTERN.sub("&lt;", filtered)
        filtered = _SCRIPT_STYLE_PATTERN.sub("", filtered)
        filtered = _TAG_PATTERN.sub("", filtered)

    filtered = re.sub(r"[\r\n\t ]+", " ", filtered).strip()

    found = False
    while _PERCENT_OCTET_PATTERN.search(filtered):
        filtered = _PERCENT_OCTET_PATTERN.sub("", filtered)
        found = True
    if found:
        filtered = re.sub(r" +", " ", filtered).strip()

    return filtered


def clean_url(value: Optional[str]) -> str:
    """
    Clean a URL for storage.

    Spaces are encoded, characters outside the safe URL alphabet are
    removed, CR/LF octets are stripped and URLs without a protocol get
    ``http://``. A URL with a protocol outside ``ALLOWED_PROTOCOLS`` is
    returned as an empty string.

    Args:
        value: Raw URL

    Returns:
        Cleaned URL or empty string
    """
    if not value:
        return ""

    url = str(value).strip().replace(" ", "%20")
    url = _URL_UNSAFE_PATTERN.sub("", url)
    if not url:
        return url

    if not url.lower().startswith("mailto:"):
        # Repeat until stable so nested sequences like %0%0dd are removed too
        previous = None
        while previous != url:
            previous = url
            url = re.sub(r"%0[dDaA]", "", url)

    url = url.replace(";//", "://")

    if ":" not in url and url[0] not in ("/", "#", "?") and not _PHP_FILE_PATTERN.match(url):
        url = "http://" + url

    match = _PROTOCOL_PATTERN.match(url)
    if match and match.group(1).lower() not in ALLOWED_PROTOCOLS:
        logger.debug(f"Dropping URL with disallowed protocol: {match.group(1)}")
        return ""

    return url


def untrailingslashit(value: str) -> str:
    """Remove trailing forward and back slashes."""
    return value.rstrip("/\\")


def sanitize_repository_uri(value: Optional[str]) -> str:
    """
    Normalize a submitted repository URI.

    Args:
        value: Raw submitted URI

    Returns:
        Absolute URL without trailing slash, or empty string if unusable
    """
    return untrailingslashit(clean_url(value))


def check_repository_uri(uri: str) -> Optional[str]:
    """
    Check that a sanitized URI points at a hosted repository.

    Args:
        uri: URI already passed through sanitize_repository_uri()

    Returns:
        None if the URI is acceptable, otherwise a short reason
    """
    if not uri:
        return "empty or disallowed URI"

    if len(uri) > MAX_URL_LENGTH:
        return f"too long: {len(uri)} chars"

    try:
        parsed = urlparse(uri)
    except ValueError as e:
        return f"parse error: {e}"

    if parsed.scheme.lower() not in REPOSITORY_URL_SCHEMES:
        return f"disallowed scheme: {parsed.scheme or 'none'}"

    if not parsed.hostname:
        return "no host"

    if HTML_PATTERN.search(uri):
        return "contains HTML-like content"

    return None
