"""Masking for URLs and user-agent strings."""

import re
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit

from .format_helpers import FormatPreserver, is_ascii_alnum
from .routing import FieldRouter, build_table

_SCHEME = re.compile(r"[a-zA-Z][a-zA-Z0-9+.-]*")

# Ordered: the first substring found wins. Chrome user agents also mention
# Safari, so Chrome is checked first.
BROWSERS: Tuple[Tuple[str, str], ...] = (
    ("Chrome", "Chrome"),
    ("Firefox", "Firefox"),
    ("Safari", "Safari"),
    ("Edge", "Edge"),
    ("Opera", "Opera"),
)
OPERATING_SYSTEMS: Tuple[Tuple[str, str], ...] = (
    ("Windows", "Windows"),
    ("Mac OS", "macOS"),
    ("Linux", "Linux"),
    ("Android", "Android"),
    ("iPhone", "iOS"),
    ("iPad", "iOS"),
)
UNKNOWN_BROWSER = "Unknown Browser"
UNKNOWN_OS = "Unknown OS"


def _split(url: str) -> Optional[SplitResult]:
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for out-of-range or non-numeric ports
    except ValueError:
        return None
    return parts


def is_valid_url(url: Any) -> bool:
    """Check that ``url`` is an absolute URL with a scheme and a host."""
    if not isinstance(url, str) or not url or any(char.isspace() for char in url):
        return False

    parts = _split(url)
    if parts is None or not _SCHEME.fullmatch(parts.scheme or ""):
        return False

    return bool(parts.hostname)


def _host(parts: SplitResult) -> str:
    hostinfo = parts.netloc.rpartition("@")[2]
    if parts.port is not None or hostinfo.endswith(":"):
        return hostinfo[: hostinfo.rfind(":")]
    return hostinfo


def _mask_path(path: str) -> str:
    segments = path.strip("/").split("/")
    return "/" + "/".join(FormatPreserver.mask_where(segment, is_ascii_alnum) for segment in segments)


def _mask_query(query: str) -> str:
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode(
        [(key, FormatPreserver.mask_run(len(value))) for key, value in pairs],
        safe="*",
    )


def mask_url(url: str, validate: bool = True) -> Optional[str]:
    """Mask the path, query values and fragment of a URL.

    Scheme, host and port are kept. Letters and digits in path segments
    become ``*``, query keys stay readable while their values become runs
    of ``*`` of the same length, and the fragment is masked entirely.
    Credentials in the authority are dropped.

    Args:
        url: The URL to mask
        validate: Reject URLs that are not absolute ``scheme://host`` URLs

    Returns:
        The masked URL, or None if the URL is invalid or cannot be parsed.

    Examples:
        >>> mask_url("https://example.com/user/123?id=42#top")
        'https://example.com/****/***?id=**#***'
    """
    if validate and not is_valid_url(url):
        return None

    if not isinstance(url, str):
        return None

    parts = _split(url)
    if parts is None:
        return None

    masked = []
    if parts.scheme:
        masked.append(f"{parts.scheme}://")
    masked.append(_host(parts))
    if parts.port is not None:
        masked.append(f":{parts.port}")
    if parts.path:
        masked.append(_mask_path(parts.path))
    if parts.query:
        masked.append(f"?{_mask_query(parts.query)}")
    if parts.fragment:
        masked.append(f"#{FormatPreserver.mask_run(len(parts.fragment))}")

    return "".join(masked)


def _detect(user_agent: str, candidates: Tuple[Tuple[str, str], ...], unknown: str) -> str:
    for needle, family in candidates:
        if needle in user_agent:
            return family
    return unknown


def detect_browser(user_agent: str) -> str:
    return _detect(user_agent, BROWSERS, UNKNOWN_BROWSER)


def detect_os(user_agent: str) -> str:
    return _detect(user_agent, OPERATING_SYSTEMS, UNKNOWN_OS)


def mask_user_agent(user_agent: str) -> str:
    """Reduce a user-agent string to ``"{browser} on {os}"``.

    Examples:
        >>> mask_user_agent("Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0")
        'Chrome on Windows'
    """
    if not user_agent:
        return ""

    return f"{detect_browser(user_agent)} on {detect_os(user_agent)}"


FIELD_ROUTER = FieldRouter(
    exact=build_table(
        {
            "url": ("url", "request_uri", "redirect_url", "referrer"),
            "user_agent": ("user_agent", "http_user_agent"),
        }
    ),
    handlers={
        "url": mask_url,
        "user_agent": mask_user_agent,
    },
)


def mask_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Mask URL and user-agent fields of a mapping; other fields pass through."""
    return FIELD_ROUTER.apply(data)
