"""IPv4 and IPv6 address anonymization.

Addresses are anonymized textually, by replacing the last dotted octet or
the last colon-separated group, so the output keeps the notation of the
input (compressed IPv6 stays compressed).
"""

import ipaddress
import re
from typing import Iterable, List, Mapping, Optional, Protocol

from piimask.core.detection import is_masked as _is_masked

IPV4 = "ipv4"
IPV6 = "ipv6"

_IPV4_LAST_OCTET = re.compile(r"\.\d+$")
_IPV6_LAST_GROUP = re.compile(r":[^:]*$")

# Checked in order; the first header holding a valid address wins.
IP_HEADER_KEYS = (
    "HTTP_CLIENT_IP",
    "HTTP_X_FORWARDED_FOR",
    "HTTP_X_FORWARDED",
    "HTTP_X_CLUSTER_CLIENT_IP",
    "HTTP_FORWARDED_FOR",
    "HTTP_FORWARDED",
    "REMOTE_ADDR",
)


class RequestContext(Protocol):
    """Source of request headers used to discover the client address."""

    def headers(self) -> Mapping[str, str]:
        ...


class EnvironContext:
    """``RequestContext`` over a WSGI/CGI environ mapping."""

    def __init__(self, environ: Mapping[str, str]):
        self._environ = environ

    def headers(self) -> Mapping[str, str]:
        return self._environ


def classify(ip: str) -> Optional[str]:
    """Return ``"ipv4"``, ``"ipv6"`` or None for anything that is not an address."""
    if not isinstance(ip, str) or not ip or ip != ip.strip():
        return None

    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return None

    if address.version == 4:
        return IPV4
    if getattr(address, "scope_id", None):
        # Zone ids ("fe80::1%eth0") are not plain addresses.
        return None
    return IPV6


def anonymize(ip: str) -> Optional[str]:
    """Zero the last IPv4 octet or the last IPv6 group.

    Returns:
        The anonymized address, or None if ``ip`` is not a valid address.

    Examples:
        >>> anonymize("192.168.1.100")
        '192.168.1.0'
        >>> anonymize("2001:db8:85a3::8a2e:370:7334")
        '2001:db8:85a3::8a2e:370:0'
        >>> anonymize("::1")
        '::0'
    """
    kind = classify(ip)

    if kind == IPV4:
        return _IPV4_LAST_OCTET.sub(".0", ip)

    if kind == IPV6:
        if ip == "::":
            return ip
        return _IPV6_LAST_GROUP.sub(":0", ip)

    return None


def mask_last_segment(ip: str) -> Optional[str]:
    """Replace the last octet with ``***`` or the last IPv6 group with ``****``."""
    kind = classify(ip)

    if kind == IPV4:
        return _IPV4_LAST_OCTET.sub(".***", ip)

    if kind == IPV6:
        return _IPV6_LAST_GROUP.sub(":****", ip)

    return None


def anonymize_many(ips: Iterable[str]) -> List[str]:
    """Anonymize several addresses, dropping the invalid ones."""
    anonymized = []
    for ip in ips:
        result = anonymize(ip)
        if result is not None:
            anonymized.append(result)
    return anonymized


def client_ip(context: RequestContext) -> Optional[str]:
    """Find the first valid address in the request headers.

    Forwarding headers may carry comma-separated chains; each candidate is
    trimmed and checked in order.
    """
    headers = context.headers()

    for key in IP_HEADER_KEYS:
        raw = headers.get(key)
        if not raw:
            continue
        for candidate in str(raw).split(","):
            candidate = candidate.strip()
            if classify(candidate) is not None:
                return candidate

    return None


def current_user_anonymized(context: RequestContext) -> Optional[str]:
    """Anonymize the requesting client's address, or None if none is found."""
    ip = client_ip(context)
    return anonymize(ip) if ip else None


def is_masked(ip: str) -> bool:
    """Check whether an address looks anonymized."""
    return _is_masked(ip)
