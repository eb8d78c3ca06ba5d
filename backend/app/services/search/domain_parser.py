"""
Domain extraction from location URLs and email addresses.

URLs are reduced to their host: scheme, credentials, port, and path are
dropped and a leading "www." is removed, so "http://www.example.org/path"
yields "example.org". Email addresses yield the part after the last "@".
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Optional, Set
from urllib.parse import urlsplit

WWW_PREFIX = "www."


def host_from_url(url: str) -> Optional[str]:
    raw = (url or "").strip()
    if not raw:
        return None
    if "://" not in raw:
        raw = f"http://{raw}"
    try:
        host = urlsplit(raw).hostname
    except ValueError:
        return None
    if not host:
        return None
    host = host.lower().rstrip(".")
    if host.startswith(WWW_PREFIX):
        host = host[len(WWW_PREFIX) :]
    return host or None


def host_from_email(email: str) -> Optional[str]:
    local, sep, host = (email or "").strip().rpartition("@")
    if not sep or not local:
        return None
    host = host.lower().rstrip(".")
    return host or None


def normalize_domain_query(domain: str) -> Optional[str]:
    """Reduce a domain filter value to a bare host; email addresses keep only their host."""
    value = (domain or "").strip().lower()
    if "@" in value:
        return host_from_email(value)
    return value or None


def derive_domains(
    urls: Iterable[str],
    emails: Iterable[str],
    excluded: AbstractSet[str] = frozenset(),
) -> Set[str]:
    """Collect hosts from URLs and emails, leaving out excluded webmail domains."""
    domains: Set[str] = set()
    for url in urls:
        host = host_from_url(url)
        if host and host not in excluded:
            domains.add(host)
    for email in emails:
        host = host_from_email(email)
        if host and host not in excluded:
            domains.add(host)
    return domains
