"""
core/auth.py
-------------

Helpers that turn store credentials into authenticated requests.

These helpers centralise construction of the API base URL and of the
HTTP headers required to call Vend.  Keeping them in one place ensures
the bearer token is only ever placed in the ``Authorization`` header
and never ends up in a URL or a log line.
"""

from __future__ import annotations

import re
from typing import Dict

VEND_HOST = "vendhq.com"
API_PATH = "/api/2.0"

# A store name is a single DNS label under vendhq.com.
DOMAIN_PREFIX_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?$")


def normalize_domain_prefix(domain_prefix: str) -> str:
    """Return the store name from a domain prefix.

    Saves people who write ``mystore.vendhq.com``: everything after the
    first period is dropped and surrounding whitespace removed.

    :param domain_prefix: store name or full store host name
    :return: the bare store name (``mystore``)
    """
    return domain_prefix.strip().split(".")[0]


def is_valid_domain_prefix(domain_prefix: str) -> bool:
    """True when ``domain_prefix`` is a bare store name usable as a host label."""
    return bool(DOMAIN_PREFIX_RE.fullmatch(domain_prefix))


def get_base_url(domain_prefix: str) -> str:
    """Return the API 2.0 base URL for a store, without trailing slash.

    :raises ValueError: if ``domain_prefix`` is not a single host label
    """
    if not is_valid_domain_prefix(domain_prefix):
        raise ValueError(f"Invalid domain prefix {domain_prefix!r}")
    return f"https://{domain_prefix}.{VEND_HOST}{API_PATH}"


def build_auth_headers(token: str, user_agent: str) -> Dict[str, str]:
    """Create the headers required for an authenticated call.

    :param token: personal API access token
    :param user_agent: identifying client string
    :return: a dictionary of headers suitable for use with httpx
    """
    return {
        "Authorization": f"Bearer {token}",
        "User-Agent": user_agent,
        "Accept": "application/json",
    }
