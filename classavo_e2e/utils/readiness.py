"""HTTP helpers for checking the application under test is being served."""

from __future__ import annotations

import httpx

from .config import get_logger

logger = get_logger("readiness")


def fetch_root(base_url: str, timeout: float = 5.0) -> httpx.Response:
    """GET the application's root document."""
    return httpx.get(f"{base_url.rstrip('/')}/", timeout=timeout, follow_redirects=True)


def app_is_reachable(base_url: str, timeout: float = 2.0) -> bool:
    """Return True when the base URL answers with a non-error status."""
    try:
        response = fetch_root(base_url, timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("Application at %s is not reachable: %s", base_url, exc)
        return False
    if response.status_code >= 400:
        logger.warning("Application at %s answered %d", base_url, response.status_code)
        return False
    return True
