"""Short URL building."""

from typing import Optional


def normalize_path_prefix(prefix: Optional[str]) -> str:
    """Return ``prefix`` as '/segment' (leading slash, no trailing), or '' for none."""
    p = (prefix or "").strip().strip("/")
    return "/" + p if p else ""


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Join the public base URL, an optional mount prefix and the code.

    >>> build_short_url("ex1", "https://sho.rt/", "l/")
    'https://sho.rt/l/ex1'
    """
    return f"{base_url.rstrip('/')}{normalize_path_prefix(path_prefix)}/{short_code}"
