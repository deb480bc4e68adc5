from typing import Mapping, Optional


def find_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Return the key under which ``name`` is stored, ignoring case."""
    lowered = name.lower()
    for key in headers:
        if key.lower() == lowered:
            return key
    return None


def merge_headers(
    base: Mapping[str, str], override: Mapping[str, str]
) -> dict[str, str]:
    """Merge two header mappings, ``override`` winning on (case-insensitive) conflicts."""
    merged = dict(base)
    for key, value in override.items():
        existing = find_header(merged, key)
        if existing is not None:
            del merged[existing]
        merged[key] = value
    return merged
