"""
camelCase to snake_case key normalization for request bodies.
"""

import re
from typing import Any

_UPPER = re.compile(r"([A-Z])")


def camel_to_snake(key: Any) -> Any:
    """
    Rewrite a single key to snake_case.

    Every upper-case letter gets a leading underscore, then the key is
    lower-cased: 'anonymousId' -> 'anonymous_id', 'appBuild' -> 'app_build'.
    Non-string keys are returned unchanged.
    """
    if not isinstance(key, str):
        return key
    return _UPPER.sub(r"_\1", key).lower()


def normalize_keys(value: Any) -> Any:
    """
    Recursively convert every mapping key in a JSON-compatible value.

    Lists and tuples are mapped element-wise (always returned as lists),
    mappings are rebuilt with converted keys, and primitives pass through.
    The input is never mutated.
    """
    if isinstance(value, dict):
        return {camel_to_snake(k): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_keys(item) for item in value]
    return value
