"""Recursive payload size limiting for summary details.

Bounds string length, list length and mapping key count while letting a
set of exempt keys through untouched. Whenever anything was cut, the
untruncated value is handed back so a reader can still see it in full.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_MAX_STRING_LENGTH = 200
DEFAULT_MAX_CONTAINER_SIZE = 3
TRUNCATION_MARKER = "…"


@dataclass(frozen=True)
class TruncationPolicy:
    """Limits applied by ``limit_data_size``."""

    max_string_length: int = DEFAULT_MAX_STRING_LENGTH
    max_container_size: int = DEFAULT_MAX_CONTAINER_SIZE
    exempt_keys: frozenset = field(default_factory=frozenset)
    marker: str = TRUNCATION_MARKER

    def with_exempt(self, *keys: str) -> "TruncationPolicy":
        """Copy of this policy with a different exempt key set."""
        return replace(self, exempt_keys=frozenset(keys))


@dataclass(frozen=True)
class LimitResult:
    """Outcome of limiting one value.

    ``original`` is only set when ``truncated`` is True.
    """

    value: Any
    truncated: bool = False
    original: Any = None


def limit_data_size(data: Any, policy: TruncationPolicy | None = None) -> LimitResult:
    """Limit the size of a JSON-like payload.

    Limiting is idempotent: feeding a result back in returns it unchanged.
    To get that, a string of exactly ``max_string_length + len(marker)``
    characters that ends with the marker is treated as already limited and
    passes through with ``truncated=False``, even when it arrived that way
    in the raw input. With an empty marker no string is exempt.

    Args:
        data: String, list, mapping or scalar to limit
        policy: Limits and exempt keys (defaults to 200 chars / 3 items)

    Returns:
        LimitResult with the bounded value
    """
    policy = policy or TruncationPolicy()

    if isinstance(data, str):
        return _limit_string(data, policy)
    if isinstance(data, (list, tuple)):
        return _limit_list(data, policy)
    if isinstance(data, Mapping):
        return _limit_mapping(data, policy)
    return LimitResult(value=data)


def _limit_string(data: str, policy: TruncationPolicy) -> LimitResult:
    limit = policy.max_string_length
    if len(data) <= limit or _is_marked_prefix(data, policy):
        return LimitResult(value=data)
    return LimitResult(
        value=data[:limit] + policy.marker,
        truncated=True,
        original=data,
    )


def _is_marked_prefix(data: str, policy: TruncationPolicy) -> bool:
    # Output of an earlier pass with the same policy
    return (
        bool(policy.marker)
        and len(data) == policy.max_string_length + len(policy.marker)
        and data.endswith(policy.marker)
    )


def _limit_list(data, policy: TruncationPolicy) -> LimitResult:
    truncated = len(data) > policy.max_container_size
    result = []
    for item in data[: policy.max_container_size]:
        limited = limit_data_size(item, policy)
        truncated = truncated or limited.truncated
        result.append(limited.value)
    return LimitResult(
        value=result,
        truncated=truncated,
        original=data if truncated else None,
    )


def _limit_mapping(data: Mapping, policy: TruncationPolicy) -> LimitResult:
    truncated = False
    result: dict[str, Any] = {}
    count = 0
    for key, value in data.items():
        if key in policy.exempt_keys:
            result[key] = value
            continue
        if count >= policy.max_container_size:
            truncated = True
            continue
        limited = limit_data_size(value, policy)
        truncated = truncated or limited.truncated
        result[key] = limited.value
        count += 1
    return LimitResult(
        value=result,
        truncated=truncated,
        original=data if truncated else None,
    )
