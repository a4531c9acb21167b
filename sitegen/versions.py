"""Version extraction, ordering and the filename pivot."""

from __future__ import annotations

import functools
from typing import Dict, Iterable, List, Sequence

from .logging import get_logger
from .models import FileNode, VersionBucket

_LOGGER = get_logger("versions")

_DIGITS = frozenset("0123456789")


def natural_compare(left: str, right: str) -> int:
    """Three-way natural comparison of two version strings.

    Runs of ASCII digits compare as numbers, except that a run starting with
    ``0`` compares digit by digit from the left, like a decimal fraction
    (``"05"`` orders before ``"1"``). Every other character, including
    non-ASCII digits, compares by code point. Whitespace is skipped.
    """
    i = j = 0
    while True:
        while i < len(left) and left[i].isspace():
            i += 1
        while j < len(right) and right[j].isspace():
            j += 1
        if i >= len(left) or j >= len(right):
            return (i < len(left)) - (j < len(right))

        a, b = left[i], right[j]
        if a in _DIGITS and b in _DIGITS:
            if a == "0" or b == "0":
                result, i, j = _compare_fraction(left, i, right, j)
            else:
                result, i, j = _compare_magnitude(left, i, right, j)
            if result:
                return result
            continue

        if a != b:
            return -1 if a < b else 1
        i += 1
        j += 1


natural_key = functools.cmp_to_key(natural_compare)


def _is_digit_at(value: str, index: int) -> bool:
    return index < len(value) and value[index] in _DIGITS


def _compare_magnitude(left: str, i: int, right: str, j: int) -> tuple[int, int, int]:
    # The longer run wins; equal lengths fall back to the first differing digit.
    bias = 0
    while True:
        left_digit = _is_digit_at(left, i)
        right_digit = _is_digit_at(right, j)
        if not left_digit and not right_digit:
            return bias, i, j
        if not left_digit:
            return -1, i, j
        if not right_digit:
            return 1, i, j
        if not bias and left[i] != right[j]:
            bias = -1 if left[i] < right[j] else 1
        i += 1
        j += 1


def _compare_fraction(left: str, i: int, right: str, j: int) -> tuple[int, int, int]:
    while True:
        left_digit = _is_digit_at(left, i)
        right_digit = _is_digit_at(right, j)
        if not left_digit and not right_digit:
            return 0, i, j
        if not left_digit:
            return -1, i, j
        if not right_digit:
            return 1, i, j
        if left[i] != right[j]:
            return (-1 if left[i] < right[j] else 1), i, j
        i += 1
        j += 1


def extract_versions(root: FileNode) -> List[VersionBucket]:
    """Turn the top level of a snapshot into version buckets, in listing order."""
    buckets: List[VersionBucket] = []
    for child in root.children:
        if not child.children or "_" not in child.name:
            _LOGGER.debug("Skipping non-version entry %s in %s", child.name, root.name)
            continue
        buckets.append(
            VersionBucket(
                version=child.name.replace("_", "."),
                files=[grandchild.name for grandchild in child.children],
            )
        )
    return buckets


def sort_versions(buckets: Iterable[VersionBucket]) -> List[VersionBucket]:
    """Return buckets newest first by natural version order."""
    return sorted(
        buckets, key=lambda bucket: natural_key(bucket.version), reverse=True
    )


def merge_versions(
    standard: Sequence[VersionBucket], gold: Sequence[VersionBucket]
) -> List[VersionBucket]:
    """Sort standard buckets and append gold files to exactly matching versions.

    Each gold bucket is consumed by the first (newest-sorted) standard bucket
    with the same version. Gold versions without a standard counterpart are
    dropped.
    """
    merged = sort_versions(standard)
    known = {bucket.version for bucket in merged}
    pending = [list(gold_bucket.files) for gold_bucket in gold]

    for bucket in merged:
        for index, gold_bucket in enumerate(gold):
            if gold_bucket.version == bucket.version and pending[index]:
                bucket.files.extend(pending[index])
                pending[index] = []

    for gold_bucket in gold:
        if gold_bucket.version not in known:
            _LOGGER.warning(
                "Dropping gold version %s (%d files): no matching standard version",
                gold_bucket.version,
                len(gold_bucket.files),
            )
    return merged


def build_pivot(buckets: Sequence[VersionBucket]) -> Dict[str, List[str]]:
    """Map each filename to the versions containing it, newest first."""
    pivot: Dict[str, List[str]] = {}
    for bucket in buckets:
        for filename in bucket.files:
            pivot.setdefault(filename, []).append(bucket.version)
    return pivot


__all__ = [
    "build_pivot",
    "extract_versions",
    "merge_versions",
    "natural_compare",
    "natural_key",
    "sort_versions",
]
