"""Rename resolution strategies.

A rename resolver pairs an artifact that disappeared from the build with
one that newly appeared, so that ``app-1a2b.js`` -> ``app-3c4d.js`` is
reported as a size change instead of a removal plus an addition.

Every resolver implements the ``RenameResolver`` protocol: a callable
taking the removed path and the still-unclaimed new paths, returning one
of those paths or ``None``.  Resolvers may be plain functions or
coroutine functions.

Strategies are selected by identifier via ``load_rename_resolver``:

- ``"none"`` (or empty)       : no rename detection
- ``"similarity[:cutoff]"``   : ``SimilarityRenameResolver``
- a pattern with ``[hash]``   : ``PatternRenameResolver``
- ``"package.module:attr"``   : a user-supplied callable
"""

from __future__ import annotations

import difflib
import importlib
import logging
import posixpath
import re
from collections.abc import Awaitable, Sequence
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

_HASH_SUFFIX = re.compile(r"[-.][0-9a-fA-F]{5,}(?=\.|$)")
_PLACEHOLDER = re.compile(r"\[(name|hash|extname)\]")


@runtime_checkable
class RenameResolver(Protocol):
    """Protocol for rename resolution strategies."""

    def __call__(
        self, removed_path: str, candidate_paths: Sequence[str]
    ) -> str | None | Awaitable[str | None]:
        """Return the path *removed_path* was renamed to, or ``None``.

        Implementations must only return an element of *candidate_paths*.
        """
        ...


class SimilarityRenameResolver:
    """Pairs files by name similarity after stripping hash suffixes.

    Only candidates in the same directory with the same extension are
    considered.  Among those, the candidate whose hash-free filename has the
    highest ``difflib`` ratio wins, provided it reaches *cutoff*.  Ties go
    to the earliest candidate.

    Parameters
    ----------
    cutoff:
        Minimum similarity ratio in ``[0, 1]``.
    """

    def __init__(self, cutoff: float = 0.6) -> None:
        if not 0.0 <= cutoff <= 1.0:
            raise ValueError(f"Similarity cutoff must be within [0, 1], got {cutoff}")
        self.cutoff = cutoff

    @staticmethod
    def _stem(path: str) -> str:
        return _HASH_SUFFIX.sub("", posixpath.basename(path))

    def __call__(self, removed_path: str, candidate_paths: Sequence[str]) -> str | None:
        directory = posixpath.dirname(removed_path)
        extension = posixpath.splitext(removed_path)[1]
        removed_stem = self._stem(removed_path)

        best: str | None = None
        best_ratio = -1.0
        for candidate in candidate_paths:
            if posixpath.dirname(candidate) != directory:
                continue
            if posixpath.splitext(candidate)[1] != extension:
                continue
            ratio = difflib.SequenceMatcher(None, removed_stem, self._stem(candidate)).ratio()
            if ratio >= self.cutoff and ratio > best_ratio:
                best, best_ratio = candidate, ratio
        return best


class PatternRenameResolver:
    """Pairs files whose names match a template and differ only in the hash.

    The template describes a filename using the placeholders ``[name]``,
    ``[hash]`` and ``[extname]`` (extension including the dot), e.g.
    ``"[name]-[hash].js"`` or ``"[name].[hash][extname]"``.  A removed file
    and a candidate in the same directory are a rename when both match the
    template and agree on every placeholder except ``[hash]``.
    """

    def __init__(self, template: str) -> None:
        if "[hash]" not in template:
            raise ValueError(f"Rename pattern must contain [hash]: {template!r}")
        self.template = template
        self._regex = self._compile(template)

    @staticmethod
    def _compile(template: str) -> re.Pattern[str]:
        parts: list[str] = []
        last = 0
        for match in _PLACEHOLDER.finditer(template):
            parts.append(re.escape(template[last:match.start()]))
            token = match.group(1)
            if token == "name":
                parts.append(r"(?P<name>.+)")
            elif token == "hash":
                parts.append(r"(?P<hash>[^/]+?)")
            else:
                parts.append(r"(?P<extname>\.[^./]+)")
            last = match.end()
        parts.append(re.escape(template[last:]))
        return re.compile("^" + "".join(parts) + "$")

    def _key(self, path: str) -> tuple[str, tuple[tuple[str, str], ...]] | None:
        match = self._regex.match(posixpath.basename(path))
        if match is None:
            return None
        groups = tuple(
            (k, v) for k, v in sorted(match.groupdict().items()) if k != "hash"
        )
        return posixpath.dirname(path), groups

    def __call__(self, removed_path: str, candidate_paths: Sequence[str]) -> str | None:
        key = self._key(removed_path)
        if key is None:
            return None
        for candidate in candidate_paths:
            if self._key(candidate) == key:
                return candidate
        return None


def _import_callable(identifier: str) -> RenameResolver:
    module_name, _, attr = identifier.partition(":")
    try:
        module = importlib.import_module(module_name)
        resolver = getattr(module, attr)
    except (ImportError, AttributeError) as exc:
        raise ValueError(f"Cannot load rename resolver {identifier!r}: {exc}") from exc
    if not callable(resolver):
        raise ValueError(f"Rename resolver {identifier!r} is not callable")
    return resolver


def load_rename_resolver(identifier: str | None) -> RenameResolver | None:
    """Build a rename resolver from a configuration identifier.

    Returns ``None`` when rename detection is disabled.

    Raises
    ------
    ValueError
        If the identifier does not name a known strategy.
    """
    if not identifier or identifier.strip().lower() == "none":
        return None

    identifier = identifier.strip()
    if identifier == "similarity" or identifier.startswith("similarity:"):
        _, _, raw_cutoff = identifier.partition(":")
        try:
            cutoff = float(raw_cutoff) if raw_cutoff else 0.6
        except ValueError as exc:
            raise ValueError(f"Invalid similarity cutoff: {raw_cutoff!r}") from exc
        logger.info("Rename detection: similarity (cutoff %.2f)", cutoff)
        return SimilarityRenameResolver(cutoff)

    if "[hash]" in identifier:
        logger.info("Rename detection: pattern %s", identifier)
        return PatternRenameResolver(identifier)

    if ":" in identifier:
        logger.info("Rename detection: custom resolver %s", identifier)
        return _import_callable(identifier)

    raise ValueError(f"Unknown rename resolver: {identifier!r}")
