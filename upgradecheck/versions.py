"""Major-version parsing and upgrade-candidate selection.

Compatibility is decided on the leading dot-delimited segment only, compared
as a string: ``"1"`` and ``"01"`` are different major versions.
"""

from collections.abc import Iterable, Sequence
from typing import Literal

from packaging.version import InvalidVersion, Version

from .errors import AlreadyLatestError, NoCompatibleVersionError, ParseError

Order = Literal["registry", "semver"]

_UNPARSEABLE = Version("0")


def major_version_of(version: str) -> str:
    """Return the part of ``version`` before the first ``"."``.

    Args:
        version: Version string such as ``"2.13.4"``.

    Returns:
        The major component, e.g. ``"2"``.

    Raises:
        ParseError: if ``version`` is empty or has no ``"."``.
    """
    if not version or "." not in version:
        raise ParseError(version)
    return version.split(".", 1)[0]


def compatible_versions(current: str, versions: Iterable[str]) -> list[str]:
    """Filter ``versions`` to those sharing ``current``'s major version.

    Registry order is preserved.  A malformed entry raises rather than being
    skipped.

    Raises:
        ParseError: if ``current`` or any entry of ``versions`` is malformed.
    """
    major = major_version_of(current)
    return [v for v in versions if major_version_of(v) == major]


def _semver_key(version: str) -> tuple[int, Version]:
    try:
        return (1, Version(version))
    except InvalidVersion:
        return (0, _UNPARSEABLE)


def newest_first(versions: Sequence[str]) -> list[str]:
    """Sort versions newest first by PEP 440 ordering.

    Strings ``packaging`` can't parse (``2.0.0-M1`` and friends) go last, in
    their original order.
    """
    return sorted(versions, key=_semver_key, reverse=True)


def select_candidate(current: str, versions: Sequence[str], *, order: Order = "registry") -> str:
    """Pick the upgrade target for ``current`` from ``versions``.

    Args:
        current: Version currently in use.
        versions: Versions reported by the registry, in registry order.
        order: ``registry`` takes the first compatible entry as the latest;
            ``semver`` takes the highest compatible version.

    Returns:
        The selected version.

    Raises:
        ParseError: if ``current`` or a registry entry is malformed.
        NoCompatibleVersionError: if nothing shares the major version.
        AlreadyLatestError: if the selected version equals ``current``.
    """
    return pick_candidate(current, compatible_versions(current, versions), order=order)


def pick_candidate(current: str, candidates: Sequence[str], *, order: Order = "registry") -> str:
    """Pick the upgrade target from already-filtered ``candidates``.

    ``candidates`` is the output of ``compatible_versions``; see
    ``select_candidate`` for the rules and exceptions.
    """
    if not candidates:
        raise NoCompatibleVersionError(major_version_of(current))

    if order == "semver":
        candidates = newest_first(candidates)

    selected = candidates[0]
    if selected == current:
        raise AlreadyLatestError(current)
    return selected
