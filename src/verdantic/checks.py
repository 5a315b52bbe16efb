"""Eager well-formedness checks for version maps.

Parsing only notices a malformed version map when a migration walks through
the broken part. ``check_version_map`` inspects the whole map up front so it
can be run as a startup self-check or from the ``verdantic check`` command.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from verdantic.versions import VersionDefinition


class ProblemKind(StrEnum):
    """Kinds of version map defects."""

    LATEST_MISSING = "latest_missing"
    NON_POSITIVE_VERSION = "non_positive_version"
    ABOVE_LATEST = "above_latest"
    GAP = "gap"
    NO_INITIAL = "no_initial"
    MULTIPLE_INITIAL = "multiple_initial"
    INITIAL_NOT_LOWEST = "initial_not_lowest"


@dataclass(frozen=True)
class DefinitionProblem:
    """A single defect found in a version map."""

    kind: ProblemKind
    version: int | None
    message: str

    def __str__(self) -> str:
        return self.message


def check_version_map(
    version_map: Mapping[int, VersionDefinition], latest_version: int
) -> list[DefinitionProblem]:
    """Check that a version map forms a contiguous chain ending at the latest version.

    Args:
        version_map: Mapping of version number to definition
        latest_version: The declared latest version

    Returns:
        list[DefinitionProblem]: Defects found, empty when the map is well formed
    """
    problems: list[DefinitionProblem] = []
    versions = sorted(version_map)

    if latest_version not in version_map:
        problems.append(
            DefinitionProblem(
                ProblemKind.LATEST_MISSING,
                latest_version,
                f"latest version {latest_version} is not defined",
            )
        )

    for ver in versions:
        if ver < 1:
            problems.append(
                DefinitionProblem(
                    ProblemKind.NON_POSITIVE_VERSION, ver, f"version {ver} is not positive"
                )
            )
        if ver > latest_version:
            problems.append(
                DefinitionProblem(
                    ProblemKind.ABOVE_LATEST,
                    ver,
                    f"version {ver} is above the latest version {latest_version}",
                )
            )

    if not versions:
        return problems

    lowest = versions[0]
    for ver in range(lowest + 1, latest_version):
        if ver not in version_map:
            problems.append(
                DefinitionProblem(ProblemKind.GAP, ver, f"version {ver} is missing from the chain")
            )

    initials = [ver for ver in versions if version_map[ver].initial]
    if not initials:
        problems.append(
            DefinitionProblem(ProblemKind.NO_INITIAL, None, "no version is marked initial")
        )
    elif len(initials) > 1:
        listed = ", ".join(str(ver) for ver in initials)
        problems.append(
            DefinitionProblem(
                ProblemKind.MULTIPLE_INITIAL,
                initials[1],
                f"versions {listed} are all marked initial",
            )
        )
    if initials and initials[0] != lowest:
        problems.append(
            DefinitionProblem(
                ProblemKind.INITIAL_NOT_LOWEST,
                lowest,
                f"lowest version {lowest} is not marked initial",
            )
        )

    return problems
