# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from dataclasses import dataclass

from monolicense.dependency.types import Dependency
from monolicense.license_detector.types import unknown_license
from monolicense.parsers.types import DependencyRef, LockfileData
from monolicense.utils.errors import ScanError, project_not_found
from monolicense.utils.result import Result, failure, success

WORKSPACE_PROTOCOL_PREFIX = "workspace:"


@dataclass(frozen=True)
class ExtractedDependencies:
    dependencies: tuple[Dependency, ...]
    dev_dependencies: tuple[Dependency, ...]


def is_workspace_specifier(
    specifier: str, prefix: str = WORKSPACE_PROTOCOL_PREFIX
) -> bool:
    return specifier.startswith(prefix)


def _extract_from_refs(
    refs: dict[str, DependencyRef] | None, is_dev: bool, prefix: str
) -> tuple[Dependency, ...]:
    if not refs:
        return ()
    # License enrichment happens later, this stage never touches the filesystem
    return tuple(
        Dependency(
            name=name,
            version=ref.version,
            license=unknown_license(),
            is_workspace_dependency=is_workspace_specifier(ref.specifier, prefix),
            is_dev=is_dev,
            specifier=ref.specifier,
        )
        for name, ref in refs.items()
    )


def extract_dependencies(
    lockfile: LockfileData,
    project_path: str,
    workspace_protocol_prefix: str = WORKSPACE_PROTOCOL_PREFIX,
) -> Result[ExtractedDependencies, ScanError]:
    """Extract the dependencies of one project from the lockfile importers.

    Optional dependencies are parsed into the lockfile model but are not
    reported here.

    Args:
        lockfile: Parsed lockfile data
        project_path: Importer key, "." for the root and e.g. "apps/web" otherwise

    Returns:
        The project's dependencies and devDependencies, or PROJECT_NOT_FOUND
        when the lockfile has no importer for the path (stale lockfile)
    """
    importer = lockfile.importers.get(project_path)
    if importer is None:
        return failure(project_not_found(project_path))

    return success(
        ExtractedDependencies(
            dependencies=_extract_from_refs(
                importer.dependencies, False, workspace_protocol_prefix
            ),
            dev_dependencies=_extract_from_refs(
                importer.dev_dependencies, True, workspace_protocol_prefix
            ),
        )
    )
