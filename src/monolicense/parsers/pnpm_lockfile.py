# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import logging
import re
from typing import Any

import yaml

from monolicense.adaptors.os import open_file
from monolicense.parsers.types import (
    DependencyRef,
    ImporterData,
    LockfileData,
    PackageData,
)
from monolicense.utils.errors import (
    ScanError,
    invalid_lockfile_version,
    lockfile_not_found,
    lockfile_parse_error,
)
from monolicense.utils.result import (
    Failure,
    Result,
    Success,
    failure,
    success,
)

logger = logging.getLogger("monolicense")

# Lowest pnpm-lock.yaml schema this parser understands (pnpm 8+)
MIN_LOCKFILE_VERSION = "6.0"

_VERSION_PREFIX = re.compile(r"^(\d+)\.(\d+)")


def parse_version(version: str) -> float:
    """Return the leading major.minor of a lockfile version as a number, 0 if absent."""
    match = _VERSION_PREFIX.match(version)
    if not match:
        return 0.0
    return float(f"{match.group(1)}.{match.group(2)}")


def validate_version(version: Any, path: str) -> Result[str, ScanError]:
    if not isinstance(version, str):
        return failure(lockfile_parse_error(path, "Missing or invalid lockfileVersion"))

    if parse_version(version) < parse_version(MIN_LOCKFILE_VERSION):
        return failure(invalid_lockfile_version(version, f">={MIN_LOCKFILE_VERSION}"))

    return success(version)


# The validate_* functions below are the only place where malformed lockfile
# entries get dropped. Anything they return is fully typed.


def validate_dependency_refs(deps: Any) -> dict[str, DependencyRef] | None:
    if not isinstance(deps, dict):
        return None

    refs = {
        str(name): DependencyRef(specifier=ref["specifier"], version=ref["version"])
        for name, ref in deps.items()
        if isinstance(ref, dict)
        and isinstance(ref.get("specifier"), str)
        and isinstance(ref.get("version"), str)
    }
    return refs or None


def validate_importers(importers: Any) -> dict[str, ImporterData]:
    if not isinstance(importers, dict):
        return {}

    result: dict[str, ImporterData] = {}
    for path, data in importers.items():
        if not isinstance(data, dict):
            continue
        result[str(path)] = ImporterData(
            dependencies=validate_dependency_refs(data.get("dependencies")),
            dev_dependencies=validate_dependency_refs(data.get("devDependencies")),
            optional_dependencies=validate_dependency_refs(
                data.get("optionalDependencies")
            ),
        )
    return result


def validate_packages(packages: Any) -> dict[str, PackageData]:
    if not isinstance(packages, dict):
        return {}

    result: dict[str, PackageData] = {}
    for package_id, data in packages.items():
        if not isinstance(data, dict):
            continue

        resolution = data.get("resolution")
        integrity = ""
        if isinstance(resolution, dict) and isinstance(resolution.get("integrity"), str):
            integrity = resolution["integrity"]

        raw_dependencies = data.get("dependencies")
        dependencies = None
        if isinstance(raw_dependencies, dict):
            dependencies = {
                str(name): version
                for name, version in raw_dependencies.items()
                if isinstance(version, str)
            } or None

        dev = data.get("dev")
        optional = data.get("optional")
        result[str(package_id)] = PackageData(
            integrity=integrity,
            dependencies=dependencies,
            dev=dev if isinstance(dev, bool) else None,
            optional=optional if isinstance(optional, bool) else None,
        )
    return result


def validate_lockfile_data(
    raw: dict[Any, Any], path: str
) -> Result[LockfileData, ScanError]:
    version_result = validate_version(raw.get("lockfileVersion"), path)
    if isinstance(version_result, Failure):
        return version_result

    settings = raw.get("settings")
    return success(
        LockfileData(
            lockfile_version=version_result.data,
            importers=validate_importers(raw.get("importers")),
            packages=validate_packages(raw.get("packages")),
            settings=settings if settings else None,
        )
    )


def parse_pnpm_lockfile_from_string(
    content: str, path: str = "<string>"
) -> Result[LockfileData, ScanError]:
    """Parse pnpm-lock.yaml content.

    Unlike the workspace config, an empty lockfile is always an error: a scan
    cannot proceed without it.
    """
    try:
        raw = yaml.safe_load(content)
    except yaml.MarkedYAMLError as e:
        line = e.problem_mark.line + 1 if e.problem_mark is not None else None
        return failure(lockfile_parse_error(path, str(e.problem or e), line))
    except yaml.YAMLError as e:
        return failure(lockfile_parse_error(path, str(e)))

    if not raw:
        return failure(lockfile_parse_error(path, "Empty or invalid lockfile"))
    if not isinstance(raw, dict):
        return failure(lockfile_parse_error(path, "Lockfile root must be an object"))

    return validate_lockfile_data(raw, path)


def parse_pnpm_lockfile(path: str) -> Result[LockfileData, ScanError]:
    try:
        content = open_file(path)
    except FileNotFoundError:
        return failure(lockfile_not_found(path))
    except OSError as e:
        return failure(lockfile_parse_error(path, str(e)))

    logger.debug("Parsing lockfile %s", path)
    result = parse_pnpm_lockfile_from_string(content, path)
    if isinstance(result, Success):
        logger.debug(
            "Lockfile %s has version %s, %d importers and %d packages",
            path,
            result.data.lockfile_version,
            len(result.data.importers),
            len(result.data.packages),
        )
    return result
