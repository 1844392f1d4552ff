# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from collections.abc import Sequence
from datetime import datetime
from types import MappingProxyType

from monolicense.adaptors.datetime import get_datetime_now, to_iso_timestamp
from monolicense.dependency.types import (
    Dependency,
    Project,
    ScanMetadata,
    ScanResult,
    ScanSummary,
)
from monolicense.license_detector.types import UNKNOWN_LICENSE


def collect_all_dependencies(projects: Sequence[Project]) -> list[Dependency]:
    all_dependencies: list[Dependency] = []
    for project in projects:
        all_dependencies.extend(project.dependencies)
        all_dependencies.extend(project.dev_dependencies)
    return all_dependencies


def deduplicate_dependencies(dependencies: Sequence[Dependency]) -> list[Dependency]:
    """Keep the first occurrence of every name@version."""
    seen: dict[tuple[str, str], Dependency] = {}
    for dependency in dependencies:
        seen.setdefault((dependency.name, dependency.version), dependency)
    return list(seen.values())


def compute_license_counts(unique_dependencies: Sequence[Dependency]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for dependency in unique_dependencies:
        spdx_id = dependency.license.spdx_id
        counts[spdx_id] = counts.get(spdx_id, 0) + 1
    return counts


def build_scan_result(
    projects: Sequence[Project],
    monorepo_root: str,
    lockfile_version: str,
    pnpm_version: str | None = None,
    now: datetime | None = None,
) -> ScanResult:
    """Aggregate scanned projects into the final, immutable scan result.

    Licenses are counted over unique name@version pairs, so a package shared
    by several projects is counted once.
    """
    all_dependencies = collect_all_dependencies(projects)
    unique_dependencies = deduplicate_dependencies(all_dependencies)
    license_counts = compute_license_counts(unique_dependencies)

    return ScanResult(
        projects=tuple(projects),
        metadata=ScanMetadata(
            monorepo_root=monorepo_root,
            lockfile_version=lockfile_version,
            scan_timestamp=to_iso_timestamp(now or get_datetime_now()),
            pnpm_version=pnpm_version,
        ),
        summary=ScanSummary(
            total_projects=len(projects),
            total_dependencies=len(all_dependencies),
            unique_dependencies=len(unique_dependencies),
            license_counts=MappingProxyType(license_counts),
            unknown_license_count=license_counts.get(UNKNOWN_LICENSE, 0),
        ),
    )
