# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from collections.abc import Mapping
from dataclasses import dataclass

from monolicense.license_detector.types import LicenseInfo


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str
    license: LicenseInfo
    is_workspace_dependency: bool
    is_dev: bool
    specifier: str


@dataclass(frozen=True)
class Project:
    """A workspace member: an app or library in the monorepo, or the root itself."""

    name: str
    path: str  # relative to the monorepo root, "." for the root
    version: str
    dependencies: tuple[Dependency, ...]
    dev_dependencies: tuple[Dependency, ...]
    is_workspace_root: bool


@dataclass(frozen=True)
class MonorepoInfo:
    root: str
    workspace_globs: tuple[str, ...]
    project_paths: tuple[str, ...]


@dataclass(frozen=True)
class ScanMetadata:
    monorepo_root: str
    lockfile_version: str
    scan_timestamp: str
    pnpm_version: str | None


@dataclass(frozen=True)
class ScanSummary:
    total_projects: int
    total_dependencies: int
    unique_dependencies: int
    license_counts: Mapping[str, int]  # read-only view
    unknown_license_count: int


@dataclass(frozen=True)
class ScanResult:
    projects: tuple[Project, ...]
    metadata: ScanMetadata
    summary: ScanSummary
