# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Typed model of pnpm-workspace.yaml and pnpm-lock.yaml.

Nothing in here holds raw YAML values: the parsers validate every field
before building these records.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WorkspaceConfig:
    packages: tuple[str, ...]


@dataclass(frozen=True)
class DependencyRef:
    specifier: str  # as declared in package.json, e.g. ^4.17.0 or workspace:*
    version: str  # resolved version


@dataclass(frozen=True)
class ImporterData:
    dependencies: dict[str, DependencyRef] | None = None
    dev_dependencies: dict[str, DependencyRef] | None = None
    optional_dependencies: dict[str, DependencyRef] | None = None


@dataclass(frozen=True)
class PackageData:
    integrity: str
    dependencies: dict[str, str] | None = None
    dev: bool | None = None
    optional: bool | None = None


@dataclass(frozen=True)
class LockfileData:
    lockfile_version: str
    importers: dict[str, ImporterData]
    packages: dict[str, PackageData]
    # passed through as found, newer pnpm releases keep adding keys here
    settings: dict[str, Any] | None = None
