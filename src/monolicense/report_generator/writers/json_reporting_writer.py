# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import json
from typing import Any

from monolicense.dependency.types import Dependency, Project, ScanResult
from monolicense.license_detector.types import LicenseInfo
from monolicense.report_generator.writers.abstract_reporting_writer import (
    ReportingWriter,
)


def license_to_dict(license_info: LicenseInfo) -> dict[str, Any]:
    return {
        "spdxId": license_info.spdx_id,
        "source": license_info.source.value,
        "rawValue": license_info.raw_value,
    }


def dependency_to_dict(dependency: Dependency) -> dict[str, Any]:
    return {
        "name": dependency.name,
        "version": dependency.version,
        "license": license_to_dict(dependency.license),
        "isWorkspaceDependency": dependency.is_workspace_dependency,
        "isDev": dependency.is_dev,
        "specifier": dependency.specifier,
    }


def project_to_dict(project: Project) -> dict[str, Any]:
    return {
        "name": project.name,
        "path": project.path,
        "version": project.version,
        "dependencies": [dependency_to_dict(d) for d in project.dependencies],
        "devDependencies": [dependency_to_dict(d) for d in project.dev_dependencies],
        "isWorkspaceRoot": project.is_workspace_root,
    }


def scan_result_to_dict(scan_result: ScanResult) -> dict[str, Any]:
    metadata = scan_result.metadata
    summary = scan_result.summary
    return {
        "projects": [project_to_dict(p) for p in scan_result.projects],
        "metadata": {
            "monorepoRoot": metadata.monorepo_root,
            "lockfileVersion": metadata.lockfile_version,
            "scanTimestamp": metadata.scan_timestamp,
            "pnpmVersion": metadata.pnpm_version,
        },
        "summary": {
            "totalProjects": summary.total_projects,
            "totalDependencies": summary.total_dependencies,
            "uniqueDependencies": summary.unique_dependencies,
            "licenseCounts": dict(summary.license_counts),
            "unknownLicenseCount": summary.unknown_license_count,
        },
    }


class JSONReportingWriter(ReportingWriter):
    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def write(self, scan_result: ScanResult) -> str:
        return json.dumps(scan_result_to_dict(scan_result), indent=self.indent)
