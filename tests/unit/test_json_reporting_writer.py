# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import json
from datetime import datetime

import pytz

from monolicense.dependency.build_scan_result import build_scan_result
from monolicense.dependency.types import Dependency, Project
from monolicense.license_detector.types import (
    LicenseInfo,
    LicenseSource,
    unknown_license,
)
from monolicense.report_generator.report_generator import ReportGenerator
from monolicense.report_generator.writers.json_reporting_writer import (
    JSONReportingWriter,
    dependency_to_dict,
    license_to_dict,
)


def test_license_to_dict() -> None:
    license_info = LicenseInfo(
        spdx_id="Apache-2.0",
        source=LicenseSource.PACKAGE_JSON,
        raw_value="Apache 2.0",
    )

    assert license_to_dict(license_info) == {
        "spdxId": "Apache-2.0",
        "source": "package.json",
        "rawValue": "Apache 2.0",
    }
    assert license_to_dict(unknown_license()) == {
        "spdxId": "UNKNOWN",
        "source": "unknown",
        "rawValue": None,
    }


def test_dependency_to_dict() -> None:
    dependency = Dependency(
        name="@repo/ui",
        version="link:../../packages/ui",
        license=unknown_license(),
        is_workspace_dependency=True,
        is_dev=False,
        specifier="workspace:*",
    )

    assert dependency_to_dict(dependency) == {
        "name": "@repo/ui",
        "version": "link:../../packages/ui",
        "license": {"spdxId": "UNKNOWN", "source": "unknown", "rawValue": None},
        "isWorkspaceDependency": True,
        "isDev": False,
        "specifier": "workspace:*",
    }


def test_json_reporting_writer() -> None:
    typescript = Dependency(
        name="typescript",
        version="5.3.3",
        license=LicenseInfo(spdx_id="Apache-2.0", source=LicenseSource.LICENSE_FILE),
        is_workspace_dependency=False,
        is_dev=True,
        specifier="^5.3.0",
    )
    scan_result = build_scan_result(
        [
            Project(
                name="root",
                path=".",
                version="0.0.0",
                dependencies=(),
                dev_dependencies=(typescript,),
                is_workspace_root=True,
            )
        ],
        "/repo",
        "6.0",
        now=datetime(2024, 3, 5, 8, 30, 15, 999000, tzinfo=pytz.UTC),
    )

    report = ReportGenerator(JSONReportingWriter()).generate_report(scan_result)

    assert json.loads(report) == {
        "projects": [
            {
                "name": "root",
                "path": ".",
                "version": "0.0.0",
                "dependencies": [],
                "devDependencies": [
                    {
                        "name": "typescript",
                        "version": "5.3.3",
                        "license": {
                            "spdxId": "Apache-2.0",
                            "source": "license-file",
                            "rawValue": None,
                        },
                        "isWorkspaceDependency": False,
                        "isDev": True,
                        "specifier": "^5.3.0",
                    }
                ],
                "isWorkspaceRoot": True,
            }
        ],
        "metadata": {
            "monorepoRoot": "/repo",
            "lockfileVersion": "6.0",
            "scanTimestamp": "2024-03-05T08:30:15.999Z",
            "pnpmVersion": None,
        },
        "summary": {
            "totalProjects": 1,
            "totalDependencies": 1,
            "uniqueDependencies": 1,
            "licenseCounts": {"Apache-2.0": 1},
            "unknownLicenseCount": 0,
        },
    }
    assert report.startswith('{\n  "projects"')


def test_compact_output() -> None:
    scan_result = build_scan_result(
        [], "/repo", "6.0", now=datetime(2024, 1, 1, tzinfo=pytz.UTC)
    )

    report = JSONReportingWriter(indent=None).write(scan_result)

    assert "\n" not in report
