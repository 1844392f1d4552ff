# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import json
import re
from typing import Any

from monolicense.license_detector.normalize_license import normalize_license
from monolicense.license_detector.types import (
    LicenseInfo,
    LicenseSource,
    unknown_license,
)
from monolicense.utils.errors import ScanError, package_json_parse_error
from monolicense.utils.result import Result, failure, success

# Order matters: the first matching pattern wins. ISC must be tried before the
# generic MIT disclaimer because ISC texts also say THE SOFTWARE IS PROVIDED "AS IS".
LICENSE_FILE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"Apache License[,\s]+Version 2\.0", re.IGNORECASE), "Apache-2.0"),
    (re.compile(r"Apache-2\.0", re.IGNORECASE), "Apache-2.0"),
    (re.compile(r"Apache License", re.IGNORECASE), "Apache-2.0"),
    (re.compile(r"ISC License", re.IGNORECASE), "ISC"),
    (
        re.compile(
            r"Permission to use, copy, modify, and/or distribute", re.IGNORECASE
        ),
        "ISC",
    ),
    (re.compile(r"MIT License", re.IGNORECASE), "MIT"),
    (re.compile(r"Permission is hereby granted, free of charge", re.IGNORECASE), "MIT"),
    (re.compile(r'THE SOFTWARE IS PROVIDED "AS IS"', re.IGNORECASE), "MIT"),
    (re.compile(r"BSD 3-Clause License", re.IGNORECASE), "BSD-3-Clause"),
    (re.compile(r"BSD 2-Clause License", re.IGNORECASE), "BSD-2-Clause"),
    (re.compile(r"GNU General Public License.*version 3", re.IGNORECASE), "GPL-3.0"),
    (re.compile(r"GNU General Public License.*version 2", re.IGNORECASE), "GPL-2.0"),
    (re.compile(r"GNU Lesser General Public License", re.IGNORECASE), "LGPL-3.0"),
    (re.compile(r"Mozilla Public License.*2\.0", re.IGNORECASE), "MPL-2.0"),
    (re.compile(r"The Unlicense", re.IGNORECASE), "Unlicense"),
]


def _from_raw_license(raw_license: str, source: LicenseSource) -> LicenseInfo:
    normalized = normalize_license(raw_license)
    return LicenseInfo(
        spdx_id=normalized,
        source=source,
        raw_value=raw_license if normalized != raw_license else None,
    )


def _legacy_license_type(parsed: dict[str, Any]) -> str | None:
    """First license type from the deprecated ``licenses`` array or ``license`` object."""
    legacy = parsed.get("licenses")
    if isinstance(legacy, list) and legacy:
        first = legacy[0]
        if isinstance(first, dict) and isinstance(first.get("type"), str):
            return str(first["type"])
        return None

    license_object = parsed.get("license")
    if isinstance(license_object, dict) and isinstance(
        license_object.get("type"), str
    ):
        return str(license_object["type"])
    return None


def extract_license_from_package_json(
    package_json_content: str, path: str | None = None
) -> Result[LicenseInfo, ScanError]:
    """Determine the license declared in a package.json document.

    The modern ``license`` string wins over the legacy ``licenses`` array.
    A manifest without either resolves to UNKNOWN. Only a document that is
    not valid JSON is reported as an error.

    Args:
        package_json_content: Raw package.json text
        path: Location of the manifest, used in the error

    Returns:
        The detected license, or a PACKAGE_JSON_PARSE_ERROR failure
    """
    try:
        parsed = json.loads(package_json_content)
    except json.JSONDecodeError:
        return failure(
            package_json_parse_error(path or "unknown", "Invalid JSON in package.json")
        )
    if not isinstance(parsed, dict):
        return success(unknown_license())

    declared = parsed.get("license")
    if isinstance(declared, str) and declared.strip():
        return success(
            _from_raw_license(declared.strip(), LicenseSource.PACKAGE_JSON)
        )

    legacy_type = _legacy_license_type(parsed)
    if legacy_type:
        return success(_from_raw_license(legacy_type, LicenseSource.PACKAGE_JSON_ARRAY))

    return success(unknown_license())


def extract_license_from_file(file_content: str) -> Result[LicenseInfo, ScanError]:
    """Guess the license of a LICENSE file by matching well known phrases."""
    content = file_content.strip()

    for pattern, spdx_id in LICENSE_FILE_PATTERNS:
        if pattern.search(content):
            return success(LicenseInfo(spdx_id=spdx_id, source=LicenseSource.LICENSE_FILE))

    return success(unknown_license())
