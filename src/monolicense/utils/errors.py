# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorType(Enum):
    LOCKFILE_NOT_FOUND = "LOCKFILE_NOT_FOUND"
    LOCKFILE_PARSE_ERROR = "LOCKFILE_PARSE_ERROR"
    WORKSPACE_CONFIG_NOT_FOUND = "WORKSPACE_CONFIG_NOT_FOUND"
    WORKSPACE_CONFIG_PARSE_ERROR = "WORKSPACE_CONFIG_PARSE_ERROR"
    INVALID_LOCKFILE_VERSION = "INVALID_LOCKFILE_VERSION"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    PACKAGE_JSON_PARSE_ERROR = "PACKAGE_JSON_PARSE_ERROR"


@dataclass(frozen=True)
class ScanError:
    """A typed scan failure.

    Which optional fields are set depends on ``error_type``:
    INVALID_LOCKFILE_VERSION carries ``version`` and ``expected`` instead of
    a path, LOCKFILE_PARSE_ERROR may carry the offending ``line``.
    """

    error_type: ErrorType
    path: str | None = None
    message: str | None = None
    line: int | None = None
    version: str | None = None
    expected: str | None = None


def lockfile_not_found(path: str) -> ScanError:
    return ScanError(ErrorType.LOCKFILE_NOT_FOUND, path=path)


def lockfile_parse_error(path: str, message: str, line: int | None = None) -> ScanError:
    return ScanError(
        ErrorType.LOCKFILE_PARSE_ERROR, path=path, message=message, line=line
    )


def workspace_config_not_found(path: str) -> ScanError:
    return ScanError(ErrorType.WORKSPACE_CONFIG_NOT_FOUND, path=path)


def workspace_config_parse_error(path: str, message: str) -> ScanError:
    return ScanError(ErrorType.WORKSPACE_CONFIG_PARSE_ERROR, path=path, message=message)


def invalid_lockfile_version(version: str, expected: str) -> ScanError:
    return ScanError(
        ErrorType.INVALID_LOCKFILE_VERSION, version=version, expected=expected
    )


def project_not_found(path: str) -> ScanError:
    return ScanError(ErrorType.PROJECT_NOT_FOUND, path=path)


def package_json_parse_error(path: str, message: str) -> ScanError:
    return ScanError(ErrorType.PACKAGE_JSON_PARSE_ERROR, path=path, message=message)


def format_scan_error(error: ScanError) -> str:
    """Human readable message, including remediation hints where we have one."""
    error_type = error.error_type
    if error_type == ErrorType.LOCKFILE_NOT_FOUND:
        return f"pnpm-lock.yaml not found at {error.path}. Run 'pnpm install' first."
    if error_type == ErrorType.LOCKFILE_PARSE_ERROR:
        line_suffix = f" (line {error.line})" if error.line is not None else ""
        return f"Failed to parse lockfile at {error.path}: {error.message}{line_suffix}"
    if error_type == ErrorType.WORKSPACE_CONFIG_NOT_FOUND:
        return f"pnpm-workspace.yaml not found at {error.path}"
    if error_type == ErrorType.WORKSPACE_CONFIG_PARSE_ERROR:
        return f"Failed to parse workspace config at {error.path}: {error.message}"
    if error_type == ErrorType.INVALID_LOCKFILE_VERSION:
        return (
            f"Invalid lockfile version: {error.version}. Expected {error.expected}. "
            "Upgrade pnpm and regenerate the lockfile."
        )
    if error_type == ErrorType.PROJECT_NOT_FOUND:
        return f"Project not found at {error.path}"
    return f"Failed to parse package.json at {error.path}: {error.message}"


def scan_error_to_dict(error: ScanError) -> dict[str, Any]:
    """JSON shape of an error, as printed by the scan command."""
    output: dict[str, Any] = {
        "type": error.error_type.value,
        "message": format_scan_error(error),
    }
    if error.error_type == ErrorType.INVALID_LOCKFILE_VERSION:
        output["version"] = error.version
        output["expected"] = error.expected
        return {"error": output}

    output["path"] = error.path
    if error.line is not None:
        output["line"] = error.line
    return {"error": output}
