# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from pathlib import Path

import pytest

from monolicense.parsers.pnpm_lockfile import (
    MIN_LOCKFILE_VERSION,
    parse_pnpm_lockfile,
    parse_pnpm_lockfile_from_string,
    parse_version,
    validate_dependency_refs,
    validate_importers,
    validate_packages,
)
from monolicense.parsers.types import DependencyRef, ImporterData, PackageData
from monolicense.utils.errors import ErrorType
from monolicense.utils.result import Failure, Success

SIMPLE_V6_LOCKFILE = """\
lockfileVersion: '6.0'

settings:
  autoInstallPeers: true
  excludeLinksFromLockfile: false

importers:

  .:
    devDependencies:
      typescript:
        specifier: ^5.3.0
        version: 5.3.3

  apps/web:
    dependencies:
      '@repo/ui':
        specifier: workspace:*
        version: link:../../packages/ui
      lodash:
        specifier: ^4.17.21
        version: 4.17.21
    optionalDependencies:
      fsevents:
        specifier: ^2.3.0
        version: 2.3.3

packages:

  /lodash@4.17.21:
    resolution: {integrity: sha512-v2kDEe57lecTulaDIuNTPy3Ry4gLGJ6Z1O3vE1krgXZNrsQ+LFTGHVxVjcXPs17LhbZVGedAJv8XZ1tvj5FvSg==}
    dev: false

  /typescript@5.3.3:
    resolution: {integrity: sha512-pXWcraxM0uxAS+tN0AG/BF2TyqmHO014Z070UsJ+pFvYuRSq8KH8DmWpnbXe0pEPDHXZV3FcAbJkijJ5oNEnWw==}
    engines: {node: '>=14.17'}
    hasBin: true
    dev: true
"""


def test_parses_simple_v6_lockfile() -> None:
    result = parse_pnpm_lockfile_from_string(SIMPLE_V6_LOCKFILE)
    assert isinstance(result, Success)
    lockfile = result.data

    assert lockfile.lockfile_version == "6.0"
    assert set(lockfile.importers) == {".", "apps/web"}
    assert lockfile.importers["."] == ImporterData(
        dev_dependencies={"typescript": DependencyRef("^5.3.0", "5.3.3")}
    )
    web = lockfile.importers["apps/web"]
    assert web.dependencies == {
        "@repo/ui": DependencyRef("workspace:*", "link:../../packages/ui"),
        "lodash": DependencyRef("^4.17.21", "4.17.21"),
    }
    assert web.optional_dependencies == {"fsevents": DependencyRef("^2.3.0", "2.3.3")}
    assert web.dev_dependencies is None

    assert lockfile.packages["/typescript@5.3.3"].dev is True
    assert lockfile.packages["/lodash@4.17.21"].integrity.startswith("sha512-")
    assert lockfile.settings == {
        "autoInstallPeers": True,
        "excludeLinksFromLockfile": False,
    }


@pytest.mark.parametrize("version", ["6.0", "6.1", "9.0", "10.0-beta"])
def test_supported_versions(version: str) -> None:
    result = parse_pnpm_lockfile_from_string(f"lockfileVersion: '{version}'\n")
    assert isinstance(result, Success)
    assert result.data.lockfile_version == version
    assert result.data.importers == {}
    assert result.data.packages == {}
    assert result.data.settings is None


@pytest.mark.parametrize("version", ["5.4", "5.3", "4.0", "1.0", "garbage"])
def test_old_versions_are_unsupported_not_parse_errors(version: str) -> None:
    result = parse_pnpm_lockfile_from_string(
        f"lockfileVersion: '{version}'\nimporters: {{}}\n", "pnpm-lock.yaml"
    )
    assert isinstance(result, Failure)
    assert result.error.error_type == ErrorType.INVALID_LOCKFILE_VERSION
    assert result.error.version == version
    assert result.error.expected == f">={MIN_LOCKFILE_VERSION}"


@pytest.mark.parametrize(
    "content",
    [
        "importers: {}\n",
        "lockfileVersion: 6.0\n",
        "lockfileVersion: 5.4\n",
        "lockfileVersion: [6]\n",
        "lockfileVersion: true\n",
        "lockfileVersion: {major: 6}\n",
    ],
)
def test_missing_or_non_string_version_is_a_parse_error(content: str) -> None:
    result = parse_pnpm_lockfile_from_string(content, "pnpm-lock.yaml")
    assert isinstance(result, Failure)
    assert result.error.error_type == ErrorType.LOCKFILE_PARSE_ERROR
    assert result.error.message == "Missing or invalid lockfileVersion"
    assert result.error.path == "pnpm-lock.yaml"


@pytest.mark.parametrize("content", ["", "\n", "# nothing\n", "null\n"])
def test_empty_lockfile_is_an_error(content: str) -> None:
    result = parse_pnpm_lockfile_from_string(content)
    assert isinstance(result, Failure)
    assert result.error.error_type == ErrorType.LOCKFILE_PARSE_ERROR
    assert result.error.message == "Empty or invalid lockfile"


def test_non_mapping_root_is_an_error() -> None:
    result = parse_pnpm_lockfile_from_string("- a\n- b\n")
    assert isinstance(result, Failure)
    assert result.error.error_type == ErrorType.LOCKFILE_PARSE_ERROR


def test_yaml_syntax_error_reports_line() -> None:
    content = "lockfileVersion: '6.0'\nimporters:\n  .: [unclosed\n"
    result = parse_pnpm_lockfile_from_string(content, "pnpm-lock.yaml")
    assert isinstance(result, Failure)
    assert result.error.error_type == ErrorType.LOCKFILE_PARSE_ERROR
    assert result.error.line is not None
    assert result.error.line >= 3


def test_parse_version() -> None:
    assert parse_version("6.0") == 6.0
    assert parse_version("6.1") == 6.1
    assert parse_version("9.0.1") == 9.0
    assert parse_version("v6") == 0.0
    assert parse_version("") == 0.0


def test_validate_dependency_refs_drops_malformed_entries() -> None:
    refs = validate_dependency_refs(
        {
            "good": {"specifier": "^1.0.0", "version": "1.0.1"},
            "no-version": {"specifier": "^1.0.0"},
            "numeric-version": {"specifier": "^1.0.0", "version": 1.0},
            "not-a-mapping": "1.0.0",
        }
    )
    assert refs == {"good": DependencyRef("^1.0.0", "1.0.1")}


@pytest.mark.parametrize("value", [None, "string", ["a"], {}, {"bad": "1.0.0"}])
def test_validate_dependency_refs_without_valid_entries(value: object) -> None:
    assert validate_dependency_refs(value) is None


def test_validate_importers_keeps_importers_without_dependencies() -> None:
    importers = validate_importers(
        {
            "apps/empty": {},
            "apps/junk": {"dependencies": "nope", "devDependencies": []},
            "not-an-importer": "nope",
        }
    )
    assert importers == {"apps/empty": ImporterData(), "apps/junk": ImporterData()}


def test_validate_importers_with_invalid_root() -> None:
    assert validate_importers(None) == {}
    assert validate_importers(["."]) == {}


def test_validate_packages() -> None:
    packages = validate_packages(
        {
            "/a@1.0.0": {
                "resolution": {"integrity": "sha512-a"},
                "dependencies": {"b": "2.0.0", "c": 3},
                "dev": True,
                "optional": "yes",
            },
            "/b@2.0.0": {"dependencies": {"c": 3}},
            "/c@3.0.0": {"resolution": {"tarball": "https://example.com/c.tgz"}},
            "/broken": "nope",
        }
    )
    assert packages == {
        "/a@1.0.0": PackageData(
            integrity="sha512-a", dependencies={"b": "2.0.0"}, dev=True
        ),
        "/b@2.0.0": PackageData(integrity=""),
        "/c@3.0.0": PackageData(integrity=""),
    }


def test_parse_from_file(tmp_path: Path) -> None:
    lockfile_path = tmp_path / "pnpm-lock.yaml"
    lockfile_path.write_text(SIMPLE_V6_LOCKFILE)
    result = parse_pnpm_lockfile(str(lockfile_path))
    assert isinstance(result, Success)
    assert "apps/web" in result.data.importers


def test_parse_from_missing_file(tmp_path: Path) -> None:
    missing = str(tmp_path / "pnpm-lock.yaml")
    result = parse_pnpm_lockfile(missing)
    assert isinstance(result, Failure)
    assert result.error.error_type == ErrorType.LOCKFILE_NOT_FOUND
    assert result.error.path == missing
