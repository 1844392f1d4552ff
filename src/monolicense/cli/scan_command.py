# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

# Command scanning a pnpm monorepo and printing the JSON scan result

import json
import logging
from dataclasses import replace
from typing import Annotated

import typer

from monolicense.adaptors.os import absolute_path, write_file
from monolicense.config.cli_configs import default_config
from monolicense.report_generator.report_generator import ReportGenerator
from monolicense.report_generator.writers.json_reporting_writer import (
    JSONReportingWriter,
)
from monolicense.scanner.monorepo_scanner import MonorepoScanner
from monolicense.utils.errors import scan_error_to_dict
from monolicense.utils.logging import LogLevel, setup_logging
from monolicense.utils.result import Failure

logger = logging.getLogger("monolicense")


def scan(
    root: Annotated[
        str,
        typer.Option("--root", "-r", help="Path to the monorepo root."),
    ] = ".",
    output_file: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Write the JSON result to this file instead of stdout.",
        ),
    ] = "",
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help=(
                "Fail the scan when a project is missing from the lockfile "
                "instead of skipping it."
            ),
        ),
    ] = False,
    max_workers: Annotated[
        int,
        typer.Option(
            "--max-workers",
            min=1,
            help="Number of projects whose licenses are resolved in parallel.",
        ),
    ] = default_config.max_workers,
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", help="Logging verbosity, logs go to stderr."),
    ] = LogLevel.WARNING,
) -> None:
    """
    Scan a pnpm monorepo for dependencies and licenses.
    """
    setup_logging(log_level.to_logging_level())

    config = replace(default_config, max_workers=max_workers)
    result = MonorepoScanner(config, strict=strict).scan(absolute_path(root))

    if isinstance(result, Failure):
        typer.echo(json.dumps(scan_error_to_dict(result.error), indent=2))
        raise typer.Exit(code=1)

    report = ReportGenerator(JSONReportingWriter()).generate_report(result.data)
    if output_file:
        write_file(output_file, report)
        logger.info("Scan result written to %s", output_file)
    else:
        typer.echo(report)
