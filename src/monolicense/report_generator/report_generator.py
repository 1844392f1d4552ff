# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

from monolicense.dependency.types import ScanResult
from monolicense.report_generator.writers.abstract_reporting_writer import (
    ReportingWriter,
)


class ReportGenerator:
    def __init__(self, reporting_writer: ReportingWriter):
        self.reporting_writer = reporting_writer

    def generate_report(self, scan_result: ScanResult) -> str:
        return self.reporting_writer.write(scan_result)
