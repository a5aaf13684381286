"""
Reporting Package - Translation, Sending and Scheduling.

Components:
    - tags: Copy-on-use base tags and dynamic tag merge
    - MetricTranslator: Metric snapshot -> data points
    - BatchSender: One batch write per report tick
    - Reporter: Single-threaded loop over report and health-check triggers

Design Principles:
    - Translation is pure apart from clearing settable gauges
    - Fallible steps return results; the loop logs them
    - The loop only stops between triggers
"""

from influx_reporter.reporting.batch_sender import BatchSender, SendResult
from influx_reporter.reporting.reporter import (
    PING_INTERVAL_SECONDS,
    Reporter,
    run_reporter,
)
from influx_reporter.reporting.tags import copy_tags, merge_tag
from influx_reporter.reporting.translator import MetricTranslator, TranslationResult

__all__ = [
    "BatchSender",
    "SendResult",
    "PING_INTERVAL_SECONDS",
    "Reporter",
    "run_reporter",
    "copy_tags",
    "merge_tag",
    "MetricTranslator",
    "TranslationResult",
]
