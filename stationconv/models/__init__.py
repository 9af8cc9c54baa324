"""Data models for conversion results."""

from stationconv.models.report import ConversionReport, MessageFailure, MessageReport

__all__ = ["ConversionReport", "MessageFailure", "MessageReport"]
