"""Utility functions for stationconv."""

from stationconv.utils.validation import (
    AlreadyConverted,
    BadDeviceType,
    BadManufacturerId,
    ConversionError,
    MessageTooLong,
    MessageTooShort,
    NotSysexFile,
    TruncatedMessage,
    UnknownDeviceFamily,
    WriteError,
)

__all__ = [
    "AlreadyConverted",
    "BadDeviceType",
    "BadManufacturerId",
    "ConversionError",
    "MessageTooLong",
    "MessageTooShort",
    "NotSysexFile",
    "TruncatedMessage",
    "UnknownDeviceFamily",
    "WriteError",
]
