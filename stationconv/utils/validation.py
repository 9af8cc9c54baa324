"""
Conversion errors for Novation Station SysEx dumps.

Every failure raised by the framer carries the offending byte and the
value that was expected, so the CLI can print a precise message.
"""


class ConversionError(Exception):
    """Raised when a dump cannot be converted."""

    pass


class NotSysexFile(ConversionError):
    """The stream does not start with a SysEx start marker."""

    def __init__(self, first_byte: int, source: str = "input"):
        self.first_byte = first_byte
        self.source = source
        super().__init__(
            f"{source} is not *.syx file (first byte {first_byte:02x}, it should be f0)"
        )


class HeaderMismatch(ConversionError):
    """A fixed header byte does not hold its expected constant."""

    field_name = "header"

    def __init__(self, offset: int, actual: int, expected: int):
        self.offset = offset
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Unknown {self.field_name} data ({actual:02x}) at offset {offset}, "
            f"it should be {expected:02x}"
        )


class BadManufacturerId(HeaderMismatch):
    """Manufacturer ID bytes (offsets 1-3) are not Novation's."""

    field_name = "manufacturer ID"


class BadDeviceType(HeaderMismatch):
    """Device type byte (offset 4) is not the Station device type."""

    field_name = "device type"


class UnknownDeviceFamily(HeaderMismatch):
    """Device family byte (offset 5) is neither A-Station nor K/V-Station."""

    field_name = "device family"


class AlreadyConverted(ConversionError):
    """The dump already carries the K-Station/V-Station family byte."""

    def __init__(self, message_index: int = 0):
        self.message_index = message_index
        super().__init__(
            "The input data is V-Station/K-Station dump. No conversion required."
        )


class MessageTooShort(ConversionError):
    """A header field was read past the end of the message."""

    def __init__(self, offset: int, length: int):
        self.offset = offset
        self.length = length
        super().__init__(
            f"Message of {length} bytes is too short to hold offset {offset}"
        )


class MessageTooLong(ConversionError):
    """A message grew past the largest Station dump (program pair)."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Message exceeds {limit} bytes")


class TruncatedMessage(ConversionError):
    """The stream ended inside a message."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Stream ended inside a message ({length} bytes, no f7)")


class WriteError(ConversionError):
    """The output sink refused a write."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "File write error"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# Failures confined to a single message; keep-going mode skips past these.
MESSAGE_ERRORS = (HeaderMismatch, AlreadyConverted, MessageTooShort)
