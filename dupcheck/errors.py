"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""


class DupCheckError(Exception):
    """Base exception for DupCheck."""


class FileProcessingError(DupCheckError):
    """Error processing a single input file."""


class ParseError(FileProcessingError):
    """Source file could not be turned into a syntax tree."""


class ResourceParseError(FileProcessingError):
    """JSON or YAML document is malformed."""


class SourceReadError(FileProcessingError):
    """File vanished or became unreadable during the scan."""


class ValidationError(DupCheckError):
    """Input validation failed."""


class ConfigurationError(DupCheckError):
    """Detector configuration is missing or invalid."""


class MemoryLimitError(DupCheckError):
    """Process memory grew past the configured ceiling."""

    __slots__ = ("limit_bytes", "used_bytes")

    def __init__(self, message: str, *, limit_bytes: int, used_bytes: int) -> None:
        super().__init__(message)
        self.limit_bytes = limit_bytes
        self.used_bytes = used_bytes
