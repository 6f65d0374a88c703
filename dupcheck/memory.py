"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys

from .errors import MemoryLimitError


def peak_rss_bytes() -> int:
    """Peak resident set size of this process, or 0 where unavailable."""
    try:
        import resource
    except ImportError:
        return 0
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is in bytes on macOS and kilobytes elsewhere.
    return int(usage) if sys.platform == "darwin" else int(usage) * 1024


class MemoryGuard:
    __slots__ = ("limit_bytes", "_probe")

    def __init__(self, limit_bytes: int, probe=peak_rss_bytes) -> None:
        self.limit_bytes = limit_bytes
        self._probe = probe

    def check(self, stage: str) -> None:
        used = self._probe()
        if used > self.limit_bytes:
            raise MemoryLimitError(
                f"Memory usage {used // (1024 * 1024)} MB exceeded the "
                f"{self.limit_bytes // (1024 * 1024)} MB limit during {stage}",
                limit_bytes=self.limit_bytes,
                used_bytes=used,
            )
