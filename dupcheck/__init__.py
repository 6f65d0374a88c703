"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dupcheck")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = ["__version__"]
