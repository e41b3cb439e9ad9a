"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (REST, CLI, result sinks)
- Outbound adapters: Implement external dependencies (file system)
"""

from controldata.adapters.outbound import (
    FileControlFileSource,
    InMemoryControlFileSource,
)

__all__ = [
    # Outbound adapters
    "FileControlFileSource",
    "InMemoryControlFileSource",
]
