"""autobump: bump semantic versions from a Keep a Changelog document."""

from __future__ import annotations

__version__ = "0.1.0"
