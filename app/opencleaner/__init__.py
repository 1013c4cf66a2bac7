"""opencleaner - reclaim disk space on macOS workstations.

Scans well-known user library locations, classifies what it finds by
deletion safety, and removes selected items through a whitelist-gated
safety manager.
"""

__version__ = "0.1.0"
