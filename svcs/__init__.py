"""SVCS - a minimal single-user version control system.

Tracks files, snapshots their content into commits addressed by a
content hash, and restores past snapshots on demand.
"""

__version__ = "1.0.0"
