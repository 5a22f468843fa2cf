"""Processing package exports.

Expose commonly used processing modules for convenient import.
"""

from labledger.processing import activity, lending, sheets

__all__ = ["activity", "lending", "sheets"]
