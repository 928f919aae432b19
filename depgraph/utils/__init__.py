"""
Process output utilities package.
"""

from .io_helper import emit_success, emit_error

__all__ = ["emit_success", "emit_error"]
