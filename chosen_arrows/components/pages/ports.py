"""
Pages component port definitions.
"""

from chosen_arrows.core.ports.db import DataPort

__all__ = ["DataPort"]
