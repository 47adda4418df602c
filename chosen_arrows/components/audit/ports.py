"""
Audit component port definitions.
"""

from chosen_arrows.components.auth.ports import AdminGatePort
from chosen_arrows.core.ports.db import DataPort

__all__ = ["AdminGatePort", "DataPort"]
