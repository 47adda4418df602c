"""
Media component port definitions.
"""

from chosen_arrows.components.auth.ports import AdminGatePort
from chosen_arrows.core.ports.storage import ObjectStoragePort
from chosen_arrows.core.ports.time import TimePort

__all__ = ["AdminGatePort", "ObjectStoragePort", "TimePort"]
