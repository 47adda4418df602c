"""
Campaigns component port definitions.
"""

from chosen_arrows.components.auth.ports import AdminGatePort
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.core.ports.storage import ObjectStoragePort

__all__ = ["AdminGatePort", "DataPort", "ObjectStoragePort", "RevalidatorPort"]
