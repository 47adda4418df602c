"""
Testimonials component port definitions.
"""

from chosen_arrows.components.auth.ports import AdminGatePort
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort

__all__ = ["AdminGatePort", "DataPort", "RevalidatorPort"]
