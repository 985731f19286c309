# This project was developed with assistance from AI tools.
"""Client side -- gateway to the onboarding backend."""

from .gateway import KycGateway, KycRequestError

__all__ = [
    "KycGateway",
    "KycRequestError",
]
