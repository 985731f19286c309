# This project was developed with assistance from AI tools.
"""KYC onboarding: identity-verification wizard, gateway client and upload API."""

__version__ = "0.1.0"
