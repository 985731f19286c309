# This project was developed with assistance from AI tools.
"""Onboarding wizard -- step catalogue, gating predicates, camera and controller."""

from .flow import ApplicantSession, InvalidTransitionError, KycFlow
from .steps import STEPS, StepDefinition, StepId

__all__ = [
    "ApplicantSession",
    "InvalidTransitionError",
    "KycFlow",
    "STEPS",
    "StepDefinition",
    "StepId",
]
