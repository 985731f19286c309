# This project was developed with assistance from AI tools.
"""FastAPI routers for the onboarding endpoints."""
