# This project was developed with assistance from AI tools.
"""Domain services: validation, document classification, storage and audit."""
