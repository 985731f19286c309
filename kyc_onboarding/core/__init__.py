# This project was developed with assistance from AI tools.
"""Application core -- configuration."""
