"""gitline — git status segments for shell prompts."""

__version__ = "0.1.0"
