"""vdash - video production workflow dashboard."""

__version__ = "0.1.0"
