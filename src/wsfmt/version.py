"""Single source of truth for the wsfmt version string."""

__version__: str = "0.1.0"
