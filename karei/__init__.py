"""karei — Linux desktop and developer-environment bootstrapper."""

__version__ = "0.1.0"
