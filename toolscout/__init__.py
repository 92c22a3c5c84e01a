"""toolscout: project fingerprinting and tool recommendation."""

__version__ = "0.1.0"
