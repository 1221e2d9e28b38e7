"""OrbitIQ backend: satellite position resolution with graceful fallback."""

__version__ = "1.0.0"
