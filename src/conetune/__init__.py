"""ConeTune — cone contrast testing and personalized color correction."""

__version__ = "0.1.0"
