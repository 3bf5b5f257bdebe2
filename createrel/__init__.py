"""Create a GitHub release from an annotated git tag."""

__version__ = "0.3.0"
