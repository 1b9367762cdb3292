"""Course versioning and progressive-enrollment service."""

__version__ = "0.1.0"
