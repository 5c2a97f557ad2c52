"""reqctl: requirement catalogue rendering and compliance checking."""

__version__ = "1.0.0"
