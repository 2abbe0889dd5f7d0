"""Local REST gateway and protocol client for MADIe channel naming."""

__version__ = "0.1.0"
