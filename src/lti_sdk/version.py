"""Version information for the LTI Python SDK"""

__version__ = "0.1.0"
