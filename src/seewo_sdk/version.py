"""Version information for Seewo Python SDK"""

__version__ = "0.1.0"
