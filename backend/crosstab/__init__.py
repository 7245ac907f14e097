"""
Cross-context message broadcast manager.
"""

from crosstab.communication import CrossTabCommunicationManager

__version__ = "0.1.0"

__all__ = [
    "CrossTabCommunicationManager",
]
