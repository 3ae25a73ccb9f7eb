"""
Quote Assistant Functions

Serverless handlers that proxy browser requests to the Anthropic Messages API:
supplier invoice line-item extraction and AI pricing strategy recommendations.
"""

__version__ = "0.1.0"
