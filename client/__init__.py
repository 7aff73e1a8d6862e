"""
Client for the NYC58 HTTP API.
"""

from client.api import ApiClientError, Nyc58Client, REGISTRATION_TEMPLATE

__all__ = ["ApiClientError", "Nyc58Client", "REGISTRATION_TEMPLATE"]
