from .base import Authority, ActionResponse
from .http_client import HttpAuthority

__all__ = ["Authority", "ActionResponse", "HttpAuthority"]
