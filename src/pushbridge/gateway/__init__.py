"""Gateway: the Bridge binding a push-source to a shared stream."""

from pushbridge.gateway.bridge import Bridge

__all__ = ["Bridge"]
