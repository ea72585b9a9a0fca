from ecr_bridge.application.bridge import Bridge

__all__ = ["Bridge"]
