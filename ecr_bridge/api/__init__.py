from ecr_bridge.api.server import create_app

__all__ = ["create_app"]
