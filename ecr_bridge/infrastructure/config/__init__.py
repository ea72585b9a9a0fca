from ecr_bridge.infrastructure.config.settings import BridgeSettings, SettingsError

__all__ = ["BridgeSettings", "SettingsError"]
