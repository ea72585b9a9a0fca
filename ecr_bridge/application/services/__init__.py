from ecr_bridge.application.services.response_correlator import Correlation, ResponseCorrelator

__all__ = ["Correlation", "ResponseCorrelator"]
