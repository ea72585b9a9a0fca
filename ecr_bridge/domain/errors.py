class ArtifactWriteError(Exception):
    """Raised when a command artifact could not be persisted to the inbox."""

    def __init__(self, artifact_name: str, directory: str) -> None:
        self.artifact_name = artifact_name
        self.directory = directory
        super().__init__(f"Could not write {artifact_name} to {directory}")


class CorrelationAlreadyResolvedError(Exception):
    """Raised when a correlation is resolved a second time."""

    def __init__(self, artifact_name: str, state: str) -> None:
        self.artifact_name = artifact_name
        self.state = state
        super().__init__(f"Correlation for {artifact_name} already resolved as {state}")
