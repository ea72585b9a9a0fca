from datetime import datetime

ARTIFACT_PREFIX = "bon_"
ARTIFACT_SUFFIX = ".txt"


def generate_artifact_name(now: datetime) -> str:
    """Build ``bon_<YYYYMMDDHHmmss>.txt``.

    Two artifacts created within the same second share a name.
    """
    return f"{ARTIFACT_PREFIX}{now:%Y%m%d%H%M%S}{ARTIFACT_SUFFIX}"
