from ecr_bridge.infrastructure.persistence.atomic_io import atomic_write
from ecr_bridge.infrastructure.persistence.file_mailbox import FileMailbox

__all__ = ["FileMailbox", "atomic_write"]
