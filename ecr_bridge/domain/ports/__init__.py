from ecr_bridge.domain.ports.mailbox_port import MailboxPort

__all__ = ["MailboxPort"]
