from ecr_bridge.application.use_cases.submit_transaction import (
    SubmitReceipt,
    SubmitTransaction,
    SubmitZReport,
)

__all__ = ["SubmitReceipt", "SubmitTransaction", "SubmitZReport"]
