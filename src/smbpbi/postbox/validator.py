# src/smbpbi/postbox/validator.py
from __future__ import annotations

from .errors import IncompleteTransferError
from .state import TransferOutcome


def validate(outcome: TransferOutcome) -> None:
    """两条消息都完成才算成功，否则 buffer 内容一律作废。"""
    if not outcome.complete:
        raise IncompleteTransferError(
            outcome.messages_completed,
            outcome.messages_expected,
        )
