# src/smbpbi/postbox/errors.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .state import Device


class PostBoxError(Exception):
    """
    post-box 读取失败的基类。

    - message : 本层的错误描述
    - context : 上层（PostBoxReader）补充的操作信息，比如 offset / size
    底层异常通过 `raise ... from exc` 挂在 __cause__ 上。
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.context: Optional[str] = None

    def __str__(self) -> str:
        if self.context:
            return f"{self.context}: {self.message}"
        return self.message


class SizeBoundsError(PostBoxError):
    """请求的字节数超过 post-box 上限，还没碰硬件就被拒绝。"""

    def __init__(self, size: int, maximum: int) -> None:
        super().__init__(
            f"Maximum post-box size is {maximum} bytes (requested {size})"
        )
        self.size = size
        self.maximum = maximum


class BusError(PostBoxError):
    """底层 I2C 传输失败：打不开设备节点、NACK、总线错误、超时……"""

    def __init__(
        self,
        message: str,
        device: "Device",
        offset: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.device = device
        self.offset = offset


class IncompleteTransferError(PostBoxError):
    """只完成了部分消息，读回来的 buffer 不可信。"""

    def __init__(self, completed: int, expected: int) -> None:
        super().__init__(
            f"Only {completed}/{expected} messages were transmitted successfully"
        )
        self.completed = completed
        self.expected = expected
