# src/smbpbi/postbox/transaction.py
from __future__ import annotations

from smbpbi.core import config as cfg
from .backends.base import I2CBackend
from .errors import BusError
from .state import Device, TransferOutcome


def execute(
    backend: I2CBackend,
    device: Device,
    address_bytes: bytes,
    out: bytearray,
) -> TransferOutcome:
    """
    对 device 发一次“写地址 + 读数据”的组合传输，结果直接填进 out。

    只负责把底层报告的完成条数带回来，成不成功交给 validator 判断；
    底层抛 OSError 时包成 BusError（带上设备和 offset），不重试。
    """
    offset = int.from_bytes(address_bytes, "big")
    try:
        completed = backend.transfer(device.address, address_bytes, out)
    except OSError as e:
        raise BusError(
            f"Unable to complete i2c transfer with {device} at +{offset}",
            device,
            offset=offset,
        ) from e

    return TransferOutcome(
        messages_completed=completed,
        messages_expected=cfg.POST_BOX_MESSAGES,
    )
