# src/smbpbi/postbox/encoder.py
from __future__ import annotations

from smbpbi.core import config as cfg


def encode_offset(offset: int) -> bytes:
    """
    把 16bit 寄存器偏移编码成设备要的地址字节（大端）：
    - offset <= 0xFF：1 个字节，低地址最常见，少发一个字节；
    - 否则：2 个字节，高位在前。
    """
    if not 0 <= offset <= cfg.OFFSET_MAX:
        raise ValueError(f"offset must be in [0, 0x{cfg.OFFSET_MAX:X}], got {offset}")

    if offset <= cfg.SHORT_OFFSET_MAX:
        return bytes([offset])
    return offset.to_bytes(2, "big")
