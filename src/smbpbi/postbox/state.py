# src/smbpbi/postbox/state.py
from __future__ import annotations

from dataclasses import dataclass

from smbpbi.core import config as cfg


@dataclass(frozen=True)
class Device:
    bus: int      # 总线号，对应 /dev/i2c-{bus}
    address: int  # 设备地址，7bit 或 10bit

    def __post_init__(self) -> None:
        if not 0 <= self.bus <= cfg.BUS_INDEX_MAX:
            raise ValueError(f"bus index must be in [0, {cfg.BUS_INDEX_MAX}], got {self.bus}")
        if not 0 <= self.address <= cfg.DEVICE_ADDR_MAX:
            raise ValueError(
                f"device address must be in [0, 0x{cfg.DEVICE_ADDR_MAX:X}], got {self.address}"
            )

    @property
    def path(self) -> str:
        return cfg.I2C_DEV_PATH.format(bus=self.bus)

    def __str__(self) -> str:
        return f"{self.path} @0x{self.address:02x}"


@dataclass(frozen=True)
class PostBoxRequest:
    offset: int  # post-box 寄存器偏移（16bit）
    size: int    # 要读的字节数，上限由 PostBoxReader 检查

    def __post_init__(self) -> None:
        if not 0 <= self.offset <= cfg.OFFSET_MAX:
            raise ValueError(f"offset must be in [0, 0x{cfg.OFFSET_MAX:X}], got {self.offset}")
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")


@dataclass(frozen=True)
class TransferOutcome:
    messages_completed: int
    messages_expected: int = cfg.POST_BOX_MESSAGES

    @property
    def complete(self) -> bool:
        return self.messages_completed == self.messages_expected
