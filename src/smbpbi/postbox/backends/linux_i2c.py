# src/smbpbi/postbox/backends/linux_i2c.py
from __future__ import annotations

import fcntl

from smbus2 import SMBus, i2c_msg
from smbus2.smbus2 import I2C_RDWR, i2c_rdwr_ioctl_data

from smbpbi.core import config as cfg
from .base import I2CBackend


class LinuxI2CBackend(I2CBackend):
    """
    基于 smbus2 的 /dev/i2c-N 实现。

    - 打开设备节点（打不开直接抛 OSError）
    - 写地址 + 读数据放进同一个 I2C_RDWR ioctl，内核保证中间不会插进别的传输
    """

    def __init__(self, bus: int) -> None:
        """
        :param bus: I2C 总线号，对应 /dev/i2c-{bus}
        """
        self.path = cfg.I2C_DEV_PATH.format(bus=bus)
        self._bus = SMBus(self.path)

    def transfer(self, dev_addr: int, write_data: bytes, read_buf: bytearray) -> int:
        write = i2c_msg.write(dev_addr, write_data)
        read = i2c_msg.read(dev_addr, len(read_buf))

        # 10bit 地址要在每条消息上都打 I2C_M_TEN
        if dev_addr > cfg.I2C_7BIT_ADDR_MAX:
            write.flags |= cfg.I2C_M_TEN
            read.flags |= cfg.I2C_M_TEN

        # SMBus.i2c_rdwr() 会丢掉 ioctl 返回值，这里自己发，拿到完成的消息条数
        ioctl_data = i2c_rdwr_ioctl_data.create(write, read)
        completed = fcntl.ioctl(self._bus.fd, I2C_RDWR, ioctl_data)

        read_buf[:] = bytes(list(read))
        return completed

    def close(self) -> None:
        self._bus.close()
