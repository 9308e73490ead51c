# src/smbpbi/postbox/backends/base.py
from __future__ import annotations

from abc import ABC, abstractmethod


class I2CBackend(ABC):
    """
    抽象 I2C 适配器接口。

    任何能做“先写后读”组合传输的控制器（/dev/i2c-N、MCP2221A、测试用的假总线……）
    只要实现 transfer() 和 close()，就可以被 PostBoxReader 复用。
    一个 backend 实例只对应一条总线，用 with 语句保证用完一定 close。
    """

    @abstractmethod
    def transfer(self, dev_addr: int, write_data: bytes, read_buf: bytearray) -> int:
        """
        在同一次总线操作里发两条消息：
        1) 向 dev_addr 写 write_data；
        2) 紧接着（repeated start，中间不放 STOP）读 len(read_buf) 个字节，填进 read_buf。

        返回底层确认完成的消息条数（0、1 或 2），是否成功由调用方判断。
        传输本身出错（NACK、总线错误、超时）时抛 OSError。
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """释放底层连接。"""
        raise NotImplementedError

    def __enter__(self) -> "I2CBackend":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
