# src/smbpbi/postbox/backends/mcp2221_easy.py
from __future__ import annotations

import EasyMCP2221  # pip install EasyMCP2221
from EasyMCP2221.exceptions import LowSCLError, LowSDAError, NotAckError
from EasyMCP2221.exceptions import TimeoutError as MCPTimeoutError

from smbpbi.core import config as cfg
from .base import I2CBackend

# I2C 引擎内部超时、写/读状态错误时 EasyMCP2221 直接抛 RuntimeError
_MCP_ERRORS = (NotAckError, MCPTimeoutError, LowSCLError, LowSDAError, RuntimeError)


class MCP2221EasyBackend(I2CBackend):
    """
    基于 EasyMCP2221 的 MCP2221A I2C 适配器实现。

    - 负责跟 USB/HID 打交道
    - 总线号就是第几个 MCP2221（devnum）
    - 写地址用 nonstop，读数据用 restart，两段之间不放 STOP
    """

    def __init__(
        self,
        bus: int = 0,
        bus_speed: int = cfg.I2C_BUS_SPEED,
        timeout_ms: int = cfg.MCP2221_TIMEOUT_MS,
    ) -> None:
        """
        :param bus: 第几个 MCP2221 设备（从 0 开始）
        :param bus_speed: I2C 总线速度（Hz）
        :param timeout_ms: 单条消息超时
        """
        self._timeout_ms = timeout_ms
        try:
            self._mcp = EasyMCP2221.Device(devnum=bus)
            self._mcp.I2C_speed(bus_speed)
        except RuntimeError as e:
            # 找不到设备时 EasyMCP2221 抛 RuntimeError，统一成 OSError 给上层
            raise OSError(f"MCP2221 #{bus} not available: {e}") from e

    def transfer(self, dev_addr: int, write_data: bytes, read_buf: bytearray) -> int:
        if dev_addr > cfg.I2C_7BIT_ADDR_MAX:
            raise OSError(
                f"MCP2221 supports 7-bit addresses only, got 0x{dev_addr:x}"
            )

        completed = 0
        try:
            # 读 0 字节时 MCP2221 不接受 size=0 的读，只发一条带 STOP 的写，读消息算完成
            if not read_buf:
                self._mcp.I2C_write(
                    dev_addr, write_data, kind="regular", timeout_ms=self._timeout_ms
                )
                return 2

            self._mcp.I2C_write(
                dev_addr, write_data, kind="nonstop", timeout_ms=self._timeout_ms
            )
            completed += 1

            data = self._mcp.I2C_read(
                dev_addr, len(read_buf), kind="restart", timeout_ms=self._timeout_ms
            )
        except _MCP_ERRORS as e:
            raise OSError(f"MCP2221 I2C error after {completed} message(s): {e!r}") from e

        # 读回来的长度不够，这条读消息不算完成
        if len(data) != len(read_buf):
            return completed

        read_buf[:] = bytes(data)
        return completed + 1

    def close(self) -> None:
        """
        EasyMCP2221 会在对象销毁时自动关闭 USB，这里只是把引用放掉。
        """
        self._mcp = None
