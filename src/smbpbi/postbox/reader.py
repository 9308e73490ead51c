# src/smbpbi/postbox/reader.py
"""
post-box 读取主流程：
    检查 size -> 打开总线 -> 编码 offset -> 组合传输 -> 校验 -> 返回 bytes

任何一步失败都直接抛出（不重试），并在异常上补一句
"Unable to read post-box at +{offset}, size={size}"，方便不重跑就能定位。
"""
from __future__ import annotations

import sys
from typing import Callable

from smbpbi.core import config as cfg
from .backends.base import I2CBackend
from .backends.linux_i2c import LinuxI2CBackend
from .encoder import encode_offset
from .errors import BusError, PostBoxError, SizeBoundsError
from .state import Device, PostBoxRequest
from .transaction import execute
from .validator import validate

BackendFactory = Callable[[int], I2CBackend]


class PostBoxReader:
    """SMBus post-box 接口的只读访问。每次 read() 都是独立的一次传输，不缓存任何状态。"""

    def __init__(
        self,
        backend_factory: BackendFactory = LinuxI2CBackend,
        verbose: bool = False,
    ) -> None:
        """
        :param backend_factory: 传入总线号、返回 I2CBackend 的可调用对象
        :param verbose: 是否把 [DEBUG] 信息打到 stderr
        """
        self._backend_factory = backend_factory
        self._verbose = verbose

    def _debug(self, msg: str) -> None:
        if self._verbose:
            print(f"[DEBUG] {msg}", file=sys.stderr)

    def read(self, bus: int, address: int, offset: int, size: int) -> bytes:
        """
        从 (bus, address) 设备的 post-box offset 处读 size 个字节。

        :raises SizeBoundsError: size 超过 MAX_POST_BOX_SIZE（不会碰硬件）
        :raises BusError: 打不开总线，或者传输过程中底层报错
        :raises IncompleteTransferError: 只完成了部分消息
        """
        request = PostBoxRequest(offset=offset, size=size)
        device = Device(bus=bus, address=address)
        try:
            # 1) 先检查大小，超了就别去动硬件
            if request.size > cfg.MAX_POST_BOX_SIZE:
                raise SizeBoundsError(request.size, cfg.MAX_POST_BOX_SIZE)
            return self._read(device, request)
        except PostBoxError as e:
            e.context = f"Unable to read post-box at +{offset}, size={size}"
            raise

    def _read(self, device: Device, request: PostBoxRequest) -> bytes:
        # 2) 打开总线，with 保证任何路径下都会 close
        try:
            backend = self._backend_factory(device.bus)
        except OSError as e:
            raise BusError(f"Unable to open {device}", device) from e

        with backend:
            # 3) offset -> 地址字节
            address_bytes = encode_offset(request.offset)
            self._debug(f"{device}: offset +{request.offset} -> {address_bytes.hex()}")

            # 4) 组合传输，buffer 先清零
            buf = bytearray(request.size)
            outcome = execute(backend, device, address_bytes, buf)
            self._debug(
                f"{device}: {outcome.messages_completed}/{outcome.messages_expected} messages"
            )

            # 5) 两条消息都完成才算数
            validate(outcome)

        # 6) 返回一份独立的 bytes，不和内部 buffer 共享
        return bytes(buf)
