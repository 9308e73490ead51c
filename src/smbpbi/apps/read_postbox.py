# src/smbpbi/apps/read_postbox.py
"""
SMBus post-box 接口命令行工具

用法：
    smbpbi read --bus 1 --address 0x50 --offset 0x10 --size 4
成功时把读到的字节按十六进制数组打到 stdout，失败时把完整的错误链打到 stderr，退出码 1。
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from smbpbi.core import config as cfg
from smbpbi.postbox.errors import PostBoxError
from smbpbi.postbox.reader import PostBoxReader


def _ranged_int(low: int, high: Optional[int]):
    """argparse 的 type：接受十进制或 0x 开头的十六进制，并检查范围。"""

    def parse(value: str) -> int:
        try:
            n = int(value, 0)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer '{value}'")
        if n < low or (high is not None and n > high):
            upper = "" if high is None else f", {high}"
            raise argparse.ArgumentTypeError(f"{n} out of range [{low}{upper}]")
        return n

    return parse


def _make_backend_factory(name: str):
    if name == "mcp2221":
        # 只有选了 MCP2221 才去加载 HID 相关依赖
        from smbpbi.postbox.backends.mcp2221_easy import MCP2221EasyBackend

        return MCP2221EasyBackend

    from smbpbi.postbox.backends.linux_i2c import LinuxI2CBackend

    return LinuxI2CBackend


def format_hex_array(data: bytes) -> str:
    """按每行一个 0xNN 的格式输出，空数组输出 []。"""
    if not data:
        return "[]"
    lines = ["["]
    lines += [f"    0x{b:02x}," for b in data]
    lines.append("]")
    return "\n".join(lines)


def format_error_chain(exc: BaseException) -> str:
    """
    把异常以及它的 __cause__ 链展开成多行文字：
        Error: <最外层>

        Caused by:
            <下一层>
            ...
    """
    messages: List[str] = []
    if isinstance(exc, PostBoxError):
        if exc.context:
            messages.append(exc.context)
        messages.append(exc.message)
    else:
        messages.append(str(exc))

    cause = exc.__cause__
    while cause is not None:
        messages.append(str(cause))
        cause = cause.__cause__

    text = f"Error: {messages[0]}"
    if len(messages) > 1:
        text += "\n\nCaused by:\n" + "\n".join(f"    {m}" for m in messages[1:])
    return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smbpbi",
        description="Smbus post-box interface sensor management",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    read_parser = sub.add_parser("read", help="Read a post-box")
    read_parser.add_argument(
        "--bus", required=True, type=_ranged_int(0, cfg.BUS_INDEX_MAX),
        help="Post-box interface I2C bus index",
    )
    read_parser.add_argument(
        "--address", required=True, type=_ranged_int(0, cfg.DEVICE_ADDR_MAX),
        help="Post-box interface I2C address",
    )
    read_parser.add_argument(
        "--offset", required=True, type=_ranged_int(0, cfg.OFFSET_MAX),
        help="Post-box offset",
    )
    read_parser.add_argument(
        "--size", required=True, type=_ranged_int(0, None),
        help="Post-box size",
    )
    read_parser.add_argument(
        "--backend", choices=("linux", "mcp2221"), default=cfg.DEFAULT_BACKEND,
        help="I2C adapter to use (default: %(default)s)",
    )
    read_parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print [DEBUG] lines to stderr",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    reader = PostBoxReader(
        backend_factory=_make_backend_factory(args.backend),
        verbose=args.verbose,
    )
    try:
        value = reader.read(args.bus, args.address, args.offset, args.size)
    except PostBoxError as e:
        print(format_error_chain(e), file=sys.stderr)
        return 1

    print(format_hex_array(value))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
