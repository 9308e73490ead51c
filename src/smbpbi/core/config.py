# src/smbpbi/core/config.py
"""
post-box 读取工具的全局常量。
其它模块统一用 `from smbpbi.core import config as cfg` 引用。
"""

# ---- post-box 协议 ---- #

# post-box 寄存器块最大 8 字节（一个 64bit 字），这是协议常量，跟主机字长无关
MAX_POST_BOX_SIZE = 8

# 一次读 = 写地址 + 读数据，两条消息
POST_BOX_MESSAGES = 2

# offset <= 0xFF 时只发 1 个字节的地址
SHORT_OFFSET_MAX = 0xFF
OFFSET_MAX = 0xFFFF

# ---- I2C 总线 ---- #

# 总线号 -> 设备节点
I2C_DEV_PATH = "/dev/i2c-{bus}"

BUS_INDEX_MAX = 0xFF
DEVICE_ADDR_MAX = 0xFFFF

# 7bit 地址上限，超过就按 10bit 地址发
I2C_7BIT_ADDR_MAX = 0x7F

# linux/i2c.h: struct i2c_msg.flags
I2C_M_TEN = 0x0010

# ---- MCP2221A USB 转 I2C ---- #

I2C_BUS_SPEED = 100_000
MCP2221_TIMEOUT_MS = 20

# 默认走 /dev/i2c-N；没有板载 I2C 的电脑可以改成 "mcp2221"
DEFAULT_BACKEND = "linux"
