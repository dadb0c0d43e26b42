"""
校验算法模块
============

闸机协议上下行使用两种不同的校验算法：

- 下行（命令帧）：字节累加后取反，保留低8位
- 上行（应答帧）：字节累加后加1，低8位为0表示正确
"""


def calculate_tx_checksum(data: bytes) -> int:
    """
    计算命令帧校验和

    Args:
        data: 参与校验的字节（命令帧第1~6字节，不含帧头和校验和）

    Returns:
        校验和，8位无符号整数

    Raises:
        TypeError: 当输入不是bytes类型时抛出

    Examples:
        >>> calculate_tx_checksum(bytes([0x00, 0x01, 0x10, 0x00, 0x00, 0x00]))
        238
        >>> calculate_tx_checksum(b'')
        255
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("输入数据必须是bytes类型")

    return ~sum(data) & 0xFF


def validate_rx_checksum(data: bytes) -> bool:
    """
    校验应答帧

    Args:
        data: 应答帧第1字节到校验和（含）的全部字节

    Returns:
        累加和加1后低8位为0时返回True
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("输入数据必须是bytes类型")

    return (sum(data) + 1) & 0xFF == 0
