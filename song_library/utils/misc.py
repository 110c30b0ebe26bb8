import re

INT64_MIN = -2**63
INT64_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')


def parse_int64(raw: str | None) -> int | None:
    """
    把字符串转换为整数。只接受可选符号加 ASCII 数字（不允许空格、下划线），
    超出 64 位有符号整数范围也算失败，返回 None
    """
    if raw is None or not _INT_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value
