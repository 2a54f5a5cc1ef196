from decimal import Decimal
import re

"""字符串中获取价格"""


def parse_money(text: str, require_symbol: bool = True) -> Decimal:
    """
        从 '$29.99' 或 'Item total: $39.98' 提取 Decimal
        require_symbol=False 时也接受不带 $ 的 '29.99'（v1 购物车页价格）
        """
    pattern = r"\$(\d+(?:\.\d+)?)" if require_symbol else r"\$?(\d+(?:\.\d+)?)"
    match = re.search(pattern, text or "")
    assert match, f"无法从文本中解析金额：{text}"
    return Decimal(match.group(1))


def format_money(value: Decimal) -> str:
    return f"${value:.2f}"


def parse_count(text: str | None) -> int:
    """购物车角标文本 -> 数量，空文本视为0"""
    text = (text or "").strip()
    return int(text) if text else 0
