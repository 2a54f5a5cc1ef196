import re
from decimal import Decimal

from pages.models import SortOrder
from utils.common_utils import format_money


class InventoryAssert:

    @staticmethod
    def product_count(actual_count: int, expect_count: int):
        assert actual_count == expect_count, f"期望商品数量：{expect_count}，实际商品数量：{actual_count}"

    @staticmethod
    def column_not_empty(names: list):
        assert names, "商品信息list为空"
        for name in names:
            assert name and name.strip(), "存在商品信息为空"

    @staticmethod
    def product_price_format(prices: list[str]):
        assert prices, "商品价格list为空"
        for price in prices:
            assert re.match(r"^\$\d+(\.\d{2})$", price), f"商品价格格式错误：{price}"

    @staticmethod
    def product_price_is_decimal(prices: list[Decimal]):
        for price in prices:
            assert isinstance(price, Decimal), f"价格不是 Decimal: {price}"
            assert price > 0, f"价格必须大于 0: {price}"

    @staticmethod
    def sorted_by(values: list, order: SortOrder):
        assert order.is_sorted(values), f"未按{order.name}排列：{values}"

    @staticmethod
    def products_match_expected(products: list, expected: list[dict]):
        """商品名称、价格与预期完全一致（含顺序）"""
        actual = [{"name": p.name, "price": format_money(p.price)} for p in products]
        assert actual == expected, f"商品列表不符合预期：{actual}!={expected}"

    @staticmethod
    def cart_badge_consistent(badge_count: int, added_count: int):
        assert badge_count == added_count, f"购物车角标{badge_count}与已加购商品数{added_count}不一致"
