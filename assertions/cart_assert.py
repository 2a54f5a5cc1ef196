from collections import Counter

from config.pages import PAGE_TITLE
from pages.models import CartLineItem, CartState


class CartAssert:

    @staticmethod
    def cart_badge_count(actual: int, expect: int):
        assert actual == expect, f"购物车角标数字{actual}，预期{expect}"

    @staticmethod
    def badge_matches_line_items(badge_count: int, items: list[CartLineItem]):
        """静止状态下：角标数字 == 购物车商品行数，无角标即为0"""
        assert badge_count == len(items), f"购物车角标{badge_count}!=购物车商品行数{len(items)}"

    @staticmethod
    def line_items_match(added: list[CartLineItem], in_cart: list[CartLineItem]):
        """加购的商品与购物车行一一对应：名称相同、价格按数值相等，不要求顺序"""
        missing = Counter(added) - Counter(in_cart)
        unexpected = Counter(in_cart) - Counter(added)
        assert not missing, f"已加购但不在购物车：{sorted(i.name for i in missing.elements())}"
        assert not unexpected, f"购物车中多出未加购商品：{sorted(i.name for i in unexpected.elements())}"

    @staticmethod
    def empty(state: CartState):
        assert not state.items, f"购物车应为空，实际有{[i.name for i in state.items]}"
        assert state.badge_count == 0, f"空购物车不应显示角标，实际{state.badge_count}"

    @staticmethod
    def identity(title: str, header: str, checkout_visible: bool):
        """购物车页面身份：标题、副标题 Your Cart、CHECKOUT 可见"""
        assert title == PAGE_TITLE, f"页面标题错误：{title}"
        assert "Your Cart" in header, f"购物车副标题错误：{header}"
        assert checkout_visible, "购物车页面 CHECKOUT 按钮不可见"
