import time

import allure
from playwright.sync_api import Page

from config.locators import CART_LOCATORS
from pages.base_page import BasePage
from pages.models import CartLineItem, CartState
from pages.session_state import SessionState
from assertions.cart_assert import CartAssert
from utils.common_utils import parse_money
from utils.logger import get_logger

logger = get_logger(__name__)


class CartPage(BasePage):
    URL_KEY = "cart"
    LOCATORS = CART_LOCATORS

    def __init__(self, page: Page, **kwargs):
        super().__init__(page, **kwargs)
        self.cart_list = self.locators["cart_list"]  # 购物车列表
        self.cart_items = self.locators["cart_item"]  # 购物车商品行
        self.cart_badge = self.locators["cart_badge"]  # 购物车显示商品数
        self.subheader = self.locators["subheader"]  # Your Cart
        self.continue_shopping_button = self.locators["continue_shopping"]  # continue-shopping按钮
        self.checkout_button = self.locators["checkout_button"]  # 结算按钮

    def wait_ready(self):
        # 空购物车也有列表容器
        self.wait_visible(self.cart_list)

    # ================= 页面行为 =================
    @allure.step("Remove cart line #{index}")
    def remove_item(self, index: int) -> CartLineItem:
        row = self.locators.nth("cart_item", index)
        button = self.locators.one("remove_button", scope=row)
        item = self._line_item(row)
        before = self.get_cart_item_count()
        self.click(button, f"REMOVE of {item.name!r}")
        self.expect_poll(self.get_cart_item_count, before - 1, f"remove cart line {index}")
        logger.info("removed %r from cart page, %d line(s) left", item.name, before - 1)
        return item

    @allure.step("Continue shopping")
    def continue_shopping(self):
        self.begin_transition(SessionState.INVENTORY, "continue_shopping")
        self.click(self.continue_shopping_button, "CONTINUE SHOPPING")
        self.wait_url("inventory", "continue_shopping")

    @allure.step("Checkout")
    def checkout(self) -> float:
        """进入 checkout-step-one，返回跳转耗时（秒）"""
        self.begin_transition(SessionState.CHECKOUT_INFO, "checkout")
        start = time.monotonic()
        self.click(self.checkout_button, "CHECKOUT")
        self.wait_url("checkout_step_one", "checkout")
        elapsed = round(time.monotonic() - start, 3)
        logger.info("checkout took %.3fs", elapsed)
        return elapsed

    # ================= 数据获取 =================
    def read_state(self) -> CartState:
        self.wait_ready()
        items = [self._line_item(self.cart_items.nth(i)) for i in range(self.cart_items.count())]
        return CartState(items=items, badge_count=self.get_cart_badge_count())

    def _line_item(self, row) -> CartLineItem:
        # 购物车页价格不带 $，例如 29.99
        return CartLineItem(name=self.text(self.locators.within(row, "item_name")),
                            price=parse_money(self.text(self.locators.within(row, "item_price")),
                                              require_symbol=False))

    def get_cart_item_count(self) -> int:
        return self.get_count(self.cart_items)

    def get_cart_badge_count(self) -> int:
        return self.badge_count(self.cart_badge)

    def get_cart_item_names(self) -> list[str]:
        return [item.name for item in self.read_state().items]

    # ================= 基础验证 =================
    def verify_identity(self):
        header = self.text(self.subheader) if self.locators.is_present("subheader") else ""
        CartAssert.identity(self.get_title(), header, self.checkout_button.is_visible())

    def verify_badge_matches_items(self):
        state = self.read_state()
        CartAssert.badge_matches_line_items(state.badge_count, state.items)

    def verify_cart_matches_added(self, added_items: list[CartLineItem]):
        CartAssert.line_items_match(added_items, self.read_state().items)

    def verify_empty(self):
        CartAssert.empty(self.read_state())
