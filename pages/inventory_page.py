import time
from decimal import Decimal

import allure
from playwright.sync_api import Page

from config.locators import INVENTORY_LOCATORS
from pages.base_page import BasePage
from pages.models import ProductRecord, CartLineItem, InventoryState, SortOrder
from pages.session_state import SessionState
from assertions.inventory_assert import InventoryAssert
from assertions.login_assert import LoginAssert
from utils.common_utils import parse_money
from utils.exceptions import ElementNotFound
from utils.logger import get_logger

logger = get_logger(__name__)


class InventoryPage(BasePage):
    URL_KEY = "inventory"
    LOCATORS = INVENTORY_LOCATORS

    def __init__(self, page: Page, **kwargs):
        super().__init__(page, **kwargs)
        # 商品列表
        self.item_rows = self.locators["item_row"]

        # 商品明细
        self.item_names = self.locators["item_name"]
        self.item_prices = self.locators["item_price"]
        self.item_descs = self.locators["item_desc"]
        self.item_imgs = self.locators["item_img"]

        # 排序下拉框、购物车
        self.sort_dropdown = self.locators["sort_dropdown"]
        self.cart_badge = self.locators["cart_badge"]
        self.cart_link = self.locators["cart_link"]

    def wait_ready(self):
        # 至少渲染出一行商品才开始读取
        self.wait_visible(self.item_rows.first)

    # ================= 页面行为 =================
    @allure.step("Open inventory page")
    def open_inventory(self):
        self.navigate()

    @allure.step("Sort products by {order}")
    def sort(self, order: SortOrder):
        self.wait_ready()
        self.sort_dropdown.select_option(order.value)
        self.expect_poll(lambda: self.sort_dropdown.input_value(), order.value, f"sort({order.name})")

    @allure.step("Add item #{index} to cart")
    def add_item(self, index: int) -> CartLineItem:
        row = self.locators.nth("item_row", index)
        button = self.locators.one("add_to_cart_button", scope=row)  # 已加购的商品没有 ADD TO CART 按钮
        item = self._line_item(row)
        before = self.get_cart_badge_count()
        self.click(button, f"ADD TO CART of {item.name!r}")
        self.expect_poll(self.get_cart_badge_count, before + 1, f"add_item({index})")
        logger.info("added %r, cart badge %d -> %d", item.name, before, before + 1)
        return item

    @allure.step("Remove item #{index} from cart")
    def remove_item(self, index: int) -> CartLineItem:
        row = self.locators.nth("item_row", index)
        button = self.locators.one("remove_button", scope=row)
        item = self._line_item(row)
        before = self.get_cart_badge_count()
        self.click(button, f"REMOVE of {item.name!r}")
        self.expect_poll(self.get_cart_badge_count, before - 1, f"remove_item({index})")
        logger.info("removed %r, cart badge %d -> %d", item.name, before, before - 1)
        return item

    def add_items_by_name(self, names: list[str]) -> list[CartLineItem]:
        """按商品名称加购，返回加购的商品（页面顺序）"""
        self.wait_ready()
        wanted = set(names)
        page_names = self.get_product_names()
        missing = wanted - set(page_names)
        if missing:
            raise ElementNotFound(f"products not listed: {sorted(missing)}", self.diagnostics(listed=page_names))
        return [self.add_item(i) for i, name in enumerate(page_names) if name in wanted]

    @allure.step("Go to cart")
    def go_to_cart(self) -> float:
        """进入购物车，返回跳转耗时（秒）"""
        self.begin_transition(SessionState.CART, "go_to_cart")
        start = time.monotonic()
        self.click(self.cart_link, "cart link")
        self.wait_url("cart", "go_to_cart")
        elapsed = round(time.monotonic() - start, 3)
        logger.info("go_to_cart took %.3fs", elapsed)
        return elapsed

    # ================= 数据获取 =================
    def read_state(self) -> InventoryState:
        self.wait_ready()
        products = [self._product(self.item_rows.nth(i)) for i in range(self.item_rows.count())]
        return InventoryState(products=products, cart_count=self.get_cart_badge_count(),
                              remove_count=self.get_remove_count())

    def _product(self, row) -> ProductRecord:
        return ProductRecord(
            name=self.text(self.locators.within(row, "item_name")),
            description=self.text(self.locators.within(row, "item_desc")),
            price=parse_money(self.text(self.locators.within(row, "item_price"))),
            image_reference=self.locators.within(row, "item_img").get_attribute("src") or "")

    def _line_item(self, row) -> CartLineItem:
        return CartLineItem(name=self.text(self.locators.within(row, "item_name")),
                            price=parse_money(self.text(self.locators.within(row, "item_price"))))

    def get_product_count(self) -> int:
        return self.get_count(self.item_rows)

    def get_product_names(self) -> list[str]:
        return self.get_texts(self.item_names)

    def get_product_descriptions(self) -> list[str]:
        return self.get_texts(self.item_descs)

    def get_product_imgs(self) -> list[str]:
        return self.get_attrs(self.item_imgs, "src")

    def get_product_prices(self) -> list[str]:
        return self.get_texts(self.item_prices)

    def get_product_prices_as_number(self) -> list[Decimal]:
        return [parse_money(p) for p in self.get_product_prices()]

    def get_cart_badge_count(self) -> int:
        # 购物车为空时角标不存在
        return self.badge_count(self.cart_badge)

    def get_remove_count(self) -> int:
        return self.locators.count("remove_button")

    # ========== 基础校验 ==========
    def verify_base_info(self, expect_count: int):
        self.wait_ready()
        LoginAssert.page_title(self.get_title())  # 页面标题 Swag Labs
        InventoryAssert.product_count(self.get_product_count(), expect_count)  # 商品数量一致
        InventoryAssert.column_not_empty(self.get_product_names())  # 商品名称非空
        InventoryAssert.column_not_empty(self.get_product_descriptions())  # 商品描述非空
        InventoryAssert.column_not_empty(self.get_product_imgs())  # 商品图片非空
        InventoryAssert.product_price_format(self.get_product_prices())  # 商品价格格式
        InventoryAssert.product_price_is_decimal(self.get_product_prices_as_number())  # 商品价格是Decimal

    def verify_sorted(self, order: SortOrder):
        values = self.get_product_prices_as_number() if order.by_price else self.get_product_names()
        InventoryAssert.sorted_by(values, order)

    def verify_cart_badge_matches_added(self):
        """角标数字 == 已加购商品数（REMOVE 按钮数）"""
        InventoryAssert.cart_badge_consistent(self.get_cart_badge_count(), self.get_remove_count())
