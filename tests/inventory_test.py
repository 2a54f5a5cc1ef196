import pytest

from data.products import PRODUCT_COUNT, EXPECTED_PRODUCTS
from data.personas import personas_able_to_login, QuirkKind
from pages.inventory_page import InventoryPage
from pages.models import SortOrder
from assertions.inventory_assert import InventoryAssert

BASELINE_PERSONAS = [p.id for p in personas_able_to_login() if p.is_baseline]


@pytest.fixture(scope="function")
def inventory_page(logged_in_page):
    return InventoryPage(logged_in_page)


@pytest.mark.ui
class TestInventory:

    @pytest.mark.parametrize("persona", BASELINE_PERSONAS, indirect=True)
    def test_expected_products(self, inventory_page, persona):
        """无 quirk 的 persona 看到固定的6个商品"""
        state = inventory_page.read_state()
        InventoryAssert.products_match_expected(state.products, EXPECTED_PRODUCTS)
        assert state.cart_count == 0

    def test_inventory_base_info(self, inventory_page):
        """验证商品列表基础信息"""
        inventory_page.verify_base_info(PRODUCT_COUNT)

    @pytest.mark.parametrize("order", list(SortOrder), ids=lambda o: o.value)
    def test_sort(self, inventory_page, order):
        inventory_page.sort(order)
        inventory_page.verify_sorted(order)

    @pytest.mark.parametrize("order", list(SortOrder), ids=lambda o: o.value)
    def test_sort_is_idempotent(self, inventory_page, order):
        inventory_page.sort(order)
        once = inventory_page.get_product_names()
        inventory_page.sort(order)
        assert inventory_page.get_product_names() == once

    def test_all_sort_orders_in_sequence(self, inventory_page):
        """同一页面上依次切换全部排序方式"""
        for order in SortOrder:
            inventory_page.sort(order)
            inventory_page.verify_sorted(order)

    @pytest.mark.persona("problem")
    def test_problem_user_inventory_base_info(self, inventory_page, persona):
        assert persona.has_quirk(QuirkKind.VISUAL_CORRUPTION)
        inventory_page.verify_base_info(PRODUCT_COUNT)
