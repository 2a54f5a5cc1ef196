import time

import pytest

from config.settings import TRANSITION_TIMEOUT
from fakes import FakePage, FakeElement, NAVIGATION_PENDING
from pages.base_page import BasePage, ClickFallback
from pages.cart_page import CartPage
from pages.inventory_page import InventoryPage
from pages.login_page import LoginPage
from pages.session_state import SessionState
from utils.exceptions import TransitionTimeout, UnexpectedState, AssertionTimeout, NavigationError


class ButtonPage(BasePage):
    URL_KEY = "inventory"
    LOCATORS = {"button": "button.btn_inventory"}


@pytest.fixture
def page():
    return FakePage(url="https://www.saucedemo.com/v1/inventory.html")


def add_button(page, **kwargs):
    button = FakeElement("ADD TO CART", **kwargs)
    page.elements["button.btn_inventory"] = [button]
    return button


class TestClickFallback:

    def test_plain_click(self, page):
        button = add_button(page)
        button_page = ButtonPage(page)
        button_page.click(button_page.locators["button"])
        assert button.clicks == [{"force": False}]
        assert button.click_timeouts == [TRANSITION_TIMEOUT]

    def test_force_once_when_click_intercepted(self, page, caplog):
        button = add_button(page, click_errors=1)
        button_page = ButtonPage(page, click_fallback=ClickFallback.FORCE_ONCE)
        button_page.click(button_page.locators["button"], "add button")
        assert button.clicks == [{"force": False}, {"force": True}]
        assert button.effects == 1
        assert "retrying once with force=True" in caplog.text

    def test_delivered_click_is_never_reissued(self, page, caplog):
        """点击已生效、之后等待导航超时：不能再强制点击一次"""
        button = add_button(page, click_errors=1, click_error=NAVIGATION_PENDING, fail_after_effect=True)
        button_page = ButtonPage(page, click_fallback=ClickFallback.FORCE_ONCE)
        button_page.click(button_page.locators["button"], "add button")
        assert button.effects == 1
        assert button.clicks == [{"force": False}]
        assert "retrying once" not in caplog.text

    def test_no_fallback_raises(self, page):
        button = add_button(page, click_errors=1)
        button_page = ButtonPage(page, click_fallback=ClickFallback.NONE)
        with pytest.raises(TransitionTimeout, match="click on add button was not delivered"):
            button_page.click(button_page.locators["button"], "add button")
        assert button.clicks == [{"force": False}]

    def test_unclassified_failure_is_not_forced(self, page):
        """元素不存在不属于可操作性失败，直接报错"""
        page.elements["button.btn_inventory"] = []
        button_page = ButtonPage(page)
        with pytest.raises(TransitionTimeout, match="click on add button was not delivered"):
            button_page.click(button_page.locators["button"], "add button")

    def test_forced_click_is_not_repeated(self, page):
        button = add_button(page, click_errors=1, force_fails=True)
        button_page = ButtonPage(page)
        with pytest.raises(TransitionTimeout, match="forced click on add button"):
            button_page.click(button_page.locators["button"], "add button")
        assert button.clicks == [{"force": False}, {"force": True}]


class TestExpectPoll:

    def test_state_settles_after_some_polls(self, page):
        counter = {"value": 0}

        def bump():
            counter["value"] += 1

        page.on_wait = bump
        result = ButtonPage(page).expect_poll(lambda: counter["value"], 2, "add_item(0)", timeout=5)
        assert result == 2
        assert len(page.waits) == 2

    def test_not_observed_raises_transition_timeout(self, page):
        with pytest.raises(TransitionTimeout) as exc_info:
            ButtonPage(page).expect_poll(lambda: 0, 1, "add_item(0)", timeout=0.05)
        assert exc_info.value.diagnostics["observed"] == 0
        assert exc_info.value.diagnostics["expected"] == 1
        assert exc_info.value.diagnostics["url"].endswith("inventory.html")


class TestScenarioDeadline:

    def test_deadline_read_from_page(self, page):
        page._scenario_deadline = 123.0
        assert ButtonPage(page).deadline == 123.0
        assert ButtonPage(page, deadline=7.0).deadline == 7.0
        assert ButtonPage(FakePage()).deadline is None

    def test_poll_stops_at_scenario_deadline(self, page):
        button_page = ButtonPage(page, deadline=time.monotonic() + 0.05)
        start = time.monotonic()
        with pytest.raises(AssertionTimeout) as exc_info:
            button_page.poll(lambda: 0, lambda value: value == 1, timeout=30, description="cart badge")
        assert time.monotonic() - start < 5
        assert exc_info.value.diagnostics["scenario_deadline"] is True
        assert "scenario deadline" in str(exc_info.value)

    def test_playwright_timeouts_bounded_by_deadline(self, page):
        button_page = ButtonPage(page, deadline=time.monotonic() - 1)
        assert button_page.bounded(TRANSITION_TIMEOUT) == 1
        assert ButtonPage(page).bounded(TRANSITION_TIMEOUT) == TRANSITION_TIMEOUT

    def test_click_uses_remaining_budget(self, page):
        button = add_button(page)
        button_page = ButtonPage(page, deadline=time.monotonic() + 1)
        button_page.click(button_page.locators["button"])
        assert 0 < button.click_timeouts[0] <= 1000


class TestNavigate:

    def test_goto_failure_is_navigation_error(self):
        page = FakePage(url="about:blank", goto_error="net::ERR_NAME_NOT_RESOLVED at https://www.saucedemo.com/v1/")
        login_page = LoginPage(page)
        with pytest.raises(NavigationError) as exc_info:
            login_page.navigate()
        assert page.visited == [login_page.url]
        assert exc_info.value.diagnostics["expected"] == login_page.url
        assert "ERR_NAME_NOT_RESOLVED" in exc_info.value.diagnostics["error"]


class TestCartBadge:

    def test_badge_absent_means_zero(self, page):
        assert InventoryPage(page).get_cart_badge_count() == 0
        assert CartPage(page).get_cart_badge_count() == 0

    def test_badge_text(self, page):
        page.elements[".shopping_cart_badge"] = [FakeElement("3")]
        assert InventoryPage(page).get_cart_badge_count() == 3

    def test_badge_read_in_one_call(self, page):
        # 只能被解析一次：第二次查询时角标已经消失
        page.elements[".shopping_cart_badge"] = iter([FakeElement("1")])
        inventory_page = InventoryPage(page)
        assert inventory_page.get_cart_badge_count() == 1
        assert inventory_page.get_cart_badge_count() == 0

    def test_remove_count(self, page):
        page.elements[".btn_secondary.btn_inventory"] = [FakeElement("REMOVE"), FakeElement("REMOVE")]
        assert InventoryPage(page).get_remove_count() == 2


class TestSessionTransitions:

    def test_state_from_url(self, page):
        assert ButtonPage(page).session_state() is SessionState.INVENTORY

    def test_go_to_cart_allowed_from_inventory(self, page):
        assert ButtonPage(page).begin_transition(SessionState.CART, "go_to_cart") is SessionState.INVENTORY

    def test_checkout_not_allowed_from_inventory(self, page):
        with pytest.raises(UnexpectedState, match="INVENTORY to CHECKOUT_INFO"):
            ButtonPage(page).begin_transition(SessionState.CHECKOUT_INFO, "checkout")
