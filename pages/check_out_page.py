import allure
from playwright.sync_api import Page

from config.locators import CHECKOUT_LOCATORS
from pages.base_page import BasePage
from pages.models import CheckoutInfoState
from pages.session_state import SessionState, url_matches
from assertions.check_out_assert import CheckOutAssert
from utils.exceptions import AssertionTimeout, TransitionTimeout, UnexpectedState

FORM_FIELDS = ("first_name_field", "last_name_field", "postal_code_field")


class CheckOutPage(BasePage):
    """checkout-step-one.html 收货人信息页"""
    URL_KEY = "checkout_step_one"
    LOCATORS = CHECKOUT_LOCATORS

    def __init__(self, page: Page, **kwargs):
        super().__init__(page, **kwargs)
        self.first_name_field = self.locators["first_name_field"]  # firstName输入框
        self.last_name_field = self.locators["last_name_field"]  # lastName输入框
        self.postal_code_field = self.locators["postal_code_field"]  # postalCode输入框
        self.error_banner = self.locators["error_banner"]  # 未填写收货人信息提交错误提示
        self.continue_button = self.locators["continue_button"]  # 继续按钮
        self.cancel_button = self.locators["cancel_button"]  # 取消按钮

    def wait_ready(self):
        self.wait_visible(self.first_name_field)

    # ========== 页面行为 ==========
    @allure.step("Fill checkout information")
    def fill_container(self, first_name: str, last_name: str, postal_code: str):
        self.fill(self.first_name_field, first_name)
        self.fill(self.last_name_field, last_name)
        self.fill(self.postal_code_field, postal_code)

    @allure.step("Continue to checkout overview")
    def continue_checkout(self):
        """成功进入 checkout-step-two；出现错误提示则抛 UnexpectedState"""
        self.begin_transition(SessionState.CHECKOUT_OVERVIEW, "continue_checkout")
        self.click(self.continue_button, "CONTINUE")
        try:
            outcome = self.poll(self._continue_outcome, lambda state: state is not None,
                                description="checkout step one outcome")
        except AssertionTimeout as err:
            raise TransitionTimeout("continue_checkout: neither overview page nor error shown",
                                    self.diagnostics()) from err
        if outcome == "error":
            message = self.get_error_message()
            raise UnexpectedState(f"checkout information rejected: {message}",
                                  self.diagnostics(error_message=message))

    def _continue_outcome(self):
        if self.locators.is_present("error_banner"):
            return "error"
        if url_matches(self.page.url, "checkout_step_two"):
            return "overview"
        return None

    @allure.step("Cancel checkout")
    def cancel(self):
        self.begin_transition(SessionState.CART, "cancel")
        self.click(self.cancel_button, "CANCEL")
        self.wait_url("cart", "cancel")

    # ================= 数据获取 =================
    def read_state(self) -> CheckoutInfoState:
        self.wait_ready()
        fields_visible = {key: self.locators[key].is_visible() for key in FORM_FIELDS}
        return CheckoutInfoState(fields_visible=fields_visible, error_message=self.get_error_message())

    def get_error_message(self) -> str | None:
        if not self.locators.is_present("error_banner"):
            return None
        return self.text(self.error_banner)

    # ========== checkout-step-one 基本验证 ==========
    def verify_form_visible(self):
        CheckOutAssert.form_visible(self.read_state().fields_visible)

    def verify_container_empty(self, expect_error_msg: str):
        CheckOutAssert.tips_message(self.get_error_message(), expect_error_msg)
