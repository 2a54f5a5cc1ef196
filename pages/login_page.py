import time

import allure
from playwright.sync_api import Page

from config.locators import LOGIN_LOCATORS
from config.settings import LOGIN_TIMEOUT
from data.personas import Persona
from pages.base_page import BasePage
from pages.session_state import SessionState, url_matches, check_transition
from assertions.login_assert import LoginAssert
from utils.exceptions import AssertionTimeout, TransitionTimeout, UnexpectedState
from utils.logger import get_logger

logger = get_logger(__name__)


class LoginPage(BasePage):
    URL_KEY = "login"
    LOCATORS = LOGIN_LOCATORS

    def __init__(self, page: Page, **kwargs):
        super().__init__(page, **kwargs)
        self.username_field = self.locators["username_field"]  # 用户名输入框
        self.password_field = self.locators["password_field"]  # 密码输入框
        self.login_button = self.locators["login_button"]  # 登录按钮
        self.error_banner = self.locators["error_banner"]  # 登录校验错误提示信息

    def wait_ready(self):
        self.wait_visible(self.username_field)

    # ================= 页面行为 =================
    @allure.step("Open login page")
    def open_login(self):
        self.navigate()

    def submit_credentials(self, username: str, password: str):
        self.fill(self.username_field, username)
        self.fill(self.password_field, password)
        # performance_glitch_user 的登录点击本身就慢，用登录预算
        self.click(self.login_button, "login button", timeout=LOGIN_TIMEOUT)

    @allure.step("Login as {persona}")
    def login(self, persona: Persona) -> float:
        """登录并等待结果：进入 inventory 返回耗时（秒）；出现错误提示抛 UnexpectedState"""
        return self.login_with(persona.username, persona.password)

    def login_with(self, username: str, password: str) -> float:
        check_transition(self.session_state(), SessionState.LOGGING_IN, "login")
        start = time.monotonic()
        self.submit_credentials(username, password)
        try:
            outcome = self.poll(self._login_outcome, lambda state: state is not None,
                                timeout=LOGIN_TIMEOUT / 1000, description=f"login outcome for {username!r}")
        except AssertionTimeout as err:
            raise TransitionTimeout(f"login as {username!r} neither reached inventory nor showed an error",
                                    self.diagnostics(username=username)) from err
        elapsed = round(time.monotonic() - start, 3)

        if outcome is SessionState.LOGIN_ERROR:
            message = self.get_login_failure_message()
            raise UnexpectedState(f"login as {username!r} rejected: {message}",
                                  self.diagnostics(username=username, error_message=message))
        logger.info("login as %s took %.3fs", username, elapsed)
        return elapsed

    def _login_outcome(self):
        if self.locators.is_present("error_banner"):
            return SessionState.LOGIN_ERROR
        if url_matches(self.page.url, "inventory"):
            return SessionState.INVENTORY
        return None

    # ================= 数据获取 =================
    def session_state(self) -> SessionState:
        state = super().session_state()
        if state is SessionState.LOGGED_OUT and self.is_error_visible():
            return SessionState.LOGIN_ERROR
        return state

    def is_error_visible(self) -> bool:
        return self.locators.is_present("error_banner") and self.error_banner.is_visible()

    def get_login_failure_message(self) -> str | None:
        if not self.locators.is_present("error_banner"):
            return None
        return self.text(self.error_banner)

    # ========== 登录校验 ==========
    def verify_login_fail(self, expect_msg: str):
        LoginAssert.error_message(self.get_login_failure_message(), expect_msg)
        LoginAssert.not_on_page(self.page.url, "inventory")
