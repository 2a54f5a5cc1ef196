import re
import time
from enum import Enum

from playwright.sync_api import Page, expect, Error as PlaywrightError

from config.pages import URLS, ENV, URL_PATTERNS
from config.settings import NAVIGATION_TIMEOUT, TRANSITION_TIMEOUT, READY_TIMEOUT, POLL_INTERVAL
from pages.locator_map import LocatorMap
from pages.session_state import SessionState, state_for_url, check_transition
from utils.common_utils import parse_count
from utils.diagnostics import capture_diagnostics
from utils.exceptions import NavigationError, TransitionTimeout, AssertionTimeout
from utils.logger import get_logger
from utils.polling import poll_until

logger = get_logger(__name__)

# 点击在派发前就失败（可操作性检查未通过），元素没有收到点击
NOT_DELIVERED_MARKERS = (
    "intercepts pointer events",
    "not visible",
    "not stable",
    "not enabled",
    "not attached",
    "detached",
    "outside of the viewport",
)
# 点击已派发，之后等待导航时超时
DELIVERED_MARKERS = (
    "scheduled navigations",
    "navigated to",
)


def click_was_delivered(err: PlaywrightError) -> bool:
    message = str(err)
    return any(marker in message for marker in DELIVERED_MARKERS)


def click_not_delivered(err: PlaywrightError) -> bool:
    message = str(err)
    return not click_was_delivered(err) and any(marker in message for marker in NOT_DELIVERED_MARKERS)


class ClickFallback(Enum):
    NONE = "none"
    FORCE_ONCE = "force_once"  # 可操作性检查失败（点击未送达）时，强制点击一次并记录日志


class BasePage:
    URL_KEY: str = ""
    LOCATORS: dict = {}

    def __init__(self, page: Page, click_fallback: ClickFallback = ClickFallback.FORCE_ONCE,
                 deadline: float | None = None):
        # page 由外部 fixture 创建和关闭，这里只借用
        self.page = page
        self.locators = LocatorMap(page, self.LOCATORS, self.__class__.__name__)
        self.click_fallback = click_fallback
        # 用例整体截止时间（time.monotonic 时间轴），默认取 fixture 挂在 page 上的值
        self.deadline = deadline if deadline is not None else getattr(page, "_scenario_deadline", None)

    @property
    def url(self) -> str:
        return URLS[ENV][self.URL_KEY]

    def bounded(self, timeout: float) -> float:
        """毫秒超时，不超过用例剩余时间"""
        if self.deadline is None:
            return timeout
        remaining = (self.deadline - time.monotonic()) * 1000
        # Playwright 把 0 当作不限时
        return max(min(timeout, remaining), 1)

    # ========= 导航 =========
    def open(self, url: str):
        self.page.goto(url, timeout=self.bounded(NAVIGATION_TIMEOUT))

    def navigate(self):
        """打开页面的标准地址，并确认最终停留在该地址"""
        try:
            self.open(self.url)
            expect(self.page).to_have_url(re.compile(URL_PATTERNS[self.URL_KEY]),
                                          timeout=self.bounded(NAVIGATION_TIMEOUT))
        except (AssertionError, PlaywrightError) as err:
            raise NavigationError(f"{self.__class__.__name__} did not load {self.url}",
                                  self.diagnostics(expected=self.url, error=str(err).splitlines()[0])) from err
        self.wait_ready()

    def wait_ready(self):
        """页面最小可读信号，子类覆盖"""

    # ========= 基础动作 =========
    def click(self, locator, description: str = "element", timeout: float = TRANSITION_TIMEOUT):
        """点击一次；已送达的点击绝不重发，结果由调用方轮询确认"""
        timeout = self.bounded(timeout)
        try:
            locator.scroll_into_view_if_needed(timeout=timeout)
            locator.click(timeout=timeout)
            return
        except PlaywrightError as err:
            reason = str(err).splitlines()[0]
            if click_was_delivered(err):
                logger.info("click on %s delivered, navigation still pending: %s", description, reason)
                return
            if self.click_fallback is not ClickFallback.FORCE_ONCE or not click_not_delivered(err):
                raise TransitionTimeout(f"click on {description} was not delivered",
                                        self.diagnostics(error=reason)) from err
            logger.warning("click on %s failed (%s), retrying once with force=True", description, reason)
        try:
            locator.click(force=True, timeout=timeout)
        except PlaywrightError as err:
            raise TransitionTimeout(f"forced click on {description} was not delivered",
                                    self.diagnostics(error=str(err).splitlines()[0])) from err

    def fill(self, locator, value: str):
        locator.fill(value)

    def text(self, locator) -> str:
        return locator.inner_text()

    def get_texts(self, locator) -> list[str]:
        return [locator.nth(i).inner_text() for i in range(locator.count())]

    def get_attrs(self, locator, attr: str) -> list[str]:
        return [locator.nth(i).get_attribute(attr) for i in range(locator.count())]

    def get_count(self, locator) -> int:
        return locator.count()

    def badge_count(self, locator) -> int:
        # 一次读取：角标在两次调用之间消失也不会报错，不存在为0
        texts = locator.all_inner_texts()
        return parse_count(texts[0]) if texts else 0

    def get_title(self) -> str:
        return self.page.title()

    # ========= 等待 =========
    def wait_visible(self, locator, timeout: float = READY_TIMEOUT):
        expect(locator).to_be_visible(timeout=self.bounded(timeout))  # 严格模式：locator 必须唯一，多个元素时先取 .first

    def wait_url(self, page_key: str, action: str, timeout: float = TRANSITION_TIMEOUT):
        """动作后确认跳转到 page_key 对应的地址"""
        try:
            expect(self.page).to_have_url(re.compile(URL_PATTERNS[page_key]), timeout=self.bounded(timeout))
        except AssertionError as err:
            raise TransitionTimeout(f"{action}: page did not reach {page_key}",
                                    self.diagnostics(expected=page_key)) from err

    def poll(self, read, predicate, timeout: float | None = None, description: str = "condition"):
        """轮询页面状态；间隔期间交给 Playwright 处理事件，不越过用例截止时间"""
        return poll_until(read, predicate, timeout=timeout, interval=POLL_INTERVAL, description=description,
                          deadline=self.deadline, sleep=lambda seconds: self.page.wait_for_timeout(seconds * 1000))

    def expect_poll(self, read, expected, action: str, timeout: float | None = None):
        """动作后的状态变化：未在时限内观察到则 TransitionTimeout"""
        try:
            return self.poll(read, lambda value: value == expected, timeout=timeout,
                             description=f"{action} -> {expected!r}")
        except AssertionTimeout as err:
            raise TransitionTimeout(f"{action}: expected {expected!r}, last observed {err.last_value!r}",
                                    self.diagnostics(expected=expected, observed=err.last_value)) from err

    # ========= 会话状态 =========
    def session_state(self) -> SessionState:
        return state_for_url(self.page.url)

    def begin_transition(self, target: SessionState, action: str) -> SessionState:
        current = self.session_state()
        check_transition(current, target, action)
        return current

    # ========= 辅助 =========
    def diagnostics(self, **fields) -> dict:
        return capture_diagnostics(self.page, page_object=self.__class__.__name__, **fields)
