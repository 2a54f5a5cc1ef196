from config.pages import PAGE_TITLE
from pages.session_state import url_matches


class LoginAssert:

    @staticmethod
    def error_message(actual_msg: str | None, expect_msg: str):
        assert actual_msg, f"登录错误提示未出现，期望：{expect_msg}"
        assert expect_msg in actual_msg, f"登录错误期望提示信息：{expect_msg}，登录错误实际提示信息：{actual_msg}"

    @staticmethod
    def not_on_page(url: str, page_key: str):
        assert not url_matches(url, page_key), f"不应跳转到{page_key}，当前地址：{url}"

    @staticmethod
    def login_delayed(elapsed: float, threshold: float):
        assert elapsed > threshold, f"登录耗时{elapsed}s，未超过预期延迟{threshold}s"

    @staticmethod
    def page_title(title: str):
        assert title == PAGE_TITLE, f"页面标题应为{PAGE_TITLE}，实际：{title}"
