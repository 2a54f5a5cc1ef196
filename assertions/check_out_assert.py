class CheckOutAssert:

    @staticmethod
    def tips_message(actual_msg: str | None, expect_msg: str):
        """收件人为空，点击continue按钮"""
        assert actual_msg, f"预期提示信息：{expect_msg}，页面未显示错误提示"
        assert expect_msg in actual_msg, f"预期提示信息：{expect_msg}，不存在于{actual_msg}"

    @staticmethod
    def form_visible(fields_visible: dict):
        hidden = [name for name, visible in fields_visible.items() if not visible]
        assert fields_visible and not hidden, f"收货人信息输入框未显示：{hidden}"
