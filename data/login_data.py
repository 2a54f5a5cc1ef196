"""login功能测试用例：测试数据、登录错误提示信息
用户名错误
密码错误
用户名和密码都为空
密码为空
用户名不存在
"""
from data.personas import PASSWORD

LOGIN_FAIL_CASES = {
    "wrong_username": {"username": "HAHAHA", "password": PASSWORD,
                       "error_msg": "Username and password do not match any user in this service"},
    "wrong_password": {"username": "standard_user", "password": "12345",
                       "error_msg": "Username and password do not match any user in this service"},
    "empty_username_password": {"username": "", "password": "", "error_msg": "Username is required"},
    "empty_password": {"username": "standard_user", "password": "", "error_msg": "Password is required"},
    "inexistence_username": {"username": "test_user", "password": PASSWORD,
                             "error_msg": "Username and password do not match any user in this service"}
}

LOCKED_OUT_MSG = "Sorry, this user has been locked out"

LOGIN_DELAY_THRESHOLD = 1.0  # 秒，performance_glitch_user 登录耗时下限
