import os

ENV = os.getenv("SAUCE_ENV", "v1")

URLS = {
    "v1": {
        "base": "https://www.saucedemo.com/v1/",
        "login": "https://www.saucedemo.com/v1/index.html",
        "inventory": "https://www.saucedemo.com/v1/inventory.html",
        "cart": "https://www.saucedemo.com/v1/cart.html",
        "checkout_step_one": "https://www.saucedemo.com/v1/checkout-step-one.html",
        "checkout_step_two": "https://www.saucedemo.com/v1/checkout-step-two.html",
    }
}

# 页面地址后缀，用于校验跳转结果
URL_PATTERNS = {
    "login": r"/(index\.html)?$",
    "inventory": r"/inventory\.html$",
    "cart": r"/cart\.html$",
    "checkout_step_one": r"/checkout-step-one\.html$",
    "checkout_step_two": r"/checkout-step-two\.html$",
}

# 所有页面共用的 <title>
PAGE_TITLE = "Swag Labs"
