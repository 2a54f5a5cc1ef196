"""inventory页测试数据"""

PRODUCT_COUNT = 6

# 默认排序（A-Z）下的商品名称和价格
EXPECTED_PRODUCTS = [
    {"name": "Sauce Labs Backpack", "price": "$29.99"},
    {"name": "Sauce Labs Bike Light", "price": "$9.99"},
    {"name": "Sauce Labs Bolt T-Shirt", "price": "$15.99"},
    {"name": "Sauce Labs Fleece Jacket", "price": "$49.99"},
    {"name": "Sauce Labs Onesie", "price": "$7.99"},
    {"name": "Test.allTheThings() T-Shirt (Red)", "price": "$15.99"},
]

CART_PRODUCTS = ["Sauce Labs Backpack", "Sauce Labs Bike Light"]
CART_REMOVE_PRODUCTS = ["Sauce Labs Backpack", "Sauce Labs Bolt T-Shirt"]
