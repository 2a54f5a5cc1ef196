LOGIN_LOCATORS = {
    "username_field": "#user-name",  # 用户名
    "password_field": "#password",  # 用户密码
    "login_button": "#login-button",  # 登录按钮
    "error_banner": "[data-test='error']",  # 登录错误提示信息
}

INVENTORY_LOCATORS = {
    "inventory_list": ".inventory_list",  # 商品列表容器
    "item_row": "div.inventory_item",  # 商品行
    "item_name": ".inventory_item_name",  # 单商品名称
    "item_desc": ".inventory_item_desc",  # 单商品描述
    "item_price": ".inventory_item_price",  # 单商品价格
    "item_img": ".inventory_item_img img, img.inventory_item_img",  # 单商品图片
    "add_to_cart_button": ".btn_primary.btn_inventory",  # 加购按钮
    "remove_button": ".btn_secondary.btn_inventory",  # 已加购商品的Remove按钮
    "sort_dropdown": ".product_sort_container",  # 商品排序方式
    "cart_badge": ".shopping_cart_badge",  # 购物车显示商品数量
    "cart_link": ".shopping_cart_link",  # 购物车icon
}

CART_LOCATORS = {
    "cart_list": ".cart_list",  # 购物车列表
    "cart_item": ".cart_item",  # 购物车商品行
    "subheader": ".subheader",  # Your Cart
    "item_name": ".inventory_item_name",
    "item_price": ".inventory_item_price",
    "remove_button": ".cart_button",  # 购物车页Remove按钮
    "continue_shopping": ".cart_footer a.btn_secondary",  # 继续购物按钮
    "checkout_button": ".checkout_button",  # 结算按钮
    "cart_badge": ".shopping_cart_badge",
}

CHECKOUT_LOCATORS = {
    # 收货人信息 checkout-step-one.html
    "first_name_field": "#first-name",
    "last_name_field": "#last-name",
    "postal_code_field": "#postal-code",
    "error_banner": "[data-test='error']",  # Error: First Name is required
    "continue_button": "input.cart_button",  # 继续按钮
    "cancel_button": ".cart_cancel_link",  # 取消按钮
}
