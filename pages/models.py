from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class ProductRecord:
    name: str
    description: str
    price: Decimal
    image_reference: str


@dataclass(frozen=True)
class CartLineItem:
    name: str
    price: Decimal


@dataclass(frozen=True)
class InventoryState:
    products: list = field(default_factory=list)  # list[ProductRecord]
    cart_count: int = 0  # 购物车角标数字，角标不存在为0
    remove_count: int = 0  # 当前显示 REMOVE 的商品数（已加购）


@dataclass(frozen=True)
class CartState:
    items: list = field(default_factory=list)  # list[CartLineItem]
    badge_count: int = 0


@dataclass(frozen=True)
class CheckoutInfoState:
    fields_visible: dict = field(default_factory=dict)
    error_message: str | None = None


class SortOrder(Enum):
    NAME_ASC = "az"
    NAME_DESC = "za"
    PRICE_ASC = "lohi"
    PRICE_DESC = "hilo"

    @property
    def by_price(self) -> bool:
        return self in (SortOrder.PRICE_ASC, SortOrder.PRICE_DESC)

    @property
    def descending(self) -> bool:
        return self in (SortOrder.NAME_DESC, SortOrder.PRICE_DESC)

    def is_sorted(self, values: list) -> bool:
        return values == sorted(values, reverse=self.descending)
