from types import MappingProxyType

from utils.exceptions import ElementNotFound


class LocatorMap:
    """语义名 -> 选择器 的只读映射，绑定到一个 live page

    key 在构造时固定；查询是惰性的，每次调用都重新对页面执行
    """

    def __init__(self, page, selectors: dict, name: str = "page"):
        self._page = page
        self._selectors = MappingProxyType(dict(selectors))
        self.name = name

    def __contains__(self, key: str) -> bool:
        return key in self._selectors

    def keys(self):
        return self._selectors.keys()

    def selector(self, key: str) -> str:
        try:
            return self._selectors[key]
        except KeyError:
            raise KeyError(f"{self.name} has no locator '{key}'") from None

    def __getitem__(self, key: str):
        return self._page.locator(self.selector(key))

    def within(self, scope, key: str):
        """在某个元素（如商品行）内部查询"""
        return scope.locator(self.selector(key))

    def count(self, key: str, scope=None) -> int:
        """0 个匹配是合法结果（例如购物车为空时没有角标）"""
        locator = self[key] if scope is None else self.within(scope, key)
        return locator.count()

    def is_present(self, key: str, scope=None) -> bool:
        return self.count(key, scope) > 0

    def one(self, key: str, scope=None):
        """要求恰好匹配一个元素"""
        locator = self[key] if scope is None else self.within(scope, key)
        found = locator.count()
        if found != 1:
            raise ElementNotFound(f"{self.name}.{key} expected exactly one element, found {found}",
                                  {"selector": self.selector(key), "found": found})
        return locator

    def nth(self, key: str, index: int):
        """第 index 个匹配元素，越界抛 ElementNotFound"""
        locator = self[key]
        found = locator.count()
        if index < 0 or index >= found:
            raise ElementNotFound(f"{self.name}.{key}[{index}] out of range, found {found}",
                                  {"selector": self.selector(key), "found": found, "index": index})
        return locator.nth(index)
