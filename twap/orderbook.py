from typing import Dict, Optional
from loguru import logger
from sortedcontainers import SortedDict


class OrderBook():
    """
    Live orders and the distinct prices they rest at.

    Prices are opaque keys: taken verbatim from the feed and only ever
    compared, never computed, so exact float equality is safe here.
    """
    def __init__(self) -> None:
        # key,value: (order_id, price)
        self._orders: Dict[int, float] = {}
        # key,value: (price, number of live orders at price)
        self._price_levels: SortedDict = SortedDict()

    def __len__(self) -> int:
        return len(self._orders)

    def __contains__(self, order_id: int) -> bool:
        return order_id in self._orders

    def price_level(self, price: float) -> int:
        return self._price_levels.get(price, 0)

    def max_price(self) -> Optional[float]:
        # highest price -> last key of the sorted levels
        if self._price_levels:
            price, _ = self._price_levels.peekitem(-1)
            return price
        return None

    def insert_order(self, order_id: int, price: float):
        if order_id in self._orders:
            logger.debug(f"Order {order_id} already in book, ignoring insert")
            return

        self._orders[order_id] = price
        self._price_levels[price] = self._price_levels.get(price, 0) + 1

    def erase_order(self, order_id: int):
        price = self._orders.pop(order_id, None)
        if price is None:
            logger.debug(f"Order {order_id} not in book, ignoring erase")
            return

        count = self._price_levels[price] - 1
        if count <= 0:
            del self._price_levels[price]
        else:
            self._price_levels[price] = count
