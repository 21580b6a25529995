import sys
from typing import Iterable, Iterator, NamedTuple, Optional, TextIO
from loguru import logger
from twap.accumulator import TWAPAccumulator
from twap.exceptions import EventOutOfOrderError
from twap.orderbook import OrderBook
from twap.reader import Action, OrderEvent


class TWAPSample(NamedTuple):
    time: int
    max_price: Optional[float]
    twap: Optional[float]


def format_sample(sample: TWAPSample) -> str:
    return ", ".join(_format_value(v) for v in sample)


def _format_value(value) -> str:
    return "NaN" if value is None else str(value)


class TWAPManager:
    def __init__(self, feed: Iterable[OrderEvent], output: Optional[TextIO] = None) -> None:
        self._orderbook = OrderBook()
        self._twap = TWAPAccumulator()

        self._feed = feed
        self._output = output or sys.stdout
        self._last_time: Optional[int] = None
        self._processed = 0
        self._skipped = 0

    def run(self):
        for sample in self.process_stream():
            self.publish(sample)
        logger.info(f"Done: {self._processed} events processed, {self._skipped} skipped, {len(self._orderbook)} orders left in book")

    def publish(self, sample: TWAPSample):
        self._output.write(format_sample(sample) + "\n")

    def process_stream(self) -> Iterator[TWAPSample]:
        for event in self._feed:
            try:
                yield self._handle_event(event)
            except EventOutOfOrderError as e:
                logger.warning(f"Skipping order {event.order_id}: {e}")
                self._skipped += 1
                continue

    def _handle_event(self, event: OrderEvent) -> TWAPSample:
        logger.debug(f"Processing {event.action.name} {event.order_id} at {event.time}")

        if self._last_time is not None and event.time < self._last_time:
            raise EventOutOfOrderError(event.time, self._last_time)

        self._update_orderbook(event)
        max_price = self._orderbook.max_price()
        self._twap.next_price(event.time, max_price)

        self._last_time = event.time
        self._processed += 1
        return TWAPSample(event.time, max_price, self._twap.avg_price())

    def _update_orderbook(self, event: OrderEvent):
        if event.action is Action.INSERT:
            self._orderbook.insert_order(event.order_id, event.price)
        else:
            self._orderbook.erase_order(event.order_id)
