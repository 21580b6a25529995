from typing import Optional


class TWAPAccumulator():
    """
    Running time-weighted average of a price trajectory.

    Each sample holds from its own timestamp until the next one. A sample
    with no price opens a gap that is left out of the average.
    """
    def __init__(self) -> None:
        self._last_time: Optional[int] = None
        self._last_price: Optional[float] = None
        self._running_average: Optional[float] = None
        self._accumulated_time: int = 0

    @property
    def accumulated_time(self) -> int:
        return self._accumulated_time

    def next_price(self, time: int, price: Optional[float]):
        if self._last_price is not None:
            delta = time - self._last_time
            self._fold(self._last_price, delta)

        self._last_time = time
        self._last_price = price

    def avg_price(self) -> Optional[float]:
        return self._running_average

    def _fold(self, price: float, delta: int):
        if self._accumulated_time == 0:
            self._running_average = price
            self._accumulated_time = delta
            return

        # re-weight the existing mean instead of summing price * time
        total = self._accumulated_time + delta
        self._running_average = (
            self._running_average * self._accumulated_time / total
            + price * delta / total
        )
        self._accumulated_time = total
