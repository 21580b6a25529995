import math
from enum import Enum
from typing import BinaryIO, Iterable, Iterator, NamedTuple, Optional, Union
from loguru import logger
from twap.exceptions import MalformedEventError


class Action(Enum):
    INSERT = "I"
    ERASE = "E"


class OrderEvent(NamedTuple):
    time: int
    action: Action
    order_id: int
    price: Optional[float] = None


class FeedReader:
    """
    Turns the lines of a feed file into order events.

    Line format:
        <time_ms> I <order_id> <price>
        <time_ms> E <order_id>

    Blank lines and lines starting with '#' are ignored. Malformed lines are
    logged and skipped.
    """
    def __init__(self, path: str) -> None:
        self.path = path

    def open(self) -> BinaryIO:
        logger.debug(f"opening feed {self.path}")
        return open(self.path, "rb")

    def __iter__(self) -> Iterator[OrderEvent]:
        with self.open() as f:
            yield from self.read_lines(f)

    def read_lines(self, lines: Iterable[Union[str, bytes]]) -> Iterator[OrderEvent]:
        for line_no, line in enumerate(lines, start=1):
            try:
                event = self._parse_line(line)
            except MalformedEventError as e:
                logger.error(f"Unable to parse line {line_no}: {e}")
                continue
            if event is not None:
                yield event

    def _parse_line(self, line: Union[str, bytes]) -> Optional[OrderEvent]:
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedEventError(f"invalid utf-8 at byte {e.start}")
        line = line.strip()
        if not line or line.startswith("#"):
            return None

        fields = line.split()
        if len(fields) < 3:
            raise MalformedEventError(f"expected at least 3 fields, got {line!r}")

        try:
            action = Action(fields[1].upper())
        except ValueError:
            raise MalformedEventError(f"unknown action {fields[1]!r}")

        expected = 4 if action is Action.INSERT else 3
        if len(fields) != expected:
            raise MalformedEventError(f"{action.name} expects {expected} fields, got {line!r}")

        try:
            time = int(fields[0])
            order_id = int(fields[2])
            price = float(fields[3]) if action is Action.INSERT else None
        except ValueError:
            raise MalformedEventError(f"non-numeric field in {line!r}")

        if price is not None and not (math.isfinite(price) and price >= 0):
            raise MalformedEventError(f"price must be finite and non-negative, got {fields[3]!r}")

        return OrderEvent(time, action, order_id, price)
