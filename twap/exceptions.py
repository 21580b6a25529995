class MalformedEventError(ValueError):
    """Feed line that cannot be parsed into an order event."""


class EventOutOfOrderError(Exception):
    def __init__(self, time: int, last_time: int) -> None:
        super().__init__(f"event at {time} is earlier than previous event at {last_time}")
        self.time = time
        self.last_time = last_time
