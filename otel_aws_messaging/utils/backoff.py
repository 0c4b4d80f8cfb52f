"""
Retry backoff timer

Used by the consumer loop after a failed receive and by the publisher between publish attempts.
"""

import threading


class BackoffTimer:
    """Fixed-interval backoff timer"""

    def __init__(self, seconds: float = 5.0):
        """Initialize backoff timer

        Args:
            seconds: Delay between attempts
        """
        self.seconds = seconds

    def next_delay(self) -> float:
        """Get next delay time (seconds)"""
        return self.seconds

    def wait(self, stop_event: threading.Event) -> bool:
        """Wait for the next delay time, returning early if ``stop_event`` is set

        Returns:
            bool: True if the wait was interrupted by ``stop_event``
        """
        return stop_event.wait(self.next_delay())
