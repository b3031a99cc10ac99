#!/usr/bin/env python3

"""
Readiness Probe - HTTP reachability check with a bounded backoff loop.
"""

import shlex
import subprocess
import time
from StackConfig import (
    DEFAULT_PROBE_ATTEMPTS,
    DEFAULT_PROBE_INITIAL_DELAY,
    DEFAULT_PROBE_MAX_DELAY,
    DEFAULT_PROBE_TIMEOUT,
)


class ReadinessProbe:
    """Polls a status endpoint until it answers 200 or the attempts run out."""

    def __init__(self, attempts=DEFAULT_PROBE_ATTEMPTS, initial_delay=DEFAULT_PROBE_INITIAL_DELAY,
                 max_delay=DEFAULT_PROBE_MAX_DELAY, timeout=DEFAULT_PROBE_TIMEOUT, sleep=time.sleep):
        self.attempts = max(1, attempts)
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.timeout = timeout
        self._sleep = sleep

    @classmethod
    def from_config(cls, config, sleep=time.sleep):
        return cls(
            attempts=config.probe_attempts,
            initial_delay=config.probe_initial_delay,
            max_delay=config.probe_max_delay,
            timeout=config.probe_timeout,
            sleep=sleep,
        )

    def check(self, url) -> bool:
        """Single GET against the url; only HTTP 200 counts as ready."""
        result = subprocess.run(
            f"curl -s -o /dev/null -w '%{{http_code}}' {shlex.quote(url)} --max-time {self.timeout}",
            shell=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip() == "200"

    def delays(self):
        """Sleep durations between consecutive probes."""
        delay = self.initial_delay
        for _ in range(self.attempts - 1):
            yield delay
            delay = min(delay * 2, self.max_delay)

    def wait_until_ready(self, url) -> bool:
        """Probe until ready. Returns False once every attempt has failed."""
        if self.check(url):
            return True
        for delay in self.delays():
            self._sleep(delay)
            if self.check(url):
                return True
        return False
