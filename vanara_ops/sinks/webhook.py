"""WebhookSink — best-effort HTTP POST of outbound events.

Each event is serialised and posted once from a single background worker
thread so tick callbacks never block on the network.  There is no retry,
no acknowledgement and no backoff: a failed POST is logged and dropped.
At most ``max_pending`` posts are queued or in flight; further events are
dropped until the endpoint catches up.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from urllib.parse import urlparse

import requests

from vanara_ops.domain.events import OutboundEvent
from vanara_ops.sinks.base import EventSink

logger = logging.getLogger(__name__)


def is_valid_webhook_url(url: str | None) -> bool:
    """Only absolute http(s) URLs with a host are accepted."""
    if not url or not url.strip():
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def serialize_event_body(event: OutboundEvent) -> bytes:
    return json.dumps(event.to_wire(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class WebhookSink(EventSink):
    """Posts every event to a configurable URL.

    An empty or invalid URL turns the sink into a no-op, mirroring an
    operator who has not configured a webhook yet.
    """

    def __init__(self, url: str = "", timeout: float = 5.0, max_pending: int = 50) -> None:
        if max_pending < 1:
            raise ValueError("max_pending must be at least 1")
        self._url = ""
        self._timeout = timeout if timeout > 0 else 5.0
        self._max_pending = max_pending
        self._pending = 0
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="webhook")
        self._session = requests.Session()
        self._session.trust_env = False
        self.sent_count = 0
        self.failed_count = 0
        self.dropped_count = 0
        self.url = url

    @property
    def sink_name(self) -> str:
        return "webhook"

    @property
    def url(self) -> str:
        return self._url

    @url.setter
    def url(self, value: str) -> None:
        value = (value or "").strip()
        if value and not is_valid_webhook_url(value):
            raise ValueError(f"webhook URL must be an absolute http(s) URL: {value!r}")
        self._url = value

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    @property
    def pending(self) -> int:
        """Posts queued or in flight."""
        return self._pending

    def deliver(self, event: OutboundEvent) -> None:
        if not self.enabled:
            return
        with self._lock:
            full = self._pending >= self._max_pending
            if full:
                self.dropped_count += 1
                self.failed_count += 1
            else:
                self._pending += 1
        if full:
            logger.warning("Webhook backlog full (%d pending), dropping %s", self._max_pending, event.event.value)
            return
        body = serialize_event_body(event)
        future = self._executor.submit(self._post, self._url, event.event.value, body)
        future.add_done_callback(self._release)

    def _release(self, _: Future) -> None:
        with self._lock:
            self._pending -= 1

    def _post(self, url: str, name: str, body: bytes) -> None:
        try:
            resp = self._session.post(
                url,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
                allow_redirects=False,
            )
            try:
                if 200 <= resp.status_code < 300:
                    self.sent_count += 1
                else:
                    self.failed_count += 1
                    logger.warning("Webhook %s returned HTTP %d", name, resp.status_code)
            finally:
                resp.close()
        except requests.RequestException as exc:
            self.failed_count += 1
            logger.warning("Webhook %s delivery failed: %s", name, exc)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._session.close()
