"""AlertLog — append-only, user-acknowledgeable list of alerts.

New alerts are prepended (most recent first).  Nothing expires: an alert
leaves the log only when an operator acknowledges it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from vanara_ops.domain.alert import Alert

logger = logging.getLogger(__name__)


class AlertLog:
    def __init__(self, alerts: Iterable[Alert] = ()) -> None:
        self._alerts: list[Alert] = list(alerts)

    def append(self, message: str) -> Alert:
        """Create an alert with a fresh id and timestamp and put it on top."""
        alert = Alert(message=message)
        self._alerts.insert(0, alert)
        logger.info("Alert raised: %s", message)
        return alert

    def acknowledge(self, alert_id: str) -> bool:
        """Remove exactly the alert with *alert_id*.  Returns False if absent."""
        for idx, alert in enumerate(self._alerts):
            if alert.id == alert_id:
                del self._alerts[idx]
                logger.debug("Alert %s acknowledged", alert_id)
                return True
        return False

    def get(self, alert_id: str) -> Alert | None:
        return next((a for a in self._alerts if a.id == alert_id), None)

    def items(self) -> list[Alert]:
        """Alerts, newest first."""
        return list(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)
