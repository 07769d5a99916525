from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from taskquest.domain.entities import Banner

from .alerts import TaskAlerts
from .ledger import GamificationLedger
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class ExpirationScanner:
    def __init__(self, store: TaskStore, ledger: GamificationLedger, alerts: TaskAlerts) -> None:
        self._store = store
        self._ledger = ledger
        self._alerts = alerts

    def scan(self, now: datetime) -> list[Banner]:
        banners: list[Banner] = []
        for task in self._store.list():
            if not task.is_pending or not task.deadline < now:
                continue
            self._store.upsert(replace(task, expired=True))
            banners.append(self._ledger.deduct_expiration(task))
            self._alerts.cancel(task.id)
            logger.info("Task %s expired (deadline %s)", task.id, task.deadline.isoformat())
        return banners
