# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from core.alchemy import BrewSession, PlayerParams

logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory brew sessions keyed by id (thread-safe, bounded, not persisted)."""

    def __init__(self, max_sessions: int = 256, default_params: Optional[PlayerParams] = None):
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, BrewSession]" = OrderedDict()
        self._max = max(1, int(max_sessions))
        self._default_params = default_params or PlayerParams()

    def create(self, params: Optional[PlayerParams] = None) -> str:
        sid = uuid.uuid4().hex
        with self._lock:
            self._sessions[sid] = BrewSession(params or self._default_params)
            while len(self._sessions) > self._max:
                old, _ = self._sessions.popitem(last=False)
                logger.info("evicted brew session %s", old)
        return sid

    def get(self, sid: str) -> Optional[BrewSession]:
        with self._lock:
            sess = self._sessions.get(str(sid))
            if sess is not None:
                self._sessions.move_to_end(str(sid))
            return sess

    def drop(self, sid: str) -> bool:
        with self._lock:
            return self._sessions.pop(str(sid), None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
