# SeriesStore.py
from __future__ import annotations

import itertools
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from Sample import Sample

logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)


class SeriesStore:
    """
    Append-only accumulator of live samples for one (test, system) session.

    ``cursor`` is the highest idx ingested so far. Every ``reset()`` opens a
    new session token; appends tagged with an older token are dropped so a
    response issued before the reset can never land in the new series.
    """

    def __init__(self) -> None:
        self._samples: List[Sample] = []
        self._snapshot: Tuple[Sample, ...] = ()
        self.cursor: int = 0
        self.session: int = next(_session_ids)
        self.last_updated: Optional[datetime] = None

    def reset(self) -> int:
        self._samples = []
        self._snapshot = ()
        self.cursor = 0
        self.last_updated = None
        self.session = next(_session_ids)
        return self.session

    def append(self, new_samples: Iterable[Sample], session: Optional[int] = None) -> bool:
        """
        Append a batch in order and advance the cursor.

        Returns False when nothing changed: the batch is empty or was tagged
        for another session. Raises ValueError if the batch would overlap or
        reorder what is already stored.
        """
        if session is not None and session != self.session:
            logger.debug("dropping stale batch for session %s (current %s)", session, self.session)
            return False

        batch = list(new_samples)
        if not batch:
            return False

        last = self.cursor
        for s in batch:
            if s.idx <= last:
                raise ValueError(f"sample idx {s.idx} is not after {last}")
            last = s.idx

        self._samples.extend(batch)
        self._snapshot = tuple(self._samples)
        self.cursor = last
        return True

    def all(self) -> Tuple[Sample, ...]:
        return self._snapshot

    def __len__(self) -> int:
        return len(self._samples)
