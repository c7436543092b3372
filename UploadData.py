# UploadData.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import settings
from api_client import BenchApi

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    test: str
    rows: Optional[int]
    test_id: Optional[int]

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "UploadResult":
        data = data or {}
        test_id = data.get("test_id")
        rows = data.get("rows")
        return cls(
            test=str(data.get("test") or ""),
            rows=int(rows) if isinstance(rows, (int, float)) else None,
            test_id=test_id if isinstance(test_id, int) and not isinstance(test_id, bool) else None,
        )

    def message(self) -> str:
        return f"✅ Import OK: {self.test} ({self.rows if self.rows is not None else '?'} lignes)"


def is_allowed(filename: str) -> bool:
    return Path(filename or "").suffix.lower().lstrip(".") in settings.UPLOAD_EXTENSIONS


def process_upload(api: BenchApi, filename: str, content: bytes) -> UploadResult:
    """Send one test file to the backend; raises ValueError for unsupported types."""
    if not is_allowed(filename):
        raise ValueError("Type non supporté. Choisir CSV / XLSX / TXT.")
    logger.info("uploading %s (%d KB)", filename, round(len(content) / 1024))
    result = UploadResult.from_response(api.upload(filename, content))
    logger.info("upload done: test=%s rows=%s id=%s", result.test, result.rows, result.test_id)
    return result
