"""
Utilities for persisting the last served aggregation result.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from loguru import logger

if TYPE_CHECKING:
    from app.domains.news.dtos import AggregateResult


def persist_result(result: AggregateResult, path: Optional[str]) -> Optional[str]:
    """
    Write the wire form of ``result`` to ``path`` and return the absolute path.

    IO errors are logged and swallowed; the caller's response never depends on them.
    """
    if not path:
        return None

    target_path = Path(path)
    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(
            json.dumps(result.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info(f"News data saved to {target_path}")
        return str(target_path.resolve())
    except Exception as exc:  # pragma: no cover - IO error path
        logger.warning(f"Failed to save news data to {target_path}: {exc}")
        return None
