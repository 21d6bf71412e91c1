from __future__ import annotations

import time
from typing import Any, Dict

from fastapi import APIRouter

from form_schema_engine import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"ok": True, "service": "form-schema-engine", "version": __version__, "ts": int(time.time() * 1000)}
