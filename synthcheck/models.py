from __future__ import annotations

from typing import Literal, Optional, List
from pydantic import BaseModel, Field, AnyHttpUrl

from synthcheck.constants import DEFAULT_SCREENSHOT_PATH, DEFAULT_WAIT_UNTIL

CheckType = Literal["browser"]
WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]

class Defaults(BaseModel):
    timeout_ms: Optional[int] = Field(default=None, ge=0)
    wait_until: WaitUntil = DEFAULT_WAIT_UNTIL
    headless: bool = True
    down_threshold: int = Field(default=1, ge=1)

class BrowserCheck(BaseModel):
    id: str = Field(..., min_length=1)
    type: CheckType = "browser"
    url: AnyHttpUrl
    screenshot_path: str = Field(default=DEFAULT_SCREENSHOT_PATH, min_length=1)
    full_page: bool = False
    tags: List[str] = Field(default_factory=list)
    timeout_ms: Optional[int] = Field(default=None, ge=0)
    wait_until: Optional[WaitUntil] = None
    down_threshold: Optional[int] = Field(default=None, ge=1)

class Registry(BaseModel):
    defaults: Defaults = Defaults()
    checks: List[BrowserCheck]
