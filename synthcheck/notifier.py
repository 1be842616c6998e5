from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests


@dataclass
class NtfyConfig:
    base_url: str
    topic: str
    priority_down: int = 4
    priority_up: int = 2
    timeout_s: float = 5


class NtfyNotifier:
    """Publishes check transitions to an ntfy topic."""

    def __init__(self, cfg: NtfyConfig) -> None:
        self.cfg = cfg

    @property
    def topic_url(self) -> str:
        return f"{self.cfg.base_url.rstrip('/')}/{self.cfg.topic}"

    def _post(
        self, title: str, message: str, priority: int, tags: Optional[str] = None
    ) -> None:
        headers = {
            "Title": title,
            "Priority": str(priority),
        }
        if tags:
            headers["Tags"] = tags  # comma-separated emoji or tag words
        resp = requests.post(
            self.topic_url,
            data=message.encode("utf-8"),
            headers=headers,
            timeout=self.cfg.timeout_s,
        )
        resp.raise_for_status()

    def send_down(self, title: str, message: str) -> None:
        self._post(
            title, message, priority=self.cfg.priority_down, tags="rotating_light,browser"
        )

    def send_up(self, title: str, message: str) -> None:
        self._post(
            title, message, priority=self.cfg.priority_up, tags="white_check_mark,browser"
        )
