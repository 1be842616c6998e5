import unittest
from unittest.mock import Mock, patch

import requests

from synthcheck.formatting import format_transition
from synthcheck.notifier import NtfyConfig, NtfyNotifier


class NtfyNotifierTests(unittest.TestCase):
    def test_send_down_posts_title_priority_and_tags(self) -> None:
        notifier = NtfyNotifier(NtfyConfig(base_url="http://ntfy.local/", topic="ops"))
        with patch("synthcheck.notifier.requests.post", return_value=Mock()) as mock_post:
            notifier.send_down(title="[DOWN] glide", message="HTTP: 404")

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "http://ntfy.local/ops")
        self.assertEqual(kwargs["data"], b"HTTP: 404")
        self.assertEqual(kwargs["headers"]["Title"], "[DOWN] glide")
        self.assertEqual(kwargs["headers"]["Priority"], "4")
        self.assertIn("rotating_light", kwargs["headers"]["Tags"])
        self.assertEqual(kwargs["timeout"], 5)

    def test_http_errors_are_raised(self) -> None:
        response = Mock()
        response.raise_for_status.side_effect = requests.HTTPError("403 Forbidden")
        notifier = NtfyNotifier(NtfyConfig(base_url="http://ntfy.local", topic="ops"))
        with patch("synthcheck.notifier.requests.post", return_value=response):
            with self.assertRaises(requests.HTTPError):
                notifier.send_up(title="[UP] glide", message="ok")


class FormatTransitionTests(unittest.TestCase):
    def test_down_message_includes_status_and_error(self) -> None:
        title, body = format_transition(
            event={"event": "DOWN", "ts": "2026-01-01T00:00:00+00:00"},
            check={"id": "glide", "type": "browser", "url": "https://89service.glide.page/"},
            state={
                "latency_ms": 812,
                "status_code": 404,
                "error": "Failed with response code 404",
                "fail_count": 2,
            },
        )

        self.assertEqual(title, "[DOWN] glide")
        self.assertIn("Target: https://89service.glide.page/", body)
        self.assertIn("HTTP: 404", body)
        self.assertIn("Error: Failed with response code 404", body)
        self.assertIn("Consecutive failures: 2", body)

    def test_up_message_points_at_screenshot(self) -> None:
        _, body = format_transition(
            event={"event": "UP", "ts": "2026-01-01T00:00:00+00:00"},
            check={"id": "glide", "type": "browser", "url": "https://89service.glide.page/"},
            state={"latency_ms": 500, "status_code": 200, "screenshot_path": "screenshot.jpg"},
        )

        self.assertIn("Screenshot: screenshot.jpg", body)
        self.assertNotIn("Error:", body)


if __name__ == "__main__":
    unittest.main()
