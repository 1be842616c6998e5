import importlib
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi import HTTPException
from fastapi.responses import FileResponse

from synthcheck.checks.results import CheckResult

CHECK = {
    "id": "glide",
    "type": "browser",
    "url": "https://89service.glide.page/",
    "screenshot_path": "screenshot.jpg",
    "timeout_ms": None,
    "wait_until": "load",
    "headless": True,
    "full_page": False,
    "down_threshold": 1,
}


class ApiTests(unittest.TestCase):
    def _load_main_module(self):
        mod = importlib.import_module("synthcheck.main")
        return importlib.reload(mod)

    def test_openapi_schema_generation(self) -> None:
        main_mod = self._load_main_module()
        schema = main_mod.app.openapi()

        paths = schema["paths"]
        self.assertIn("/health", paths)
        self.assertIn("/api/registry", paths)
        self.assertIn("/api/status/checks", paths)
        self.assertIn("/api/status/summary", paths)
        self.assertIn("/api/status/events", paths)
        self.assertIn("/api/checks/{check_id}/run", paths)
        self.assertIn("/api/checks/{check_id}/screenshot", paths)

    def test_health(self) -> None:
        main_mod = self._load_main_module()
        self.assertEqual(main_mod.health(), {"status": "ok"})

    def test_run_check_records_result(self) -> None:
        main_mod = self._load_main_module()
        res = CheckResult.from_status(CHECK["url"], 200, latency_ms=640, screenshot_path="screenshot.jpg")

        with patch.object(main_mod, "load_registry", return_value=object()), patch.object(
            main_mod, "apply_defaults", return_value={"glide": CHECK}
        ), patch.object(main_mod, "execute_check", return_value=res), patch.object(
            main_mod, "build_notifier", return_value=None
        ):
            resp = main_mod.run_check("glide")

        self.assertEqual(resp["check_id"], "glide")
        self.assertTrue(resp["ok"])
        self.assertEqual(resp["status_code"], 200)
        self.assertEqual(resp["event"], "INIT")
        self.assertEqual(main_mod.status_checks()["glide"]["ok"], True)
        self.assertEqual(main_mod.status_events(limit=5)[0]["event"], "INIT")

    def test_run_check_unknown_id(self) -> None:
        main_mod = self._load_main_module()

        with patch.object(main_mod, "load_registry", return_value=object()), patch.object(
            main_mod, "apply_defaults", return_value={}
        ):
            with self.assertRaises(HTTPException) as ctx:
                main_mod.run_check("missing")

        self.assertEqual(ctx.exception.status_code, 404)

    def test_screenshot_served_when_present(self) -> None:
        main_mod = self._load_main_module()
        with tempfile.TemporaryDirectory() as td:
            shot = Path(td) / "screenshot.jpg"
            shot.write_bytes(b"\xff\xd8\xff\xd9")
            check = dict(CHECK, screenshot_path=str(shot))

            with patch.object(main_mod, "load_registry", return_value=object()), patch.object(
                main_mod, "apply_defaults", return_value={"glide": check}
            ):
                resp = main_mod.check_screenshot("glide")

        self.assertIsInstance(resp, FileResponse)
        self.assertEqual(resp.media_type, "image/jpeg")

    def test_screenshot_missing_is_404(self) -> None:
        main_mod = self._load_main_module()
        with tempfile.TemporaryDirectory() as td:
            check = dict(CHECK, screenshot_path=str(Path(td) / "never-written.jpg"))

            with patch.object(main_mod, "load_registry", return_value=object()), patch.object(
                main_mod, "apply_defaults", return_value={"glide": check}
            ):
                with self.assertRaises(HTTPException) as ctx:
                    main_mod.check_screenshot("glide")

        self.assertEqual(ctx.exception.status_code, 404)


if __name__ == "__main__":
    unittest.main()
