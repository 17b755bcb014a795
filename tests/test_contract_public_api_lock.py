from __future__ import annotations

import unittest


class TestPublicApiLockContract(unittest.TestCase):
    def test_api_module_exports_are_present(self) -> None:
        import dayview.api as api

        self.assertTrue(hasattr(api, "__all__"))
        self.assertIsInstance(api.__all__, (list, tuple))
        self.assertGreaterEqual(len(api.__all__), 3)

        for name in api.__all__:
            self.assertIsInstance(name, str)
            self.assertTrue(hasattr(api, name), f"dayview.api missing public name: {name}")
            obj = getattr(api, name)
            self.assertIsNotNone(obj, f"dayview.api {name} is None")

    def test_package_reexports_match_api_all(self) -> None:
        import dayview
        import dayview.api as api

        for name in api.__all__:
            self.assertTrue(hasattr(dayview, name), f"dayview package does not re-export: {name}")
            self.assertIs(getattr(dayview, name), getattr(api, name), f"dayview.{name} must be same object as dayview.api.{name}")

    def test_core_entrypoints_are_public(self) -> None:
        import dayview.api as api

        for name in ("process_events", "layout_events", "make_event", "decode_layout"):
            self.assertIn(name, api.__all__)


if __name__ == "__main__":
    unittest.main(verbosity=2)
