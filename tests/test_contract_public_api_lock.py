from __future__ import annotations

import unittest


class TestPublicApiLockContract(unittest.TestCase):
    def test_api_module_exports_are_present(self) -> None:
        import daygrid.api as api

        self.assertTrue(hasattr(api, "__all__"))
        self.assertIsInstance(api.__all__, (list, tuple))
        self.assertEqual(len(api.__all__), len(set(api.__all__)))

        for name in api.__all__:
            self.assertIsInstance(name, str)
            self.assertTrue(hasattr(api, name), f"daygrid.api missing public name: {name}")
            self.assertIsNotNone(getattr(api, name), f"daygrid.api {name} is None")

    def test_package_reexports_match_api_all(self) -> None:
        import daygrid
        import daygrid.api as api

        for name in api.__all__:
            self.assertTrue(hasattr(daygrid, name), f"daygrid package does not re-export: {name}")
            self.assertIs(getattr(daygrid, name), getattr(api, name), f"daygrid.{name} must be same object as daygrid.api.{name}")

    def test_core_operations_are_public(self) -> None:
        import daygrid

        for name in ("select_for_day", "select_for_week", "build_forest", "place_events", "compute_now_position"):
            self.assertIn(name, daygrid.__all__)


if __name__ == "__main__":
    unittest.main(verbosity=2)
