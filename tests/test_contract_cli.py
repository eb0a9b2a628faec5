import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

# 2020-01-06 (Monday) 00:00 UTC
BASE = 1578268800000
H = 60 * 60000


def _run(args, *, cwd: Path) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT)
    env.pop("DAYGRID_TZ", None)
    return subprocess.run(
        [sys.executable, "-m", "daygrid.cli", *args],
        cwd=str(cwd),
        env=env,
        text=True,
        capture_output=True,
    )


class TestCliContract(unittest.TestCase):
    def _write_events(self, td: Path, events) -> Path:
        p = td / "events.json"
        p.write_text(json.dumps(events), encoding="utf-8")
        return p

    def test_day_layout_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            ev = self._write_events(td, [
                {"id": "a", "title": "A", "start": "2020-01-06T09:00:00Z", "end": "2020-01-06T10:00:00Z"},
                {"id": "b", "start": "2020-01-06T09:30:00Z", "end": "2020-01-06T10:30:00Z"},
            ])
            out = td / "out" / "layout.json"
            p = _run(["--events", str(ev), "--day", "2020-01-06", "--tz", "UTC", "--out", str(out)], cwd=td)
            self.assertEqual(p.returncode, 0, p.stdout + "\n" + p.stderr)
            self.assertIn("[daygrid] OK: wrote", p.stdout)

            doc = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(doc["date"], "2020-01-06")
            styles = {e["key"]: e["style"] for e in doc["events"]}
            self.assertEqual(styles["a"]["top"], 270.0)
            self.assertEqual(styles["a"]["width"], 85.0)
            self.assertEqual(styles["b"]["left"], 50.0)

    def test_week_layout_to_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            ev = self._write_events(td, {"events": [{"id": "a", "start": BASE + 9 * H, "end": BASE + 10 * H}]})
            p = _run(["--events", str(ev), "--day", "2020-01-08", "--view", "week", "--tz", "UTC"], cwd=td)
            self.assertEqual(p.returncode, 0, p.stderr)
            doc = json.loads(p.stdout)
            self.assertEqual(doc["week_start"], "2020-01-06")
            self.assertEqual([e["key"] for e in doc["days"][0]["events"]], ["a"])

    def test_env_tz_is_the_default(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            # 23:30 UTC Monday is Tuesday at +02:00.
            ev = self._write_events(td, [{"id": "a", "start": BASE + 23 * H + 30 * 60000, "end": BASE + 24 * H}])
            env = os.environ.copy()
            env["PYTHONPATH"] = str(REPO_ROOT)
            env["DAYGRID_TZ"] = "+02:00"
            p = subprocess.run(
                [sys.executable, "-m", "daygrid.cli", "--events", str(ev), "--day", "2020-01-07"],
                cwd=str(td), env=env, text=True, capture_output=True,
            )
            self.assertEqual(p.returncode, 0, p.stderr)
            self.assertEqual([e["key"] for e in json.loads(p.stdout)["events"]], ["a"])

    def test_non_finite_timestamps_are_dropped(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            ev = td / "events.json"
            ev.write_text('[{"id": "i", "start": Infinity}, {"id": "a", "start": %d, "end": %d}]' % (BASE + 9 * H, BASE + 10 * H), encoding="utf-8")
            p = _run(["--events", str(ev), "--day", "2020-01-06", "--tz", "UTC"], cwd=td)
            self.assertEqual(p.returncode, 0, p.stderr)
            self.assertEqual([e["key"] for e in json.loads(p.stdout)["events"]], ["a"])

    def test_bad_inputs(self) -> None:

        with tempfile.TemporaryDirectory() as td:
            td = Path(td)
            p = _run(["--events", str(td / "missing.json")], cwd=td)
            self.assertEqual(p.returncode, 2)
            self.assertIn("[daygrid] ERROR: Missing events file", p.stderr)

            ev = self._write_events(td, [{"id": "a", "start": BASE}])
            p = _run(["--events", str(ev), "--start-hour", "8am"], cwd=td)
            self.assertEqual(p.returncode, 2)
            self.assertIn("Invalid configuration", p.stderr)

            p = _run(["--events", str(ev), "--day", "2020-13-01"], cwd=td)
            self.assertEqual(p.returncode, 2)

            rev = self._write_events(td, [{"id": "r", "start": BASE + H, "end": BASE}])
            p = _run(["--events", str(rev), "--tz", "UTC"], cwd=td)
            self.assertEqual(p.returncode, 3)
            self.assertIn("Invalid event", p.stderr)


if __name__ == "__main__":
    unittest.main(verbosity=2)
