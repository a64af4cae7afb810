import json
import signal
import unittest
from unittest import mock

import schedule

from cscserver.ingestion.news_types import RunOutcome
from cscserver.ingestion.scheduler import NewsScheduler


class TestRunOnce(unittest.TestCase):
    def test_success_exits_zero(self):
        pipeline = mock.Mock()
        pipeline.run_safely.return_value = RunOutcome(success=True, total=3, new=1)
        self.assertEqual(NewsScheduler(pipeline, 30).run_once(), 0)
        pipeline.run_safely.assert_called_once_with()

    def test_outcome_logged_once_per_run(self):
        pipeline = mock.Mock()
        pipeline.run_safely.return_value = RunOutcome(success=True, total=3, new=1, store_updated=False)
        with self.assertLogs("cscserver.ingestion.scheduler", level="INFO") as logs:
            NewsScheduler(pipeline, 30).run_once()
        outcome_lines = [line for line in logs.output if "Run outcome:" in line]
        self.assertEqual(len(outcome_lines), 1)
        payload = json.loads(outcome_lines[0].split("Run outcome: ", 1)[1])
        self.assertEqual(payload, {"success": True, "total": 3, "new": 1, "storeUpdated": False, "error": None})

    def test_failure_exits_nonzero(self):
        pipeline = mock.Mock()
        pipeline.run_safely.return_value = RunOutcome(success=False, error="boom")
        with self.assertLogs("cscserver.ingestion.scheduler", level="ERROR"):
            self.assertEqual(NewsScheduler(pipeline, 30).run_once(), 1)


class TestRunForever(unittest.TestCase):
    def test_runs_immediately_then_on_schedule_until_shutdown(self):
        pipeline = mock.Mock()
        pipeline.run_safely.side_effect = [
            RunOutcome(success=True),
            RunOutcome(success=False, error="sheet down"),
            RunOutcome(success=True),
        ]
        sched = schedule.Scheduler()
        ticks = []

        def fake_sleep(seconds):
            ticks.append(seconds)
            if len(ticks) < 3:
                # Make the job due on the next run_pending().
                for job in sched.jobs:
                    job.next_run = job.next_run.replace(year=2000)
            else:
                runner.request_shutdown()

        runner = NewsScheduler(pipeline, 15, scheduler=sched, sleep=fake_sleep, poll_seconds=5)
        with self.assertLogs("cscserver.ingestion.scheduler", level="INFO") as logs:
            code = runner.run_forever()

        self.assertEqual(code, 0)
        # initial run + two scheduled runs; the failed one did not stop the loop
        self.assertEqual(pipeline.run_safely.call_count, 3)
        self.assertEqual(ticks, [5, 5, 5])
        self.assertEqual(sched.jobs, [])
        self.assertTrue(any("Scheduled run failed: sheet down" in line for line in logs.output))

    def test_job_registered_with_interval(self):
        pipeline = mock.Mock()
        pipeline.run_safely.return_value = RunOutcome(success=True)
        sched = mock.Mock()
        runner = NewsScheduler(pipeline, 45, scheduler=sched, sleep=lambda s: runner.request_shutdown())
        runner.run_forever()
        sched.every.assert_called_once_with(45)

    def test_signal_handler_requests_shutdown(self):
        runner = NewsScheduler(mock.Mock(), 30)
        with mock.patch("cscserver.ingestion.scheduler.signal.signal") as fake_signal:
            runner.install_signal_handlers()
        handlers = {c.args[0]: c.args[1] for c in fake_signal.call_args_list}
        self.assertEqual(set(handlers), {signal.SIGINT, signal.SIGTERM})
        with self.assertLogs("cscserver.ingestion.scheduler", level="INFO"):
            handlers[signal.SIGTERM](signal.SIGTERM, None)
        self.assertTrue(runner.shutdown_requested)


if __name__ == "__main__":
    unittest.main()
