import logging
import unittest

import numpy as np

import cachematrix


class TestSolveObservability(unittest.TestCase):
    def setUp(self):
        cachematrix.clear_solve_traces()
        self.hits = []
        self.listener = cachematrix.add_hit_listener(self.hits.append)

    def tearDown(self):
        cachematrix.remove_hit_listener(self.listener)
        cachematrix.clear_solve_traces()

    def _matrix(self):
        return cachematrix.CacheableMatrix([[1.0, 2.0], [3.0, 4.0]])

    def test_listener_called_on_hits_only(self):
        m = self._matrix()

        cachematrix.cache_solve(m)
        self.assertEqual(self.hits, [])

        cachematrix.cache_solve(m)
        cachematrix.cache_solve(m)
        self.assertEqual(len(self.hits), 2)
        self.assertTrue(all(rec.route == "cache" for rec in self.hits))
        self.assertEqual(self.hits[0].shape, (2, 2))

    def test_traces_record_route(self):
        m = self._matrix()

        cachematrix.cache_solve(m)
        trace = cachematrix.last_solve_trace()
        self.assertIsNotNone(trace)
        self.assertEqual(trace.get("op"), "cache_solve")
        self.assertEqual(trace.get("route"), "compute")

        cachematrix.cache_solve(m)
        trace = cachematrix.last_solve_trace("cache_solve")
        self.assertEqual(trace.get("route"), "cache")
        self.assertTrue(str(trace.get("trace_tag", "")).startswith("cache_solve:"))

    def test_clear_traces(self):
        cachematrix.cache_solve(self._matrix())
        cachematrix.clear_solve_traces()
        self.assertIsNone(cachematrix.last_solve_trace())

    def test_removed_listener_is_not_called(self):
        m = self._matrix()
        cachematrix.cache_solve(m)
        cachematrix.remove_hit_listener(self.listener)
        # Removing twice is harmless.
        cachematrix.remove_hit_listener(self.listener)

        cachematrix.cache_solve(m)
        self.assertEqual(self.hits, [])

    def test_failing_listener_does_not_break_cache_hit(self):
        m = self._matrix()
        first = cachematrix.cache_solve(m)

        def broken(record):
            raise RuntimeError("listener failure")

        cachematrix.add_hit_listener(broken)
        try:
            with self.assertLogs("cachematrix", level=logging.ERROR) as logs:
                second = cachematrix.cache_solve(m)
        finally:
            cachematrix.remove_hit_listener(broken)

        self.assertIs(second, first)
        self.assertEqual(len(self.hits), 1)
        self.assertTrue(any("hit listener" in line for line in logs.output))

    def test_non_callable_listener_rejected(self):
        with self.assertRaises(TypeError):
            cachematrix.add_hit_listener("not callable")

    def test_hit_is_logged_at_info(self):
        m = self._matrix()
        cachematrix.cache_solve(m)

        with self.assertLogs("cachematrix", level=logging.INFO) as logs:
            cachematrix.cache_solve(m)
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].levelno, logging.INFO)
        self.assertIn("cached inverse", logs.records[0].getMessage())

    def test_miss_logs_only_at_debug(self):
        m = cachematrix.CacheableMatrix(np.eye(2) * 2.0)
        with self.assertLogs("cachematrix", level=logging.DEBUG) as logs:
            cachematrix.cache_solve(m)
        self.assertTrue(all(r.levelno == logging.DEBUG for r in logs.records))


if __name__ == "__main__":
    unittest.main()
