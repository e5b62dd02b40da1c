import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from address import CacheGeometry
from report import render, format_summary, format_trace
from simulator import Simulator
from tracefile import parse_trace


class TestReport(unittest.TestCase):

    def setUp(self):
        self.geometry = CacheGeometry(1, 4, 16)

    def test_render(self):
        result = Simulator(self.geometry).run(parse_trace(["R:4:00000000", "W:4:0000001e"]))
        text = render(result)
        self.assertIn("Total Cache Size:  16B", text)
        self.assertIn("Number of Sets:  4", text)
        self.assertIn("Hit Rate:\t0", text)
        self.assertIn("Total Misses:\t2", text)

    def test_trace_rows(self):
        result = Simulator(self.geometry).run(parse_trace(["R:4:00000000", "W:4:0000001e", "W:4:0000001e"]))
        rows = format_trace(result)[2:]
        self.assertEqual(len(rows), 3)
        self.assertIn("Read", rows[0])
        self.assertIn("00000000", rows[0])
        self.assertTrue(rows[0].rstrip().endswith("Miss"))
        # 0x1e: tag 1, index 3, offset 2
        self.assertEqual(rows[1].split()[-4:], ["1", "3", "2", "Miss"])
        self.assertTrue(rows[2].rstrip().endswith("Hit"))

    def test_rates(self):
        result = Simulator(self.geometry).run(parse_trace(["R:4:0", "R:4:0", "R:4:0"]))
        summary = format_summary(result)
        self.assertIn("Hit Rate:\t0.66667", summary)
        self.assertIn("Miss Rate:\t0.33333", summary)

    def test_no_accesses(self):
        text = render(Simulator(self.geometry).run([]))
        self.assertIn("Hit Rate:\tno accesses recorded", text)
        self.assertIn("Miss Rate:\tno accesses recorded", text)


if __name__ == '__main__':
    unittest.main()
