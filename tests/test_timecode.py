#!/usr/bin/env python3

"""
Tests for HH:MM:SS.mmm formatting and parsing.
"""

# Standard Library
import os
import random
import re
import sys
import unittest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from cutbotlib.core import utils

#============================================

TIMECODE_RE = re.compile(r"^\d{2}:\d{2}:\d{2}\.\d{3}$")

#============================================

class FormatTimeTest(unittest.TestCase):
	#============================================
	def test_known_values(self) -> None:
		"""Ensure common values format with zero padding."""
		self.assertEqual(utils.format_time(0), "00:00:00.000")
		self.assertEqual(utils.format_time(1.5), "00:00:01.500")
		self.assertEqual(utils.format_time(100.0), "00:01:40.000")
		self.assertEqual(utils.format_time(3723.25), "01:02:03.250")
		self.assertEqual(utils.format_time(359999.999), "99:59:59.999")

	#============================================
	def test_rounds_half_up_to_millis(self) -> None:
		"""Ensure sub-millisecond values round instead of leaking digits."""
		self.assertEqual(utils.format_time(1.0005), "00:00:01.001")
		self.assertEqual(utils.format_time(1.0004), "00:00:01.000")
		self.assertEqual(utils.format_time(59.9996), "00:01:00.000")

	#============================================
	def test_negative_clamped(self) -> None:
		"""Ensure negative values never produce a minus sign."""
		self.assertEqual(utils.format_time(-0.002), "00:00:00.000")

	#============================================
	def test_pattern_and_reparse(self) -> None:
		"""Ensure random values match the pattern and reparse within 1ms."""
		rng = random.Random(99)
		values = [rng.uniform(0, 359999.999) for _ in range(500)]
		values += [0.0, 0.0001, 59.999, 3599.9994, 359999.999]
		for value in values:
			text = utils.format_time(value)
			self.assertRegex(text, TIMECODE_RE)
			self.assertLessEqual(abs(utils.parse_timecode(text) - value), 0.001)

#============================================

class ParseTimecodeTest(unittest.TestCase):
	#============================================
	def test_forms(self) -> None:
		"""Ensure full, short and bare-second forms parse."""
		self.assertAlmostEqual(utils.parse_timecode("01:02:03.250"), 3723.25)
		self.assertAlmostEqual(utils.parse_timecode("02:03.5"), 123.5)
		self.assertAlmostEqual(utils.parse_timecode("7.25"), 7.25)
		self.assertAlmostEqual(utils.parse_timecode(4), 4.0)

	#============================================
	def test_none_rejected(self) -> None:
		"""Ensure a missing value is rejected."""
		with self.assertRaises(RuntimeError):
			utils.parse_timecode(None)

#============================================

class ReduceFractionTest(unittest.TestCase):
	#============================================
	def test_display_aspect(self) -> None:
		"""Ensure common resolutions reduce to their display aspect."""
		self.assertEqual(utils.reduce_fraction(2560, 1440), (16, 9))
		self.assertEqual(utils.reduce_fraction(1920, 1080), (16, 9))
		self.assertEqual(utils.reduce_fraction(1024, 768), (4, 3))

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
