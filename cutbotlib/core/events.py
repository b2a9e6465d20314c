#!/usr/bin/env python3

"""
Parse ffmpeg silencedetect diagnostics into timestamps.

ffmpeg writes lines like:
	Duration: 00:01:40.00, start: 0.000000, bitrate: 1411 kb/s
	[silencedetect @ 0x55d2] silence_start: 1.5
	[silencedetect @ 0x55d2] silence_end: 3.25 | silence_duration: 1.75
"""

import re
from cutbotlib.core.errors import ParseError

#============================================

DURATION_RE = re.compile(r"Duration: (\d+):(\d+):(\d+)\.(\d+)")
SILENCE_START_RE = re.compile(r"silence_start:\s*(\d+\.?\d*)")
SILENCE_END_RE = re.compile(r"silence_end:\s*(\d+\.?\d*)")

#============================================

def extract_duration(text: str) -> float:
	"""
	Find the total media duration in ffmpeg output.

	The fractional field is scaled by its own digit count, so "40.5",
	"40.50" and "40.500" all read as 40.5 seconds.

	Args:
		text: Raw ffmpeg stderr text.

	Returns:
		float: Duration in seconds.
	"""
	match = DURATION_RE.search(text)
	if match is None:
		raise ParseError("failed to find Duration line in ffmpeg output")
	hours = int(match.group(1))
	minutes = int(match.group(2))
	seconds = int(match.group(3))
	fraction_digits = match.group(4)
	fraction = int(fraction_digits) / (10 ** len(fraction_digits))
	duration = hours * 3600 + minutes * 60 + seconds + fraction
	if duration <= 0:
		raise ParseError(f"media duration is zero: {match.group(0)}")
	return duration

#============================================

def _collect_marks(text: str, pattern: re.Pattern) -> list:
	marks = []
	for line in text.splitlines():
		match = pattern.search(line)
		if match is None:
			continue
		try:
			value = float(match.group(1))
		except ValueError:
			continue
		marks.append(value)
	return marks

#============================================

def extract_silence_starts(text: str) -> list:
	"""
	Collect every silence_start value in order of appearance.
	"""
	return _collect_marks(text, SILENCE_START_RE)

#============================================

def extract_loud_starts(text: str) -> list:
	"""
	Collect every silence_end value in order of appearance.

	A silence_end is the point where loud material resumes.
	"""
	return _collect_marks(text, SILENCE_END_RE)

#============================================

def extract_events(text: str) -> dict:
	return {
		'duration': extract_duration(text),
		'silence_starts': extract_silence_starts(text),
		'loud_starts': extract_loud_starts(text),
	}
