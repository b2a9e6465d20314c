#!/usr/bin/env python3

"""
Turn loud/silence marks into a gapless list of chunks over [0, duration).
"""

from cutbotlib.core import utils
from cutbotlib.core.errors import OrderingError
from cutbotlib.core.errors import ParseError

#============================================

def make_chunk(start: float, end: float, kind: str) -> dict:
	return {
		'start': start,
		'end': end,
		'duration': end - start,
		'kind': kind,
	}

#============================================

def first_mark_after(marks: list, position: float, default: float) -> float:
	"""
	Return the first mark in sequence order strictly greater than position.
	"""
	for mark in marks:
		if mark > position:
			return mark
	return default

#============================================

def snap_to_millis(seconds: float) -> float:
	"""
	Round a time to the millisecond grid the MLT document is written on.
	"""
	return round(utils.seconds_to_millis(seconds) / 1000, 3)

#============================================

def check_ascending(marks: list) -> None:
	previous = None
	for index, mark in enumerate(marks):
		if previous is not None and mark < previous:
			raise OrderingError(
				f"loud marks must be ascending: mark {index} ({mark}) "
				f"is before {previous}"
			)
		previous = mark
	return

#============================================

def segment(loud_starts: list, silence_starts: list, duration: float) -> list:
	"""
	Split [0, duration) into alternating silent and loud chunks.

	Each loud mark opens a loud chunk that runs to the next silence mark
	after it, or to the end of the media. Gaps before a loud mark become
	silent chunks. Loud marks falling inside an already emitted loud chunk
	are absorbed into it. Marks and duration are snapped to whole
	milliseconds first, so no chunk is shorter than one millisecond.

	Args:
		loud_starts: Ascending loud marks (ffmpeg silence_end values).
		silence_starts: Silence marks (ffmpeg silence_start values).
		duration: Total media duration in seconds.

	Returns:
		list: Chunk dicts with start, end, duration and kind.
	"""
	check_ascending(loud_starts)
	duration = snap_to_millis(duration)
	if duration <= 0:
		raise ParseError(f"media duration must be positive, got {duration}")
	loud_starts = [snap_to_millis(mark) for mark in loud_starts]
	silence_starts = [snap_to_millis(mark) for mark in silence_starts]
	chunks = []
	cursor = 0.0
	for loud_start in loud_starts:
		if loud_start >= duration:
			break
		if loud_start < cursor:
			continue
		if cursor < loud_start:
			chunks.append(make_chunk(cursor, loud_start, 'silent'))
		end = first_mark_after(silence_starts, loud_start, duration)
		end = min(end, duration)
		chunks.append(make_chunk(loud_start, end, 'loud'))
		cursor = end
	if cursor < duration:
		# no loud marks at all means nothing quiet enough was found
		kind = 'silent' if len(chunks) > 0 else 'loud'
		chunks.append(make_chunk(cursor, duration, kind))
	return chunks

#============================================

def summarize_chunks(chunks: list) -> dict:
	loud_total = 0.0
	silent_total = 0.0
	loud_count = 0
	silent_count = 0
	for chunk in chunks:
		if chunk['kind'] == 'loud':
			loud_total += chunk['duration']
			loud_count += 1
		else:
			silent_total += chunk['duration']
			silent_count += 1
	return {
		'chunk_count': len(chunks),
		'loud_count': loud_count,
		'silent_count': silent_count,
		'loud_total': loud_total,
		'silent_total': silent_total,
	}
