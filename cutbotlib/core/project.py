#!/usr/bin/env python3

import os
from cutbotlib.core import config
from cutbotlib.core import segmenter
from cutbotlib.core import utils
from cutbotlib.exporters.mlt import MltTimelineBuilder
from cutbotlib.exporters.mlt import TimelineOptions
from cutbotlib.exporters.mlt import build_timeline
from cutbotlib.media import ffmpeg

#============================================

def default_output_path(input_file: str,
	file_name: str = config.DEFAULT_OUTPUT_FILE_NAME) -> str:
	"""
	Output goes next to the source with a fixed file name.
	"""
	parent_dir = os.path.dirname(os.path.abspath(input_file))
	return os.path.join(parent_dir, file_name)

#============================================

class SilenceProject():
	def __init__(self, input_file: str, settings: dict = None,
		output_override: str = None, dry_run: bool = False):
		self.input_file = input_file
		self.settings = settings or config.build_settings(None)
		self.output_file = output_override or default_output_path(input_file,
			self.settings['output_file_name'])
		self.dry_run = dry_run
		self.events = None
		self.chunks = None
		self.document = None

	#============================
	def analyze(self) -> dict:
		utils.ensure_file_exists(self.input_file)
		self.events = ffmpeg.detect_events(self.input_file, self.settings)
		return self.events

	#============================
	def plan(self) -> list:
		if self.events is None:
			self.analyze()
		self.chunks = segmenter.segment(self.events['loud_starts'],
			self.events['silence_starts'], self.events['duration'])
		return self.chunks

	#============================
	def export(self) -> str:
		"""
		Write the MLT file, or on a dry run only build the document tree.

		Returns:
			str: Written path, or None on a dry run.
		"""
		if self.chunks is None:
			self.plan()
		resource = os.path.abspath(self.input_file)
		if self.dry_run:
			self.document = build_timeline(self.chunks, self.events['duration'],
				resource, profile=self.settings['profile'])
			return None
		options = TimelineOptions(
			chunks=self.chunks,
			duration=self.events['duration'],
			resource=resource,
			output_file=self.output_file,
			profile=self.settings['profile'],
		)
		builder = MltTimelineBuilder(options)
		builder.write()
		self.document = builder.root
		return self.output_file

	#============================
	def run(self) -> str:
		self.analyze()
		self.plan()
		written = self.export()
		if not utils.is_quiet_mode():
			self.print_summary()
			if self.dry_run:
				print("dry run: MLT file not written")
		return written

	#============================
	def print_summary(self) -> None:
		duration = self.events['duration']
		summary = segmenter.summarize_chunks(self.chunks)
		loud_pct = 100.0 * summary['loud_total'] / duration
		silent_pct = 100.0 * summary['silent_total'] / duration
		print("")
		print("Silence Summary")
		print(f"Input: {self.input_file}")
		print(f"Duration: {utils.format_time(duration)} ({duration:.3f}s)")
		print(f"Loud: {utils.format_time(summary['loud_total'])} ({loud_pct:.2f}%)")
		print(f"Silent: {utils.format_time(summary['silent_total'])} ({silent_pct:.2f}%)")
		print(f"Silence marks: {len(self.events['silence_starts'])}")
		print(f"Loud marks: {len(self.events['loud_starts'])}")
		print(f"Chunks: {summary['chunk_count']} "
			f"({summary['loud_count']} loud, {summary['silent_count']} silent)")
		print(f"MLT file: {self.output_file}")
		print("")
