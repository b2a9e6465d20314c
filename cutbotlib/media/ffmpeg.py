#!/usr/bin/env python3

"""
Run ffmpeg silencedetect passes over a media file.
"""

import concurrent.futures
from cutbotlib.core import events
from cutbotlib.core import utils

#============================================

def format_db(noise_db: float) -> str:
	value = f"{noise_db:.2f}".rstrip('0').rstrip('.')
	return f"{value}dB"

#============================================

def build_silencedetect_cmd(ffmpeg: str, input_file: str, noise_db: float,
	min_duration: float) -> list:
	"""
	Build an ffmpeg command that decodes audio only and reports silence.

	Args:
		ffmpeg: ffmpeg executable.
		input_file: Media file path.
		noise_db: Noise floor in dBFS.
		min_duration: Minimum silence length in seconds.

	Returns:
		list: Command list.
	"""
	audio_filter = f"silencedetect=noise={format_db(noise_db)}:d={min_duration:g}"
	cmd = [
		ffmpeg, "-hide_banner", "-nostats",
		"-i", input_file,
		"-vn", "-sn",
		"-af", audio_filter,
		"-f", "null", "-",
	]
	return cmd

#============================================

def run_silencedetect(ffmpeg: str, input_file: str, noise_db: float,
	min_duration: float) -> str:
	"""
	Run one silencedetect pass and return the diagnostic text.

	ffmpeg writes its diagnostics to stderr.
	"""
	cmd = build_silencedetect_cmd(ffmpeg, input_file, noise_db, min_duration)
	proc = utils.run_process(cmd)
	return proc.stderr

#============================================

def detect_events(input_file: str, settings: dict) -> dict:
	"""
	Run the silence and loud passes and extract their marks.

	The silence pass uses the deeper noise floor so silence starts are
	caught early, the loud pass uses the shallower floor so loud material
	is only marked once it is clearly back. The passes are independent and
	run in two threads when settings['parallel'] is set.

	Args:
		input_file: Media file path.
		settings: Settings from config.build_settings().

	Returns:
		dict: duration, silence_starts and loud_starts.
	"""
	utils.check_dependency(settings['ffmpeg'])
	silence_args = (settings['ffmpeg'], input_file,
		settings['silence_noise_db'], settings['silence_min_duration'])
	loud_args = (settings['ffmpeg'], input_file,
		settings['loud_noise_db'], settings['loud_min_duration'])
	if settings['parallel']:
		with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
			silence_future = executor.submit(run_silencedetect, *silence_args)
			loud_future = executor.submit(run_silencedetect, *loud_args)
			silence_text = silence_future.result()
			loud_text = loud_future.result()
	else:
		silence_text = run_silencedetect(*silence_args)
		loud_text = run_silencedetect(*loud_args)
	# every pass prints the Duration line; the silence pass supplies it
	result = events.extract_events(silence_text)
	result['loud_starts'] = events.extract_loud_starts(loud_text)
	return result
