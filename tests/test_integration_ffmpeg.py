#!/usr/bin/env python3

"""
Integration test running real ffmpeg silencedetect passes.
"""

# Standard Library
import os
import shutil
import subprocess
import sys
import tempfile
import xml.etree.ElementTree

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from cutbotlib.core import utils
from cutbotlib.core.project import SilenceProject

#============================================

HAVE_FFMPEG = shutil.which("ffmpeg") is not None
SKIP_FFMPEG_REASON = "missing tools: ffmpeg"

#============================================

def _make_tone_gap_tone(path: str) -> None:
	"""
	Write 2s tone, 3s digital silence, 3s tone as a mono wav.
	"""
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-f", "lavfi", "-i", "sine=frequency=440:sample_rate=44100:duration=2",
		"-f", "lavfi", "-t", "3", "-i", "anullsrc=r=44100:cl=mono",
		"-f", "lavfi", "-i", "sine=frequency=440:sample_rate=44100:duration=3",
		"-filter_complex", "[0:a][1:a][2:a]concat=n=3:v=0:a=1[out]",
		"-map", "[out]",
		path,
	]
	subprocess.run(cmd, check=True, stdout=subprocess.DEVNULL,
		stderr=subprocess.DEVNULL)

#============================================

@pytest.mark.skipif(not HAVE_FFMPEG, reason=SKIP_FFMPEG_REASON)
def test_real_ffmpeg_project() -> None:
	"""Ensure a real analysis tiles the clip and writes a loadable project."""
	with tempfile.TemporaryDirectory() as temp_dir:
		source_file = os.path.join(temp_dir, "tone-gap.wav")
		_make_tone_gap_tone(source_file)
		utils.set_quiet_mode(True)
		try:
			project = SilenceProject(source_file)
			output_file = project.run()
		finally:
			utils.set_quiet_mode(False)
		duration = project.events['duration']
		assert abs(duration - 8.0) < 0.05
		assert any(abs(mark - 5.0) < 0.1 for mark in project.events['loud_starts'])
		chunks = project.chunks
		assert chunks[0]['start'] == 0
		assert chunks[-1]['end'] == duration
		for left, right in zip(chunks, chunks[1:]):
			assert left['end'] == right['start']
		root = xml.etree.ElementTree.parse(output_file).getroot()
		assert len(root.findall('chain')) == len(chunks)
		assert os.path.dirname(output_file) == temp_dir
