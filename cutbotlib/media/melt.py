#!/usr/bin/env python3

"""
Merge a folder of recordings into one MLT project with melt.
"""

import os
from cutbotlib.core import utils

#============================================

CONCAT_OUTPUT_NAME = "pass1.mlt"

#============================================

def list_recordings(input_folder: str, extension: str = ".mkv") -> list:
	"""
	List recordings in a folder, oldest modification time first.

	Args:
		input_folder: Folder to scan.
		extension: File extension to match, case-insensitive.

	Returns:
		list: Absolute file paths.
	"""
	if not os.path.isdir(input_folder):
		raise RuntimeError(f"folder not found: {input_folder}")
	entries = []
	for name in os.listdir(input_folder):
		path = os.path.abspath(os.path.join(input_folder, name))
		if not os.path.isfile(path):
			continue
		if os.path.splitext(name)[1].lower() != extension:
			continue
		entries.append((os.path.getmtime(path), name, path))
	entries.sort()
	return [path for (_, _, path) in entries]

#============================================

def build_concat_cmd(melt: str, files: list, output_file: str) -> list:
	cmd = [melt]
	cmd += files
	cmd += [
		"-verbose",
		"-progress", "2",
		"-consumer", f"xml:{output_file}",
		"acodec=aac",
		"vcodec=libx264",
	]
	return cmd

#============================================

def concat_folder(input_folder: str, settings: dict) -> str:
	"""
	Concatenate every recording in a folder into pass1.mlt in that folder.

	Returns:
		str: Path of the written MLT file.
	"""
	files = list_recordings(input_folder)
	if len(files) == 0:
		raise RuntimeError(f"no .mkv files found in {input_folder}")
	utils.check_dependency(settings['melt'])
	output_file = os.path.join(os.path.abspath(input_folder), CONCAT_OUTPUT_NAME)
	cmd = build_concat_cmd(settings['melt'], files, output_file)
	utils.run_process(cmd, cwd=input_folder)
	return output_file
