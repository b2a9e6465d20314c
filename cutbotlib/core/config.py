#!/usr/bin/env python3

"""
Load and normalize the cutbot YAML config.
"""

import os
import yaml

#============================================

DEFAULT_OUTPUT_FILE_NAME = "output.mlt"

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'cutbot': 1,
		'settings': {
			'tools': {
				'ffmpeg': "ffmpeg",
				'melt': "melt",
			},
			'silence': {
				'noise_db': -60.0,
				'min_duration': 0.1,
			},
			'loud': {
				'noise_db': -30.0,
				'min_duration': 0.5,
			},
			'analysis': {
				'parallel': True,
			},
			'profile': {
				'width': 2560,
				'height': 1440,
				'frame_rate_num': 60000000,
				'frame_rate_den': 1000000,
				'colorspace': 709,
			},
			'output': {
				'file_name': DEFAULT_OUTPUT_FILE_NAME,
			},
		},
	}

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	if isinstance(value, bool):
		return value
	if isinstance(value, int):
		return bool(value)
	if isinstance(value, str):
		normalized = value.strip().lower()
		if normalized in ("true", "yes", "1", "on"):
			return True
		if normalized in ("false", "no", "0", "off"):
			return False
	raise RuntimeError(f"config {config_path}: {key_path} must be a boolean")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	if isinstance(value, bool):
		raise RuntimeError(f"config {config_path}: {key_path} must be a number")
	if isinstance(value, (int, float)):
		return float(value)
	if isinstance(value, str):
		try:
			return float(value)
		except ValueError as exc:
			raise RuntimeError(f"config {config_path}: {key_path} must be a number") from exc
	raise RuntimeError(f"config {config_path}: {key_path} must be a number")

#============================================

def coerce_int(value, config_path: str, key_path: str) -> int:
	if isinstance(value, bool):
		raise RuntimeError(f"config {config_path}: {key_path} must be an integer")
	if isinstance(value, int):
		return value
	if isinstance(value, float):
		return int(value)
	if isinstance(value, str):
		try:
			return int(float(value))
		except ValueError as exc:
			raise RuntimeError(f"config {config_path}: {key_path} must be an integer") from exc
	raise RuntimeError(f"config {config_path}: {key_path} must be an integer")

#============================================

def coerce_str(value, config_path: str, key_path: str) -> str:
	if not isinstance(value, str) or value.strip() == "":
		raise RuntimeError(f"config {config_path}: {key_path} must be a non-empty string")
	return value

#============================================

def build_config_text(config: dict) -> str:
	"""
	Build YAML text for the config file.

	Args:
		config: Config dictionary.

	Returns:
		str: YAML content.
	"""
	header = "# cutbot config: thresholds are in dBFS, durations in seconds\n"
	body = yaml.safe_dump(config, sort_keys=False, default_flow_style=False)
	return header + body

#============================================

def write_config_file(config_path: str, config: dict) -> None:
	text = build_config_text(config)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def load_config(config_path: str) -> dict:
	"""
	Load a config file from disk.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config dictionary.
	"""
	with open(config_path, 'r', encoding='utf-8') as handle:
		data = yaml.safe_load(handle)
	if not isinstance(data, dict):
		raise RuntimeError("config file must be a mapping")
	if data.get('cutbot') != 1:
		raise RuntimeError("config file must set cutbot: 1")
	return data

#============================================

def _section(overrides: dict, name: str, config_path: str) -> dict:
	value = overrides.get(name, {})
	if value is None:
		return {}
	if not isinstance(value, dict):
		raise RuntimeError(f"config {config_path}: settings.{name} must be a mapping")
	return value

#============================================

def build_settings(config: dict, config_path: str = "<defaults>") -> dict:
	"""
	Merge config overrides over the defaults and coerce types.

	Args:
		config: Raw config dictionary, or None for pure defaults.
		config_path: Config file path, used in error messages.

	Returns:
		dict: Flat settings dictionary.
	"""
	settings = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings') or {}
	if not isinstance(overrides, dict):
		raise RuntimeError(f"config {config_path}: settings must be a mapping")
	tools = _section(overrides, 'tools', config_path)
	silence = _section(overrides, 'silence', config_path)
	loud = _section(overrides, 'loud', config_path)
	analysis = _section(overrides, 'analysis', config_path)
	profile = _section(overrides, 'profile', config_path)
	output = _section(overrides, 'output', config_path)
	result = {
		'ffmpeg': coerce_str(tools.get('ffmpeg', settings['tools']['ffmpeg']),
			config_path, "settings.tools.ffmpeg"),
		'melt': coerce_str(tools.get('melt', settings['tools']['melt']),
			config_path, "settings.tools.melt"),
		'silence_noise_db': coerce_float(silence.get('noise_db',
			settings['silence']['noise_db']), config_path,
			"settings.silence.noise_db"),
		'silence_min_duration': coerce_float(silence.get('min_duration',
			settings['silence']['min_duration']), config_path,
			"settings.silence.min_duration"),
		'loud_noise_db': coerce_float(loud.get('noise_db',
			settings['loud']['noise_db']), config_path,
			"settings.loud.noise_db"),
		'loud_min_duration': coerce_float(loud.get('min_duration',
			settings['loud']['min_duration']), config_path,
			"settings.loud.min_duration"),
		'parallel': coerce_bool(analysis.get('parallel',
			settings['analysis']['parallel']), config_path,
			"settings.analysis.parallel"),
		'profile': {
			'width': coerce_int(profile.get('width',
				settings['profile']['width']), config_path,
				"settings.profile.width"),
			'height': coerce_int(profile.get('height',
				settings['profile']['height']), config_path,
				"settings.profile.height"),
			'frame_rate_num': coerce_int(profile.get('frame_rate_num',
				settings['profile']['frame_rate_num']), config_path,
				"settings.profile.frame_rate_num"),
			'frame_rate_den': coerce_int(profile.get('frame_rate_den',
				settings['profile']['frame_rate_den']), config_path,
				"settings.profile.frame_rate_den"),
			'colorspace': coerce_int(profile.get('colorspace',
				settings['profile']['colorspace']), config_path,
				"settings.profile.colorspace"),
		},
		'output_file_name': coerce_str(output.get('file_name',
			settings['output']['file_name']), config_path,
			"settings.output.file_name"),
	}
	validate_settings(result)
	return result

#============================================

def validate_settings(settings: dict) -> None:
	if settings['silence_noise_db'] > 0:
		raise RuntimeError("silence noise_db must be 0 or negative dBFS")
	if settings['loud_noise_db'] > 0:
		raise RuntimeError("loud noise_db must be 0 or negative dBFS")
	if settings['silence_min_duration'] <= 0:
		raise RuntimeError("silence min_duration must be positive")
	if settings['loud_min_duration'] <= 0:
		raise RuntimeError("loud min_duration must be positive")
	profile = settings['profile']
	for key in ('width', 'height', 'frame_rate_num', 'frame_rate_den'):
		if profile[key] <= 0:
			raise RuntimeError(f"profile {key} must be positive")
	if os.path.basename(settings['output_file_name']) != settings['output_file_name']:
		raise RuntimeError("output file_name must not contain a directory")
	return

#============================================

def load_settings(config_path: str = None) -> dict:
	"""
	Load settings from a config file, or return defaults when no path is given.
	"""
	if config_path is None:
		return build_settings(None)
	if not os.path.isfile(config_path):
		raise RuntimeError(f"config file not found: {config_path}")
	config = load_config(config_path)
	return build_settings(config, config_path)
