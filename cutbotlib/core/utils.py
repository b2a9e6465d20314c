#!/usr/bin/env python3

import os
import shlex
import shutil
import subprocess
from decimal import Decimal, ROUND_HALF_UP
from cutbotlib.core.errors import ExternalToolError

#============================================

_QUIET_MODE = False

#============================================

def set_quiet_mode(value: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(value)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def run_process(cmd: list, cwd: str = None) -> subprocess.CompletedProcess:
	"""
	Run an external command and capture its output.

	Args:
		cmd: Command list to execute.
		cwd: Optional working directory.

	Returns:
		subprocess.CompletedProcess: The completed process.
	"""
	showcmd = shlex.join(cmd)
	if not is_quiet_mode():
		print(f"CMD: '{showcmd}'")
	try:
		proc = subprocess.run(cmd, capture_output=True, text=True,
			errors='replace', cwd=cwd)
	except OSError as exc:
		raise ExternalToolError(f"failed to start: {showcmd}: {exc}",
			cmd=cmd) from exc
	if proc.returncode != 0:
		stderr_text = proc.stderr.strip()
		raise ExternalToolError(
			f"command failed with exit code {proc.returncode}: {showcmd}\n{stderr_text}",
			cmd=cmd, returncode=proc.returncode)
	return proc

#============================================

def check_dependency(cmd_name: str) -> None:
	if shutil.which(cmd_name) is None:
		raise ExternalToolError(f"missing dependency: {cmd_name}", cmd=[cmd_name])
	return

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.isfile(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def seconds_to_millis(seconds: float) -> int:
	"""
	Convert seconds to integer milliseconds using half-up rounding.
	"""
	value = Decimal(str(seconds)) * Decimal(1000)
	millis = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
	if millis < 0:
		millis = 0
	return millis

#============================================

def format_time(seconds: float) -> str:
	"""
	Format seconds as HH:MM:SS.mmm.

	Args:
		seconds: Time in seconds.

	Returns:
		str: Formatted timecode with exactly three fractional digits.
	"""
	total_millis = seconds_to_millis(seconds)
	hours = total_millis // 3600000
	remainder = total_millis % 3600000
	minutes = remainder // 60000
	remainder = remainder % 60000
	seconds_part = remainder // 1000
	millis_part = remainder % 1000
	return f"{hours:02d}:{minutes:02d}:{seconds_part:02d}.{millis_part:03d}"

#============================================

def parse_timecode(raw_time) -> float:
	if raw_time is None:
		raise RuntimeError("time value is required")
	if isinstance(raw_time, (int, float)):
		return float(raw_time)
	if isinstance(raw_time, str):
		value = raw_time.strip()
		if ':' not in value:
			return float(Decimal(value))
		parts = value.split(':')
		seconds = Decimal(parts.pop())
		minutes = Decimal(parts.pop())
		hours = Decimal(0)
		if len(parts) > 0:
			hours = Decimal(parts.pop())
		return float(hours * Decimal(3600) + minutes * Decimal(60) + seconds)
	raise RuntimeError("time values must be int, float, or timecode string")

#============================================

def reduce_fraction(num: int, den: int) -> tuple:
	if den == 0:
		return (num, den)
	a = num
	b = den
	while b != 0:
		a, b = b, a % b
	gcd = a if a != 0 else 1
	return (num // gcd, den // gcd)
