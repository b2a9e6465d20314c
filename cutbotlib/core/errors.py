#!/usr/bin/env python3

"""
Exception types raised by cutbot.

Everything derives from RuntimeError so callers that only care about
"the run failed" can keep catching RuntimeError.
"""

#============================================

class CutbotError(RuntimeError):
	pass

#============================================

class ExternalToolError(CutbotError):
	"""
	An external executable was missing, failed to start, or exited non-zero.
	"""
	def __init__(self, message: str, cmd: list = None, returncode: int = None):
		super().__init__(message)
		self.cmd = cmd
		self.returncode = returncode

#============================================

class ParseError(CutbotError):
	pass

#============================================

class OrderingError(ParseError):
	pass

#============================================

class OutputWriteError(CutbotError):
	def __init__(self, message: str, path: str = None):
		super().__init__(message)
		self.path = path
