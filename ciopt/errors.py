from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
	"""A configuration could not be turned into a Config Tree. Always fatal."""

	hint = "Check that the file is a valid CircleCI configuration."

	def __init__(self, message: str, hint: Optional[str] = None):
		super().__init__(message)
		self.message = message
		if hint is not None:
			self.hint = hint


class ConfigNotFound(ConfigError):
	hint = "Pass the path to your config explicitly, e.g. `ciopt path/to/config.yml`."


class ConfigUnreadable(ConfigError):
	hint = "Check the file permissions and encoding (UTF-8 is expected)."


class ConfigSyntaxError(ConfigError):
	hint = "Fix the YAML syntax; `circleci config validate` reports the same errors."

	def __init__(
		self,
		message: str,
		line: Optional[int] = None,
		column: Optional[int] = None,
		hint: Optional[str] = None,
	):
		if line is not None:
			message = f"{message} (line {line}, column {column})"
		super().__init__(message, hint)
		self.line = line
		self.column = column


class ConfigStructurallyInvalid(ConfigError):
	hint = "A config must be a mapping with a non-empty `jobs` section."
