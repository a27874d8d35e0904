"""Best-practice checks.

The secret check is a length heuristic: any run of 20+ alphanumerics in a step
string that carries no interpolation marker. Long identifiers and hashes will
trip it and short secrets will not; it is a prompt to look, not a verdict.
"""

from __future__ import annotations

import re
from typing import Any, Iterator, List

from .model import Category, ConfigTree, Finding, Priority, finding_id
from .tables import SCORE_SECRET, SECRET_MIN_LENGTH


_SECRET = re.compile(r"[A-Za-z0-9]{%d,}" % SECRET_MIN_LENGTH)
_INTERPOLATION = re.compile(r"\$\{|\$[A-Za-z_]|<<")


def _strings(node: Any) -> Iterator[str]:
	if isinstance(node, str):
		yield node
	elif isinstance(node, dict):
		for key, value in node.items():
			yield str(key)
			yield from _strings(value)
	elif isinstance(node, (list, tuple)):
		for item in node:
			yield from _strings(item)


def find_secret(node: Any) -> str:
	for text in _strings(node):
		if _INTERPOLATION.search(text):
			continue
		m = _SECRET.search(text)
		if m:
			return m.group(0)
	return ""


def _mask(value: str) -> str:
	return value[:4] + "*" * (len(value) - 4)


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []
	for name, job in config.jobs.items():
		match = find_secret([step.raw for step in job.steps])
		if not match:
			continue
		findings.append(
			Finding(
				id=finding_id(Category.PRACTICE, name),
				category=Category.PRACTICE,
				priority=Priority.HIGH,
				impact_score=SCORE_SECRET,
				title=f"Possible hardcoded secret in job '{name}'",
				current_state=f"Step content contains {_mask(match)}",
				problem="Credentials committed to the config are visible to anyone with repository access.",
				recommendation="Move the value into a project environment variable or context and reference it as $NAME.",
				example="- run: deploy --token \"$DEPLOY_TOKEN\"",
				affected_jobs=[name],
			)
		)
	return findings
