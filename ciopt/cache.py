from __future__ import annotations

from typing import List

from .estimate import cache_example, checksum_key_example, detect_language
from .model import Category, ConfigTree, EstimatedSavings, Finding, Priority, finding_id
from .tables import INSTALL_COMMANDS, SCORE_MISSING_CACHE, SCORE_WEAK_CACHE_KEY


def _install_command(commands: List[str]) -> str:
	for command in commands:
		for marker in INSTALL_COMMANDS:
			if marker in command:
				return marker
	return ""


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []
	for name, job in config.jobs.items():
		install = _install_command(job.run_commands())
		restores = job.steps_of("restore_cache")
		has_save = bool(job.steps_of("save_cache"))
		language = detect_language(job.images)

		if install and not restores:
			state = f"'{install}' runs on every build"
			if has_save:
				state += "; save_cache is present but nothing restores it"
			findings.append(
				Finding(
					id=finding_id(Category.CACHE, name),
					category=Category.CACHE,
					priority=Priority.HIGH,
					impact_score=SCORE_MISSING_CACHE,
					title=f"Dependencies are not cached in job '{name}'",
					current_state=state,
					problem="Dependencies are downloaded from scratch on every run.",
					recommendation="Restore a dependency cache keyed on the lockfile checksum before installing, and save it afterwards.",
					example=cache_example(language),
					savings=EstimatedSavings(time_reduction="2-5 min"),
					affected_jobs=[name],
				)
			)

		if restores:
			keys = [k for step in restores for k in step.keys]
			if not any("checksum" in k for k in keys):
				findings.append(
					Finding(
						id=finding_id(Category.CACHE, "key", name),
						category=Category.CACHE,
						priority=Priority.MEDIUM,
						impact_score=SCORE_WEAK_CACHE_KEY,
						title=f"Cache key does not track dependency changes in job '{name}'",
						current_state="restore_cache keys: " + (", ".join(keys) or "(none)"),
						problem="Without a checksum in the key the cache is never invalidated when dependencies change.",
						recommendation="Include {{ checksum \"<lockfile>\" }} in the cache key, with a prefix-only fallback key.",
						example=checksum_key_example(keys, language),
						savings=EstimatedSavings(time_reduction="1-2 min"),
						affected_jobs=[name],
					)
				)
	return findings
