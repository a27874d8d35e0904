from __future__ import annotations

from typing import List

from .estimate import layer_cache_example
from .model import Category, ConfigTree, EstimatedSavings, Finding, JobSpec, Priority, finding_id
from .tables import DOCKER_BUILD_COMMANDS, SCORE_LAYER_CACHE


def _builds_image(job: JobSpec) -> bool:
	return any(marker in command for command in job.run_commands() for marker in DOCKER_BUILD_COMMANDS)


def _layer_caching(job: JobSpec) -> bool:
	if job.machine_layer_caching:
		return True
	return any(step.docker_layer_caching for step in job.steps_of("setup_remote_docker"))


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []
	for name, job in config.jobs.items():
		if not _builds_image(job) or _layer_caching(job):
			continue
		remote = job.steps_of("setup_remote_docker")
		findings.append(
			Finding(
				id=finding_id(Category.LAYER_CACHE, name),
				category=Category.LAYER_CACHE,
				priority=Priority.MEDIUM,
				impact_score=SCORE_LAYER_CACHE,
				title=f"Docker layer caching disabled in job '{name}'",
				current_state=(
					"setup_remote_docker without docker_layer_caching"
					if remote
					else "docker build without a remote Docker environment"
				),
				problem="Every image layer is rebuilt from scratch on each run.",
				recommendation="Enable docker_layer_caching on setup_remote_docker (or on the machine executor).",
				example=layer_cache_example(),
				savings=EstimatedSavings(time_reduction="3-10 min"),
				affected_jobs=[name],
			)
		)
	return findings
