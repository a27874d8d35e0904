from __future__ import annotations

from typing import List

from .estimate import parallelism_example
from .model import Category, ConfigTree, EstimatedSavings, Finding, Priority, finding_id
from .tables import SCORE_PARALLEL_WORKFLOW, SCORE_TEST_PARALLELISM, TEST_KEYWORDS


def _looks_like_tests(name: str, blob: str) -> bool:
	haystack = f"{name}\n{blob}".lower()
	return any(keyword in haystack for keyword in TEST_KEYWORDS)


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []

	for name, job in config.jobs.items():
		if job.parallelism is not None:
			continue
		if not _looks_like_tests(name, job.serialized_steps()):
			continue
		findings.append(
			Finding(
				id=finding_id(Category.PARALLEL, name),
				category=Category.PARALLEL,
				priority=Priority.MEDIUM,
				impact_score=SCORE_TEST_PARALLELISM,
				title=f"Tests in job '{name}' run on a single container",
				current_state="parallelism not set",
				problem="The whole test suite runs serially on one executor.",
				recommendation="Set parallelism and split tests by timing data.",
				example=parallelism_example(name),
				savings=EstimatedSavings(time_reduction="40-50%"),
				affected_jobs=[name],
			)
		)

	for wf_name, workflow in config.workflows.items():
		independent = [ref.name for ref in workflow.jobs if not ref.requires]
		if len(independent) < 2:
			continue
		minutes = min(2 * len(independent), 10)
		findings.append(
			Finding(
				id=finding_id(Category.PARALLEL, "workflow", wf_name),
				category=Category.PARALLEL,
				priority=Priority.MEDIUM,
				impact_score=SCORE_PARALLEL_WORKFLOW,
				title=f"Independent jobs in workflow '{wf_name}'",
				current_state=f"{len(independent)} jobs have no requires: {', '.join(independent)}",
				problem="These jobs do not depend on each other; the workflow should fan them out and only gate later stages on them.",
				recommendation="Keep them free of requires so they start together, and have downstream jobs require all of them.",
				savings=EstimatedSavings(time_reduction=f"{minutes} min"),
				affected_jobs=independent,
			)
		)
	return findings
