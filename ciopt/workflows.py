from __future__ import annotations

from typing import List

from .estimate import approval_example
from .model import Category, ConfigTree, Finding, Priority, finding_id
from .tables import APPROVAL_JOB_THRESHOLD, SCORE_APPROVAL


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []
	for name, workflow in config.workflows.items():
		if len(workflow.jobs) <= APPROVAL_JOB_THRESHOLD:
			continue
		if any(ref.kind == "approval" for ref in workflow.jobs):
			continue
		findings.append(
			Finding(
				id=finding_id(Category.WORKFLOW, name),
				category=Category.WORKFLOW,
				priority=Priority.LOW,
				impact_score=SCORE_APPROVAL,
				title=f"No approval gate in workflow '{name}'",
				current_state=f"{len(workflow.jobs)} jobs, none of type approval",
				problem="Every run goes through the full workflow with no manual checkpoint.",
				recommendation="Add an approval job before expensive or deployment stages.",
				example=approval_example(workflow.jobs[0].name),
				affected_jobs=[ref.name for ref in workflow.jobs],
			)
		)
	return findings
