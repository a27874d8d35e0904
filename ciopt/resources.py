from __future__ import annotations

from typing import List

from .estimate import estimate_duration, round_half_up
from .model import Category, ConfigTree, EstimatedSavings, Executor, Finding, Priority, finding_id
from .tables import (
	CREDIT_RATES,
	DEFAULT_TIER,
	OVERSIZED_TIERS,
	SCORE_OVERSIZED_BASE,
	SCORE_UNSPECIFIED_TIER,
)


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []
	for name, job in config.jobs.items():
		if job.executor is not Executor.CONTAINER:
			continue

		duration = estimate_duration(len(job.steps))
		tier = job.tier
		if duration < 5 and tier in OVERSIZED_TIERS:
			current_cost = CREDIT_RATES[tier] * duration
			recommended = "small" if duration < 3 else "medium"
			recommended_cost = CREDIT_RATES[recommended] * duration
			savings = round_half_up(100 * (1 - recommended_cost / current_cost))
			findings.append(
				Finding(
					id=finding_id(Category.RESOURCE, name),
					category=Category.RESOURCE,
					priority=Priority.HIGH,
					impact_score=SCORE_OVERSIZED_BASE + savings / 5,
					title=f"Oversized resource class for job '{name}'",
					current_state=(
						f"resource_class: {tier} ({CREDIT_RATES[tier]} credits/min), "
						f"{len(job.steps)} steps, ~{duration} min estimated"
					),
					problem=(
						f"A short job on {tier} costs ~{current_cost} credits per run; "
						f"{recommended} would cost ~{recommended_cost}."
					),
					recommendation=f"Use resource_class: {recommended} for '{name}'.",
					example=f"{name}:\n  resource_class: {recommended}",
					savings=EstimatedSavings(cost_reduction_percent=savings),
					affected_jobs=[name],
				)
			)

		if job.resource_class is None:
			findings.append(
				Finding(
					id=finding_id(Category.RESOURCE, "unspecified", name),
					category=Category.RESOURCE,
					priority=Priority.LOW,
					impact_score=SCORE_UNSPECIFIED_TIER,
					title=f"No resource class declared for job '{name}'",
					current_state=f"resource_class not set (defaults to {DEFAULT_TIER})",
					problem="The job's compute size is implicit, so its cost is easy to overlook.",
					recommendation="Declare resource_class explicitly, sized to the job's workload.",
					example=f"{name}:\n  resource_class: small",
					affected_jobs=[name],
				)
			)
	return findings
