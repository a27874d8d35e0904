from __future__ import annotations

import re
from typing import List, Set

from .estimate import orb_example
from .model import Category, ConfigTree, Finding, Priority, finding_id
from .tables import ORB_RECOMMENDATIONS, SCORE_ORB, orb_name


def _declared_namespaces(config: ConfigTree) -> Set[str]:
	names = {orb_name(ref) for ref in config.orbs.values()}
	names.update(alias.lower() for alias in config.orbs)
	return names


def analyze(config: ConfigTree) -> List[Finding]:
	findings: List[Finding] = []
	declared = _declared_namespaces(config)
	for name, job in config.jobs.items():
		blob = job.serialized_steps()
		for rec in ORB_RECOMMENDATIONS:
			if rec.namespace in declared or not re.search(rec.pattern, blob, re.IGNORECASE):
				continue
			findings.append(
				Finding(
					id=finding_id(Category.ORBS, name, rec.namespace),
					category=Category.ORBS,
					priority=Priority.LOW,
					impact_score=SCORE_ORB,
					title=f"{rec.display_name} orb could replace custom steps in job '{name}'",
					current_state=f"{rec.display_name} usage is scripted by hand",
					problem="Hand-written setup is duplicated across jobs and drifts from upstream best practice.",
					recommendation=f"Use the {rec.orb} orb.",
					example=orb_example(rec.orb),
					affected_jobs=[name],
				)
			)
	return findings
