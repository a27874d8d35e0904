from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Tuple

from . import cache, docker, orbs, parallel, practices, resources, workflows
from .estimate import first_int, round_half_up
from .model import (
	AggregateSavings,
	AnalysisResult,
	AnalyzerFault,
	ConfigTree,
	Finding,
	Priority,
	PriorityCounts,
)
from .tables import PRIORITY_RANK, TIME_SAVINGS_CAP


logger = logging.getLogger(__name__)

AnalyzerFunc = Callable[[ConfigTree], List[Finding]]

# Execution order only decides ties between equal (priority, impact) findings.
ANALYZERS: Tuple[Tuple[str, AnalyzerFunc], ...] = (
	("resource-tier", resources.analyze),
	("cache-strategy", cache.analyze),
	("parallelization", parallel.analyze),
	("docker-layer-cache", docker.analyze),
	("orbs", orbs.analyze),
	("workflow-structure", workflows.analyze),
	("best-practices", practices.analyze),
)


def run_analyzers(
	config: ConfigTree, analyzers: Sequence[Tuple[str, AnalyzerFunc]] = ANALYZERS
) -> Tuple[List[Finding], List[AnalyzerFault]]:
	findings: List[Finding] = []
	faults: List[AnalyzerFault] = []
	for name, func in analyzers:
		try:
			# Each analyzer gets its own copy of the tree.
			produced = list(func(config.model_copy(deep=True)))
		except Exception as e:
			logger.warning("Analyzer %s failed and was skipped: %s", name, e)
			logger.debug("Analyzer %s traceback", name, exc_info=True)
			faults.append(AnalyzerFault(analyzer=name, error=f"{type(e).__name__}: {e}"))
			continue
		logger.debug("Analyzer %s produced %d findings", name, len(produced))
		findings.extend(produced)
	return findings, faults


def sort_findings(findings: Sequence[Finding]) -> List[Finding]:
	# sorted() is stable: equal keys keep emission order.
	return sorted(findings, key=lambda f: (PRIORITY_RANK[f.priority], -f.impact_score))


def count_priorities(findings: Sequence[Finding]) -> PriorityCounts:
	return PriorityCounts(
		high=sum(1 for f in findings if f.priority is Priority.HIGH),
		medium=sum(1 for f in findings if f.priority is Priority.MEDIUM),
		low=sum(1 for f in findings if f.priority is Priority.LOW),
	)


def aggregate_savings(findings: Sequence[Finding]) -> AggregateSavings:
	costs = [
		f.savings.cost_reduction_percent
		for f in findings
		if f.savings is not None and f.savings.cost_reduction_percent is not None
	]
	cost = round_half_up(sum(costs) / len(costs)) if costs else 0

	# First integer of each text, whatever its unit ("2-5 min", "40-50%").
	time_saved = sum(first_int(f.savings.time_reduction) for f in findings if f.savings is not None)
	return AggregateSavings(cost_reduction_percent=cost, time_saved=min(time_saved, TIME_SAVINGS_CAP))


def analyze_config(
	config: ConfigTree, analyzers: Sequence[Tuple[str, AnalyzerFunc]] = ANALYZERS
) -> AnalysisResult:
	findings, faults = run_analyzers(config, analyzers)
	ordered = sort_findings(findings)
	return AnalysisResult(
		source=config.source,
		total=len(ordered),
		by_priority=count_priorities(ordered),
		estimated_savings=aggregate_savings(ordered),
		findings=ordered,
		faults=faults,
	)
