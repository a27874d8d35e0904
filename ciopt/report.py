from __future__ import annotations

from typing import List

from .model import AnalysisResult, Finding, Priority


_GROUP_TITLES = (
	(Priority.HIGH, "HIGH PRIORITY"),
	(Priority.MEDIUM, "MEDIUM PRIORITY"),
	(Priority.LOW, "LOW PRIORITY"),
)


def _indent(text: str, prefix: str = "      ") -> str:
	return "\n".join(prefix + line for line in text.splitlines())


def render_finding(index: int, f: Finding) -> str:
	parts: List[str] = []
	parts.append(f"  {index}. {f.title}")
	parts.append(f"     Problem: {f.problem}")
	parts.append(f"     Current: {f.current_state}")
	parts.append(f"     Recommendation: {f.recommendation}")
	if f.example:
		parts.append("     Example:")
		parts.append(_indent(f.example))
	if f.savings is not None:
		savings: List[str] = []
		if f.savings.cost_reduction_percent is not None:
			savings.append(f"~{f.savings.cost_reduction_percent}% cost")
		if f.savings.time_reduction:
			savings.append(f"~{f.savings.time_reduction} time")
		if savings:
			parts.append(f"     Estimated savings: {', '.join(savings)}")
	if f.affected_jobs:
		parts.append(f"     Jobs: {', '.join(f.affected_jobs)}")
	return "\n".join(parts)


def render_text(result: AnalysisResult) -> str:
	parts: List[str] = []
	parts.append(f"CircleCI optimization report for {result.source}")
	parts.append("")
	for fault in result.faults:
		parts.append(f"warning: analyzer {fault.analyzer} failed ({fault.error}); its checks were skipped")
	if result.faults:
		parts.append("")

	if not result.findings:
		parts.append("No optimization opportunities found. Your config looks good.")
		return "\n".join(parts)

	counts = result.by_priority
	parts.append(
		f"{result.total} findings: {counts.high} high, {counts.medium} medium, {counts.low} low"
	)
	savings = result.estimated_savings
	parts.append(
		f"Estimated savings: ~{savings.cost_reduction_percent}% cost, ~{savings.time_saved} min per run"
	)

	index = 0
	for priority, heading in _GROUP_TITLES:
		group = [f for f in result.findings if f.priority is priority]
		if not group:
			continue
		parts.append("")
		parts.append(heading)
		parts.append("-" * len(heading))
		for f in group:
			index += 1
			parts.append(render_finding(index, f))
	return "\n".join(parts)


def render_json(result: AnalysisResult) -> str:
	return result.model_dump_json(indent=2)
