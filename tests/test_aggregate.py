from textwrap import dedent

from ciopt.aggregate import ANALYZERS, aggregate_savings, analyze_config, sort_findings
from ciopt.loader import parse_config
from ciopt.model import Category, EstimatedSavings, Finding, Priority


CONFIG = dedent(
	"""
    version: 2.1
    jobs:
      build:
        docker: [{image: cimg/node:20.1}]
        resource_class: xlarge
        steps:
          - checkout
          - run: npm install
      test:
        docker: [{image: cimg/node:20.1}]
        steps:
          - checkout
          - run: npm test
      deploy:
        docker: [{image: cimg/base:stable}]
        resource_class: small
        steps:
          - run: deploy --token AKIAIOSFODNN7EXAMPLEKEY
          - run: docker build -t app .
    workflows:
      release:
        jobs:
          - build
          - test
          - lint
          - deploy:
              requires: [build, test]
          - publish:
              requires: [deploy]
    """
)


def _finding(fid, priority, score, cost=None, time=None):
	savings = None
	if cost is not None or time is not None:
		savings = EstimatedSavings(cost_reduction_percent=cost, time_reduction=time)
	return Finding(
		id=fid,
		category=Category.PRACTICE,
		priority=priority,
		impact_score=score,
		title=fid,
		current_state="",
		problem="",
		recommendation="",
		savings=savings,
	)


def test_result_is_ranked_and_counted():
	result = analyze_config(parse_config(CONFIG))
	priorities = [f.priority for f in result.findings]
	assert priorities == sorted(priorities, key=["high", "medium", "low"].index)
	assert result.total == len(result.findings)
	counts = result.by_priority
	assert counts.high + counts.medium + counts.low == result.total
	assert result.findings[0].id == "resource:build"
	assert result.findings[1].id == "practice:deploy"
	assert result.faults == []
	for group in (Priority.HIGH, Priority.MEDIUM, Priority.LOW):
		scores = [f.impact_score for f in result.findings if f.priority is group]
		assert scores == sorted(scores, reverse=True)


def test_deterministic():
	config = parse_config(CONFIG)
	first = analyze_config(config).model_dump_json()
	second = analyze_config(parse_config(CONFIG)).model_dump_json()
	assert first == second


def test_sort_is_stable_for_equal_keys():
	findings = [
		_finding("low-1", Priority.LOW, 40),
		_finding("med-1", Priority.MEDIUM, 50),
		_finding("low-2", Priority.LOW, 40),
		_finding("high-1", Priority.HIGH, 10),
		_finding("med-2", Priority.MEDIUM, 50),
		_finding("med-3", Priority.MEDIUM, 70),
		_finding("low-3", Priority.LOW, 40),
	]
	ordered = [f.id for f in sort_findings(findings)]
	assert ordered == ["high-1", "med-3", "med-1", "med-2", "low-1", "low-2", "low-3"]


def test_aggregate_savings():
	savings = aggregate_savings(
		[
			_finding("a", Priority.HIGH, 1, cost=88),
			_finding("b", Priority.HIGH, 1, cost=75),
			_finding("c", Priority.MEDIUM, 1, time="2-5 min"),
			_finding("d", Priority.MEDIUM, 1, time="40-50%"),
			_finding("e", Priority.LOW, 1),
		]
	)
	assert savings.cost_reduction_percent == 82
	assert savings.time_saved == 30


def test_aggregate_savings_without_contributions():
	savings = aggregate_savings([_finding("a", Priority.LOW, 1)])
	assert savings.cost_reduction_percent == 0
	assert savings.time_saved == 0


def test_time_savings_sum_below_cap():
	savings = aggregate_savings(
		[_finding("a", Priority.MEDIUM, 1, time="2-5 min"), _finding("b", Priority.MEDIUM, 1, time="6 min")]
	)
	assert savings.time_saved == 8


def test_failing_analyzer_is_isolated(caplog):
	def broken(config):
		raise KeyError("steps")

	config = parse_config(CONFIG)
	baseline = analyze_config(config)
	analyzers = ANALYZERS[:2] + (("broken", broken),) + ANALYZERS[2:]
	with caplog.at_level("WARNING", logger="ciopt.aggregate"):
		result = analyze_config(config, analyzers)

	assert [f.id for f in result.findings] == [f.id for f in baseline.findings]
	assert [(x.analyzer, x.error) for x in result.faults] == [("broken", "KeyError: 'steps'")]
	assert "broken" in caplog.text


def test_analyzer_order_is_fixed():
	assert [name for name, _ in ANALYZERS] == [
		"resource-tier",
		"cache-strategy",
		"parallelization",
		"docker-layer-cache",
		"orbs",
		"workflow-structure",
		"best-practices",
	]


def test_analyzer_cannot_change_tree_for_others():
	def clears_jobs(config):
		config.jobs.clear()
		raise RuntimeError("gave up")

	config = parse_config(CONFIG)
	baseline = analyze_config(config)
	result = analyze_config(config, (("clears-jobs", clears_jobs),) + ANALYZERS)

	assert [f.id for f in result.findings] == [f.id for f in baseline.findings]
	assert list(config.jobs) == ["build", "test", "deploy"]
	assert [x.analyzer for x in result.faults] == ["clears-jobs"]


def test_findings_are_write_once():
	result = analyze_config(parse_config(CONFIG))
	assert isinstance(result.findings[0].affected_jobs, tuple)
