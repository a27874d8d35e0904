"""Static optimizer for CircleCI pipeline configuration.

Modules:
- loader.py: YAML parsing into an immutable ConfigTree.
- model.py: Config tree, step variants, findings and analysis results.
- tables.py: Credit rates, detection patterns and scoring constants.
- estimate.py: Heuristic duration/language estimates and example snippets.
- resources.py, cache.py, parallel.py, docker.py, orbs.py, workflows.py,
  practices.py: The analyzers, one rule family each.
- aggregate.py: Runs the analyzers, ranks and summarizes findings.
- report.py: Text and JSON rendering of an analysis result.
"""

__all__ = [
	"loader",
	"model",
	"tables",
	"estimate",
	"aggregate",
	"report",
]
