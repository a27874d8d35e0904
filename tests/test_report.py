from ciopt.aggregate import analyze_config
from ciopt.loader import parse_config
from ciopt.model import AnalysisResult
from ciopt.report import render_json, render_text


CONFIG = """
jobs:
  build:
    docker: [{image: cimg/node:20.1}]
    resource_class: xlarge
    steps:
      - run: npm install
"""


def test_text_groups_in_priority_order():
	text = render_text(analyze_config(parse_config(CONFIG, source="config.yml")))
	assert text.startswith("CircleCI optimization report for config.yml")
	assert text.index("HIGH PRIORITY") < text.index("LOW PRIORITY")
	assert "MEDIUM PRIORITY" not in text
	assert "Oversized resource class for job 'build'" in text
	assert "package-lock.json" in text
	assert "~88% cost" in text


def test_text_no_issues():
	config = parse_config("jobs:\n  noop:\n    machine: true\n    steps: [checkout]\n")
	text = render_text(analyze_config(config))
	assert "No optimization opportunities found" in text


def test_text_reports_faults():
	def broken(config):
		raise RuntimeError("boom")

	text = render_text(analyze_config(parse_config(CONFIG), [("broken", broken)]))
	assert "analyzer broken failed" in text


def test_json_round_trips():
	result = analyze_config(parse_config(CONFIG))
	assert AnalysisResult.model_validate_json(render_json(result)) == result
