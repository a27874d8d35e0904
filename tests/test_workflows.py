from ciopt import workflows
from ciopt.loader import parse_config
from ciopt.model import Priority


def _config(names, approval=False):
	refs = "".join(f"      - {n}\n" for n in names)
	if approval:
		refs += "      - hold:\n          type: approval\n"
	return parse_config("jobs:\n  a: {}\nworkflows:\n  release:\n    jobs:\n" + refs)


def test_missing_approval_gate():
	findings = workflows.analyze(_config(["a", "b", "c", "d", "e"]))
	assert len(findings) == 1
	f = findings[0]
	assert f.priority is Priority.LOW
	assert f.impact_score == 30
	assert f.id == "workflow:release"


def test_three_jobs_is_not_enough():
	assert workflows.analyze(_config(["a", "b", "c"])) == []
	assert len(workflows.analyze(_config(["a", "b", "c", "d"]))) == 1


def test_approval_present():
	assert workflows.analyze(_config(["a", "b", "c", "d"], approval=True)) == []
