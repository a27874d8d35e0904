from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Frozen(BaseModel):
	model_config = ConfigDict(frozen=True)


class Executor(str, Enum):
	CONTAINER = "container"
	VIRTUAL_MACHINE = "virtual_machine"
	HOST_OS = "host_os"
	UNKNOWN = "unknown"


class RunStep(Frozen):
	kind: Literal["run"] = "run"
	command: str = ""
	name: Optional[str] = None
	raw: Any = None


class RestoreCacheStep(Frozen):
	kind: Literal["restore_cache"] = "restore_cache"
	keys: Tuple[str, ...] = ()
	raw: Any = None


class SaveCacheStep(Frozen):
	kind: Literal["save_cache"] = "save_cache"
	key: Optional[str] = None
	paths: Tuple[str, ...] = ()
	raw: Any = None


class SetupRemoteDockerStep(Frozen):
	kind: Literal["setup_remote_docker"] = "setup_remote_docker"
	docker_layer_caching: bool = False
	raw: Any = None


class ApprovalStep(Frozen):
	kind: Literal["approval"] = "approval"
	raw: Any = None


class OtherStep(Frozen):
	"""Any step shape without a dedicated variant; only the raw node is kept."""

	kind: Literal["other"] = "other"
	name: Optional[str] = None
	raw: Any = None


Step = Annotated[
	Union[RunStep, RestoreCacheStep, SaveCacheStep, SetupRemoteDockerStep, ApprovalStep, OtherStep],
	Field(discriminator="kind"),
]


class JobSpec(Frozen):
	name: str
	executor: Executor = Executor.UNKNOWN
	resource_class: Optional[str] = None
	images: Tuple[str, ...] = ()
	parallelism: Optional[int] = None
	machine_layer_caching: bool = False
	steps: Tuple[Step, ...] = ()

	@property
	def tier(self) -> str:
		return self.resource_class or "medium"

	def steps_of(self, kind: str) -> List[Any]:
		return [s for s in self.steps if s.kind == kind]

	def run_commands(self) -> List[str]:
		return [s.command for s in self.steps if s.kind == "run"]

	def serialized_steps(self) -> str:
		# Raw nodes in declaration order; detectors match substrings on this blob.
		return json.dumps([s.raw for s in self.steps], default=str)


class JobReference(Frozen):
	name: str
	requires: Tuple[str, ...] = ()
	kind: Literal["normal", "approval"] = "normal"


class WorkflowSpec(Frozen):
	name: str
	jobs: Tuple[JobReference, ...] = ()


class ConfigTree(Frozen):
	source: str = "<string>"
	jobs: Dict[str, JobSpec]
	workflows: Dict[str, WorkflowSpec] = {}
	orbs: Dict[str, str] = {}


class Category(str, Enum):
	RESOURCE = "resource"
	CACHE = "cache"
	PARALLEL = "parallel"
	LAYER_CACHE = "layer_cache"
	ORBS = "orbs"
	WORKFLOW = "workflow"
	PRACTICE = "practice"


class Priority(str, Enum):
	HIGH = "high"
	MEDIUM = "medium"
	LOW = "low"


class EstimatedSavings(Frozen):
	cost_reduction_percent: Optional[int] = None
	time_reduction: Optional[str] = None


class Finding(Frozen):
	id: str
	category: Category
	priority: Priority
	impact_score: float
	title: str
	current_state: str
	problem: str
	recommendation: str
	example: Optional[str] = None
	savings: Optional[EstimatedSavings] = None
	affected_jobs: Tuple[str, ...] = ()


def finding_id(category: Category, *names: str) -> str:
	return ":".join([category.value, *names])


class PriorityCounts(Frozen):
	high: int = 0
	medium: int = 0
	low: int = 0


class AggregateSavings(Frozen):
	cost_reduction_percent: int = 0
	time_saved: int = 0


class AnalyzerFault(Frozen):
	analyzer: str
	error: str


class AnalysisResult(Frozen):
	source: str
	total: int
	by_priority: PriorityCounts
	estimated_savings: AggregateSavings
	findings: List[Finding] = []
	faults: List[AnalyzerFault] = []
