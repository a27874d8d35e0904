"""Config Loader: YAML text -> immutable ConfigTree.

Only the document shape is validated (a mapping with a non-empty ``jobs``
mapping). Everything below the job level is normalized leniently; malformed
jobs or steps degrade to ``unknown`` executors and ``other`` steps instead of
failing the load.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigNotFound, ConfigStructurallyInvalid, ConfigSyntaxError, ConfigUnreadable
from .model import (
	ApprovalStep,
	ConfigTree,
	Executor,
	JobReference,
	JobSpec,
	OtherStep,
	RestoreCacheStep,
	RunStep,
	SaveCacheStep,
	SetupRemoteDockerStep,
	WorkflowSpec,
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(".circleci", "config.yml")


def load_config(path: str = DEFAULT_CONFIG_PATH) -> ConfigTree:
	if not os.path.exists(path):
		raise ConfigNotFound(f"Config file not found: {path}")
	if os.path.isdir(path):
		raise ConfigNotFound(f"Config path is a directory: {path}")
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except PermissionError as e:
		raise ConfigUnreadable(f"Permission denied reading {path}") from e
	except UnicodeDecodeError as e:
		raise ConfigUnreadable(f"Config file is not valid UTF-8: {path}") from e
	except OSError as e:
		raise ConfigUnreadable(f"Could not read {path}: {e.strerror or e}") from e
	logger.debug("Read %d bytes from %s", len(text), path)
	return parse_config(text, source=path)


def parse_config(text: str, source: str = "<string>") -> ConfigTree:
	try:
		doc = yaml.safe_load(text)
	except yaml.MarkedYAMLError as e:
		mark = e.problem_mark or e.context_mark
		problem = e.problem or str(e)
		if mark is None:
			raise ConfigSyntaxError(f"Invalid YAML in {source}: {problem}") from e
		raise ConfigSyntaxError(
			f"Invalid YAML in {source}: {problem}", line=mark.line + 1, column=mark.column + 1
		) from e
	except yaml.YAMLError as e:
		raise ConfigSyntaxError(f"Invalid YAML in {source}: {e}") from e

	if not isinstance(doc, dict):
		raise ConfigStructurallyInvalid(f"{source}: top level must be a mapping")
	jobs = doc.get("jobs")
	if not isinstance(jobs, dict) or not jobs:
		raise ConfigStructurallyInvalid(f"{source}: no jobs defined")

	return ConfigTree(
		source=source,
		jobs={str(name): _parse_job(str(name), node) for name, node in jobs.items()},
		workflows=_parse_workflows(doc.get("workflows")),
		orbs=_parse_orbs(doc.get("orbs")),
	)


def _parse_job(name: str, node: Any) -> JobSpec:
	if not isinstance(node, dict):
		logger.debug("Job %s is not a mapping; treating as empty", name)
		return JobSpec(name=name)

	executor = Executor.UNKNOWN
	images: List[str] = []
	machine_layer_caching = False
	if "docker" in node:
		executor = Executor.CONTAINER
		docker = node.get("docker")
		for image in docker if isinstance(docker, list) else []:
			if isinstance(image, dict) and image.get("image"):
				images.append(str(image["image"]))
			elif isinstance(image, str):
				images.append(image)
	elif "machine" in node:
		executor = Executor.VIRTUAL_MACHINE
		machine = node.get("machine")
		if isinstance(machine, dict):
			machine_layer_caching = machine.get("docker_layer_caching") is True
			if machine.get("image"):
				images.append(str(machine["image"]))
	elif "macos" in node:
		executor = Executor.HOST_OS

	resource_class = node.get("resource_class")
	parallelism = node.get("parallelism")
	steps = node.get("steps")
	return JobSpec(
		name=name,
		executor=executor,
		resource_class=str(resource_class) if resource_class is not None else None,
		images=tuple(images),
		parallelism=parallelism if isinstance(parallelism, int) and not isinstance(parallelism, bool) else None,
		machine_layer_caching=machine_layer_caching,
		steps=tuple(parse_step(s) for s in steps) if isinstance(steps, list) else (),
	)


def parse_step(node: Any):
	if isinstance(node, str):
		if node == "setup_remote_docker":
			return SetupRemoteDockerStep(raw=node)
		return OtherStep(name=node, raw=node)
	if not isinstance(node, dict) or not node:
		return OtherStep(raw=node)
	if node.get("type") == "approval":
		return ApprovalStep(raw=node)

	key, value = next(iter(node.items()))
	if key == "run":
		if isinstance(value, dict):
			name = value.get("name")
			return RunStep(
				command=str(value.get("command") or ""),
				name=str(name) if name is not None else None,
				raw=node,
			)
		return RunStep(command="" if value is None else str(value), raw=node)
	if key == "restore_cache" and isinstance(value, dict):
		return RestoreCacheStep(keys=_cache_keys(value), raw=node)
	if key == "save_cache" and isinstance(value, dict):
		key_value = value.get("key")
		paths = value.get("paths")
		if isinstance(paths, str):
			paths = [paths]
		return SaveCacheStep(
			key=str(key_value) if key_value is not None else None,
			paths=tuple(str(p) for p in paths or []),
			raw=node,
		)
	if key == "setup_remote_docker":
		caching = isinstance(value, dict) and value.get("docker_layer_caching") is True
		return SetupRemoteDockerStep(docker_layer_caching=caching, raw=node)
	return OtherStep(name=str(key), raw=node)


def _cache_keys(value: Dict[str, Any]) -> Tuple[str, ...]:
	keys = value.get("keys")
	if isinstance(keys, list):
		return tuple(str(k) for k in keys if k is not None)
	if value.get("key") is not None:
		return (str(value["key"]),)
	return ()


def _parse_workflows(node: Any) -> Dict[str, WorkflowSpec]:
	workflows: Dict[str, WorkflowSpec] = {}
	if not isinstance(node, dict):
		return workflows
	for name, body in node.items():
		if name == "version" or not isinstance(body, dict):
			continue
		jobs = body.get("jobs")
		refs = [_parse_job_ref(r) for r in jobs] if isinstance(jobs, list) else []
		workflows[str(name)] = WorkflowSpec(name=str(name), jobs=tuple(r for r in refs if r is not None))
	return workflows


def _parse_job_ref(node: Any) -> Optional[JobReference]:
	if isinstance(node, str):
		return JobReference(name=node)
	if not isinstance(node, dict) or not node:
		return None
	key, params = next(iter(node.items()))
	if not isinstance(params, dict):
		return JobReference(name=str(key))
	requires = params.get("requires") or []
	if isinstance(requires, str):
		requires = [requires]
	elif not isinstance(requires, list):
		requires = []
	return JobReference(
		name=str(params.get("name") or key),
		requires=tuple(str(r) for r in requires),
		kind="approval" if params.get("type") == "approval" else "normal",
	)


def _parse_orbs(node: Any) -> Dict[str, str]:
	if not isinstance(node, dict):
		return {}
	return {str(k): str(v) for k, v in node.items() if isinstance(v, str)}
