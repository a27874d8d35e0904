"""Heuristic estimators.

None of these measure anything: durations come from step counts and languages
from image names. They are signals for ranking findings, not predictions.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

from .tables import LANGUAGE_MARKERS, orb_name


_FIRST_INT = re.compile(r"\d+")


def estimate_duration(step_count: int) -> int:
	"""Estimated job duration in minutes from its number of steps."""
	if step_count < 3:
		return 2
	if step_count < 5:
		return 4
	if step_count < 8:
		return 7
	return 10


def round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def first_int(text: Optional[str]) -> int:
	if not text:
		return 0
	m = _FIRST_INT.search(text)
	return int(m.group(0)) if m else 0


def detect_language(images: Iterable[str]) -> str:
	names = [i.lower() for i in images]
	for language, markers in LANGUAGE_MARKERS:
		if any(marker in name for name in names for marker in markers):
			return language
	return "generic"


_CACHE_FILES = {
	"node": ("package-lock.json", "node_modules"),
	"ruby": ("Gemfile.lock", "vendor/bundle"),
	"python": ("requirements.txt", "~/.cache/pip"),
	"java": ("pom.xml", "~/.m2"),
	"php": ("composer.lock", "vendor"),
	"go": ("go.sum", "/home/circleci/go/pkg/mod"),
	"generic": ("<lockfile>", "<dependency-dir>"),
}

_INSTALL_LINES = {
	"node": "npm ci",
	"ruby": "bundle install --path vendor/bundle",
	"python": "pip install -r requirements.txt",
	"java": "mvn dependency:go-offline",
	"php": "composer install",
	"go": "go mod download",
	"generic": "<install dependencies>",
}


def cache_example(language: str) -> str:
	lockfile, path = _CACHE_FILES.get(language, _CACHE_FILES["generic"])
	install = _INSTALL_LINES.get(language, _INSTALL_LINES["generic"])
	return "\n".join(
		[
			"- restore_cache:",
			"    keys:",
			f'      - v1-deps-{{{{ checksum "{lockfile}" }}}}',
			"      - v1-deps-",
			f"- run: {install}",
			"- save_cache:",
			f'    key: v1-deps-{{{{ checksum "{lockfile}" }}}}',
			"    paths:",
			f"      - {path}",
		]
	)


def checksum_key_example(restore_keys: Iterable[str], language: str) -> str:
	lockfile, _ = _CACHE_FILES.get(language, _CACHE_FILES["generic"])
	prefix = next((k for k in restore_keys if k), "v1-deps-")
	prefix = prefix.split("{{", 1)[0].rstrip("-") + "-"
	return "\n".join(
		[
			"- restore_cache:",
			"    keys:",
			f'      - {prefix}{{{{ checksum "{lockfile}" }}}}',
			f"      - {prefix}",
		]
	)


def parallelism_example(job_name: str) -> str:
	return "\n".join(
		[
			f"{job_name}:",
			"  parallelism: 4",
			"  steps:",
			"    - run: |",
			'        TESTS=$(circleci tests glob "**/*.test.*" | circleci tests split --split-by=timings)',
			"        <run tests> $TESTS",
		]
	)


def layer_cache_example() -> str:
	return "\n".join(
		[
			"- setup_remote_docker:",
			"    docker_layer_caching: true",
		]
	)


def orb_example(orb: str) -> str:
	return "\n".join(["orbs:", f"  {orb_name(orb)}: {orb}"])


def approval_example(first_job: str) -> str:
	return "\n".join(
		[
			"jobs:",
			"  - hold:",
			"      type: approval",
			"      requires:",
			f"        - {first_job}",
		]
	)
