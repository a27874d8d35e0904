"""Fixed lookup tables and scoring constants shared by the analyzers."""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple, Tuple

from .model import Priority


DEFAULT_TIER = "medium"

# Docker executor credits per minute.
CREDIT_RATES = MappingProxyType(
	{
		"small": 5,
		"medium": 10,
		"medium+": 15,
		"large": 20,
		"xlarge": 40,
		"2xlarge": 80,
		"2xlarge+": 100,
	}
)

OVERSIZED_TIERS: Tuple[str, ...] = ("large", "xlarge", "2xlarge")

PRIORITY_RANK = MappingProxyType(
	{
		Priority.HIGH: 0,
		Priority.MEDIUM: 1,
		Priority.LOW: 2,
	}
)

INSTALL_COMMANDS: Tuple[str, ...] = (
	"npm install",
	"npm ci",
	"yarn install",
	"pnpm install",
	"pip install",
	"pipenv install",
	"poetry install",
	"bundle install",
	"composer install",
	"go mod download",
	"mvn install",
	"gradle dependencies",
)

TEST_KEYWORDS: Tuple[str, ...] = ("test", "spec", "jest", "rspec", "pytest", "mocha")

DOCKER_BUILD_COMMANDS: Tuple[str, ...] = (
	"docker build",
	"docker buildx build",
	"docker-compose build",
	"docker compose build",
)

# Checked in order; the first language whose marker appears in an image name wins.
LANGUAGE_MARKERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
	("node", ("node",)),
	("ruby", ("ruby", "rails")),
	("python", ("python",)),
	("java", ("openjdk", "java", "maven", "gradle")),
	("php", ("php",)),
	("go", ("golang", "cimg/go", "circleci/go")),
)


class OrbRecommendation(NamedTuple):
	pattern: str
	orb: str
	display_name: str

	@property
	def namespace(self) -> str:
		return orb_name(self.orb)


ORB_RECOMMENDATIONS: Tuple[OrbRecommendation, ...] = (
	OrbRecommendation(r"\baws (s3|ecr|ecs|cloudformation|lambda|configure)\b", "circleci/aws-cli@4.1", "AWS CLI"),
	OrbRecommendation(r"hooks\.slack\.com|\bslack\b", "circleci/slack@4.13", "Slack"),
	OrbRecommendation(r"\b(npm (install|ci)|yarn install)\b", "circleci/node@5.2", "Node.js"),
)


def orb_name(reference: str) -> str:
	"""``circleci/node@5.2`` -> ``node``."""
	name = reference.split("@", 1)[0]
	return name.rsplit("/", 1)[-1].strip().lower()


# impact scores per finding kind
SCORE_OVERSIZED_BASE = 80
SCORE_UNSPECIFIED_TIER = 30
SCORE_MISSING_CACHE = 80
SCORE_WEAK_CACHE_KEY = 50
SCORE_TEST_PARALLELISM = 70
SCORE_PARALLEL_WORKFLOW = 60
SCORE_LAYER_CACHE = 65
SCORE_ORB = 40
SCORE_APPROVAL = 30
SCORE_SECRET = 90

APPROVAL_JOB_THRESHOLD = 3
TIME_SAVINGS_CAP = 30
SECRET_MIN_LENGTH = 20
