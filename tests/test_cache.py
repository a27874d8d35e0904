from textwrap import dedent

from ciopt import cache
from ciopt.loader import parse_config
from ciopt.model import Priority


def _config(image, steps):
	return parse_config(
		dedent(
			f"""
            jobs:
              deps:
                docker: [{{image: {image}}}]
                steps:
            """
		)
		+ steps
	)


def test_missing_cache_for_node_install():
	config = _config("cimg/node:20.1", "      - checkout\n      - run: npm install\n")
	findings = cache.analyze(config)
	assert len(findings) == 1
	f = findings[0]
	assert f.priority is Priority.HIGH
	assert f.impact_score == 80
	assert "package-lock.json" in f.example
	assert f.savings.time_reduction == "2-5 min"


def test_missing_cache_example_follows_image_language():
	config = _config("cimg/python:3.12", "      - run: pip install -r requirements.txt\n")
	(f,) = cache.analyze(config)
	assert "requirements.txt" in f.example

	config = _config("cimg/base:stable", "      - run: bundle install\n")
	(f,) = cache.analyze(config)
	assert "<lockfile>" in f.example


def test_save_without_restore_is_reported_in_state():
	config = _config(
		"cimg/ruby:3.3",
		"      - run: bundle install\n      - save_cache:\n          key: gems\n          paths: [vendor]\n",
	)
	(f,) = cache.analyze(config)
	assert "save_cache" in f.current_state
	assert "Gemfile.lock" in f.example


def test_weak_cache_key():
	config = _config(
		"cimg/node:20.1",
		"      - restore_cache:\n          key: v1-deps\n      - run: npm ci\n",
	)
	findings = cache.analyze(config)
	assert len(findings) == 1
	f = findings[0]
	assert f.priority is Priority.MEDIUM
	assert f.impact_score == 50
	assert "checksum" in f.example


def test_checksum_key_is_fine():
	config = _config(
		"cimg/node:20.1",
		'      - restore_cache:\n          keys:\n            - v1-{{ checksum "package-lock.json" }}\n            - v1-\n'
		"      - run: npm ci\n",
	)
	assert cache.analyze(config) == []


def test_no_install_no_finding():
	config = _config("cimg/base:stable", "      - checkout\n      - run: make\n")
	assert cache.analyze(config) == []
