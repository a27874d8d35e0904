from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ciopt.aggregate import ANALYZERS, analyze_config
from ciopt.errors import ConfigError, ConfigNotFound
from ciopt.loader import load_config, parse_config
from ciopt.logging_utils import setup_logging
from ciopt.model import AnalysisResult


app = FastAPI(title="CircleCI Config Optimizer")


class AnalyzeRequest(BaseModel):
	config_text: Optional[str] = None
	path: Optional[str] = None


@app.post("/analyze", response_model=AnalysisResult)
def analyze(req: AnalyzeRequest) -> AnalysisResult:
	try:
		if req.config_text is not None:
			config = parse_config(req.config_text, source="<request>")
		elif req.path:
			config = load_config(req.path)
		else:
			raise HTTPException(status_code=400, detail="Provide config_text or path")
	except ConfigNotFound as e:
		raise HTTPException(status_code=404, detail={"error": e.message, "hint": e.hint})
	except ConfigError as e:
		raise HTTPException(status_code=400, detail={"error": e.message, "hint": e.hint})
	return analyze_config(config)


@app.get("/analyzers")
def list_analyzers() -> List[str]:
	return [name for name, _ in ANALYZERS]


def create_app() -> FastAPI:
	return app


def main() -> None:
	parser = argparse.ArgumentParser(prog="ciopt-serve")
	parser.add_argument("--host", default="127.0.0.1")
	parser.add_argument("--port", type=int, default=8000)
	parser.add_argument("--reload", action="store_true")
	parser.add_argument("-v", "--verbose", action="store_true")
	args = parser.parse_args()
	setup_logging(args.verbose)
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
	main()
