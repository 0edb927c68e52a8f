#!/usr/bin/env python3
"""
Command line entry point for VentCalc

    python -m ventcalc calculate building.json [--output saved.json]
    python -m ventcalc serve [--host HOST] [--port PORT]
"""
import argparse
import logging
import sys
from typing import List, Optional

from ventcalc.app.config import get_settings, setup_logging
from ventcalc.services.calculation_service import load_document, run_calculation, save_calculation
from ventcalc.services.error_types import CriticalError, log_error_with_context
from ventcalc.utils import json_utils
from ventcalc.utils.logging_utils import Timer

logger = logging.getLogger(__name__)


def calculate(args) -> int:
    """Compute a calculation file and print or save the saved-calculation record"""
    try:
        with Timer("calculate", logger):
            project, inputs = load_document(args.input)
            saved = run_calculation(inputs, project)
    except CriticalError as e:
        log_error_with_context(e, {"input": args.input})
        print(e.message, file=sys.stderr)
        return 1

    if args.output:
        save_calculation(saved, args.output)
    else:
        print(json_utils.dumps(saved, indent=2))

    if not saved.result.achievable:
        logger.warning("Required vent area is not achievable with natural ventilation")
    return 0


def serve(args) -> int:
    """Start the uvicorn server"""
    import uvicorn

    settings = get_settings()
    logger.info("Starting VentCalc API server...")
    uvicorn.run(
        "ventcalc.app.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level="debug" if settings.debug else "info"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ventcalc",
        description="Natural ventilation sizing for hazardous-area enclosures"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    calc_parser = subparsers.add_parser("calculate", help="Run a calculation from a JSON file")
    calc_parser.add_argument("input", help="Inputs JSON or saved calculation JSON")
    calc_parser.add_argument("--output", "-o", help="Write the saved calculation to this file")
    calc_parser.set_defaults(func=calculate)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, help="Port (default: PORT or 8000)")
    serve_parser.set_defaults(func=serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug, stream=sys.stderr)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
