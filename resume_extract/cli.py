"""
resume-extract command line.

Usage:
    resume-extract parse cv.pdf [--llm] [--output cv.json]
    resume-extract serve [--host 0.0.0.0] [--port 8000]
"""

from __future__ import annotations

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from .config import configure_logging, load_settings
from .errors import ResumeExtractError
from .pipeline import extract_resume

logger = logging.getLogger(__name__)


def _parse(args: argparse.Namespace) -> int:
    settings = load_settings()
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {path}")
        return 2

    content_type, _ = mimetypes.guess_type(path.name)
    try:
        result = extract_resume(
            path.read_bytes(), settings, use_llm=args.llm, content_type=content_type
        )
    except ResumeExtractError as e:
        print(json.dumps({"error": e.message, "details": e.details}, ensure_ascii=False), file=sys.stderr)
        return 1

    body = json.dumps(result.to_response(), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(body, encoding="utf-8")
        logger.info(f"Wrote {args.output}")
    else:
        print(body)
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = load_settings()
    host = args.host or settings.api_host
    port = args.port or settings.api_port
    logger.info(f"Starting Resume Extract API on {host}:{port}")
    uvicorn.run("resume_extract.server:app", host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-extract",
        description="Turn a résumé PDF into a structured JSON record",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Extract a local résumé file")
    p.add_argument("file", help="PDF or .txt résumé")
    p.add_argument("--llm", action="store_true", help="Also ask the configured LLM")
    p.add_argument("--output", "-o", help="Write JSON here instead of stdout")
    p.set_defaults(func=_parse)

    s = sub.add_parser("serve", help="Run the HTTP API")
    s.add_argument("--host", default=None)
    s.add_argument("--port", type=int, default=None)
    s.set_defaults(func=_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(load_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
