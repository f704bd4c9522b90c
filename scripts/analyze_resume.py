from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import settings  # noqa: E402
from app.matching import extract_resume_tokens  # noqa: E402
from app.schemas.normalized import JobRequirements  # noqa: E402
from app.services.analysis_service import AnalysisInputError, analyze_resume, validate_resume_text  # noqa: E402
from app.services.match_service import calculate_match_score  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Score a plain-text resume and optionally match it to a job.")
    parser.add_argument("--resume", required=True, help="Path to the resume as plain text")
    parser.add_argument(
        "--file-name",
        default=None,
        help="Original upload name used for the file-format checks (defaults to the resume path)",
    )
    parser.add_argument("--job", default=None, help="Path to a JSON file with extracted job requirements")
    parser.add_argument("--reference-year", type=int, default=None, help="Year used for 'present' date ranges")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(message)s")

    raw = Path(args.resume).read_text(encoding="utf-8")
    try:
        validate_resume_text(raw)
    except AnalysisInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    output: dict[str, object] = {
        "analysis": analyze_resume(raw, args.file_name or Path(args.resume).name).model_dump(mode="json"),
    }
    if args.job:
        job = JobRequirements.model_validate_json(Path(args.job).read_text(encoding="utf-8"))
        tokens = extract_resume_tokens(raw, reference_year=args.reference_year)
        output["match"] = calculate_match_score(tokens, job).model_dump(mode="json")

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
