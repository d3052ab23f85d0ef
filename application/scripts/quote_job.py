#!/usr/bin/env python3
"""Price a job described in a JSON file (same shape as POST /api/quote). PRICING_CONFIG_PATH and PROFIT_MARGIN override rates as for the API."""

import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

# Load .env from application/ or repo root so PRICING_CONFIG_PATH etc. are set
_app_dir = Path(__file__).resolve().parent.parent
_repo_root = _app_dir.parent
load_dotenv(_app_dir / ".env")
load_dotenv(_app_dir / ".env.local")
load_dotenv(_repo_root / ".env")
load_dotenv(_repo_root / ".env.local")

sys.path.insert(0, str(_app_dir))

from src.removals_quote.config import ConfigurationError, config_from_env  # noqa: E402
from src.removals_quote.quote_engine import calculate_quote  # noqa: E402
from src.removals_quote.schemas import QuoteRequest  # noqa: E402


def main():
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} JOB.json", file=sys.stderr)
        sys.exit(1)

    try:
        config = config_from_env()
        with open(sys.argv[1], "r", encoding="utf-8") as f:
            req = QuoteRequest.model_validate(json.load(f))
        result = calculate_quote(req.to_facts(), config)
    except (ConfigurationError, ValidationError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None:
        print("Incomplete job: property/office/furniture selection and distances are required.", file=sys.stderr)
        sys.exit(2)

    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
