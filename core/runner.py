import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

import pytest

from core.config import PROJECT_ROOT


logger = logging.getLogger(__name__)

DEFAULT_TAGS = "reto1 or reto2"
DEFAULT_ALLURE_DIR = "allure-results"
DEFAULT_CUCUMBER_JSON = "reports/cucumber.json"
JOURNEY_MODULE = PROJECT_ROOT / "test_journeys.py"


def build_pytest_args(
    tags: str = DEFAULT_TAGS,
    alluredir: Optional[str] = DEFAULT_ALLURE_DIR,
    cucumberjson: Optional[str] = DEFAULT_CUCUMBER_JSON,
    extra: Optional[List[str]] = None,
) -> List[str]:
    # The journeys are marked e2e and deselected by default; -m here replaces that filter
    args = [str(JOURNEY_MODULE), "-m", tags, "--gherkin-terminal-reporter", "-v"]
    if alluredir:
        args.append(f"--alluredir={alluredir}")
    if cucumberjson:
        args.append(f"--cucumberjson={cucumberjson}")
    args.extend(extra or [])
    return args


def _parse_args(argv: Optional[List[str]]) -> Tuple[argparse.Namespace, List[str]]:
    parser = argparse.ArgumentParser(
        prog="saucedemo-journeys",
        description="Run the Sauce Demo mobile journeys against an Appium server.",
    )
    parser.add_argument("--tags", default=DEFAULT_TAGS, help="Marker expression selecting scenarios")
    parser.add_argument("--alluredir", default=DEFAULT_ALLURE_DIR, help="Allure results directory")
    parser.add_argument("--cucumberjson", default=DEFAULT_CUCUMBER_JSON, help="Cucumber JSON report path")
    return parser.parse_known_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    options, extra = _parse_args(argv)
    if options.cucumberjson and os.path.dirname(options.cucumberjson):
        os.makedirs(os.path.dirname(options.cucumberjson), exist_ok=True)
    args = build_pytest_args(options.tags, options.alluredir, options.cucumberjson, extra)
    logger.info(f"Running journeys: pytest {' '.join(args)}")
    return int(pytest.main(args))


if __name__ == "__main__":
    sys.exit(main())
