from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .config import HarnessConfig
from .interfaces import SchemeParameters, SignatureScheme
from .results import SuiteReport
from .scenarios import RandomFill, ScenarioRunner

log = logging.getLogger(__name__)


def variant_of(params: SchemeParameters) -> str:
    return "scratch-buffer" if params.requires_scratch else "self-contained"


def run_suite(
    scheme: SignatureScheme,
    config: Optional[HarnessConfig] = None,
    fill_random: Optional[RandomFill] = None,
) -> SuiteReport:
    """Run all three scenarios against one scheme.

    Scenario failures are collected in the report; `AllocationFailure` and
    `SchemeError` propagate because the run cannot continue meaningfully.
    """
    params = scheme.params
    params.validate()
    report = SuiteReport(
        scheme=getattr(scheme, "name", params.algname),
        algname=params.algname,
        variant=variant_of(params),
    )
    runner = ScenarioRunner(scheme, config, fill_random)
    report.results.extend(runner.run_all())
    log.info("%s (%s): exit code %d", params.algname, report.variant, report.exit_code)
    return report


def run_suites(
    schemes: Iterable[SignatureScheme],
    config: Optional[HarnessConfig] = None,
    fill_random: Optional[RandomFill] = None,
) -> List[SuiteReport]:
    return [run_suite(scheme, config, fill_random) for scheme in schemes]
