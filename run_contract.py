#!/usr/bin/env python
"""
Contract Runner for an Authentication Service

Runs the contract scenario against a deployed target and prints one verdict
per step.

Usage:
    python run_contract.py                          # core sequence against CONTRACT_BASE_URL
    python run_contract.py --url http://host:8080   # explicit target
    python run_contract.py --extended               # core plus negative checks
    python run_contract.py --preflight              # check the environment first

Exit codes: 0 all steps passed, 1 at least one step failed, 2 preflight failed.
"""

import argparse
import asyncio
import sys
from typing import List
from auth_contract.config.settings import ContractConfig, load_identities
from auth_contract.exceptions import PreconditionViolation
from auth_contract.helper.utils import build_client
from auth_contract.models.models import RunState, Verdict
from auth_contract.src.preflight import check_environment
from auth_contract.src.scenario import CORE_SCENARIO, FULL_SCENARIO, RunContext


def print_report(verdicts: List[Verdict], verbose: bool = False):
    print(f"\n{'='*60}")
    print("CONTRACT REPORT")
    print(f"{'='*60}\n")
    for verdict in verdicts:
        mark = "PASS" if verdict.passed else f"FAIL [{verdict.category}]"
        print(f"  {mark:<22} {verdict.step}")
        if verdict.detail and (verbose or not verdict.passed):
            print(f"      {verdict.detail}")
    passed = sum(1 for v in verdicts if v.passed)
    print(f"\n  Passed: {passed}/{len(verdicts)}")
    print(f"\n{'='*60}\n")


async def run(config: ContractConfig, extended: bool = False, preflight: bool = False) -> List[Verdict]:
    identities = load_identities()
    scenario = FULL_SCENARIO if extended else CORE_SCENARIO
    async with build_client(config.base_url, config.timeout) as client:
        if preflight:
            await check_environment(client, identities)
        ctx = RunContext(
            client=client,
            identities=identities,
            state=RunState(),
            target_user_id=config.target_user_id,
        )
        return await scenario.run(ctx)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Verify an auth service against its access-control contract")
    parser.add_argument("--url", help="Base URL of the target (default: CONTRACT_BASE_URL)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--extended", action="store_true", help="Also run the negative checks")
    parser.add_argument("--preflight", action="store_true", help="Check reachability and the seeded admin first")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    args = parser.parse_args(argv)

    config = ContractConfig.from_env()
    if args.url:
        config.base_url = args.url
    if args.timeout:
        config.timeout = args.timeout

    try:
        verdicts = asyncio.run(run(config, extended=args.extended, preflight=args.preflight))
    except PreconditionViolation as e:
        print(f"Preflight failed: {e}")
        return 2

    print_report(verdicts, args.verbose)
    return 0 if all(v.passed for v in verdicts) else 1


if __name__ == "__main__":
    sys.exit(main())
