#!/usr/bin/env python
"""
Test runner script for the YouTube Transcripts test suite.

Usage:
    python run_tests.py [options]

Options:
    --unit           Run only unit tests
    --integration    Run only HTTP API integration tests
    --all            Run all tests (default)
    --coverage       Generate coverage report
    --verbose        Verbose output
    --quiet          Minimal output
    --xvs            Generate JUnit XML report
    --help           Show this help message
"""

import sys
import os
import subprocess
import argparse


ROOT = os.path.abspath(os.path.dirname(__file__))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run YouTube Transcripts tests")

    # Test selection options
    test_group = parser.add_argument_group("Test Selection")
    test_group.add_argument("--unit", action="store_true", help="Run only unit tests")
    test_group.add_argument("--integration", action="store_true", help="Run only integration tests")
    test_group.add_argument("--all", action="store_true", help="Run all tests (default)")

    # Output options
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument("--coverage", action="store_true", help="Generate coverage report")
    output_group.add_argument("--verbose", action="store_true", help="Verbose output")
    output_group.add_argument("--quiet", action="store_true", help="Minimal output")
    output_group.add_argument("--xvs", action="store_true", help="Generate JUnit XML report")

    return parser.parse_args()


def run_tests(args) -> int:
    """Run tests with the specified options."""
    env = os.environ.copy()
    env["PYTHONPATH"] = os.path.join(ROOT, "src")

    cmd = [sys.executable, "-m", "pytest"]

    # Test selection
    if args.unit:
        cmd.append(os.path.join("tests", "unit"))
    elif args.integration:
        cmd.append(os.path.join("tests", "integration"))
    else:
        cmd.append("tests")

    # Output options
    if args.verbose:
        cmd.append("-v")
    if args.quiet:
        cmd.append("-q")
    if args.coverage:
        cmd.extend(["--cov=youtube_transcripts", "--cov=youtube_transcripts_api", "--cov-report=term-missing"])
    if args.xvs:
        cmd.append("--junitxml=test-results.xml")

    print(f"Running: {' '.join(cmd)}")
    print(f"PYTHONPATH={env['PYTHONPATH']}")
    return subprocess.run(cmd, cwd=ROOT, env=env).returncode


def main():
    """Main entry point."""
    sys.exit(run_tests(parse_args()))


if __name__ == "__main__":
    main()
