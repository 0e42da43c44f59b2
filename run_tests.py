#!/usr/bin/env python3
"""
Runs the test suite with a coverage report.
"""
import os
import subprocess
import sys


def run_tests():
    """Runs pytest with coverage and writes the reports under reports/."""
    if not os.path.exists('reports'):
        os.makedirs('reports')

    print("=== Running tests with coverage ===")

    cmd = [
        sys.executable, '-m', 'pytest',
        'tests/',
        '-v',
        '--cov=campus_signage',
        '--cov-report=term',
        '--cov-report=html:reports/coverage_html',
        '--cov-report=xml:reports/coverage.xml'
    ]

    result = subprocess.run(cmd)

    if result.returncode != 0:
        print("Tests failed")
        return False

    print("Tests passed")
    print("HTML coverage report: reports/coverage_html/index.html")

    return True


if __name__ == '__main__':
    success = run_tests()
    sys.exit(0 if success else 1)
