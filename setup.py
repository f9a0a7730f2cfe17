#!/usr/bin/env python3
"""Setup script for the jira-issues client library.
"""

from setuptools import find_packages, setup

# Read requirements from requirements.txt file
with open("requirements.txt") as f:
    requirements = f.read().splitlines()

# Remove any comments or blank lines from requirements
requirements = [line for line in requirements if line and not line.startswith("#")]

with open("requirements-test.txt") as f:
    test_requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]

setup(
    name="jira-issues",
    version="0.1.0",
    description="Jira REST API v2 issue client with typed and custom fields",
    packages=find_packages(include=["jira_issues", "jira_issues.*"]),
    include_package_data=True,
    python_requires=">=3.12,<4.0",
    install_requires=requirements,
    extras_require={"test": test_requirements},
    license="MIT",  # SPDX license identifier
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
