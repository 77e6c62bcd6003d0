#!/usr/bin/env python

from setuptools import setup


VERSION = "0.1"

setup(
    name="richtext",
    version=VERSION,
    description="A tree model for attributed text with pluggable formats.",
    license="AGPL-3.0-or-later",
    python_requires=">=3.10",
    packages=["_richtext", "_richtext.plugins", "richtext", "richtext.plugins"],
    install_requires=[
        "lxml",
        "typing_extensions; python_version < '3.11'",
    ],
    extras_require={"test": ["pytest"]},
)
