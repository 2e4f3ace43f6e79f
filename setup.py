from setuptools import setup
from templog import __version__

setup(
    name="templog",
    long_description="templog is a leveled logging library driven by format templates with pluggable placeholders and per-level output routing.",
    version=__version__,
    packages=[
        "templog",
        "templog.commands",
        "templog.format",
        "templog.log",
        "templog.output",
    ],
    include_package_data=True,
    install_requires=[
        "click==8.0.3",
        "pyyaml>=6.0.0,<7.0.0",
        "pyserde==0.12.*",
        "beartype>=0.17.0,<1.0.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points="""
        [console_scripts]
        templog=templog.cli:cli
    """,
)
