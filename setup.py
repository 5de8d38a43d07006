"""
Setup script for EMS Tracker.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from package
about = {}
exec((Path(__file__).parent / "emstracker" / "__init__.py").read_text(), about)

# Read README
readme = Path(__file__).parent / "README.md"
long_description = readme.read_text() if readme.exists() else ""

setup(
    name="ems-tracker",
    version=about.get("__version__", "0.1.0"),
    description="Download delivery status information from EMS Russian Post by tracking code",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["emstracker", "emstracker.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.28.0",
        "beautifulsoup4>=4.12.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "loguru>=0.7.0",
        "click>=8.0.0",
        "rich>=13.0.0",
        "orjson>=3.9.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ems-tracker=emstracker.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
