"""
Risk Premia Engine - Volatility-targeted daily sizing and rebalancing
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="riskpremia-engine",
    version="0.1.0",
    description="Volatility-targeted daily sizing and rebalance engine for a small ETF portfolio",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="",
    author_email="",
    packages=find_packages(exclude=["tests*", "docs*"]),
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0.1",
        "pandas>=2.1.0",
        "numpy>=1.25.0",
        "click>=8.1.7",
        "pydantic>=2.5.0",
        "pandas-market-calendars>=4.0.0",
        "yfinance>=0.2.40",
        "requests>=2.31.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
            "black>=23.12.0",
            "isort>=5.13.0",
            "flake8>=7.0.0",
            "mypy>=1.7.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "riskpremia=riskpremia.cli.main:cli",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Financial and Insurance Industry",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="trading finance risk-parity volatility-targeting rebalancing",
)
