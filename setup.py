"""Setup file for the freqprep package."""

from setuptools import setup, find_packages

setup(
    name="freqprep",
    version="0.1.0",
    description="Parallel word-frequency tables for large English text corpora",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pandas>=1.5",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "freqprep=freqprep.cli:main",
        ],
    },
)
