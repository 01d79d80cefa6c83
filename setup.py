"""Setup script for Spectra"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

serve_requires = [
    "starlette>=0.37.0",
    "uvicorn>=0.29.0",
]

setup(
    name="spectra-topology",
    version="0.4.0",
    author="Spectra Contributors",
    author_email="",
    description="Storage topology profiler with snapshot-based growth velocity analytics",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Filesystems",
        "Topic :: System :: Monitoring",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.20.0",
        "rich>=13.0.0",
        "typer>=0.12.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "serve": serve_requires,
        "test": serve_requires + ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "spectra=spectra.cli:main",
        ],
    },
    keywords="disk-usage storage filesystem topology snapshot velocity",
)
