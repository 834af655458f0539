"""
Setup script for PetraDesigner

Installation:
    pip install -e .          # Development mode (editable install)
    pip install -e .[test]    # With the test dependencies
    pip install .             # Regular install

After installation, run with:
    petra-designer generate design.json -o config.yaml
    python -m petra_designer check config.yaml
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).resolve().parent / "README.md"
long_description = ""
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")

# Read requirements
requirements_file = Path(__file__).resolve().parent / "requirements.txt"
install_requires = []
if requirements_file.exists():
    with open(requirements_file, "r", encoding="utf-8") as f:
        install_requires = [
            line.strip()
            for line in f
            if line.strip() and not line.startswith("#")
        ]

setup(
    name="petra-designer",
    version="0.1.0",
    description="Graph model, validators and YAML config compiler for PETRA control-logic designs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PetraDesigner",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=install_requires,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "petra-designer=petra_designer.cli.cli_interface:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    include_package_data=True,
)
