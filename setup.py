from pathlib import Path
from setuptools import setup, find_packages

README = (Path(__file__).parent / "README.md").read_text(encoding="utf-8")

setup(
    name="cgs-client",
    version="0.1.0",
    description="Client library for the Coding Game Server, with a Snake client",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(include=("cgsclient", "cgsclient.*")),
    python_requires=">=3.9",
    install_requires=[
        "pygame>=2.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cgs-snake=cgsclient.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Topic :: Games/Entertainment",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
    ],
)
