"""Setup script for ytplaylist."""

from setuptools import setup, find_namespace_packages

setup(
    name="ytplaylist",
    version="0.1.0",
    description="Fetch every item of a YouTube playlist through the web interface",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src"),
    install_requires=[
        "httpx>=0.24.0",
        "python-dotenv>=1.0.0",
        "tqdm>=4.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "ytplaylist=ytplaylist.cli:main",
        ]
    },
)
