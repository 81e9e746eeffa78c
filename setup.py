# setup.py
from setuptools import setup, find_packages

setup(
    name="linkcount",
    version="0.1.0",
    description="Asynchronous crawler that ranks pages by how often they are linked",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"linkcount": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "linkcount=linkcount.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
