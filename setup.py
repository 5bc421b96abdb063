# setup.py
from setuptools import setup, find_packages

setup(
    name="r6",
    version="0.1.0",
    description="A small Scheme reader, bytecode compiler and stack VM",
    packages=find_packages(include=("r6", "r6.*")),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
