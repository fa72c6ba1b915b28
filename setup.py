import os
import re

import setuptools
from setuptools import find_packages

root = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(root, "keywordsai_sdk", "version.py"), encoding="utf-8") as fh:
    __version__ = re.search(r'__version__ = "(.+)"', fh.read()).group(1)

with open(os.path.join(root, "README.md"), "r", encoding="utf-8") as fh:
    long_description = fh.read()


def read_requirements(path):
    if not isinstance(path, list):
        path = [path]
    requirements = []
    for p in path:
        with open(os.path.join(root, p)) as fh:
            requirements.extend(
                [
                    line.strip()
                    for line in fh
                    if line.strip() and not line.startswith("#")
                ]
            )
    return requirements


setuptools.setup(
    name="keywordsai-sdk",
    version=__version__,
    description="Python client for the KeywordsAI LLM observability API.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(
        where=root,
        exclude=(
            "requirements",
            "tests",
            "tests.*",
        ),
    ),
    install_requires=read_requirements(["requirements/requirements.sdk.http.txt"]),
    extras_require={
        "test": read_requirements(["requirements/requirements.test.unit.txt"]),
    },
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development",
        "Typing :: Typed",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
