import os.path
from setuptools import find_packages, setup

# the directory containing this file
ROOT = os.path.dirname(__file__)

# the text of the README file
with open(os.path.join(ROOT, "README.md"), "r") as f:
    README = f.read()

setup(
    name="markdown-to-confluence-clipboard",
    version="0.1.0",
    description="Convert Markdown to Confluence wiki markup or storage format",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Levente Hunyadi",
    author_email="hunyadi@gmail.com",
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    packages=find_packages(exclude=("tests",)),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "lxml",
        "markdown",
        "pymdown-extensions",
        "cattrs",
        "PyYAML",
        "typing_extensions; python_version < '3.12'",
    ],
)
