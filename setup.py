from setuptools import setup, find_packages
from os import path

here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="primeunits",
    version="0.1.0",
    description="Units of measure with exact prime-factor scales and dimension checking",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="primeunits",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
    ],
    keywords="units dimensional-analysis quantities",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8, <4",
    install_requires=[
        "numpy>=1.20",
        "pandas>=1.3",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
        "dev": ["sphinx", "sphinx_rtd_theme"],
    },
)
