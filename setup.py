# read contents of README for PyPi description
from pathlib import Path

from setuptools import find_packages, setup

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="gridturb",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version="0.1.0",
    description="Synthetic turbulent vector fields on cubic grids",
    license="BSD 2-clause",
    packages=find_packages(include=["gridturb", "gridturb.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "scipy>=1.6",
        "pyfftw",
        "tqdm",
        "pyevtk",
        "plotly",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.9",
    ],
)
