# setup.py
"""Setup script for areacount."""

from setuptools import setup, find_packages
from pathlib import Path

# Read version
version = {}
with open("src/areacount/__version__.py") as f:
    exec(f.read(), version)

# Read README
readme = Path("README.md").read_text(encoding="utf-8") if Path("README.md").exists() else ""

setup(
    name="areacount",
    version=version["__version__"],
    description="Rectangle counting in raster images with contour heuristics and a learned regressor",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="areacount contributors",
    author_email="",
    license="MIT",

    packages=find_packages(where="src"),
    package_dir={"": "src"},

    python_requires=">=3.8",

    install_requires=[
        "numpy>=1.19.0",
        "opencv-python>=4.5.0",
        "Pillow>=9.2.0",
        "scikit-learn>=1.0",
        "joblib>=1.0",
    ],

    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "black>=21.0",
            "flake8>=3.9.0",
            "mypy>=0.900",
        ],
        "test": [
            "pytest>=6.0.0",
        ],
    },

    entry_points={
        "console_scripts": [
            "areacount=areacount.cli:main",
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Image Recognition",
    ],

    keywords="computer-vision contour rectangle-counting regression",
)
