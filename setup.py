from setuptools import setup, find_namespace_packages

setup(
    name="stderrkit",
    version="0.3.0a0",
    description="Leveled, boxed and traced terminal output for CLI tools — glyph-prefixed log levels, bitmask tables, call trees and y/n/q prompts on stderr",
    author="Dustin",
    author_email="6962246+djdarcy@users.noreply.github.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["stderrkit*"]),
    install_requires=[
        "rich>=13",
    ],
    extras_require={
        "test": ["pytest>=7", "pytest-cov"],
    },
    entry_points={
        "console_scripts": [
            "stderrkit=stderrkit.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
)
