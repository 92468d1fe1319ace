"""
Setup script for the lexigame package.

The library is pure Python. Hosted model SDKs are optional extras so the
core (validation, repair, session play) installs without them.
"""

from setuptools import setup, find_packages

setup(
    name="lexigame",
    version="1.0.0",
    description="Generate and play scored word-game sessions from your own documents",
    author="Course Staff",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "tenacity>=8.2.0",
    ],
    extras_require={
        "llm": ["anthropic>=0.18.0"],
        "images": ["openai>=1.0.0"],
        "all": [
            "anthropic>=0.18.0",
            "openai>=1.0.0",
        ],
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
