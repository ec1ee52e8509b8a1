"""Package setup for sift-sdk."""

from setuptools import setup

setup(
    name="sift-sdk",
    version="0.5.0",
    description="Async typed client for the Sift fraud detection APIs",
    packages=["sift_sdk"],
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24.0",
        "aiohttp>=3.8.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
)
