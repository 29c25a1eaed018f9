"""
Setup script for the Character Merge API package.

This package provides the shared code (repositories, services, utils) behind
the store, merge and history Lambdas and the history read-through cache.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="character-merge-api",
    version="1.0.0",
    author="Character Merge API Team",
    description="Character record merging API with a DynamoDB read-through cache",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "infrastructure", "infrastructure.*", "scripts", "scripts.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        # AWS SDK
        "boto3>=1.28.85",
        "botocore>=1.31.85",

        # Authentication
        "PyJWT>=2.8.0",
    ],
    extras_require={
        "dev": [
            # Testing
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "moto>=5.0.0",
        ],
        "cdk": [
            # Infrastructure as Code
            "aws-cdk-lib>=2.100.0",
            "constructs>=10.0.0,<11.0.0",
        ],
    },
    zip_safe=False,
)
