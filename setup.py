"""
ROUTEBIND Setup Configuration

Route parameter binding for Python handler classes.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="routebind",
    version="0.1.0",

    description="Bind route parameters to typed handler arguments (enums, models, services)",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["routebind", "routebind.*"]),
    include_package_data=True,
    install_requires=[
        "click>=8.0.0",
        "python-dotenv>=1.0.0",
        "SQLAlchemy>=2.0.0",
    ],
    extras_require={
        "fastapi": ["fastapi>=0.100.0", "uvicorn[standard]>=0.20.0"],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
            "fastapi>=0.100.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
            "fastapi>=0.100.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "routebind=routebind.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
    ],
    keywords="routing route-model-binding dependency-injection fastapi sqlalchemy",
)
