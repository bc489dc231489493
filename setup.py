from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="clinics",
    version="0.1.0",
    description="In-memory clinic registry with a specialty index, served over HTTP",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "fastapi",
        "uvicorn",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "clinics=clinics.__main__:main",
        ],
    },
)
