from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="splatloader",
    version="0.1.0",
    description="Load Gaussian splat scenes (PLY/SPZ) from storage and publish them to a renderer",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "fastapi",
        "uvicorn",
        "httpx",
    ],
    extras_require={
        "ply": ["plyfile"],
        "test": ["pytest", "plyfile", "httpx"],
    },
    entry_points={
        "console_scripts": [
            "splatloader=splatloader.__main__:main",
        ]
    },
)
