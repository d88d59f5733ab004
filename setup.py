from setuptools import setup, find_packages

setup(
    name="bodybox",
    version="1.0.0",
    description="Full-body detection overlays: joint filtering, bounding boxes and orientation-aware transforms",
    packages=find_packages(include=["bodybox", "bodybox.*"]),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        "pydantic>=2.0.0",
        "opencv-python",
        "numpy",
        "PyYAML",
        "prometheus-client",
        "prometheus-fastapi-instrumentator>=6.1.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
        "dev": [
            "pytest",
            "pytest-asyncio",
            "httpx",
            "black",
            "isort",
            "flake8",
        ]
    }
)
