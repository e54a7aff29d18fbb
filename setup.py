from setuptools import find_namespace_packages, setup

setup(
    name="listing-reel-backend",
    version="0.1.0",
    packages=find_namespace_packages(include=["shared", "shared.*", "services", "services.*"]),
    py_modules=["app"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "pydantic>=2",
        "aiohttp",
        "openai>=1",
        "python-dotenv",
        "PyYAML",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
    include_package_data=True,
    description="Backend package for listing videos (photo sequencing, captions and narration scripts)",
)
