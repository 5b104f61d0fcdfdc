from setuptools import setup, find_packages

setup(
    name="diff_review",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests",
        "pyyaml",
        "textual",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "diff-review=diff_review.cli:main",
        ],
    },
    description="Interactive review and selective application of proposed code changes.",
)
