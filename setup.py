from setuptools import setup, find_packages

setup(
    name="gamescloset",
    version="0.2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Environment wrapper for agents playing the AI
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gamescloset=gamescloset.interfaces.cli:main",
        ],
    },
)
