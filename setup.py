from setuptools import setup, find_packages

setup(
    name="minesweeper_engine",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "flask",
        "pyyaml",
        "numpy"
    ],
    entry_points={
        "console_scripts": [
            "minesweeper-server=frontend.app:main"
        ]
    },
)
