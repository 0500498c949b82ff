from setuptools import setup, find_packages

setup(
    name="minesweeper_hints",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"backend": ["config.yaml"]},
    install_requires=[
        "flask",
        "pyyaml",
        "numpy"
    ],
    extras_require={
        "test": ["pytest"]
    },
    entry_points={
        "console_scripts": [
            "minesweeper-ui=frontend.app:main",
            "minesweeper-eval=evaluation.evaluate:main"
        ]
    },
)
