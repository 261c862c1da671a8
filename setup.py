from setuptools import setup, find_packages

setup(
    name="eth-volatility-dashboard",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["models", "build_dashboard"],
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "seaborn",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "build-dashboard=build_dashboard:main",
        ],
    },
    python_requires=">=3.8",
)
