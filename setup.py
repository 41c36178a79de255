from setuptools import setup, find_packages

setup(
    name="tilewall",
    version="0.1",
    packages=find_packages(include=["tilewall", "tilewall.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.24",
        "noise>=1.2.2",
        "python-dotenv>=1.0",
        "Pillow>=10.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tilewall=tilewall.__main__:main",
        ],
    },
)
