from setuptools import setup, find_packages

setup(
    name="modulos",
    version="0.1.0",
    description="Modular integers over fixed-width numpy representations, with CRT reconstruction",
    author="VesterlundCoder",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
        "sympy>=1.13",
    ],
    extras_require={
        "dev": ["pytest>=6.0.0"],
    },
)
