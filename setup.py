from setuptools import setup, find_packages

setup(
    name="rootseek",
    version="0.1.0",
    description="Scalar root finding from a single starting point (bracket search + Brent's method)",
    author="adamfilli",
    packages=find_packages(include=["rootseek", "rootseek.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
