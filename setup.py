from setuptools import setup, find_packages

setup(
    name="monolicense",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "license-expression",
        "pytz",
        "PyYAML",
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "pytest-mock",
            "mypy",
            "black",
            "types-PyYAML",
            "types-pytz",
        ],
    },
    entry_points={
        "console_scripts": [
            "monolicense=monolicense.cli.main_cli:app",
        ],
    },
    description="License and dependency inventory for pnpm monorepos",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
