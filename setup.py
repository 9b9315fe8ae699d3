# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="monkey",
    version="0.1.0",
    description="A tree-walking interpreter for the Monkey language, with macros",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["monkey", "monkey.*", "monkey_lsp", "monkey_lsp.*"]),
    package_data={"monkey": ["prelude/*.monkey"]},
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "monkey=monkey.repl:main",
            "monkey-ls=monkey_lsp.server:main",
        ],
    },
    zip_safe=False,
)
